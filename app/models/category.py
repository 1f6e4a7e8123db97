from sqlalchemy import Column, Integer, String

from app.models.base import Base, enum_type
from domain.models.enums import CategoryKey


class Category(Base):
    __tablename__ = "categories"

    key = Column(enum_type(CategoryKey), primary_key=True)
    name = Column(String, nullable=False)
    icon = Column(String, nullable=True)
    description = Column(String, nullable=True)
    order = Column(Integer, nullable=False, default=0)

    character_name = Column(String, nullable=True)
    character_theme = Column(String, nullable=True)
