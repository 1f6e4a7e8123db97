from sqlalchemy import Enum
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def enum_type(enum_cls, **kwargs) -> Enum:
    """Enum column stored by value ("health"), not by member name."""
    return Enum(enum_cls, values_callable=lambda members: [m.value for m in members], **kwargs)
