import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from adapters.persistence.sqlite.repositories import ResolutionTemplateRepository
from app.models.category import Category
from app.models.template import ResolutionTemplate
from domain.models.enums import CategoryKey, FrequencyType, TrackingMode
from domain.rules.xp_rules import CHARACTERS

logger = logging.getLogger(__name__)

CATEGORY_DATA = [
    {
        "key": CategoryKey.HEALTH,
        "name": "Health",
        "icon": "💧",
        "description": "Water, food, sleep, fitness",
        "order": 1,
    },
    {
        "key": CategoryKey.MIND,
        "name": "Mind",
        "icon": "🧠",
        "description": "Reading, meditation, learning, journaling",
        "order": 2,
    },
    {
        "key": CategoryKey.CAREER,
        "name": "Career",
        "icon": "💼",
        "description": "Coding, job prep, projects, business",
        "order": 3,
    },
    {
        "key": CategoryKey.LIFE,
        "name": "Life",
        "icon": "🧭",
        "description": "Discipline, routines, digital detox, habits",
        "order": 4,
    },
    {
        "key": CategoryKey.FUN,
        "name": "Fun",
        "icon": "🎨",
        "description": "Hobbies, creativity, travel, relaxation",
        "order": 5,
    },
]


async def seed_categories(session: AsyncSession) -> int:
    """Insert or refresh the fixed categories. Returns how many were inserted."""
    inserted = 0
    try:
        for data in CATEGORY_DATA:
            character_name, character_theme = CHARACTERS[data["key"]]
            stmt = select(Category).where(Category.key == data["key"])
            existing = (await session.execute(stmt)).scalars().first()

            if not existing:
                session.add(Category(**data, character_name=character_name, character_theme=character_theme))
                inserted += 1
                logger.info(f"Seeding new category: {data['name']}")
            else:
                existing.name = data["name"]
                existing.icon = data["icon"]
                existing.description = data["description"]
                existing.order = data["order"]
                existing.character_name = character_name
                existing.character_theme = character_theme

        await session.commit()
    except Exception as e:
        logger.error(f"Seeding failed: {e}")
        await session.rollback()
        raise
    return inserted


async def list_categories(session: AsyncSession) -> list[Category]:
    result = await session.execute(select(Category).order_by(Category.order))
    return list(result.scalars().all())


def _template(category, order, title, description, mode, frequency, popular, target=None, unit=None, days=None):
    return {
        "category_key": category,
        "order": order,
        "title": title,
        "description": description,
        "tracking_mode": mode,
        "suggested_frequency": frequency,
        "is_popular": popular,
        "suggested_target_value": target,
        "suggested_count_unit": unit,
        "suggested_days_per_week": days,
    }


H, M, C, L, F = CategoryKey.HEALTH, CategoryKey.MIND, CategoryKey.CAREER, CategoryKey.LIFE, CategoryKey.FUN
BIN, DUR, CNT = TrackingMode.BINARY, TrackingMode.DURATION, TrackingMode.COUNT
DAILY, WEEKDAYS, WEEKENDS = FrequencyType.DAILY, FrequencyType.WEEKDAYS, FrequencyType.WEEKENDS
CUSTOM, X_PER_WEEK = FrequencyType.CUSTOM, FrequencyType.X_PER_WEEK

# Durations are minutes
TEMPLATE_DATA = [
    _template(H, 1, "Drink 8 Glasses of Water", "Stay hydrated throughout the day", CNT, DAILY, True, 8, "glasses"),
    _template(H, 2, "Exercise", "Get your body moving with any physical activity", DUR, X_PER_WEEK, True, 30, days=5),
    _template(H, 3, "Go to the Gym", "Strength training and cardio workout", BIN, X_PER_WEEK, True, days=3),
    _template(H, 4, "Sleep 8 Hours", "Get quality rest for recovery", DUR, DAILY, False, 480),
    _template(H, 5, "Eat Vegetables", "Include vegetables in your meals", CNT, DAILY, False, 5, "servings"),
    _template(M, 1, "Read a Book", "Expand your knowledge and imagination", DUR, DAILY, True, 20),
    _template(M, 2, "Meditate", "Practice mindfulness and mental clarity", DUR, DAILY, True, 10),
    _template(M, 3, "Journal", "Write down your thoughts and reflections", BIN, DAILY, True),
    _template(M, 4, "Learn Something New", "Take an online course or watch educational content", DUR, X_PER_WEEK, False, 30, days=5),
    _template(M, 5, "Practice Gratitude", "List 3 things you're grateful for", BIN, DAILY, False),
    _template(C, 1, "Code Practice", "Work on programming skills and projects", DUR, WEEKDAYS, True, 60),
    _template(C, 2, "Apply to Jobs", "Send out job applications", CNT, WEEKDAYS, True, 3, "applications"),
    _template(C, 3, "Work on Side Project", "Build your portfolio or business", DUR, WEEKENDS, True, 90),
    _template(C, 4, "Network", "Connect with professionals in your field", BIN, X_PER_WEEK, False, days=2),
    _template(C, 5, "Update Resume/Portfolio", "Keep your professional materials current", BIN, CUSTOM, False),
    _template(L, 1, "Morning Routine", "Start your day with intention", BIN, DAILY, True),
    _template(L, 2, "Digital Detox", "No phone/social media for set time", DUR, DAILY, True, 60),
    _template(L, 3, "Clean/Organize", "Tidy up your living space", BIN, X_PER_WEEK, True, days=3),
    _template(L, 4, "No Procrastination", "Complete tasks without delay", BIN, WEEKDAYS, False),
    _template(L, 5, "Budget Review", "Track expenses and manage finances", BIN, CUSTOM, False),
    _template(F, 1, "Play Music/Instrument", "Practice or enjoy making music", DUR, X_PER_WEEK, True, 30, days=4),
    _template(F, 2, "Draw/Paint", "Express yourself through art", DUR, X_PER_WEEK, True, 30, days=3),
    _template(F, 3, "Call a Friend/Family", "Stay connected with loved ones", BIN, X_PER_WEEK, True, days=2),
    _template(F, 4, "Try New Recipe", "Cook something you've never made", BIN, WEEKENDS, False),
    _template(F, 5, "Watch Movie/Show", "Relax and enjoy entertainment", BIN, WEEKENDS, False),
]


async def seed_templates(session: AsyncSession) -> int:
    """Insert missing templates, keyed by (category, title). Returns how many were inserted."""
    repo = ResolutionTemplateRepository(session)
    inserted = 0
    try:
        for data in TEMPLATE_DATA:
            existing = await repo.get_by_title(data["category_key"], data["title"])
            if not existing:
                await repo.add(ResolutionTemplate(**data))
                inserted += 1
            else:
                for key, value in data.items():
                    setattr(existing, key, value)

        await session.commit()
    except Exception as e:
        logger.error(f"Template seeding failed: {e}")
        await session.rollback()
        raise
    logger.info("Templates seeded", extra={"inserted": inserted, "total": len(TEMPLATE_DATA)})
    return inserted
