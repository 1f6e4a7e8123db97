import enum


class CategoryKey(str, enum.Enum):
    HEALTH = "health"
    MIND = "mind"
    CAREER = "career"
    LIFE = "life"
    FUN = "fun"


# Display order used by stats and card listings
CATEGORY_ORDER = [
    CategoryKey.HEALTH,
    CategoryKey.MIND,
    CategoryKey.CAREER,
    CategoryKey.LIFE,
    CategoryKey.FUN,
]


class TrackingMode(str, enum.Enum):
    BINARY = "binary"  # value 0/1
    DURATION = "duration"  # value in seconds, target in minutes
    COUNT = "count"


class FrequencyType(str, enum.Enum):
    DAILY = "daily"
    WEEKDAYS = "weekdays"
    WEEKENDS = "weekends"
    CUSTOM = "custom"
    X_PER_WEEK = "x_per_week"
