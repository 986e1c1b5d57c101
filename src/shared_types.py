"""Shared enums and types for facts-today."""

from enum import StrEnum

ALL_CATEGORIES = "all"

MAX_FACT_LENGTH = 200


class Category(StrEnum):
    TECHNOLOGY = "technology"
    SCIENCE = "science"
    FINANCE = "finance"
    SOCIETY = "society"
    ENTERTAINMENT = "entertainment"
    HEALTH = "health"
    HISTORY = "history"
    NEWS = "news"


CATEGORY_COLORS: dict[Category, str] = {
    Category.TECHNOLOGY: "#3b82f6",
    Category.SCIENCE: "#16a34a",
    Category.FINANCE: "#ef4444",
    Category.SOCIETY: "#eab308",
    Category.ENTERTAINMENT: "#db2777",
    Category.HEALTH: "#14b8a6",
    Category.HISTORY: "#f97316",
    Category.NEWS: "#8b5cf6",
}


class VoteColumn(StrEnum):
    """Vote counters on a fact row; values are the store's column names."""

    INTERESTING = "votesInteresting"
    MIND_BLOWING = "votesMindBlowing"
    FALSE = "votesFalse"
