"""
Domain enums for MealBills application.
Contains all enumeration types used across the domain models.
"""

import enum


class MealType(str, enum.Enum):
    """Meal a bill was recorded for"""

    BREAKFAST = "BREAKFAST"
    LUNCH = "LUNCH"
    DINNER = "DINNER"


class SummaryPeriod(str, enum.Enum):
    """Named date-window selectors for bill summaries"""

    WEEKLY = "weekly"
    MONTHLY = "monthly"
    CUSTOM = "custom"
    ALL = "all"
