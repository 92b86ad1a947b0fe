"""
Calorie estimation from MET values.

Estimates calories burned per hour for an exercise from its category and
level and the user's body weight:

    calories_per_hour = round((MET * 3.5 * weight_kg) / 200 * 60)

This module is pure. Looking up the user's weight (and falling back when
that lookup fails) is the job of application.use_cases.estimate_calories.
"""
from typing import Dict, Optional

DEFAULT_BODY_WEIGHT_KG = 70.0
MIN_MET = 1.0

DEFAULT_CATEGORY = "default"
DEFAULT_LEVEL = "intermediate"


# =============================================================================
# MET Table
# =============================================================================

# Keyed by lower-cased category, then lower-cased level
MET_VALUES: Dict[str, Dict[str, float]] = {
    "cardio": {"beginner": 6.0, "intermediate": 7.0, "expert": 8.0},
    "strength": {"beginner": 4.0, "intermediate": 5.0, "expert": 6.0},
    "olympic weightlifting": {"beginner": 5.0, "intermediate": 6.0, "expert": 7.0},
    "powerlifting": {"beginner": 5.0, "intermediate": 6.0, "expert": 7.0},
    "strongman": {"beginner": 7.0, "intermediate": 8.0, "expert": 9.0},
    "plyometrics": {"beginner": 6.0, "intermediate": 7.0, "expert": 8.0},
    "stretching": {"beginner": 2.0, "intermediate": 2.5, "expert": 3.0},
    "default": {"beginner": 3.0, "intermediate": 3.5, "expert": 4.0},
}


def _normalize_key(value: Optional[str]) -> str:
    return (value or "").strip().lower()


def lookup_met(category: Optional[str], level: Optional[str]) -> float:
    """
    Look up the MET value for a category/level pair.

    An unknown category uses the "default" row and an unknown level uses
    "intermediate". The result is never below MIN_MET.

    Examples:
        >>> lookup_met("Strength", "expert")
        6.0
        >>> lookup_met("parkour", "beginner")
        3.0
    """
    row = MET_VALUES.get(_normalize_key(category), MET_VALUES[DEFAULT_CATEGORY])
    met = row.get(_normalize_key(level), row[DEFAULT_LEVEL])
    return max(met, MIN_MET)


def estimate_calories_per_hour(
    category: Optional[str],
    level: Optional[str],
    weight_kg: Optional[float] = None,
) -> int:
    """
    Estimate calories burned per hour.

    Args:
        category: Exercise category (case-insensitive)
        level: Exercise level (case-insensitive)
        weight_kg: Latest body weight; DEFAULT_BODY_WEIGHT_KG when missing

    Returns:
        Whole calories per hour
    """
    if not weight_kg or weight_kg <= 0:
        weight_kg = DEFAULT_BODY_WEIGHT_KG

    met = lookup_met(category, level)
    return round((met * 3.5 * weight_kg) / 200 * 60)


def calories_for_duration(calories_per_hour: float, duration_minutes: float) -> float:
    """Calories burned over a duration, rounded to 2 decimals."""
    if not calories_per_hour or not duration_minutes:
        return 0.0
    return round(calories_per_hour / 60 * duration_minutes, 2)
