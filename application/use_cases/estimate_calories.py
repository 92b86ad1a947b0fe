"""
EstimateCalories Use Case.

Wraps the pure MET estimate with the user's latest body weight. A failed
weight lookup is logged and the default weight is used instead; calorie
estimation never blocks entry creation.
"""

import logging
from typing import Callable, Dict, Optional

from application.ports import MeasurementRepository
from domain.models import Exercise
from domain.services.calorie_estimation import (
    DEFAULT_BODY_WEIGHT_KG,
    estimate_calories_per_hour,
)

logger = logging.getLogger(__name__)


class EstimateCaloriesUseCase:
    """
    Calorie burn rates for a user.

    Usage:
        >>> estimator = EstimateCaloriesUseCase(measurement_repo)
        >>> estimator.estimate(exercise, user_id="user-1")
        504
    """

    def __init__(
        self,
        measurement_repo: MeasurementRepository,
        default_weight_kg: float = DEFAULT_BODY_WEIGHT_KG,
    ) -> None:
        self._measurement_repo = measurement_repo
        self._default_weight_kg = default_weight_kg

    def body_weight(self, user_id: str) -> float:
        """Latest recorded weight in kg, or the default."""
        try:
            weight = self._measurement_repo.get_latest_weight(user_id)
        except Exception as e:
            logger.warning(
                f"Weight lookup failed for user {user_id}, "
                f"using {self._default_weight_kg} kg: {e}"
            )
            return self._default_weight_kg
        if weight is None or weight <= 0:
            return self._default_weight_kg
        return float(weight)

    def estimate(
        self, exercise: Exercise, user_id: str, weight_kg: Optional[float] = None
    ) -> int:
        """MET-based calories per hour, ignoring any stored rate."""
        if weight_kg is None:
            weight_kg = self.body_weight(user_id)
        return estimate_calories_per_hour(exercise.category, exercise.level, weight_kg)

    def calories_per_hour(self, exercise: Exercise, user_id: str) -> float:
        """The exercise's stored rate when positive, else the estimate."""
        if exercise.calories_per_hour and exercise.calories_per_hour > 0:
            return float(exercise.calories_per_hour)
        return float(self.estimate(exercise, user_id))

    def rate_function(self, user_id: str) -> Callable[[Exercise], float]:
        """
        A per-exercise rate lookup that fetches the user's weight at most once.

        Used by plan materialization, which needs rates for many exercises.
        """
        weight: Dict[str, float] = {}

        def rate(exercise: Exercise) -> float:
            if exercise.calories_per_hour and exercise.calories_per_hour > 0:
                return float(exercise.calories_per_hour)
            if "kg" not in weight:
                weight["kg"] = self.body_weight(user_id)
            return float(self.estimate(exercise, user_id, weight_kg=weight["kg"]))

        return rate
