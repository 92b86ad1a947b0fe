"""
Measurement Repository Interface (Port).

Read-only access to body measurements, used for calorie estimation.
"""
from typing import Optional, Protocol


class MeasurementRepository(Protocol):
    def get_latest_weight(self, user_id: str) -> Optional[float]:
        """
        Most recent recorded body weight.

        Args:
            user_id: User ID

        Returns:
            Weight in kilograms, or None when nothing is recorded
        """
        ...
