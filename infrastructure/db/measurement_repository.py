"""
Supabase implementation of MeasurementRepository.

Reads body weight from check_in_measurements (kilograms).
"""
from typing import Optional

from supabase import Client

from infrastructure.db.query import first, run


class SupabaseMeasurementRepository:
    def __init__(self, client: Client):
        self._client = client

    def get_latest_weight(self, user_id: str) -> Optional[float]:
        response = run(
            self._client.table("check_in_measurements")
            .select("weight, entry_date")
            .eq("user_id", user_id)
            .not_.is_("weight", "null")
            .order("entry_date", desc=True)
            .limit(1),
            "get_latest_weight",
            user_id=user_id,
        )
        row = first(response)
        if row is None or row.get("weight") is None:
            return None
        return float(row["weight"])
