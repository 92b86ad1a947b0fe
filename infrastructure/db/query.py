"""
Shared helpers for Supabase repositories.

Every query and RPC goes through run(), which turns driver failures into
TransientInfrastructureError so callers see one error type for "the
database did not answer". Errors are not retried.
"""

import logging
from typing import Any

from application.exceptions import TransientInfrastructureError

logger = logging.getLogger(__name__)


def run(query: Any, operation: str, **context: Any) -> Any:
    """
    Execute a postgrest query builder.

    Args:
        query: A table(...) or rpc(...) builder, not yet executed
        operation: Short description for logs, e.g. "save_workout_plan"
        context: Identifiers to log and attach to the error (template_id, user_id...)

    Returns:
        The APIResponse

    Raises:
        TransientInfrastructureError: If the request fails for any reason
    """
    try:
        return query.execute()
    except Exception as e:
        logger.error(f"Database operation {operation} failed ({context}): {e}")
        raise TransientInfrastructureError(
            f"Database operation {operation} failed: {e}", context=context
        ) from e


def first(response: Any) -> Any:
    """First row of a response, or None."""
    data = response.data or []
    return data[0] if data else None
