"""
Request-scoped context passed explicitly into use cases.

Carries who is acting, which calendar day their client considers "today",
and a logger that tags every record with the user id.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Optional


class _UserLoggerAdapter(logging.LoggerAdapter):
    def process(self, msg, kwargs):
        return f"[user={self.extra['user_id']}] {msg}", kwargs


@dataclass
class RequestContext:
    """
    Who is acting and when.

    Usage:
        >>> ctx = RequestContext(user_id="user-1", client_today=date(2024, 1, 5))
        >>> ctx.logger.info("saving plan")
    """

    user_id: str
    client_today: date = field(default_factory=date.today)
    logger: Optional[logging.LoggerAdapter] = None

    def __post_init__(self) -> None:
        if self.logger is None:
            self.logger = _UserLoggerAdapter(
                logging.getLogger("sparky.request"), {"user_id": self.user_id}
            )
