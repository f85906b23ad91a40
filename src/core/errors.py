"""Error types raised by the core.

Lookups that find nothing return ``None`` or an empty ``RouteInfo`` instead
of raising; only malformed input, alias loops, and partially completed
submissions are errors.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from core.models import Form


class InquiryError(Exception):
    """Base class for inquiry submission failures."""


class InvalidSubmissionError(InquiryError, ValueError):
    """The submission was rejected before anything was stored or sent."""


class NotificationFailedError(InquiryError):
    """The inquiry was stored but the notification could not be sent."""

    def __init__(self, form: "Form", cause: BaseException) -> None:
        super().__init__(f"Inquiry from {form.company_name!r} was saved but the notification failed: {cause}")
        self.form = form
        self.cause = cause


class RouteAliasCycleError(ValueError):
    """Route links point back to a route already visited."""

    def __init__(self, chain: list[str]) -> None:
        super().__init__(f"Route alias cycle: {' -> '.join(chain)}")
        self.chain = chain
