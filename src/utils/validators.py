"""Field and workflow validation rules for tickets."""

from typing import Any

from models.ticket import TicketStatus
from utils.error_handling import IllegalTransitionError, InvalidInputError

TITLE_MIN_LENGTH = 3
TITLE_MAX_LENGTH = 120
DESCRIPTION_MIN_LENGTH = 5
DESCRIPTION_MAX_LENGTH = 2000

_STATUS_VALUES = frozenset(status.value for status in TicketStatus)

# Forward-only, single-step workflow. RESOLVED is terminal.
ALLOWED_TRANSITIONS = frozenset(
    {
        (TicketStatus.OPEN, TicketStatus.IN_PROGRESS),
        (TicketStatus.IN_PROGRESS, TicketStatus.RESOLVED),
    }
)


def ensure_present(value: Any, field: str) -> None:
    """Raise InvalidInputError if value is falsy."""
    if value in (None, "", []):
        raise InvalidInputError(f"{field} is required")


def _validate_text(value: Any, field: str, min_length: int, max_length: int) -> str:
    if not isinstance(value, str) or len(value.strip()) < min_length:
        raise InvalidInputError(
            f"{field} is required and must be at least {min_length} characters"
        )
    cleaned = value.strip()
    if len(cleaned) > max_length:
        raise InvalidInputError(f"{field} must be at most {max_length} characters")
    return cleaned


def validate_title(text: Any) -> str:
    """Return the trimmed title, or raise InvalidInputError."""
    return _validate_text(text, "title", TITLE_MIN_LENGTH, TITLE_MAX_LENGTH)


def validate_description(text: Any) -> str:
    """Return the trimmed description, or raise InvalidInputError."""
    return _validate_text(
        text, "description", DESCRIPTION_MIN_LENGTH, DESCRIPTION_MAX_LENGTH
    )


def is_valid_status(value: Any) -> bool:
    """True iff value names one of the ticket statuses."""
    return isinstance(value, str) and value in _STATUS_VALUES


def parse_status(value: Any) -> TicketStatus:
    """Coerce a raw status value, or raise InvalidInputError."""
    if not is_valid_status(value):
        raise InvalidInputError(
            "Missing or invalid status. Use OPEN, IN_PROGRESS, or RESOLVED"
        )
    return TicketStatus(value)


def check_transition(current: TicketStatus, requested: TicketStatus) -> None:
    """Raise IllegalTransitionError unless current -> requested is a legal step."""
    if (TicketStatus(current), TicketStatus(requested)) not in ALLOWED_TRANSITIONS:
        raise IllegalTransitionError(TicketStatus(current).value, TicketStatus(requested).value)
