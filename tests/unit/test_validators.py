import pytest

from models.ticket import TicketStatus
from utils.error_handling import IllegalTransitionError, InvalidInputError
from utils.validators import (
    check_transition,
    ensure_present,
    is_valid_status,
    parse_status,
    validate_description,
    validate_title,
)

LEGAL = {
    (TicketStatus.OPEN, TicketStatus.IN_PROGRESS),
    (TicketStatus.IN_PROGRESS, TicketStatus.RESOLVED),
}
ALL_PAIRS = [(current, nxt) for current in TicketStatus for nxt in TicketStatus]


@pytest.mark.parametrize("length", [3, 4, 119, 120])
def test_title_lengths_accepted(length):
    assert validate_title("x" * length) == "x" * length


@pytest.mark.parametrize("length", [0, 2, 121])
def test_title_lengths_rejected(length):
    with pytest.raises(InvalidInputError):
        validate_title("x" * length)


def test_title_is_measured_after_trimming():
    with pytest.raises(InvalidInputError):
        validate_title("  ab  ")
    assert validate_title("  abc  ") == "abc"
    # 120 visible characters padded with whitespace still fit.
    assert len(validate_title("   " + "y" * 120 + "   ")) == 120


@pytest.mark.parametrize("value", [None, 123, ["a title"], {"t": "x"}])
def test_title_must_be_a_string(value):
    with pytest.raises(InvalidInputError):
        validate_title(value)


def test_description_boundaries():
    with pytest.raises(InvalidInputError):
        validate_description("x" * 4)
    assert validate_description("x" * 5) == "x" * 5
    assert validate_description("x" * 2000) == "x" * 2000
    with pytest.raises(InvalidInputError):
        validate_description("x" * 2001)


@pytest.mark.parametrize("value", ["OPEN", "IN_PROGRESS", "RESOLVED", TicketStatus.OPEN])
def test_valid_statuses(value):
    assert is_valid_status(value)


@pytest.mark.parametrize("value", ["open", "CLOSED", "", None, 1, ["OPEN"]])
def test_invalid_statuses(value):
    assert not is_valid_status(value)
    with pytest.raises(InvalidInputError):
        parse_status(value)


@pytest.mark.parametrize("current,requested", ALL_PAIRS)
def test_transition_table(current, requested):
    if (current, requested) in LEGAL:
        check_transition(current, requested)
    else:
        with pytest.raises(IllegalTransitionError) as exc_info:
            check_transition(current, requested)
        assert exc_info.value.message == f"invalid transition {current.value} -> {requested.value}"


def test_transition_accepts_raw_strings():
    check_transition("OPEN", "IN_PROGRESS")
    with pytest.raises(IllegalTransitionError):
        check_transition("RESOLVED", "OPEN")


def test_ensure_present():
    ensure_present("x", "field")
    with pytest.raises(InvalidInputError, match="ticketId is required"):
        ensure_present("", "ticketId")
