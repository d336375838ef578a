"""
Pydantic model tests.

Covers wire/table serialization and the key layout of the single table.
No AWS connection required.

Run with: pytest tests/unit/test_models.py -v
"""

import pytest
from pydantic import ValidationError

from models.identity import Identity, Role
from models.response import ErrorEnvelope
from models.ticket import (
    CreateTicketRequest,
    OwnerIndexEntry,
    OwnerTicketSummary,
    StatusTicketSummary,
    StatusUpdateRequest,
    TicketRecord,
    TicketStatus,
)


def _record(**overrides) -> TicketRecord:
    fields = dict(
        ticket_id="t-1",
        owner_id="user-1",
        status=TicketStatus.OPEN,
        title="Printer broken",
        description="It wont turn on",
        created_at="2024-05-01T09:00:00.000Z",
    )
    fields.update(overrides)
    return TicketRecord(**fields)


class TestTicketRecord:
    """Ticket record item layout."""

    def test_item_carries_primary_and_status_index_keys(self):
        item = _record().to_item()

        assert item["PK"] == "TICKET#t-1"
        assert item["SK"] == "META"
        assert item["GSI1PK"] == "STATUS#OPEN"
        assert item["GSI1SK"] == "CREATED#2024-05-01T09:00:00.000Z#t-1"
        assert item["ownerId"] == "user-1"
        assert item["status"] == "OPEN"
        assert "updatedAt" not in item

    def test_from_item_ignores_key_attributes(self):
        item = _record(updated_at="2024-05-01T10:00:00.000Z").to_item()
        record = TicketRecord.from_item(item)

        assert record.ticket_id == "t-1"
        assert record.updated_at == "2024-05-01T10:00:00.000Z"
        assert record.status == TicketStatus.OPEN

    def test_rejects_unknown_status(self):
        with pytest.raises(ValidationError):
            _record(status="CLOSED")


class TestOwnerIndexEntry:
    """Owner index entry layout."""

    def test_entry_key_sorts_by_creation_time(self):
        entry = OwnerIndexEntry.for_ticket(_record())
        item = entry.to_item()

        assert item["PK"] == "USER#user-1"
        assert item["SK"] == "TICKET#2024-05-01T09:00:00.000Z#t-1"
        assert item["status"] == "OPEN"
        assert item["title"] == "Printer broken"
        assert "description" not in item
        assert "GSI1PK" not in item


class TestSummaries:
    """List projections drop everything but the listed fields."""

    def test_owner_summary_projection(self):
        item = OwnerIndexEntry.for_ticket(_record()).to_item()
        summary = OwnerTicketSummary.model_validate(item).to_wire()

        assert summary == {
            "ticketId": "t-1",
            "status": "OPEN",
            "createdAt": "2024-05-01T09:00:00.000Z",
            "title": "Printer broken",
        }

    def test_status_summary_includes_owner(self):
        summary = StatusTicketSummary.model_validate(_record().to_item()).to_wire()
        assert summary["ownerId"] == "user-1"
        assert set(summary) == {"ticketId", "ownerId", "status", "createdAt", "title"}


class TestRequests:
    """Request body models."""

    def test_create_request_requires_both_fields(self):
        with pytest.raises(ValidationError):
            CreateTicketRequest.model_validate({"title": "Only a title"})

    def test_create_request_rejects_non_string_title(self):
        with pytest.raises(ValidationError):
            CreateTicketRequest.model_validate({"title": 42, "description": "Some text"})

    def test_status_update_uses_status_field(self):
        assert StatusUpdateRequest.model_validate({"status": "RESOLVED"}).status == "RESOLVED"
        with pytest.raises(ValidationError):
            StatusUpdateRequest.model_validate({"newStatus": "RESOLVED"})


def test_identity_defaults_to_user_role():
    identity = Identity(subject_id="abc")
    assert identity.roles == frozenset({Role.USER})
    assert identity.is_agent is False


def test_error_envelope_serializes_request_id_in_camel_case():
    envelope = ErrorEnvelope(error="NotFound", message="Ticket not found", request_id="r-1")
    assert envelope.model_dump(by_alias=True) == {
        "error": "NotFound",
        "message": "Ticket not found",
        "requestId": "r-1",
    }
