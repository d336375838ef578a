"""Ticket models and the single-table key layout."""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

TICKET_PREFIX = "TICKET#"
USER_PREFIX = "USER#"
STATUS_PREFIX = "STATUS#"
CREATED_PREFIX = "CREATED#"
META_SORT_KEY = "META"


class TicketStatus(str, Enum):
    """Lifecycle states enforced by the workflow."""

    OPEN = "OPEN"
    IN_PROGRESS = "IN_PROGRESS"
    RESOLVED = "RESOLVED"


def ticket_key(ticket_id: str) -> Dict[str, str]:
    """Primary key of the ticket record."""
    return {"PK": f"{TICKET_PREFIX}{ticket_id}", "SK": META_SORT_KEY}


def owner_partition(owner_id: str) -> str:
    return f"{USER_PREFIX}{owner_id}"


def owner_index_key(owner_id: str, created_at: str, ticket_id: str) -> Dict[str, str]:
    """Primary key of the owner index entry, sortable by recency."""
    return {
        "PK": owner_partition(owner_id),
        "SK": f"{TICKET_PREFIX}{created_at}#{ticket_id}",
    }


def status_partition(status: TicketStatus) -> str:
    return f"{STATUS_PREFIX}{TicketStatus(status).value}"


def status_sort(created_at: str, ticket_id: str) -> str:
    return f"{CREATED_PREFIX}{created_at}#{ticket_id}"


class CamelModel(BaseModel):
    """Base model serialized with camelCase names on the wire and in the table."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
    )

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class TicketRecord(CamelModel):
    """System-of-record item for one ticket."""

    ticket_id: str
    owner_id: str
    status: TicketStatus
    title: str
    description: str
    created_at: str
    updated_at: Optional[str] = None

    def key(self) -> Dict[str, str]:
        return ticket_key(self.ticket_id)

    def to_item(self) -> Dict[str, Any]:
        """Render the stored item, including the status index attributes."""
        item = self.key()
        item.update(self.to_wire())
        item["GSI1PK"] = status_partition(self.status)
        item["GSI1SK"] = status_sort(self.created_at, self.ticket_id)
        return item

    @classmethod
    def from_item(cls, item: Dict[str, Any]) -> "TicketRecord":
        return cls.model_validate(item)


class OwnerIndexEntry(CamelModel):
    """Denormalized copy of a ticket under its owner's partition."""

    ticket_id: str
    owner_id: str
    status: TicketStatus
    title: str
    created_at: str

    def key(self) -> Dict[str, str]:
        return owner_index_key(self.owner_id, self.created_at, self.ticket_id)

    def to_item(self) -> Dict[str, Any]:
        item = self.key()
        item.update(self.model_dump(by_alias=True, exclude={"owner_id"}))
        return item

    @classmethod
    def for_ticket(cls, record: TicketRecord) -> "OwnerIndexEntry":
        return cls(
            ticket_id=record.ticket_id,
            owner_id=record.owner_id,
            status=record.status,
            title=record.title,
            created_at=record.created_at,
        )


class OwnerTicketSummary(CamelModel):
    """Row of the caller's own ticket list."""

    ticket_id: str
    status: TicketStatus
    created_at: str
    title: str


class StatusTicketSummary(CamelModel):
    """Row of the agent's by-status ticket list."""

    ticket_id: str
    owner_id: str
    status: TicketStatus
    created_at: str
    title: str


class CreateTicketRequest(BaseModel):
    """Inbound body for POST /tickets. Length rules are applied by the service."""

    title: str
    description: str


class StatusUpdateRequest(BaseModel):
    """Inbound body for PATCH /agent/tickets/{ticketId}."""

    status: str


class CreateTicketResponse(CamelModel):
    ticket_id: str
    status: TicketStatus
    created_at: str


class StatusUpdateResponse(CamelModel):
    ticket_id: str
    status: TicketStatus
    updated_at: str
