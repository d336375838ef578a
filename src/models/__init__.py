"""Pydantic models for API payloads and table items."""

from models.identity import Identity, Role  # noqa: F401
from models.response import ErrorEnvelope  # noqa: F401
from models.ticket import (  # noqa: F401
    CreateTicketRequest,
    CreateTicketResponse,
    OwnerIndexEntry,
    OwnerTicketSummary,
    StatusTicketSummary,
    StatusUpdateRequest,
    StatusUpdateResponse,
    TicketRecord,
    TicketStatus,
)
