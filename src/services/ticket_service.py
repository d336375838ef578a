"""
Ticket lifecycle service.

Owns creation, listing and status transitions. The ticket record, its owner
index entry and its status index attributes are only ever written together in
one DynamoDB transaction, so the three views of a ticket never disagree.
"""

from typing import Callable, List

from botocore.exceptions import BotoCoreError, ClientError

from models.ticket import (
    TICKET_PREFIX,
    CreateTicketResponse,
    OwnerIndexEntry,
    OwnerTicketSummary,
    StatusTicketSummary,
    StatusUpdateResponse,
    TicketRecord,
    TicketStatus,
    owner_index_key,
    owner_partition,
    status_partition,
    status_sort,
    ticket_key,
)
from repositories.dynamodb_repo import ConditionalUpdate, TicketStore
from utils.error_handling import AlreadyExistsError, NotFoundError, ServerError
from utils.logging_config import get_logger
from utils.time_utils import new_ticket_id, utc_now_iso
from utils.validators import (
    check_transition,
    parse_status,
    validate_description,
    validate_title,
)

logger = get_logger(__name__)

_STORE_ERRORS = (ClientError, BotoCoreError)


def _store_error_code(exc: Exception) -> str:
    if isinstance(exc, ClientError):
        return exc.response.get("Error", {}).get("Code", "ClientError")
    return type(exc).__name__


class TicketService:
    """Encapsulates the ticket workflow on top of the single-table store."""

    def __init__(
        self,
        store: TicketStore,
        clock: Callable[[], str] = utc_now_iso,
        id_factory: Callable[[], str] = new_ticket_id,
    ):
        self.store = store
        self.clock = clock
        self.id_factory = id_factory

    def create_ticket(self, owner_id: str, title, description) -> CreateTicketResponse:
        """Validate, then write the record and its owner entry atomically."""
        clean_title = validate_title(title)
        clean_description = validate_description(description)

        record = TicketRecord(
            ticket_id=self.id_factory(),
            owner_id=owner_id,
            status=TicketStatus.OPEN,
            title=clean_title,
            description=clean_description,
            created_at=self.clock(),
        )
        owner_entry = OwnerIndexEntry.for_ticket(record)

        try:
            self.store.put_if_absent(record.to_item(), owner_entry.to_item())
        except AlreadyExistsError as exc:
            logger.error("Ticket id collision", extra={"ticket_id": record.ticket_id})
            raise ServerError("Failed to create ticket") from exc
        except _STORE_ERRORS as exc:
            logger.error(
                "Ticket creation failed",
                extra={"owner_id": owner_id, "error": _store_error_code(exc)},
            )
            raise ServerError("Failed to create ticket") from exc

        logger.info(
            "Ticket created",
            extra={"ticket_id": record.ticket_id, "owner_id": owner_id},
        )
        return CreateTicketResponse(
            ticket_id=record.ticket_id,
            status=record.status,
            created_at=record.created_at,
        )

    def list_owner_tickets(self, owner_id: str) -> List[OwnerTicketSummary]:
        """Every ticket the owner filed, newest first."""
        try:
            items = self.store.query_by_partition(
                owner_partition(owner_id), sort_prefix=TICKET_PREFIX, descending=True
            )
        except _STORE_ERRORS as exc:
            logger.error(
                "Owner ticket query failed",
                extra={"owner_id": owner_id, "error": _store_error_code(exc)},
            )
            raise ServerError("Failed to list tickets") from exc

        return [OwnerTicketSummary.model_validate(item) for item in items]

    def list_tickets_by_status(self, status) -> List[StatusTicketSummary]:
        """
        Every ticket currently in ``status``, newest first, across all owners.

        Callers must restrict this to agents; the service does not check roles.
        """
        wanted = parse_status(status)
        try:
            items = self.store.query_by_partition(
                status_partition(wanted),
                descending=True,
                index_name=self.store.status_index_name,
            )
        except _STORE_ERRORS as exc:
            logger.error(
                "Status ticket query failed",
                extra={"status": wanted.value, "error": _store_error_code(exc)},
            )
            raise ServerError("Failed to list tickets by status") from exc

        return [StatusTicketSummary.model_validate(item) for item in items]

    def get_ticket(self, ticket_id: str) -> TicketRecord:
        """Fresh read of the ticket record."""
        try:
            item = self.store.get_by_key(ticket_key(ticket_id))
        except NotFoundError as exc:
            raise NotFoundError("Ticket not found") from exc
        except _STORE_ERRORS as exc:
            logger.error(
                "Ticket read failed",
                extra={"ticket_id": ticket_id, "error": _store_error_code(exc)},
            )
            raise ServerError("Failed to read ticket") from exc
        return TicketRecord.from_item(item)

    def transition_status(self, ticket_id: str, requested_status) -> StatusUpdateResponse:
        """
        Move a ticket one step along OPEN -> IN_PROGRESS -> RESOLVED.

        Both writes are conditioned on the status read here, so of two racing
        transitions exactly one commits and the other gets
        ConcurrentModificationError. No retry is attempted.
        """
        requested = parse_status(requested_status)
        current = self.get_ticket(ticket_id)
        check_transition(current.status, requested)

        # Never earlier than creation, even if this host's clock lags.
        updated_at = max(self.clock(), current.created_at)
        previous = TicketStatus(current.status).value

        record_update = ConditionalUpdate(
            key=ticket_key(ticket_id),
            new_fields={
                "status": requested.value,
                "GSI1PK": status_partition(requested),
                "GSI1SK": status_sort(current.created_at, ticket_id),
                "updatedAt": updated_at,
            },
            compare_field="status",
            expected=previous,
        )
        owner_update = ConditionalUpdate(
            key=owner_index_key(current.owner_id, current.created_at, ticket_id),
            new_fields={"status": requested.value},
            compare_field="status",
            expected=previous,
        )

        try:
            self.store.update_if_matches(record_update, owner_update)
        except _STORE_ERRORS as exc:
            logger.error(
                "Status transition failed",
                extra={"ticket_id": ticket_id, "error": _store_error_code(exc)},
            )
            raise ServerError("Failed to update ticket status") from exc

        logger.info(
            "Ticket status changed",
            extra={"ticket_id": ticket_id, "from": previous, "to": requested.value},
        )
        return StatusUpdateResponse(
            ticket_id=ticket_id, status=requested, updated_at=updated_at
        )
