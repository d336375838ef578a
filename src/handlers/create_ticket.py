"""Handler for POST /tickets."""

from models.ticket import CreateTicketRequest
from utils.auth import resolve_identity
from utils.error_handling import AppError, ServerError, json_response, to_response
from utils.logging_config import get_logger

from . import common

logger = get_logger(__name__)

ROUTE = "POST /tickets"


def lambda_handler(event, context):
    """File a new ticket owned by the caller."""
    req_id = common.request_id(event)

    try:
        identity = resolve_identity(event, common.get_settings().agent_group)
        logger.info(
            "Request received",
            extra={"request_id": req_id, "route": ROUTE, "user_sub": identity.subject_id},
        )

        body = common.parse_body(event, CreateTicketRequest)
        created = common.get_ticket_service().create_ticket(
            identity.subject_id, body.title, body.description
        )
        return json_response(201, created.to_wire())

    except AppError as exc:
        logger.warning(
            "Request rejected",
            extra={"request_id": req_id, "route": ROUTE, "error": exc.kind},
        )
        return to_response(exc, req_id)
    except Exception:
        logger.exception("Ticket creation failed", extra={"request_id": req_id, "route": ROUTE})
        return to_response(ServerError("Failed to create ticket"), req_id)
