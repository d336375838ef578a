"""Handler for GET /tickets."""

from utils.auth import resolve_identity
from utils.error_handling import AppError, ServerError, json_response, to_response
from utils.logging_config import get_logger

from . import common

logger = get_logger(__name__)

ROUTE = "GET /tickets"


def lambda_handler(event, context):
    """Return the caller's own tickets, newest first."""
    req_id = common.request_id(event)

    try:
        identity = resolve_identity(event, common.get_settings().agent_group)
        logger.info(
            "Request received",
            extra={"request_id": req_id, "route": ROUTE, "user_sub": identity.subject_id},
        )

        tickets = common.get_ticket_service().list_owner_tickets(identity.subject_id)
        return json_response(200, {"tickets": [t.to_wire() for t in tickets]})

    except AppError as exc:
        logger.warning(
            "Request rejected",
            extra={"request_id": req_id, "route": ROUTE, "error": exc.kind},
        )
        return to_response(exc, req_id)
    except Exception:
        logger.exception("Ticket listing failed", extra={"request_id": req_id, "route": ROUTE})
        return to_response(ServerError("Failed to list tickets"), req_id)
