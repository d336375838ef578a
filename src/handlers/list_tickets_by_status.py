"""Handler for GET /agent/tickets?status=<STATUS> (agents only)."""

from utils.auth import require_agent, resolve_identity
from utils.error_handling import AppError, ServerError, json_response, to_response
from utils.logging_config import get_logger

from . import common

logger = get_logger(__name__)

ROUTE = "GET /agent/tickets"


def lambda_handler(event, context):
    """Return every ticket in the requested status, newest first."""
    req_id = common.request_id(event)

    try:
        identity = require_agent(
            resolve_identity(event, common.get_settings().agent_group)
        )
        status = (event.get("queryStringParameters") or {}).get("status")
        logger.info(
            "Request received",
            extra={
                "request_id": req_id,
                "route": ROUTE,
                "user_sub": identity.subject_id,
                "status": status,
            },
        )

        tickets = common.get_ticket_service().list_tickets_by_status(status)
        return json_response(200, {"tickets": [t.to_wire() for t in tickets]})

    except AppError as exc:
        logger.warning(
            "Request rejected",
            extra={"request_id": req_id, "route": ROUTE, "error": exc.kind},
        )
        return to_response(exc, req_id)
    except Exception:
        logger.exception("Status listing failed", extra={"request_id": req_id, "route": ROUTE})
        return to_response(ServerError("Failed to list tickets by status"), req_id)
