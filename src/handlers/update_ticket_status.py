"""Handler for PATCH /agent/tickets/{ticketId} (agents only)."""

from typing import Optional

from models.ticket import StatusUpdateRequest
from utils.auth import require_agent, resolve_identity
from utils.error_handling import (
    AppError,
    ServerError,
    json_response,
    to_response,
)
from utils.logging_config import get_logger
from utils.validators import ensure_present

from . import common

logger = get_logger(__name__)

ROUTE = "PATCH /agent/tickets/{ticketId}"
PATH_PREFIX = "/agent/tickets/"


def _ticket_id(event) -> Optional[str]:
    """Prefer the API Gateway path parameter; fall back to the raw path."""
    path_params = event.get("pathParameters") or {}
    if path_params.get("ticketId"):
        return path_params["ticketId"]

    http = (event.get("requestContext") or {}).get("http") or {}
    path = http.get("path") or ""
    if path.startswith(PATH_PREFIX):
        return path[len(PATH_PREFIX):].strip("/") or None
    return None


def lambda_handler(event, context):
    """Advance a ticket to the requested status."""
    req_id = common.request_id(event)

    try:
        identity = require_agent(
            resolve_identity(event, common.get_settings().agent_group)
        )
        ticket_id = _ticket_id(event)
        ensure_present(ticket_id, "ticketId")

        body = common.parse_body(event, StatusUpdateRequest)
        logger.info(
            "Request received",
            extra={
                "request_id": req_id,
                "route": ROUTE,
                "user_sub": identity.subject_id,
                "ticket_id": ticket_id,
                "next_status": body.status,
            },
        )

        result = common.get_ticket_service().transition_status(ticket_id, body.status)
        return json_response(200, result.to_wire())

    except AppError as exc:
        logger.warning(
            "Request rejected",
            extra={"request_id": req_id, "route": ROUTE, "error": exc.kind},
        )
        return to_response(exc, req_id)
    except Exception:
        logger.exception("Status update failed", extra={"request_id": req_id, "route": ROUTE})
        return to_response(ServerError("Failed to update ticket status"), req_id)
