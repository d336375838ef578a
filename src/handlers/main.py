"""
Single entrypoint Lambda that routes HTTP API requests to thin handler modules.

Why one Lambda?
- Keeps the DynamoDB resource warm across routes.
- Simpler to deploy while still keeping code organized by delegating to modules.
"""

from typing import Callable, Tuple

from utils.error_handling import NotFoundError, to_response

from . import (
    common,
    create_ticket,
    health_check,
    list_my_tickets,
    list_tickets_by_status,
    update_ticket_status,
)


def lambda_handler(event, context):
    """
    Entry point invoked by API Gateway HTTP API.

    The event contains the HTTP method and path; we route it to the correct
    handler. Each handler owns its own auth, logging and error translation.
    """
    http = (event.get("requestContext") or {}).get("http") or {}
    method = http.get("method") or ""
    path = http.get("path") or ""
    route_key = f"{method.upper()} {path.rstrip('/') or '/'}"

    # Exact keys first, then prefixes for routes with path params.
    exact_routes = {
        "GET /health": health_check.lambda_handler,
        "POST /tickets": create_ticket.lambda_handler,
        "GET /tickets": list_my_tickets.lambda_handler,
        "GET /agent/tickets": list_tickets_by_status.lambda_handler,
    }
    prefix_routes: Tuple[Tuple[str, Callable], ...] = (
        ("PATCH /agent/tickets/", update_ticket_status.lambda_handler),
    )

    handler = exact_routes.get(route_key)
    if handler is not None:
        return handler(event, context)

    for prefix, handler in prefix_routes:
        if route_key.startswith(prefix):
            return handler(event, context)

    return to_response(NotFoundError("Route not found"), common.request_id(event))
