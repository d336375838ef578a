"""Shared plumbing for the ticket route handlers."""

from __future__ import annotations

import base64
import json
import uuid
from typing import Any, Dict, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from utils.config import RuntimeSettings
from utils.error_handling import InvalidInputError

ModelT = TypeVar("ModelT", bound=BaseModel)

# Lazy-loaded so warm invocations reuse one DynamoDB resource.
_settings: Optional[RuntimeSettings] = None
_ticket_service: Optional["TicketService"] = None


def get_settings() -> RuntimeSettings:
    """Load RuntimeSettings once."""
    global _settings
    if _settings is None:
        _settings = RuntimeSettings.from_environment()
    return _settings


def get_ticket_service():
    """Lazy-load TicketService."""
    global _ticket_service
    if _ticket_service is None:
        from repositories.dynamodb_repo import TicketStore
        from services.ticket_service import TicketService

        settings = get_settings()
        _ticket_service = TicketService(
            TicketStore(settings.table_name, settings.status_index_name)
        )
    return _ticket_service


def reset() -> None:
    """Drop cached settings and service (used by tests)."""
    global _settings, _ticket_service
    _settings = None
    _ticket_service = None


def request_id(event: Dict[str, Any]) -> str:
    """Correlation id for logs and error bodies."""
    return (event.get("requestContext") or {}).get("requestId") or str(uuid.uuid4())


def parse_body(event: Dict[str, Any], model: Type[ModelT]) -> ModelT:
    """Parse the JSON body into ``model`` or raise InvalidInputError."""
    raw = event.get("body") or "{}"
    try:
        if event.get("isBase64Encoded") and event.get("body"):
            raw = base64.b64decode(raw, validate=True).decode("utf-8")
        payload = json.loads(raw)
    except (TypeError, ValueError) as exc:
        raise InvalidInputError("Invalid JSON body") from exc
    if not isinstance(payload, dict):
        raise InvalidInputError("Request body must be a JSON object")

    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        first = exc.errors()[0]
        field = ".".join(str(part) for part in first.get("loc", ())) or "body"
        raise InvalidInputError(f"{field}: {first.get('msg', 'invalid value')}") from exc
