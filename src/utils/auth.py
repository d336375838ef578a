"""
Identity resolution from API Gateway JWT authorizer claims.

Token verification happens upstream in the HTTP API authorizer; this module
only turns the verified claims into a typed Identity once per request.
"""

from typing import Any, Dict, List, Optional

from models.identity import Identity, Role
from utils.error_handling import ForbiddenError, UnauthenticatedError

GROUPS_CLAIM = "cognito:groups"


def _claims(event: Dict[str, Any]) -> Dict[str, Any]:
    request_context = event.get("requestContext") or {}
    authorizer = request_context.get("authorizer") or {}
    jwt = authorizer.get("jwt") or {}
    return jwt.get("claims") or {}


def normalize_groups(raw: Any) -> List[str]:
    """
    Accept the shapes Cognito groups arrive in.

    HTTP API authorizers flatten list claims to ``"[Agents Users]"``.
    """
    if not raw:
        return []
    if isinstance(raw, (list, tuple, set)):
        return [str(group) for group in raw]
    text = str(raw).strip()
    if text.startswith("[") and text.endswith("]"):
        return [group for group in text[1:-1].replace(",", " ").split() if group]
    return [text]


def resolve_identity(event: Dict[str, Any], agent_group: str = "Agents") -> Identity:
    """Build the caller's Identity or raise UnauthenticatedError."""
    claims = _claims(event)
    subject_id: Optional[Any] = claims.get("sub")
    if not subject_id or not isinstance(subject_id, str):
        raise UnauthenticatedError()

    roles = {Role.USER}
    if agent_group in normalize_groups(claims.get(GROUPS_CLAIM)):
        roles.add(Role.AGENT)
    return Identity(subject_id=subject_id, roles=frozenset(roles))


def require_agent(identity: Identity) -> Identity:
    """Raise ForbiddenError unless the caller holds the agent role."""
    if not identity.is_agent:
        raise ForbiddenError()
    return identity
