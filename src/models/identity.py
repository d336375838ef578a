"""Caller identity resolved from trusted gateway claims."""

from enum import Enum
from typing import FrozenSet

from pydantic import BaseModel, ConfigDict


class Role(str, Enum):
    """Roles the ticket routes care about."""

    USER = "user"
    AGENT = "agent"


class Identity(BaseModel):
    """Verified subject plus the roles it holds."""

    model_config = ConfigDict(frozen=True)

    subject_id: str
    roles: FrozenSet[Role] = frozenset({Role.USER})

    @property
    def is_agent(self) -> bool:
        return Role.AGENT in self.roles
