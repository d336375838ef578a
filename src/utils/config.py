"""Runtime configuration read from the Lambda environment."""

from dataclasses import dataclass
import os

from utils.error_handling import ServerError


@dataclass(frozen=True)
class RuntimeSettings:
    """Settings the handlers need at request time."""

    table_name: str
    status_index_name: str = "GSI1"
    agent_group: str = "Agents"
    environment: str = "dev"

    @classmethod
    def from_environment(cls) -> "RuntimeSettings":
        """Load settings from environment variables."""
        table_name = os.environ.get("TABLE_NAME")
        if not table_name:
            raise ServerError("Missing TABLE_NAME")

        return cls(
            table_name=table_name,
            status_index_name=os.environ.get("GSI1_NAME") or "GSI1",
            agent_group=os.environ.get("AGENT_GROUP") or "Agents",
            environment=os.environ.get("ENVIRONMENT", "dev"),
        )
