"""
Environment-specific deployment settings.

Cost-optimized defaults for development/testing.
"""

from dataclasses import dataclass
import os


@dataclass
class Settings:
    """Deployment settings with cost-optimized defaults."""

    # Environment
    environment: str = "dev"
    aws_region: str = "eu-west-2"  # Default AWS region

    # Table layout
    status_index_name: str = "GSI1"

    # Identity
    agent_group: str = "Agents"

    # Lambda Configuration
    lambda_memory_mb: int = 256
    lambda_timeout_seconds: int = 10
    log_level: str = "INFO"

    # CORS origin for the single-page UI
    allowed_origin: str = "*"

    @classmethod
    def from_environment(cls) -> "Settings":
        """Load settings from environment variables."""
        env = os.environ.get("ENVIRONMENT", "dev")
        region = os.environ.get("AWS_REGION", "eu-west-2")
        origin = os.environ.get("ALLOWED_ORIGIN", "*")
        agent_group = os.environ.get("AGENT_GROUP", "Agents")

        # Production overrides
        if env == "prod":
            return cls(
                environment="prod",
                aws_region=region,
                agent_group=agent_group,
                lambda_memory_mb=512,
                lambda_timeout_seconds=15,
                log_level="WARNING",
                allowed_origin=origin,
            )

        return cls(
            environment=env,
            aws_region=region,
            agent_group=agent_group,
            allowed_origin=origin,
        )
