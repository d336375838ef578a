"""
Main CDK Stack for the helpdesk ticketing service.
"""

from aws_cdk import (
    Stack,
    Tags,
    CfnOutput,
)
from constructs import Construct

from infrastructure.constructs.api_layer import ApiLayerConstruct
from infrastructure.constructs.auth_layer import AuthLayerConstruct
from infrastructure.constructs.data_layer import DataLayerConstruct
from infrastructure.config.settings import Settings


class HelpdeskStack(Stack):
    """Main stack wiring all constructs together."""

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        *,
        settings: Settings,
        **kwargs,
    ) -> None:
        super().__init__(scope, construct_id, **kwargs)

        # Global tags for cost/accounting.
        Tags.of(self).add("Project", "helpdesk-tickets")
        Tags.of(self).add("Environment", settings.environment)
        Tags.of(self).add("ManagedBy", "cdk")

        # 1) Data layer.
        data_construct = DataLayerConstruct(
            self,
            "DataLayer",
            environment=settings.environment,
            status_index_name=settings.status_index_name,
        )

        # 2) Identity provider.
        auth_construct = AuthLayerConstruct(
            self,
            "AuthLayer",
            environment=settings.environment,
            agent_group=settings.agent_group,
        )

        # 3) API layer (single Lambda).
        api_construct = ApiLayerConstruct(
            self,
            "ApiLayer",
            environment=settings.environment,
            tickets_table=data_construct.tickets_table,
            status_index_name=settings.status_index_name,
            user_pool=auth_construct.user_pool,
            user_pool_client=auth_construct.user_pool_client,
            agent_group=settings.agent_group,
            allowed_origin=settings.allowed_origin,
            log_level=settings.log_level,
            lambda_memory_mb=settings.lambda_memory_mb,
            lambda_timeout_seconds=settings.lambda_timeout_seconds,
        )

        # Outputs to quickly find resources.
        CfnOutput(self, "ApiEndpoint", value=api_construct.api.api_endpoint)
        CfnOutput(self, "TicketsTable", value=data_construct.tickets_table.table_name)
        CfnOutput(self, "UserPoolId", value=auth_construct.user_pool.user_pool_id)
        CfnOutput(
            self,
            "UserPoolClientId",
            value=auth_construct.user_pool_client.user_pool_client_id,
        )
