"""
Auth layer construct: Cognito user pool whose tokens the HTTP API verifies.

Agents are users placed in the agent group; everyone else is an end user.
"""

from aws_cdk import (
    RemovalPolicy,
    aws_cognito as cognito,
)
from constructs import Construct


class AuthLayerConstruct(Construct):
    """Provision the user pool, SPA client and agent group."""

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        *,
        environment: str,
        agent_group: str,
    ) -> None:
        super().__init__(scope, construct_id)

        self.user_pool = cognito.UserPool(
            self,
            "Users",
            user_pool_name=f"helpdesk-users-{environment}",
            self_sign_up_enabled=True,
            sign_in_aliases=cognito.SignInAliases(email=True),
            auto_verify=cognito.AutoVerifiedAttrs(email=True),
            removal_policy=RemovalPolicy.RETAIN if environment == "prod" else RemovalPolicy.DESTROY,
        )

        # Public client for the single-page UI (no secret).
        self.user_pool_client = self.user_pool.add_client(
            "WebClient",
            auth_flows=cognito.AuthFlow(user_srp=True),
            generate_secret=False,
        )

        cognito.CfnUserPoolGroup(
            self,
            "AgentsGroup",
            user_pool_id=self.user_pool.user_pool_id,
            group_name=agent_group,
            description="Support agents allowed to triage tickets",
        )
