"""
Data layer construct: one DynamoDB table holding ticket records and the
owner index, plus a GSI serving the by-status view.
"""

from aws_cdk import (
    RemovalPolicy,
    aws_dynamodb as dynamodb,
)
from constructs import Construct


class DataLayerConstruct(Construct):
    """Provision the single ticket table."""

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        *,
        environment: str,
        status_index_name: str,
    ) -> None:
        super().__init__(scope, construct_id)

        self.status_index_name = status_index_name

        self.tickets_table = dynamodb.Table(
            self,
            "Tickets",
            partition_key=dynamodb.Attribute(name="PK", type=dynamodb.AttributeType.STRING),
            sort_key=dynamodb.Attribute(name="SK", type=dynamodb.AttributeType.STRING),
            billing_mode=dynamodb.BillingMode.PAY_PER_REQUEST,
            point_in_time_recovery=environment == "prod",
            removal_policy=RemovalPolicy.RETAIN if environment == "prod" else RemovalPolicy.DESTROY,
        )

        # Only ticket records carry GSI1 keys, so owner entries stay out of it.
        self.tickets_table.add_global_secondary_index(
            index_name=status_index_name,
            partition_key=dynamodb.Attribute(name="GSI1PK", type=dynamodb.AttributeType.STRING),
            sort_key=dynamodb.Attribute(name="GSI1SK", type=dynamodb.AttributeType.STRING),
            projection_type=dynamodb.ProjectionType.ALL,
        )
