"""DynamoDB single-table store with transactional conditional writes."""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import boto3
from boto3.dynamodb.conditions import Key
from botocore.exceptions import ClientError

from utils.error_handling import (
    AlreadyExistsError,
    ConcurrentModificationError,
    NotFoundError,
)
from utils.logging_config import get_logger

logger = get_logger(__name__)

PARTITION_KEY = "PK"
SORT_KEY = "SK"
INDEX_KEYS = {"PK": "GSI1PK", "SK": "GSI1SK"}


@dataclass
class ConditionalUpdate:
    """One guarded update inside an atomic multi-item write."""

    key: Dict[str, str]
    new_fields: Dict[str, Any]
    compare_field: str
    expected: Any


def _cancellation_codes(exc: ClientError) -> List[str]:
    reasons = exc.response.get("CancellationReasons") or []
    codes = [reason.get("Code") for reason in reasons if reason.get("Code")]
    if not codes:
        # Some endpoints only list the reasons in the message text.
        message = exc.response.get("Error", {}).get("Message", "")
        for code in ("ConditionalCheckFailed", "TransactionConflict"):
            if code in message:
                codes.append(code)
    return codes


def _is_transaction_cancelled(exc: ClientError) -> bool:
    return exc.response.get("Error", {}).get("Code") == "TransactionCanceledException"


class TicketStore:
    """Conditional put/get/update/query primitives over one table."""

    def __init__(self, table_name: str, status_index_name: str = "GSI1"):
        self.table_name = table_name
        self.status_index_name = status_index_name
        self.table = boto3.resource("dynamodb").Table(table_name)
        # The resource-backed client keeps high-level (de)serialization.
        self.client = self.table.meta.client

    def put_if_absent(self, *items: Dict[str, Any]) -> None:
        """Write all items atomically; none lands if any key already exists."""
        transact_items = [
            {
                "Put": {
                    "TableName": self.table_name,
                    "Item": item,
                    "ConditionExpression": "attribute_not_exists(#pk)",
                    "ExpressionAttributeNames": {"#pk": PARTITION_KEY},
                }
            }
            for item in items
        ]
        try:
            self.client.transact_write_items(TransactItems=transact_items)
        except ClientError as exc:
            if _is_transaction_cancelled(exc) and "ConditionalCheckFailed" in _cancellation_codes(exc):
                raise AlreadyExistsError() from exc
            raise

    def get_by_key(self, key: Dict[str, str]) -> Dict[str, Any]:
        """Strongly consistent read of one item."""
        resp = self.table.get_item(Key=key, ConsistentRead=True)
        item = resp.get("Item")
        if item is None:
            raise NotFoundError()
        return item

    def query_by_partition(
        self,
        partition_key: str,
        sort_prefix: Optional[str] = None,
        descending: bool = True,
        index_name: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """Return every item in a partition, following pagination to the end."""
        pk_name, sk_name = PARTITION_KEY, SORT_KEY
        if index_name:
            pk_name, sk_name = INDEX_KEYS["PK"], INDEX_KEYS["SK"]

        condition = Key(pk_name).eq(partition_key)
        if sort_prefix:
            condition = condition & Key(sk_name).begins_with(sort_prefix)

        kwargs: Dict[str, Any] = {
            "KeyConditionExpression": condition,
            "ScanIndexForward": not descending,
        }
        if index_name:
            kwargs["IndexName"] = index_name

        items: List[Dict[str, Any]] = []
        while True:
            resp = self.table.query(**kwargs)
            items.extend(resp.get("Items", []))
            last_key = resp.get("LastEvaluatedKey")
            if not last_key:
                return items
            kwargs["ExclusiveStartKey"] = last_key

    def update_if_matches(self, *updates: ConditionalUpdate) -> None:
        """Apply all updates atomically, each guarded by a compare-and-swap."""
        transact_items = [self._update_item(update) for update in updates]
        try:
            self.client.transact_write_items(TransactItems=transact_items)
        except ClientError as exc:
            if _is_transaction_cancelled(exc):
                codes = _cancellation_codes(exc)
                if "ConditionalCheckFailed" in codes or "TransactionConflict" in codes:
                    logger.info(
                        "Conditional update rejected",
                        extra={"table": self.table_name, "reasons": codes},
                    )
                    raise ConcurrentModificationError() from exc
            raise

    def _update_item(self, update: ConditionalUpdate) -> Dict[str, Any]:
        names = {"#pk": PARTITION_KEY, "#cmp": update.compare_field}
        values: Dict[str, Any] = {":expected": update.expected}
        assignments = []
        for index, (field, value) in enumerate(update.new_fields.items()):
            names[f"#f{index}"] = field
            values[f":v{index}"] = value
            assignments.append(f"#f{index} = :v{index}")

        return {
            "Update": {
                "TableName": self.table_name,
                "Key": update.key,
                "UpdateExpression": "SET " + ", ".join(assignments),
                "ConditionExpression": "attribute_exists(#pk) AND #cmp = :expected",
                "ExpressionAttributeNames": names,
                "ExpressionAttributeValues": values,
            }
        }
