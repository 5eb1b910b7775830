from enum import Enum
from typing import Any, Dict, List, Optional, Protocol

from botocore.exceptions import BotoCoreError, ClientError

Item = Dict[str, Any]

# Partition key of the users table.
KEY_ATTRIBUTE = "email"


class StoreError(Exception):
    """A DynamoDB call failed."""


class ConditionFailed(StoreError):
    """A conditional put was rejected because of the item's current state."""


class PutCondition(Enum):
    MUST_NOT_EXIST = f"attribute_not_exists({KEY_ATTRIBUTE})"
    MUST_EXIST = f"attribute_exists({KEY_ATTRIBUTE})"


class UserStore(Protocol):
    """The four table operations the user service needs.

    Implementations raise ``StoreError`` (or ``ConditionFailed`` for a
    rejected conditional put) and never return partial results.
    """

    def get(self, table_name: str, key: str) -> Optional[Item]:
        ...

    def scan(self, table_name: str) -> List[Item]:
        ...

    def put(self, table_name: str, item: Item, condition: Optional[PutCondition] = None) -> None:
        ...

    def delete(self, table_name: str, key: str) -> None:
        ...


class DynamoUserStore:
    """``UserStore`` backed by a boto3 DynamoDB resource."""

    def __init__(self, dynamodb):
        self.dynamodb = dynamodb

    def _table(self, table_name):
        return self.dynamodb.Table(table_name)

    def get(self, table_name, key):
        try:
            response = self._table(table_name).get_item(Key={KEY_ATTRIBUTE: key})
        except (ClientError, BotoCoreError) as e:
            raise StoreError(f"get_item on {table_name} failed: {e}") from e
        # No 'Item' in the response means there is no such key.
        return response.get('Item')

    def scan(self, table_name):
        # A single scan call: results past the 1MB page limit are not followed.
        try:
            response = self._table(table_name).scan()
        except (ClientError, BotoCoreError) as e:
            raise StoreError(f"scan on {table_name} failed: {e}") from e
        return response.get('Items', [])

    def put(self, table_name, item, condition=None):
        kwargs = {'Item': item}
        if condition is not None:
            kwargs['ConditionExpression'] = condition.value
        try:
            self._table(table_name).put_item(**kwargs)
        except ClientError as e:
            if condition is not None and e.response['Error']['Code'] == 'ConditionalCheckFailedException':
                raise ConditionFailed(f"put_item on {table_name} rejected: {condition.name}") from e
            raise StoreError(f"put_item on {table_name} failed: {e}") from e
        except BotoCoreError as e:
            raise StoreError(f"put_item on {table_name} failed: {e}") from e

    def delete(self, table_name, key):
        # DynamoDB treats deleting a missing key as a success.
        try:
            self._table(table_name).delete_item(Key={KEY_ATTRIBUTE: key})
        except (ClientError, BotoCoreError) as e:
            raise StoreError(f"delete_item on {table_name} failed: {e}") from e
