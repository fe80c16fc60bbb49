from __future__ import annotations

import logging
from typing import Any, Optional

import aioboto3

from cloud_labs.models.catalog import AttributeValueMap
from cloud_labs.services.aws_errors import is_error_code
from cloud_labs.services.config import DynamoDBConfig


logger = logging.getLogger(__name__)


class DynamoDBServiceError(RuntimeError):
    pass


class DynamoDBTableNotFoundError(DynamoDBServiceError):
    pass


class DynamoDBService:
    """Control- and data-plane calls against a single DynamoDB table."""

    def __init__(self, config: DynamoDBConfig, *, session: Optional[Any] = None) -> None:
        self._config = config
        self._session = session or aioboto3.Session()

    @property
    def table_name(self) -> str:
        return self._config.table_name

    def _client(self) -> Any:
        return self._session.client(
            "dynamodb",
            region_name=self._config.region_name,
            endpoint_url=self._config.endpoint_url,
        )

    def _waiter_config(self) -> dict[str, int]:
        delay = max(1, self._config.wait_delay_seconds)
        attempts = max(1, self._config.wait_max_seconds // delay)
        return {"Delay": delay, "MaxAttempts": attempts}

    async def create_table(self, *, wait: bool = True) -> bool:
        """Create the table with a single string hash key and on-demand billing.

        Returns:
            True when the table was created, False when it already existed.
        """

        table = self._config.table_name
        key = self._config.key_attribute
        logger.info("Creating DynamoDB table: %s...", table)

        try:
            dynamodb_client: Any = self._client()
            async with dynamodb_client as dynamodb:
                await dynamodb.create_table(
                    TableName=table,
                    KeySchema=[{"AttributeName": key, "KeyType": "HASH"}],
                    AttributeDefinitions=[{"AttributeName": key, "AttributeType": "S"}],
                    BillingMode="PAY_PER_REQUEST",
                )
                if wait:
                    logger.info("Waiting for table to be active...")
                    waiter = dynamodb.get_waiter("table_exists")
                    await waiter.wait(TableName=table, WaiterConfig=self._waiter_config())
        except Exception as exc:
            if is_error_code(exc, "ResourceInUseException"):
                logger.warning("Table %s already exists", table)
                return False
            logger.exception("DynamoDB create_table failed")
            raise DynamoDBServiceError(f"Failed to create DynamoDB table (table={table})") from exc

        logger.info("Table %s created successfully", table)
        return True

    async def put_item(self, item: AttributeValueMap) -> None:
        try:
            dynamodb_client: Any = self._client()
            async with dynamodb_client as dynamodb:
                await dynamodb.put_item(TableName=self._config.table_name, Item=item)
        except Exception as exc:
            logger.exception("DynamoDB put_item failed")
            raise DynamoDBServiceError(f"Failed to put item into {self._config.table_name}") from exc

    async def scan_items(self) -> list[AttributeValueMap]:
        """Return every item in the table, following LastEvaluatedKey."""

        table = self._config.table_name
        try:
            items: list[AttributeValueMap] = []
            kwargs: dict[str, Any] = {"TableName": table}
            dynamodb_client: Any = self._client()
            async with dynamodb_client as dynamodb:
                while True:
                    response = await dynamodb.scan(**kwargs)
                    items.extend(response.get("Items", []))
                    last_key = response.get("LastEvaluatedKey")
                    if not last_key:
                        break
                    kwargs["ExclusiveStartKey"] = last_key
            return items
        except Exception as exc:
            if is_error_code(exc, "ResourceNotFoundException"):
                raise DynamoDBTableNotFoundError(f"Table does not exist: {table}") from exc
            logger.exception("DynamoDB scan failed")
            raise DynamoDBServiceError(f"Failed to scan {table}") from exc

    async def delete_item(self, key: AttributeValueMap) -> None:
        try:
            dynamodb_client: Any = self._client()
            async with dynamodb_client as dynamodb:
                await dynamodb.delete_item(TableName=self._config.table_name, Key=key)
        except Exception as exc:
            logger.exception("DynamoDB delete_item failed")
            raise DynamoDBServiceError(f"Failed to delete item from {self._config.table_name}") from exc

    async def delete_all_items(self) -> int:
        """Scan the table and delete items one by one.

        Items without the key attribute are skipped. A missing table counts as
        nothing to delete.
        """

        table = self._config.table_name
        key_name = self._config.key_attribute
        logger.info("Deleting all items from table %s...", table)

        try:
            items = await self.scan_items()
        except DynamoDBTableNotFoundError:
            logger.warning("Table %s does not exist", table)
            return 0

        if not items:
            logger.warning("No items found in table")
            return 0

        deleted = 0
        for item in items:
            key_value = item.get(key_name)
            if not key_value:
                logger.warning("Skipping item without %s", key_name)
                continue
            await self.delete_item({key_name: key_value})
            logger.info("Deleted item: %s", key_value.get("S", key_value))
            deleted += 1

        logger.info("All items deleted from %s", table)
        return deleted

    async def delete_table(self, *, wait: bool = False) -> bool:
        """Delete the table.

        Returns:
            True when the table was deleted, False when it did not exist.
        """

        table = self._config.table_name
        logger.info("Deleting DynamoDB table: %s...", table)

        try:
            dynamodb_client: Any = self._client()
            async with dynamodb_client as dynamodb:
                await dynamodb.delete_table(TableName=table)
                if wait:
                    logger.info("Waiting for table to be deleted...")
                    waiter = dynamodb.get_waiter("table_not_exists")
                    await waiter.wait(TableName=table, WaiterConfig=self._waiter_config())
        except Exception as exc:
            if is_error_code(exc, "ResourceNotFoundException"):
                logger.warning("Table %s does not exist", table)
                return False
            logger.exception("DynamoDB delete_table failed")
            raise DynamoDBServiceError(f"Failed to delete DynamoDB table (table={table})") from exc

        logger.info("Table %s deleted successfully", table)
        return True
