from __future__ import annotations

import logging
from decimal import Decimal

from cloud_labs.models.catalog import CoffeeItem
from cloud_labs.services.dynamodb_service import DynamoDBService


logger = logging.getLogger(__name__)

COFFEE_ITEMS: tuple[CoffeeItem, ...] = (
    CoffeeItem(id="coffee-1", name="Espresso", size="Tall", price=Decimal("3.50")),
    CoffeeItem(id="coffee-2", name="Latte", size="Grande", price=Decimal("4.20")),
    CoffeeItem(id="coffee-3", name="Cappuccino", size="Venti", price=Decimal("4.80")),
)


class DynamoDBLabService:
    """DynamoDB basics lab: create a table, write a menu, read it back, drop the table."""

    def __init__(self, *, dynamodb: DynamoDBService, items: tuple[CoffeeItem, ...] = COFFEE_ITEMS) -> None:
        self._dynamodb = dynamodb
        self._items = items

    async def run(self) -> list[CoffeeItem]:
        """Run the lab end to end and return the menu read from the table.

        On failure the table deletion is attempted once, then the original error
        is re-raised.
        """

        logger.info("Starting DynamoDB operations on table %s...", self._dynamodb.table_name)
        try:
            await self._dynamodb.create_table(wait=True)
            await self.insert_items()
            menu = await self.read_all_items()
            await self._dynamodb.delete_table(wait=True)
        except Exception as exc:
            logger.error("DynamoDB lab failed: %s", exc)
            await self._cleanup()
            raise

        logger.info("All operations completed successfully!")
        return menu

    async def insert_items(self) -> None:
        logger.info("Inserting coffee items...")
        for item in self._items:
            await self._dynamodb.put_item(item.to_dynamodb_item())
            logger.info("Inserted: %s", item.describe())
        logger.info("All coffee items inserted successfully!")

    async def read_all_items(self) -> list[CoffeeItem]:
        logger.info("Reading all items from the table...")
        menu = [CoffeeItem.from_dynamodb_item(raw) for raw in await self._dynamodb.scan_items()]

        if not menu:
            logger.info("No items found in the table.")
            return menu

        logger.info("Coffee Menu:")
        for index, item in enumerate(menu, start=1):
            logger.info("%d. %s", index, item.describe())
        logger.info("Total items found: %d", len(menu))
        return menu

    async def _cleanup(self) -> None:
        logger.info("Attempting cleanup...")
        try:
            await self._dynamodb.delete_table(wait=True)
        except Exception as cleanup_exc:
            logger.error("Cleanup failed: %s", cleanup_exc)
            logger.warning(
                "Please manually delete table %s via the AWS Console if it exists.",
                self._dynamodb.table_name,
            )
