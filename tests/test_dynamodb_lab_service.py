from __future__ import annotations

from decimal import Decimal

import pytest

from cloud_labs.models.catalog import CoffeeItem
from cloud_labs.services.dynamodb_service import DynamoDBService, DynamoDBServiceError
from cloud_labs.services.setup.dynamodb_lab_service import COFFEE_ITEMS, DynamoDBLabService
from tests.fakes import FakeSession, client_error


@pytest.fixture
def lab(dynamodb: DynamoDBService) -> DynamoDBLabService:
    return DynamoDBLabService(dynamodb=dynamodb)


async def test_lab_runs_create_insert_scan_delete(lab: DynamoDBLabService, session: FakeSession) -> None:
    session.respond("dynamodb", "scan", {"Items": [item.to_dynamodb_item() for item in COFFEE_ITEMS]})

    menu = await lab.run()

    assert session.operations("dynamodb") == [
        "create_table",
        "wait:table_exists",
        "put_item",
        "put_item",
        "put_item",
        "scan",
        "delete_table",
        "wait:table_not_exists",
    ]
    assert [item.describe() for item in menu] == [
        "Espresso (Tall) - €3.50",
        "Latte (Grande) - €4.20",
        "Cappuccino (Venti) - €4.80",
    ]


async def test_items_are_written_in_attribute_value_form(lab: DynamoDBLabService, session: FakeSession) -> None:
    await lab.run()

    first = session.params("dynamodb", "put_item")[0]
    assert first == {
        "TableName": "TestTable",
        "Item": {"id": {"S": "coffee-1"}, "name": {"S": "Espresso"}, "size": {"S": "Tall"}, "price": {"N": "3.50"}},
    }


async def test_empty_table_reads_as_empty_menu(lab: DynamoDBLabService, session: FakeSession) -> None:
    assert await lab.run() == []


async def test_failure_attempts_cleanup_then_reraises(lab: DynamoDBLabService, session: FakeSession) -> None:
    session.fail("dynamodb", "put_item", client_error("ValidationException"))

    with pytest.raises(DynamoDBServiceError):
        await lab.run()

    assert session.operations("dynamodb")[-2:] == ["delete_table", "wait:table_not_exists"]


async def test_cleanup_failure_keeps_original_error(lab: DynamoDBLabService, session: FakeSession) -> None:
    session.fail("dynamodb", "scan", client_error("InternalServerError"))
    session.fail("dynamodb", "delete_table", client_error("AccessDeniedException"))

    with pytest.raises(DynamoDBServiceError, match="scan"):
        await lab.run()


def test_coffee_item_round_trip_from_wire_format() -> None:
    item = CoffeeItem.from_dynamodb_item(
        {"id": {"S": "c"}, "name": {"S": "Mocha"}, "size": {"S": "Tall"}, "price": {"N": "5"}}
    )

    assert item.price == Decimal("5")
    assert item.to_dynamodb_item()["price"] == {"N": "5"}
    assert item.describe() == "Mocha (Tall) - €5.00"


def test_price_precision_survives_write_and_read_back() -> None:
    item = CoffeeItem(id="c", name="Flat White", size="Short", price=Decimal("4.255"))

    stored = item.to_dynamodb_item()

    assert stored["price"] == {"N": "4.255"}
    assert CoffeeItem.from_dynamodb_item(stored).price == Decimal("4.255")
