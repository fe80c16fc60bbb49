from __future__ import annotations

from fastapi import APIRouter, Depends

from cloud_labs.models.catalog import CatalogItemsResponse
from cloud_labs.services.dependencies import get_dynamodb_service
from cloud_labs.services.dynamodb_service import DynamoDBService

router = APIRouter(prefix="/dynamodb", tags=["dynamodb"])


@router.get("/items", response_model=CatalogItemsResponse)
async def list_items(
    dynamodb: DynamoDBService = Depends(get_dynamodb_service),
) -> CatalogItemsResponse:
    items = await dynamodb.scan_items()
    return CatalogItemsResponse(table_name=dynamodb.table_name, count=len(items), items=items)
