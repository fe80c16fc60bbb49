from __future__ import annotations

import logging

from cloud_labs.models.deployment import TeardownSummary
from cloud_labs.services.apigateway_service import ApiGatewayService
from cloud_labs.services.config import CapstoneConfig
from cloud_labs.services.dynamodb_service import DynamoDBService
from cloud_labs.services.s3_service import S3Service


logger = logging.getLogger(__name__)


class CapstoneTeardownService:
    """Deletes everything the capstone deployment created.

    Resources that are already gone are logged as warnings; any other failure
    stops the teardown.
    """

    def __init__(
        self,
        *,
        s3: S3Service,
        dynamodb: DynamoDBService,
        apigateway: ApiGatewayService,
        config: CapstoneConfig,
    ) -> None:
        self._s3 = s3
        self._dynamodb = dynamodb
        self._apigateway = apigateway
        self._config = config

    async def destroy(self) -> TeardownSummary:
        logger.info("Starting Project Deletion...")

        summary = TeardownSummary(
            table_name=self._dynamodb.table_name,
            bucket_name=self._s3.bucket_name,
            api_name=self._config.api_name,
        )

        summary.items_deleted = await self._dynamodb.delete_all_items()
        summary.table_deleted = await self._dynamodb.delete_table()

        deleted_objects = await self._s3.empty_and_delete_bucket()
        summary.bucket_deleted = deleted_objects is not None
        summary.objects_deleted = deleted_objects or []

        summary.usage_plan_deleted = await self.delete_usage_plan()
        summary.api_key_deleted = await self.delete_api_key()
        summary.api_deleted = await self.delete_api()

        logger.info("Project deleted successfully!")
        return summary

    async def delete_usage_plan(self) -> bool:
        name = self._config.usage_plan_name
        usage_plan_id = await self._apigateway.find_usage_plan_id(name=name)
        if not usage_plan_id:
            logger.warning("Usage plan %s not found", name)
            return False

        await self._apigateway.detach_usage_plan_stages(usage_plan_id=usage_plan_id)
        deleted = await self._apigateway.delete_usage_plan(usage_plan_id=usage_plan_id)
        if deleted:
            logger.info("Usage plan %s deleted successfully", name)
        return deleted

    async def delete_api_key(self) -> bool:
        name = self._config.api_key_name
        api_key_id = await self._apigateway.find_api_key_id(name=name)
        if not api_key_id:
            logger.warning("API key %s not found", name)
            return False

        deleted = await self._apigateway.delete_api_key(api_key_id=api_key_id)
        if deleted:
            logger.info("API key %s deleted successfully", name)
        return deleted

    async def delete_api(self) -> bool:
        name = self._config.api_name
        logger.info("Deleting API Gateway: %s...", name)

        api_id = await self._apigateway.find_rest_api_id(name=name)
        if not api_id:
            logger.warning("API %s not found", name)
            return False

        deleted = await self._apigateway.delete_rest_api(api_id=api_id)
        if deleted:
            logger.info("API Gateway %s deleted successfully", name)
        return deleted
