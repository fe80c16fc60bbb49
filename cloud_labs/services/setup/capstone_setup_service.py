from __future__ import annotations

import json
import logging
from pathlib import Path

from tqdm import tqdm

from cloud_labs.models.catalog import AttributeValueMap, Ship
from cloud_labs.models.deployment import DeploymentSummary
from cloud_labs.services.config import CapstoneConfig
from cloud_labs.services.dynamodb_service import DynamoDBService
from cloud_labs.services.s3_service import S3Service
from cloud_labs.services.setup.ships_api_setup_service import ShipsApiSetupService


logger = logging.getLogger(__name__)


class CapstoneDataError(ValueError):
    pass


def load_ship_items(path: Path) -> list[AttributeValueMap]:
    """Read the ships catalog, already written in DynamoDB attribute-value form."""

    if not path.exists() or not path.is_file():
        raise CapstoneDataError(f"Ships data file not found: {path}")

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise CapstoneDataError(f"Ships data file is not valid JSON: {path}") from exc

    if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
        raise CapstoneDataError(f"Ships data file must contain a list of items: {path}")
    return data


class CapstoneSetupService:
    """Capstone deployment: photos bucket, ships table, then the API in front of both.

    Steps run strictly in order. When a step fails the error is logged and, if
    `cleanup_on_failure` is set, one cleanup attempt removes only what this run
    created (a bucket or table that already existed is kept) before the original
    error is re-raised.
    """

    def __init__(
        self,
        *,
        s3: S3Service,
        dynamodb: DynamoDBService,
        api_setup: ShipsApiSetupService,
        config: CapstoneConfig,
    ) -> None:
        self._s3 = s3
        self._dynamodb = dynamodb
        self._api_setup = api_setup
        self._config = config
        self._bucket_created = False
        self._table_created = False

    async def deploy(self, *, cleanup_on_failure: bool = True) -> DeploymentSummary:
        logger.info("Starting Project Deployment...")
        self._bucket_created = False
        self._table_created = False
        try:
            self._bucket_created = await self._s3.create_bucket()
            uploaded_keys = await self.upload_images()

            self._table_created = await self._dynamodb.create_table()
            inserted_ids = await self.insert_ships()

            api = await self._api_setup.setup_api()
        except Exception as exc:
            logger.error("Deployment failed: %s", exc)
            if cleanup_on_failure:
                await self._cleanup()
            raise

        logger.info("Project deployed successfully!")
        return DeploymentSummary(
            bucket_name=self._s3.bucket_name,
            table_name=self._dynamodb.table_name,
            uploaded_keys=uploaded_keys,
            inserted_item_ids=inserted_ids,
            api=api,
        )

    async def upload_images(self) -> list[str]:
        logger.info("Uploading images to S3...")

        uploaded: list[str] = []
        for image in tqdm(self._config.images, desc="Uploading images", unit="file"):
            path = self._config.assets_dir / image.file_name
            key = await self._s3.upload_local_file(path=path, key=image.key, content_type=image.content_type)
            logger.info("Uploaded %s as %s", image.file_name, key)
            uploaded.append(key)
        return uploaded

    async def insert_ships(self) -> list[str]:
        logger.info("Inserting ships data into DynamoDB...")

        inserted: list[str] = []
        for item in load_ship_items(self._config.data_file):
            await self._dynamodb.put_item(item)
            ship = Ship.from_dynamodb_item(item)
            logger.info("Inserted ship: %s", ship.nom)
            inserted.append(ship.id)
        return inserted

    async def _cleanup(self) -> None:
        logger.info("Attempting cleanup...")
        try:
            await self._api_setup.rollback()
            if self._table_created:
                await self._dynamodb.delete_table()
            if self._bucket_created:
                await self._s3.empty_and_delete_bucket()
        except Exception as cleanup_exc:
            logger.error("Cleanup failed: %s", cleanup_exc)
            logger.warning("Please manually delete the resources created by this run via the AWS Console.")
