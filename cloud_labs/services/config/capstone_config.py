from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[3]


@dataclass(frozen=True)
class ImageAsset:
    """A local photo and the object key it is published under."""

    file_name: str
    key: str
    content_type: str = "image/jpeg"


DEFAULT_IMAGES: tuple[ImageAsset, ...] = (
    ImageAsset(file_name="fisher.jpg", key="pecheur-b-001.jpg"),
    ImageAsset(file_name="tanker.jpg", key="tanker-b-002.jpg"),
)


@dataclass(frozen=True)
class UsagePlanLimits:
    rate_limit: float = 100.0
    burst_limit: int = 200
    quota_limit: int = 10000
    quota_period: str = "MONTH"


@dataclass(frozen=True)
class CapstoneConfig:
    """Wiring for the capstone project: API naming, IAM roles and bundled lab data."""

    api_name: str = "ShipsAPI"
    api_description: str = "Ships API for Capstone Project"
    stage_name: str = "dev"
    dynamodb_role_name: str = "APIGatewayDynamoDBServiceRole"
    s3_role_name: str = "APIGatewayS3ServiceRole"
    assets_dir: Path = PROJECT_ROOT / "assets"
    data_file: Path = PROJECT_ROOT / "data" / "ships.json"
    images: tuple[ImageAsset, ...] = DEFAULT_IMAGES
    limits: UsagePlanLimits = field(default_factory=UsagePlanLimits)

    @property
    def api_key_name(self) -> str:
        return f"{self.api_name}-key"

    @property
    def usage_plan_name(self) -> str:
        return f"{self.api_name}-UsagePlan"

    @staticmethod
    def from_env() -> "CapstoneConfig":
        defaults = CapstoneConfig()
        assets_dir = os.getenv("CAPSTONE_ASSETS_DIR")
        data_file = os.getenv("CAPSTONE_DATA_FILE")

        return CapstoneConfig(
            api_name=os.getenv("CAPSTONE_API_NAME", defaults.api_name),
            stage_name=os.getenv("CAPSTONE_STAGE_NAME", defaults.stage_name),
            dynamodb_role_name=os.getenv("CAPSTONE_DYNAMODB_ROLE_NAME", defaults.dynamodb_role_name),
            s3_role_name=os.getenv("CAPSTONE_S3_ROLE_NAME", defaults.s3_role_name),
            assets_dir=Path(assets_dir) if assets_dir else defaults.assets_dir,
            data_file=Path(data_file) if data_file else defaults.data_file,
        )
