from __future__ import annotations

import os
import time
from dataclasses import dataclass, replace
from typing import ClassVar, Optional

from cloud_labs.services.config.aws_config import endpoint_from_env, region_from_env

DEFAULT_TABLE_NAME = "ShipsTable"


@dataclass(frozen=True)
class DynamoDBConfig:
    """Table coordinates plus how long to wait for table status transitions."""

    table_name: str
    region_name: Optional[str] = None
    endpoint_url: Optional[str] = None
    key_attribute: str = "id"
    _DEFAULT_WAIT_MAX_SECONDS: ClassVar[int] = 60
    wait_max_seconds: int = _DEFAULT_WAIT_MAX_SECONDS
    wait_delay_seconds: int = 5

    @staticmethod
    def from_env(*, table_name: Optional[str] = None) -> "DynamoDBConfig":
        name = table_name or (os.getenv("DYNAMODB_TABLE_NAME") or DEFAULT_TABLE_NAME).strip()
        if not name:
            raise ValueError("DYNAMODB_TABLE_NAME must not be blank")

        wait_raw = os.getenv("DYNAMODB_WAIT_MAX_SECONDS")
        wait_max_seconds = DynamoDBConfig._DEFAULT_WAIT_MAX_SECONDS
        if wait_raw:
            try:
                wait_max_seconds = int(wait_raw)
            except ValueError as exc:
                raise ValueError("Invalid DYNAMODB_WAIT_MAX_SECONDS; must be an integer") from exc
            if wait_max_seconds <= 0:
                raise ValueError("Invalid DYNAMODB_WAIT_MAX_SECONDS; must be positive")

        return DynamoDBConfig(
            table_name=name,
            region_name=region_from_env(),
            endpoint_url=endpoint_from_env("DYNAMODB_ENDPOINT_URL"),
            wait_max_seconds=wait_max_seconds,
        )

    @staticmethod
    def for_lab(*, prefix: str = "coffee-shop") -> "DynamoDBConfig":
        """Config for the basics lab: a throwaway table with a unique suffix."""

        base = DynamoDBConfig.from_env(table_name=prefix)
        return replace(base, table_name=f"{prefix}-{int(time.time() * 1000)}")
