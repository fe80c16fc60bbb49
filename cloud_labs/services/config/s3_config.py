from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from cloud_labs.services.config.aws_config import endpoint_from_env, region_from_env

DEFAULT_BUCKET_NAME = "ships-capstone-project-bucket"


@dataclass(frozen=True)
class S3Config:
    bucket_name: str
    region_name: Optional[str] = None
    endpoint_url: Optional[str] = None

    @staticmethod
    def from_env() -> "S3Config":
        bucket_name = (os.getenv("S3_BUCKET_NAME") or DEFAULT_BUCKET_NAME).strip()
        if not bucket_name:
            raise ValueError("S3_BUCKET_NAME must not be blank")

        return S3Config(
            bucket_name=bucket_name,
            region_name=region_from_env(),
            endpoint_url=endpoint_from_env("S3_ENDPOINT_URL"),
        )
