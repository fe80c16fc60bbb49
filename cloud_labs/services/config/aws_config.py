from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_REGION = "eu-west-1"


def region_from_env() -> str:
    return os.getenv("AWS_REGION") or os.getenv("AWS_DEFAULT_REGION") or DEFAULT_REGION


def endpoint_from_env(*names: str) -> Optional[str]:
    """Return the first endpoint override found, falling back to AWS_ENDPOINT_URL."""

    for name in (*names, "AWS_ENDPOINT_URL"):
        value = os.getenv(name)
        if value:
            return value.rstrip("/")
    return None


@dataclass(frozen=True)
class AwsConfig:
    """Region and optional endpoint override shared by the control-plane clients."""

    region_name: str = DEFAULT_REGION
    endpoint_url: Optional[str] = None

    @staticmethod
    def from_env(*, endpoint_env: Optional[str] = None) -> "AwsConfig":
        names = (endpoint_env,) if endpoint_env else ()
        return AwsConfig(region_name=region_from_env(), endpoint_url=endpoint_from_env(*names))
