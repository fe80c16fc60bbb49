from __future__ import annotations

import logging
from typing import Any, Optional

import aioboto3

from cloud_labs.services.config import AwsConfig


logger = logging.getLogger(__name__)


class IamServiceError(RuntimeError):
    pass


class IamService:
    def __init__(self, config: AwsConfig, *, session: Optional[Any] = None) -> None:
        self._config = config
        self._session = session or aioboto3.Session()

    def _client(self) -> Any:
        # IAM is global; the region only selects the signing endpoint.
        return self._session.client(
            "iam",
            region_name=self._config.region_name,
            endpoint_url=self._config.endpoint_url,
        )

    async def get_role_arn(self, role_name: str) -> str:
        try:
            iam_client: Any = self._client()
            async with iam_client as iam:
                response = await iam.get_role(RoleName=role_name)
            return str(response["Role"]["Arn"])
        except Exception as exc:
            logger.error("IAM get_role failed (role=%s): %s", role_name, exc)
            raise IamServiceError(f"Failed to get role ARN for {role_name}. Make sure the role exists.") from exc
