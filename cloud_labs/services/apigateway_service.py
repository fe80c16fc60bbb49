from __future__ import annotations

import logging
from typing import Any, Optional

import aioboto3

from cloud_labs.models.deployment import ApiKey
from cloud_labs.services.aws_errors import is_error_code
from cloud_labs.services.config import AwsConfig


logger = logging.getLogger(__name__)


class ApiGatewayServiceError(RuntimeError):
    pass


class ApiGatewayService:
    """Thin wrapper over the API Gateway (REST, v1) control plane.

    Every method opens its own client and issues exactly one logical call, so a
    provisioning flow reads as the ordered list of calls it makes.
    """

    def __init__(self, config: AwsConfig, *, session: Optional[Any] = None) -> None:
        self._config = config
        self._session = session or aioboto3.Session()

    @property
    def region_name(self) -> str:
        return self._config.region_name

    def _client(self) -> Any:
        return self._session.client(
            "apigateway",
            region_name=self._config.region_name,
            endpoint_url=self._config.endpoint_url,
        )

    async def _call(self, operation: str, **kwargs: Any) -> dict[str, Any]:
        try:
            apigateway_client: Any = self._client()
            async with apigateway_client as apigateway:
                return await getattr(apigateway, operation)(**kwargs)
        except Exception as exc:
            logger.exception("API Gateway %s failed", operation)
            raise ApiGatewayServiceError(f"API Gateway call failed: {operation}") from exc

    async def _find_by_name(self, operation: str, name: str) -> Optional[str]:
        try:
            apigateway_client: Any = self._client()
            async with apigateway_client as apigateway:
                paginator = apigateway.get_paginator(operation)
                async for page in paginator.paginate():
                    for item in page.get("items", []):
                        if item.get("name") == name:
                            return item.get("id")
        except Exception as exc:
            logger.exception("API Gateway %s failed", operation)
            raise ApiGatewayServiceError(f"API Gateway call failed: {operation}") from exc
        return None

    async def _delete(self, operation: str, **kwargs: Any) -> bool:
        try:
            apigateway_client: Any = self._client()
            async with apigateway_client as apigateway:
                await getattr(apigateway, operation)(**kwargs)
        except Exception as exc:
            if is_error_code(exc, "NotFoundException"):
                return False
            logger.exception("API Gateway %s failed", operation)
            raise ApiGatewayServiceError(f"API Gateway call failed: {operation}") from exc
        return True

    def stage_url(self, *, api_id: str, stage_name: str) -> str:
        return f"https://{api_id}.execute-api.{self._config.region_name}.amazonaws.com/{stage_name}"

    # -----------------
    # REST API and resources
    # -----------------

    async def create_rest_api(self, *, name: str, description: str) -> str:
        response = await self._call(
            "create_rest_api",
            name=name,
            description=description,
            endpointConfiguration={"types": ["REGIONAL"]},
        )
        return str(response["id"])

    async def get_root_resource_id(self, *, api_id: str) -> str:
        response = await self._call("get_resources", restApiId=api_id)
        items = response.get("items") or []
        if not items:
            raise ApiGatewayServiceError("No root resource found")

        root = next((item for item in items if item.get("path") == "/"), items[0])
        if not root.get("id"):
            raise ApiGatewayServiceError("Root resource ID is undefined")
        return str(root["id"])

    async def create_resource(self, *, api_id: str, parent_id: str, path_part: str) -> str:
        response = await self._call("create_resource", restApiId=api_id, parentId=parent_id, pathPart=path_part)
        return str(response["id"])

    # -----------------
    # Methods and integrations
    # -----------------

    async def put_method(
        self,
        *,
        api_id: str,
        resource_id: str,
        http_method: str,
        api_key_required: bool = False,
        request_parameters: Optional[dict[str, bool]] = None,
    ) -> None:
        kwargs: dict[str, Any] = {
            "restApiId": api_id,
            "resourceId": resource_id,
            "httpMethod": http_method,
            "authorizationType": "NONE",
        }
        if api_key_required:
            kwargs["apiKeyRequired"] = True
        if request_parameters:
            kwargs["requestParameters"] = request_parameters
        await self._call("put_method", **kwargs)

    async def put_integration(
        self,
        *,
        api_id: str,
        resource_id: str,
        http_method: str,
        integration_type: str,
        integration_http_method: Optional[str] = None,
        uri: Optional[str] = None,
        credentials: Optional[str] = None,
        request_parameters: Optional[dict[str, str]] = None,
        request_templates: Optional[dict[str, str]] = None,
    ) -> None:
        kwargs: dict[str, Any] = {
            "restApiId": api_id,
            "resourceId": resource_id,
            "httpMethod": http_method,
            "type": integration_type,
        }
        optional = {
            "integrationHttpMethod": integration_http_method,
            "uri": uri,
            "credentials": credentials,
            "requestParameters": request_parameters,
            "requestTemplates": request_templates,
        }
        kwargs.update({k: v for k, v in optional.items() if v})
        await self._call("put_integration", **kwargs)

    async def put_method_response(
        self,
        *,
        api_id: str,
        resource_id: str,
        http_method: str,
        response_parameters: dict[str, bool],
        status_code: str = "200",
    ) -> None:
        await self._call(
            "put_method_response",
            restApiId=api_id,
            resourceId=resource_id,
            httpMethod=http_method,
            statusCode=status_code,
            responseParameters=response_parameters,
        )

    async def put_integration_response(
        self,
        *,
        api_id: str,
        resource_id: str,
        http_method: str,
        response_parameters: dict[str, str],
        response_templates: Optional[dict[str, str]] = None,
        status_code: str = "200",
    ) -> None:
        kwargs: dict[str, Any] = {
            "restApiId": api_id,
            "resourceId": resource_id,
            "httpMethod": http_method,
            "statusCode": status_code,
            "responseParameters": response_parameters,
        }
        if response_templates:
            kwargs["responseTemplates"] = response_templates
        await self._call("put_integration_response", **kwargs)

    # -----------------
    # Deployment, keys and usage plans
    # -----------------

    async def create_deployment(self, *, api_id: str, stage_name: str) -> str:
        response = await self._call("create_deployment", restApiId=api_id, stageName=stage_name)
        return str(response.get("id", ""))

    async def create_api_key(self, *, name: str, description: str) -> ApiKey:
        response = await self._call("create_api_key", name=name, description=description, enabled=True)
        return ApiKey(id=str(response["id"]), value=response.get("value"))

    async def create_usage_plan(
        self,
        *,
        name: str,
        description: str,
        api_id: str,
        stage_name: str,
        rate_limit: float,
        burst_limit: int,
        quota_limit: int,
        quota_period: str,
    ) -> str:
        response = await self._call(
            "create_usage_plan",
            name=name,
            description=description,
            apiStages=[{"apiId": api_id, "stage": stage_name}],
            throttle={"rateLimit": rate_limit, "burstLimit": burst_limit},
            quota={"limit": quota_limit, "period": quota_period},
        )
        return str(response["id"])

    async def create_usage_plan_key(self, *, usage_plan_id: str, key_id: str) -> None:
        await self._call("create_usage_plan_key", usagePlanId=usage_plan_id, keyId=key_id, keyType="API_KEY")

    # -----------------
    # Lookup and teardown
    # -----------------

    async def find_rest_api_id(self, *, name: str) -> Optional[str]:
        return await self._find_by_name("get_rest_apis", name)

    async def find_usage_plan_id(self, *, name: str) -> Optional[str]:
        return await self._find_by_name("get_usage_plans", name)

    async def find_api_key_id(self, *, name: str) -> Optional[str]:
        return await self._find_by_name("get_api_keys", name)

    async def delete_rest_api(self, *, api_id: str) -> bool:
        return await self._delete("delete_rest_api", restApiId=api_id)

    async def detach_usage_plan_stages(self, *, usage_plan_id: str) -> int:
        """Remove every API stage from a usage plan so the plan can be deleted."""

        response = await self._call("get_usage_plan", usagePlanId=usage_plan_id)
        stages = response.get("apiStages") or []
        if not stages:
            return 0

        await self._call(
            "update_usage_plan",
            usagePlanId=usage_plan_id,
            patchOperations=[
                {"op": "remove", "path": "/apiStages", "value": f"{s['apiId']}:{s['stage']}"} for s in stages
            ],
        )
        return len(stages)

    async def delete_usage_plan(self, *, usage_plan_id: str) -> bool:
        return await self._delete("delete_usage_plan", usagePlanId=usage_plan_id)

    async def delete_api_key(self, *, api_key_id: str) -> bool:
        return await self._delete("delete_api_key", apiKey=api_key_id)
