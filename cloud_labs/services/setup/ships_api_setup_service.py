from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from cloud_labs.models.deployment import ApiDeployment, ApiKey
from cloud_labs.services.apigateway_service import ApiGatewayService
from cloud_labs.services.config import CapstoneConfig
from cloud_labs.services.iam_service import IamService
from cloud_labs.services.setup import api_templates as templates


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ShipsApiResources:
    """Resource ids of the endpoints exposed by the ships API."""

    root_id: str
    ships_id: str
    profile_key_id: str
    photo_key_id: str


@dataclass
class CreatedApiResources:
    """Ids of the API Gateway resources created by the current `setup_api` run."""

    api_id: Optional[str] = None
    api_key_id: Optional[str] = None
    usage_plan_id: Optional[str] = None


class ShipsApiSetupService:
    """Builds the ships REST API in front of the catalog table and the photo bucket.

    Layout:
    - GET /ships              -> DynamoDB Scan
    - GET /ships/profile/{key} -> DynamoDB GetItem
    - GET /ships/photo/{key}   -> S3 GetObject

    Every GET requires an API key; every endpoint answers CORS preflight through
    a MOCK integration.
    """

    def __init__(
        self,
        *,
        apigateway: ApiGatewayService,
        iam: IamService,
        config: CapstoneConfig,
        table_name: str,
        bucket_name: str,
    ) -> None:
        self._apigateway = apigateway
        self._iam = iam
        self._config = config
        self._table_name = table_name
        self._bucket_name = bucket_name
        self._created = CreatedApiResources()

    async def setup_api(self) -> ApiDeployment:
        logger.info("Creating API Gateway...")
        self._created = CreatedApiResources()

        api_id = await self._apigateway.create_rest_api(
            name=self._config.api_name,
            description=self._config.api_description,
        )
        self._created.api_id = api_id
        logger.info("API Gateway created with ID: %s", api_id)

        root_id = await self._apigateway.get_root_resource_id(api_id=api_id)

        logger.info("Retrieving IAM role ARNs...")
        dynamodb_role_arn = await self._iam.get_role_arn(self._config.dynamodb_role_name)
        s3_role_arn = await self._iam.get_role_arn(self._config.s3_role_name)

        resources = await self.create_resources(api_id=api_id, root_id=root_id)

        await self.configure_list_ships_endpoint(api_id, resources.ships_id, dynamodb_role_arn)
        await self.configure_ship_profile_endpoint(api_id, resources.profile_key_id, dynamodb_role_arn)
        await self.configure_ship_photo_endpoint(api_id, resources.photo_key_id, s3_role_arn)

        for resource_id in (resources.ships_id, resources.profile_key_id, resources.photo_key_id):
            await self.enable_cors(api_id, resource_id)

        stage = self._config.stage_name
        logger.info("Deploying API...")
        await self._apigateway.create_deployment(api_id=api_id, stage_name=stage)

        api_key = await self.create_api_key()
        usage_plan_id = await self.create_usage_plan(api_id=api_id, api_key_id=api_key.id)

        url = self._apigateway.stage_url(api_id=api_id, stage_name=stage)
        logger.info("API deployed successfully!")
        logger.info("API URL: %s", url)
        logger.info("Copy the API Key value above and send it as the X-API-Key header")

        # Completed runs leave nothing for rollback.
        self._created = CreatedApiResources()

        return ApiDeployment(
            api_id=api_id,
            stage_name=stage,
            url=url,
            api_key=api_key,
            usage_plan_id=usage_plan_id,
        )

    async def create_resources(self, *, api_id: str, root_id: str) -> ShipsApiResources:
        create = self._apigateway.create_resource

        ships_id = await create(api_id=api_id, parent_id=root_id, path_part="ships")
        logger.info("Created /ships resource")

        profile_id = await create(api_id=api_id, parent_id=ships_id, path_part="profile")
        profile_key_id = await create(api_id=api_id, parent_id=profile_id, path_part="{key}")
        logger.info("Created /ships/profile/{key} resource")

        photo_id = await create(api_id=api_id, parent_id=ships_id, path_part="photo")
        photo_key_id = await create(api_id=api_id, parent_id=photo_id, path_part="{key}")
        logger.info("Created /ships/photo/{key} resource")

        return ShipsApiResources(
            root_id=root_id,
            ships_id=ships_id,
            profile_key_id=profile_key_id,
            photo_key_id=photo_key_id,
        )

    async def configure_list_ships_endpoint(self, api_id: str, resource_id: str, role_arn: str) -> None:
        logger.info("Configuring GET /ships endpoint...")
        gw = self._apigateway

        await gw.put_method(api_id=api_id, resource_id=resource_id, http_method="GET", api_key_required=True)
        await gw.put_integration(
            api_id=api_id,
            resource_id=resource_id,
            http_method="GET",
            integration_type="AWS",
            integration_http_method="POST",
            uri=templates.dynamodb_action_uri(region_name=gw.region_name, action="Scan"),
            credentials=role_arn,
            request_templates={templates.JSON_CONTENT_TYPE: templates.scan_request_template(self._table_name)},
        )
        await gw.put_method_response(
            api_id=api_id,
            resource_id=resource_id,
            http_method="GET",
            response_parameters={templates.ALLOW_ORIGIN_HEADER: False},
        )
        await gw.put_integration_response(
            api_id=api_id,
            resource_id=resource_id,
            http_method="GET",
            response_parameters={templates.ALLOW_ORIGIN_HEADER: templates.quoted(templates.CORS_ALLOW_ORIGIN)},
            response_templates={templates.JSON_CONTENT_TYPE: templates.SHIPS_LIST_RESPONSE_TEMPLATE},
        )

        logger.info("GET /ships endpoint configured")

    async def configure_ship_profile_endpoint(self, api_id: str, resource_id: str, role_arn: str) -> None:
        logger.info("Configuring GET /ships/profile/{key} endpoint...")
        gw = self._apigateway

        await gw.put_method(
            api_id=api_id,
            resource_id=resource_id,
            http_method="GET",
            api_key_required=True,
            request_parameters={templates.KEY_PATH_PARAMETER: True},
        )
        await gw.put_integration(
            api_id=api_id,
            resource_id=resource_id,
            http_method="GET",
            integration_type="AWS",
            integration_http_method="POST",
            uri=templates.dynamodb_action_uri(region_name=gw.region_name, action="GetItem"),
            credentials=role_arn,
            request_parameters={templates.KEY_INTEGRATION_PARAMETER: templates.KEY_PATH_PARAMETER},
            request_templates={templates.JSON_CONTENT_TYPE: templates.get_item_request_template(self._table_name)},
        )
        await gw.put_method_response(
            api_id=api_id,
            resource_id=resource_id,
            http_method="GET",
            response_parameters={templates.ALLOW_ORIGIN_HEADER: False},
        )
        await gw.put_integration_response(
            api_id=api_id,
            resource_id=resource_id,
            http_method="GET",
            response_parameters={templates.ALLOW_ORIGIN_HEADER: templates.quoted(templates.CORS_ALLOW_ORIGIN)},
            response_templates={templates.JSON_CONTENT_TYPE: templates.SHIP_PROFILE_RESPONSE_TEMPLATE},
        )

        logger.info("GET /ships/profile/{key} endpoint configured")

    async def configure_ship_photo_endpoint(self, api_id: str, resource_id: str, role_arn: str) -> None:
        logger.info("Configuring GET /ships/photo/{key} endpoint...")
        gw = self._apigateway

        await gw.put_method(
            api_id=api_id,
            resource_id=resource_id,
            http_method="GET",
            api_key_required=True,
            request_parameters={templates.KEY_PATH_PARAMETER: True},
        )
        await gw.put_integration(
            api_id=api_id,
            resource_id=resource_id,
            http_method="GET",
            integration_type="AWS",
            integration_http_method="GET",
            uri=templates.s3_object_uri(region_name=gw.region_name, bucket_name=self._bucket_name),
            credentials=role_arn,
            request_parameters={templates.KEY_INTEGRATION_PARAMETER: templates.KEY_PATH_PARAMETER},
        )
        await gw.put_method_response(
            api_id=api_id,
            resource_id=resource_id,
            http_method="GET",
            response_parameters={
                templates.CONTENT_TYPE_HEADER: False,
                templates.ALLOW_ORIGIN_HEADER: False,
            },
        )
        await gw.put_integration_response(
            api_id=api_id,
            resource_id=resource_id,
            http_method="GET",
            response_parameters={
                templates.CONTENT_TYPE_HEADER: "integration.response.header.Content-Type",
                templates.ALLOW_ORIGIN_HEADER: templates.quoted(templates.CORS_ALLOW_ORIGIN),
            },
        )

        logger.info("GET /ships/photo/{key} endpoint configured")

    async def enable_cors(self, api_id: str, resource_id: str) -> None:
        gw = self._apigateway

        await gw.put_method(api_id=api_id, resource_id=resource_id, http_method="OPTIONS")
        await gw.put_integration(
            api_id=api_id,
            resource_id=resource_id,
            http_method="OPTIONS",
            integration_type="MOCK",
            request_templates={templates.JSON_CONTENT_TYPE: templates.MOCK_REQUEST_TEMPLATE},
        )
        await gw.put_method_response(
            api_id=api_id,
            resource_id=resource_id,
            http_method="OPTIONS",
            response_parameters=templates.cors_method_response_parameters(),
        )
        await gw.put_integration_response(
            api_id=api_id,
            resource_id=resource_id,
            http_method="OPTIONS",
            response_parameters=templates.cors_integration_response_parameters(),
        )

    async def create_api_key(self) -> ApiKey:
        logger.info("Creating API Key...")
        api_key = await self._apigateway.create_api_key(
            name=self._config.api_key_name,
            description=f"API Key for {self._config.api_name}",
        )
        self._created.api_key_id = api_key.id
        logger.info("API Key created: %s", api_key.id)
        logger.info("API Key Value: %s", api_key.value)
        return api_key

    async def create_usage_plan(self, *, api_id: str, api_key_id: str) -> str:
        logger.info("Creating Usage Plan...")
        limits = self._config.limits

        usage_plan_id = await self._apigateway.create_usage_plan(
            name=self._config.usage_plan_name,
            description=f"Usage plan for {self._config.api_name}",
            api_id=api_id,
            stage_name=self._config.stage_name,
            rate_limit=limits.rate_limit,
            burst_limit=limits.burst_limit,
            quota_limit=limits.quota_limit,
            quota_period=limits.quota_period,
        )
        self._created.usage_plan_id = usage_plan_id
        logger.info("Usage Plan created: %s", usage_plan_id)

        await self._apigateway.create_usage_plan_key(usage_plan_id=usage_plan_id, key_id=api_key_id)
        logger.info("API Key associated with Usage Plan")
        return usage_plan_id

    async def rollback(self) -> None:
        """Delete, by id, what an unfinished `setup_api` run created.

        Resources that already existed under the same names are left untouched.
        """

        created = self._created
        gw = self._apigateway

        if created.usage_plan_id:
            await gw.detach_usage_plan_stages(usage_plan_id=created.usage_plan_id)
            await gw.delete_usage_plan(usage_plan_id=created.usage_plan_id)
            logger.info("Deleted usage plan %s", created.usage_plan_id)
        if created.api_key_id:
            await gw.delete_api_key(api_key_id=created.api_key_id)
            logger.info("Deleted API key %s", created.api_key_id)
        if created.api_id:
            await gw.delete_rest_api(api_id=created.api_id)
            logger.info("Deleted API Gateway %s", created.api_id)

        self._created = CreatedApiResources()
