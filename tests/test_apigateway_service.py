from __future__ import annotations

import pytest

from cloud_labs.services.apigateway_service import ApiGatewayService, ApiGatewayServiceError
from tests.fakes import FakeSession, client_error


async def test_create_rest_api_is_regional(apigateway: ApiGatewayService, session: FakeSession) -> None:
    session.respond("apigateway", "create_rest_api", {"id": "abc123"})

    assert await apigateway.create_rest_api(name="ShipsAPI", description="d") == "abc123"
    assert session.params("apigateway", "create_rest_api") == [
        {"name": "ShipsAPI", "description": "d", "endpointConfiguration": {"types": ["REGIONAL"]}}
    ]


async def test_root_resource_prefers_slash_path(apigateway: ApiGatewayService, session: FakeSession) -> None:
    session.respond("apigateway", "get_resources", {"items": [{"id": "child", "path": "/x"}, {"id": "root", "path": "/"}]})

    assert await apigateway.get_root_resource_id(api_id="abc") == "root"


async def test_root_resource_missing(apigateway: ApiGatewayService, session: FakeSession) -> None:
    session.respond("apigateway", "get_resources", {"items": []})

    with pytest.raises(ApiGatewayServiceError, match="No root resource found"):
        await apigateway.get_root_resource_id(api_id="abc")


async def test_put_integration_omits_unset_fields(apigateway: ApiGatewayService, session: FakeSession) -> None:
    await apigateway.put_integration(
        api_id="abc",
        resource_id="r1",
        http_method="OPTIONS",
        integration_type="MOCK",
        request_templates={"application/json": '{"statusCode": 200}'},
    )

    assert session.params("apigateway", "put_integration") == [
        {
            "restApiId": "abc",
            "resourceId": "r1",
            "httpMethod": "OPTIONS",
            "type": "MOCK",
            "requestTemplates": {"application/json": '{"statusCode": 200}'},
        }
    ]


async def test_put_method_only_sends_api_key_flag_when_required(
    apigateway: ApiGatewayService, session: FakeSession
) -> None:
    await apigateway.put_method(api_id="abc", resource_id="r1", http_method="OPTIONS")
    await apigateway.put_method(api_id="abc", resource_id="r1", http_method="GET", api_key_required=True)

    first, second = session.params("apigateway", "put_method")
    assert "apiKeyRequired" not in first
    assert second["apiKeyRequired"] is True
    assert second["authorizationType"] == "NONE"


async def test_create_api_key_returns_id_and_value(apigateway: ApiGatewayService, session: FakeSession) -> None:
    session.respond("apigateway", "create_api_key", {"id": "key-1", "value": "secret"})

    api_key = await apigateway.create_api_key(name="ShipsAPI-key", description="d")

    assert (api_key.id, api_key.value) == ("key-1", "secret")
    assert session.params("apigateway", "create_api_key")[0]["enabled"] is True


async def test_find_rest_api_by_name_across_pages(apigateway: ApiGatewayService, session: FakeSession) -> None:
    session.pages(
        "apigateway",
        "get_rest_apis",
        {"items": [{"id": "1", "name": "Other"}]},
        {"items": [{"id": "2", "name": "ShipsAPI"}]},
    )

    assert await apigateway.find_rest_api_id(name="ShipsAPI") == "2"
    assert await apigateway.find_rest_api_id(name="Missing") is None


async def test_delete_not_found_is_reported_not_raised(apigateway: ApiGatewayService, session: FakeSession) -> None:
    session.fail("apigateway", "delete_rest_api", client_error("NotFoundException"))

    assert await apigateway.delete_rest_api(api_id="gone") is False


async def test_call_failures_are_wrapped(apigateway: ApiGatewayService, session: FakeSession) -> None:
    session.fail("apigateway", "create_deployment", client_error("BadRequestException"))

    with pytest.raises(ApiGatewayServiceError, match="create_deployment"):
        await apigateway.create_deployment(api_id="abc", stage_name="dev")


async def test_detach_usage_plan_stages(apigateway: ApiGatewayService, session: FakeSession) -> None:
    session.respond("apigateway", "get_usage_plan", {"apiStages": [{"apiId": "abc", "stage": "dev"}]})

    assert await apigateway.detach_usage_plan_stages(usage_plan_id="plan-1") == 1
    assert session.params("apigateway", "update_usage_plan") == [
        {
            "usagePlanId": "plan-1",
            "patchOperations": [{"op": "remove", "path": "/apiStages", "value": "abc:dev"}],
        }
    ]


def test_stage_url(apigateway: ApiGatewayService) -> None:
    assert apigateway.stage_url(api_id="abc", stage_name="dev") == "https://abc.execute-api.eu-west-1.amazonaws.com/dev"
