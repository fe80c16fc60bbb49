from __future__ import annotations

import json

from cloud_labs.services.setup import api_templates as templates


def test_scan_request_template_is_json() -> None:
    assert json.loads(templates.scan_request_template("ShipsTable")) == {"TableName": "ShipsTable"}


def test_get_item_request_template_reads_path_key() -> None:
    body = templates.get_item_request_template("ShipsTable")

    assert '"TableName": "ShipsTable"' in body
    assert "\"S\": \"$input.params('key')\"" in body


def test_integration_uris() -> None:
    assert (
        templates.dynamodb_action_uri(region_name="eu-west-1", action="Scan")
        == "arn:aws:apigateway:eu-west-1:dynamodb:action/Scan"
    )
    assert (
        templates.s3_object_uri(region_name="eu-west-1", bucket_name="b")
        == "arn:aws:apigateway:eu-west-1:s3:path/b/{key}"
    )


def test_cors_header_values_are_quoted_literals() -> None:
    params = templates.cors_integration_response_parameters()

    assert params[templates.ALLOW_METHODS_HEADER] == "'GET,OPTIONS'"
    assert params[templates.ALLOW_ORIGIN_HEADER] == "'*'"
    assert set(params) == set(templates.cors_method_response_parameters())
