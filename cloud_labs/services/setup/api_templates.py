"""Static API Gateway mapping templates and header parameters for the ships API.

Request templates translate an incoming HTTP call into a DynamoDB action body;
response templates (Velocity) reshape the DynamoDB wire format into plain JSON.
"""

from __future__ import annotations

import json

JSON_CONTENT_TYPE = "application/json"

CORS_ALLOW_HEADERS = "Content-Type,X-Amz-Date,Authorization,X-Api-Key,X-Amz-Security-Token"
CORS_ALLOW_METHODS = "GET,OPTIONS"
CORS_ALLOW_ORIGIN = "*"

ALLOW_ORIGIN_HEADER = "method.response.header.Access-Control-Allow-Origin"
ALLOW_HEADERS_HEADER = "method.response.header.Access-Control-Allow-Headers"
ALLOW_METHODS_HEADER = "method.response.header.Access-Control-Allow-Methods"
CONTENT_TYPE_HEADER = "method.response.header.Content-Type"

KEY_PATH_PARAMETER = "method.request.path.key"
KEY_INTEGRATION_PARAMETER = "integration.request.path.key"

MOCK_REQUEST_TEMPLATE = '{"statusCode": 200}'

SHIPS_LIST_RESPONSE_TEMPLATE = """#set($inputRoot = $input.path('$'))
{
  "ships": [
    #foreach($item in $inputRoot.Items)
    {
      "id": "$item.id.S",
      "nom": "$item.nom.S",
      "type": "$item.type.S",
      "pavillon": "$item.pavillon.S",
      "taille": $item.taille.N,
      "nombre_marins": $item.nombre_marins.N,
      "s3_image_key": "$item.s3_image_key.S"
    }#if($foreach.hasNext),#end
    #end
  ]
}"""

SHIP_PROFILE_RESPONSE_TEMPLATE = """#set($inputRoot = $input.path('$'))
{
  "id": "$inputRoot.Item.id.S",
  "nom": "$inputRoot.Item.nom.S",
  "type": "$inputRoot.Item.type.S",
  "pavillon": "$inputRoot.Item.pavillon.S",
  "taille": $inputRoot.Item.taille.N,
  "nombre_marins": $inputRoot.Item.nombre_marins.N,
  "s3_image_key": "$inputRoot.Item.s3_image_key.S"
}"""


def quoted(value: str) -> str:
    """Static header values are single-quoted literals in API Gateway."""

    return f"'{value}'"


def dynamodb_action_uri(*, region_name: str, action: str) -> str:
    return f"arn:aws:apigateway:{region_name}:dynamodb:action/{action}"


def s3_object_uri(*, region_name: str, bucket_name: str) -> str:
    return f"arn:aws:apigateway:{region_name}:s3:path/{bucket_name}/{{key}}"


def scan_request_template(table_name: str) -> str:
    return json.dumps({"TableName": table_name})


def get_item_request_template(table_name: str, *, key_attribute: str = "id") -> str:
    return (
        "{\n"
        f'  "TableName": "{table_name}",\n'
        '  "Key": {\n'
        f'    "{key_attribute}": {{\n'
        '      "S": "$input.params(\'key\')"\n'
        "    }\n"
        "  }\n"
        "}"
    )


def cors_method_response_parameters() -> dict[str, bool]:
    return {
        ALLOW_HEADERS_HEADER: False,
        ALLOW_METHODS_HEADER: False,
        ALLOW_ORIGIN_HEADER: False,
    }


def cors_integration_response_parameters() -> dict[str, str]:
    return {
        ALLOW_HEADERS_HEADER: quoted(CORS_ALLOW_HEADERS),
        ALLOW_METHODS_HEADER: quoted(CORS_ALLOW_METHODS),
        ALLOW_ORIGIN_HEADER: quoted(CORS_ALLOW_ORIGIN),
    }
