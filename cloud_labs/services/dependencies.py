from __future__ import annotations

from cloud_labs.services.apigateway_service import ApiGatewayService
from cloud_labs.services.config import AwsConfig, CapstoneConfig, DynamoDBConfig, S3Config
from cloud_labs.services.dynamodb_service import DynamoDBService
from cloud_labs.services.iam_service import IamService
from cloud_labs.services.s3_service import S3Service
from cloud_labs.services.setup.capstone_setup_service import CapstoneSetupService
from cloud_labs.services.setup.capstone_teardown_service import CapstoneTeardownService
from cloud_labs.services.setup.dynamodb_lab_service import DynamoDBLabService
from cloud_labs.services.setup.ships_api_setup_service import ShipsApiSetupService


def get_s3_service() -> S3Service:
    """FastAPI dependency provider for an S3Service instance."""

    return S3Service(S3Config.from_env())


def get_dynamodb_service() -> DynamoDBService:
    """FastAPI dependency provider for the capstone table."""

    return DynamoDBService(DynamoDBConfig.from_env())


def get_apigateway_service() -> ApiGatewayService:
    return ApiGatewayService(AwsConfig.from_env(endpoint_env="APIGATEWAY_ENDPOINT_URL"))


def get_iam_service() -> IamService:
    return IamService(AwsConfig.from_env(endpoint_env="IAM_ENDPOINT_URL"))


def get_capstone_teardown_service() -> CapstoneTeardownService:
    return CapstoneTeardownService(
        s3=get_s3_service(),
        dynamodb=get_dynamodb_service(),
        apigateway=get_apigateway_service(),
        config=CapstoneConfig.from_env(),
    )


def get_capstone_setup_service() -> CapstoneSetupService:
    config = CapstoneConfig.from_env()
    s3 = get_s3_service()
    dynamodb = get_dynamodb_service()

    return CapstoneSetupService(
        s3=s3,
        dynamodb=dynamodb,
        api_setup=ShipsApiSetupService(
            apigateway=get_apigateway_service(),
            iam=get_iam_service(),
            config=config,
            table_name=dynamodb.table_name,
            bucket_name=s3.bucket_name,
        ),
        config=config,
    )


def get_dynamodb_lab_service() -> DynamoDBLabService:
    """Provider for the basics lab; every call targets a brand-new table name."""

    return DynamoDBLabService(dynamodb=DynamoDBService(DynamoDBConfig.for_lab()))
