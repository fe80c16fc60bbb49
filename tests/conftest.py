from __future__ import annotations

from pathlib import Path

import pytest

from cloud_labs.services.apigateway_service import ApiGatewayService
from cloud_labs.services.config import AwsConfig, CapstoneConfig, DynamoDBConfig, ImageAsset, S3Config
from cloud_labs.services.dynamodb_service import DynamoDBService
from cloud_labs.services.iam_service import IamService
from cloud_labs.services.s3_service import S3Service
from tests.fakes import FakeSession

REGION = "eu-west-1"


@pytest.fixture(autouse=True)
def _clean_aws_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "AWS_REGION",
        "AWS_DEFAULT_REGION",
        "AWS_ENDPOINT_URL",
        "S3_BUCKET_NAME",
        "S3_ENDPOINT_URL",
        "DYNAMODB_TABLE_NAME",
        "DYNAMODB_ENDPOINT_URL",
        "DYNAMODB_WAIT_MAX_SECONDS",
        "CAPSTONE_API_NAME",
        "CAPSTONE_STAGE_NAME",
        "CAPSTONE_ASSETS_DIR",
        "CAPSTONE_DATA_FILE",
        "CAPSTONE_DYNAMODB_ROLE_NAME",
        "CAPSTONE_S3_ROLE_NAME",
        "APIGATEWAY_ENDPOINT_URL",
        "IAM_ENDPOINT_URL",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def s3(session: FakeSession) -> S3Service:
    return S3Service(S3Config(bucket_name="test-bucket", region_name=REGION), session=session)


@pytest.fixture
def dynamodb(session: FakeSession) -> DynamoDBService:
    return DynamoDBService(DynamoDBConfig(table_name="TestTable", region_name=REGION), session=session)


@pytest.fixture
def apigateway(session: FakeSession) -> ApiGatewayService:
    return ApiGatewayService(AwsConfig(region_name=REGION), session=session)


@pytest.fixture
def iam(session: FakeSession) -> IamService:
    return IamService(AwsConfig(region_name=REGION), session=session)


@pytest.fixture
def capstone_config(tmp_path: Path) -> CapstoneConfig:
    assets = tmp_path / "assets"
    assets.mkdir()
    (assets / "fisher.jpg").write_bytes(b"\xff\xd8fisher")
    (assets / "tanker.jpg").write_bytes(b"\xff\xd8tanker")

    data_file = tmp_path / "ships.json"
    data_file.write_text(
        '[{"id": {"S": "B-001"}, "nom": {"S": "Fisher"}, "taille": {"N": "24"}},'
        ' {"id": {"S": "B-002"}, "nom": {"S": "Tanker"}, "nombre_marins": {"N": "28"}}]',
        encoding="utf-8",
    )

    return CapstoneConfig(
        assets_dir=assets,
        data_file=data_file,
        images=(
            ImageAsset(file_name="fisher.jpg", key="pecheur-b-001.jpg"),
            ImageAsset(file_name="tanker.jpg", key="tanker-b-002.jpg"),
        ),
    )
