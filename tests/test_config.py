from __future__ import annotations

from pathlib import Path

import pytest

from cloud_labs.services.config import AwsConfig, CapstoneConfig, DynamoDBConfig, S3Config


def test_defaults_reproduce_lab_constants() -> None:
    assert AwsConfig.from_env().region_name == "eu-west-1"
    assert S3Config.from_env().bucket_name == "ships-capstone-project-bucket"
    assert DynamoDBConfig.from_env().table_name == "ShipsTable"

    capstone = CapstoneConfig.from_env()
    assert capstone.api_name == "ShipsAPI"
    assert capstone.stage_name == "dev"
    assert capstone.api_key_name == "ShipsAPI-key"
    assert capstone.usage_plan_name == "ShipsAPI-UsagePlan"
    assert [image.key for image in capstone.images] == ["pecheur-b-001.jpg", "tanker-b-002.jpg"]


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-west-2")
    monkeypatch.setenv("AWS_ENDPOINT_URL", "http://localhost:4566/")
    monkeypatch.setenv("S3_BUCKET_NAME", "my-bucket")
    monkeypatch.setenv("S3_ENDPOINT_URL", "http://localhost:9000")
    monkeypatch.setenv("DYNAMODB_TABLE_NAME", "MyTable")
    monkeypatch.setenv("CAPSTONE_API_NAME", "BoatsAPI")
    monkeypatch.setenv("CAPSTONE_ASSETS_DIR", str(tmp_path))

    s3 = S3Config.from_env()
    assert (s3.bucket_name, s3.region_name, s3.endpoint_url) == ("my-bucket", "us-west-2", "http://localhost:9000")

    dynamodb = DynamoDBConfig.from_env()
    assert dynamodb.table_name == "MyTable"
    assert dynamodb.endpoint_url == "http://localhost:4566"

    capstone = CapstoneConfig.from_env()
    assert capstone.api_name == "BoatsAPI"
    assert capstone.usage_plan_name == "BoatsAPI-UsagePlan"
    assert capstone.assets_dir == tmp_path


def test_aws_region_takes_precedence_over_default_region(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("AWS_REGION", "eu-central-1")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")

    assert AwsConfig.from_env().region_name == "eu-central-1"


@pytest.mark.parametrize("raw", ["abc", "0", "-5"])
def test_invalid_wait_seconds_rejected(monkeypatch: pytest.MonkeyPatch, raw: str) -> None:
    monkeypatch.setenv("DYNAMODB_WAIT_MAX_SECONDS", raw)

    with pytest.raises(ValueError, match="DYNAMODB_WAIT_MAX_SECONDS"):
        DynamoDBConfig.from_env()


def test_lab_table_gets_unique_timestamp_suffix() -> None:
    config = DynamoDBConfig.for_lab()

    prefix, _, suffix = config.table_name.rpartition("-")
    assert prefix == "coffee-shop"
    assert suffix.isdigit()
    assert config.key_attribute == "id"


def test_role_names_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CAPSTONE_DYNAMODB_ROLE_NAME", "LabDynamoRole")
    monkeypatch.setenv("CAPSTONE_S3_ROLE_NAME", "LabS3Role")

    capstone = CapstoneConfig.from_env()

    assert (capstone.dynamodb_role_name, capstone.s3_role_name) == ("LabDynamoRole", "LabS3Role")
