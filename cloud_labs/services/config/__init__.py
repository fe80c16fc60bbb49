"""Configuration package (Facade).

Re-exports the public config types so callers import from one stable path:

	from cloud_labs.services.config import S3Config

Module layout can change underneath without touching call sites; ``__all__``
defines the public API of this package.
"""

from cloud_labs.services.config.aws_config import AwsConfig
from cloud_labs.services.config.capstone_config import (
	CapstoneConfig,
	ImageAsset,
	UsagePlanLimits,
)
from cloud_labs.services.config.dynamodb_config import DynamoDBConfig
from cloud_labs.services.config.s3_config import S3Config

__all__ = ["AwsConfig", "CapstoneConfig", "DynamoDBConfig", "ImageAsset", "S3Config", "UsagePlanLimits"]
