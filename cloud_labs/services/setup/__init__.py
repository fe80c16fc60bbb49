"""Setup (provisioning) services.

This package contains the lab flows that *provision* or *tear down* the AWS
infrastructure used by the labs (DynamoDB tables, S3 buckets, API Gateway).
"""
