from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class ApiKey(BaseModel):
    id: str
    value: Optional[str] = None


class ApiDeployment(BaseModel):
    api_id: str
    stage_name: str
    url: str
    api_key: ApiKey
    usage_plan_id: str


class DeploymentSummary(BaseModel):
    bucket_name: str
    table_name: str
    uploaded_keys: list[str]
    inserted_item_ids: list[str]
    api: ApiDeployment


class TeardownSummary(BaseModel):
    table_name: str
    bucket_name: str
    api_name: str
    items_deleted: int = 0
    table_deleted: bool = False
    objects_deleted: list[str] = []
    bucket_deleted: bool = False
    usage_plan_deleted: bool = False
    api_key_deleted: bool = False
    api_deleted: bool = False
