from __future__ import annotations

from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, Field

AttributeValueMap = dict[str, dict[str, Any]]


def _string(item: AttributeValueMap, name: str) -> Optional[str]:
    value = item.get(name) or {}
    raw = value.get("S")
    return str(raw) if raw is not None else None


def _number(item: AttributeValueMap, name: str) -> Optional[str]:
    value = item.get(name) or {}
    raw = value.get("N")
    return str(raw) if raw is not None else None


class CoffeeItem(BaseModel):
    """A coffee menu entry as stored in the basics lab table."""

    id: str
    name: str
    size: str
    price: Decimal = Field(..., description="Price in euros")

    def to_dynamodb_item(self) -> AttributeValueMap:
        return {
            "id": {"S": self.id},
            "name": {"S": self.name},
            "size": {"S": self.size},
            "price": {"N": str(self.price)},
        }

    @staticmethod
    def from_dynamodb_item(item: AttributeValueMap) -> "CoffeeItem":
        return CoffeeItem(
            id=_string(item, "id") or "",
            name=_string(item, "name") or "",
            size=_string(item, "size") or "",
            price=Decimal(_number(item, "price") or "0"),
        )

    def describe(self) -> str:
        return f"{self.name} ({self.size}) - €{self.price:.2f}"


class Ship(BaseModel):
    """A ship record from the capstone catalog table."""

    id: str
    nom: str
    type: Optional[str] = None
    pavillon: Optional[str] = None
    taille: Optional[Decimal] = None
    nombre_marins: Optional[Decimal] = None
    s3_image_key: Optional[str] = None

    @staticmethod
    def from_dynamodb_item(item: AttributeValueMap) -> "Ship":
        taille = _number(item, "taille")
        marins = _number(item, "nombre_marins")
        return Ship(
            id=_string(item, "id") or "",
            nom=_string(item, "nom") or "",
            type=_string(item, "type"),
            pavillon=_string(item, "pavillon"),
            taille=Decimal(taille) if taille is not None else None,
            nombre_marins=Decimal(marins) if marins is not None else None,
            s3_image_key=_string(item, "s3_image_key"),
        )


class CatalogItemsResponse(BaseModel):
    table_name: str
    count: int
    items: list[AttributeValueMap]
