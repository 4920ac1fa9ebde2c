# catalog_api/models.py
import math
from typing import Any, Dict, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictFloat,
    StrictInt,
    StrictStr,
    field_validator,
)


class Product(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    name: str
    description: str = ""
    price: Union[int, float]
    category: str
    in_stock: bool = Field(True, alias="inStock")

    def to_json(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


# ---------------------------
# Create / update payload
# ---------------------------
class ProductIn(BaseModel):
    """Candidate body for POST/PUT, decoded with strict types and normalized.

    description and in_stock stay None when the caller omitted them so the
    update handler can fall back to the stored values.
    """

    model_config = ConfigDict(extra="ignore")

    name: StrictStr
    price: Union[StrictInt, StrictFloat]
    category: StrictStr
    description: Optional[StrictStr] = None
    in_stock: Optional[StrictBool] = Field(None, alias="inStock")

    @field_validator("description", "in_stock", mode="before")
    @classmethod
    def _reject_null(cls, value: Any) -> Any:
        # present-but-null is a type error, only absence means "not supplied"
        if value is None:
            raise ValueError("must not be null")
        return value

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("name is blank")
        return value

    @field_validator("price")
    @classmethod
    def _price_positive(cls, value: Union[int, float]) -> Union[int, float]:
        if isinstance(value, float) and not math.isfinite(value):
            raise ValueError("price is not finite")
        if value <= 0:
            raise ValueError("price must be > 0")
        return value

    @field_validator("category")
    @classmethod
    def _category_normalized(cls, value: str) -> str:
        value = value.strip().lower()
        if not value:
            raise ValueError("category is blank")
        return value

    @field_validator("description")
    @classmethod
    def _description_trimmed(cls, value: str) -> str:
        return value.strip()

    def to_product(self, product_id: str) -> Product:
        return Product(
            id=product_id,
            name=self.name,
            description=self.description if self.description is not None else "",
            price=self.price,
            category=self.category,
            in_stock=self.in_stock if self.in_stock is not None else True,
        )

    def merge_into(self, existing: Product) -> Product:
        """Overwrite the required fields; keep stored description/in_stock when omitted."""
        return existing.model_copy(update={
            "name": self.name,
            "description": self.description if self.description is not None else existing.description,
            "price": self.price,
            "category": self.category,
            "in_stock": self.in_stock if self.in_stock is not None else existing.in_stock,
        })
