"""
Product payload validation.

validate_product() decodes a JSON payload into a ProductIn and reports the
first rule that fails, checked in the order name, price, category,
description, inStock. Unknown keys (including a caller-supplied id) are
ignored.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

from pydantic import ValidationError

from .models import ProductIn

FIELD_ORDER = ("name", "price", "category", "description", "inStock")

REASONS = {
    "name": "Name is required and must be a non-empty string",
    "price": "Price must be a positive number",
    "category": "Category is required and must be a non-empty string",
    "description": "Description must be a string",
    "inStock": "inStock must be a boolean",
}


@dataclass(frozen=True)
class ValidationFailure:
    field: str
    reason: str


def validate_product(payload: Any) -> Union[ProductIn, ValidationFailure]:
    if not isinstance(payload, dict):
        payload = {}
    try:
        return ProductIn.model_validate(payload)
    except ValidationError as exc:
        fields = {err["loc"][0] for err in exc.errors() if err["loc"]}
        for field in FIELD_ORDER:
            if field in fields:
                return ValidationFailure(field=field, reason=REASONS[field])
        raise
