# tests/test_validation.py
from catalog_api.models import Product
from catalog_api.validation import ValidationFailure, validate_product


def test_valid_payload_is_normalized():
    out = validate_product({"name": " Mouse ", "price": 20, "category": " Electronics "})
    assert not isinstance(out, ValidationFailure)
    assert out.name == "Mouse"
    assert out.category == "electronics"
    assert out.description is None
    assert out.in_stock is None


def test_non_object_payload_fails_on_name():
    assert validate_product(["name"]) == ValidationFailure(
        field="name", reason="Name is required and must be a non-empty string"
    )


def test_infinite_price_rejected():
    out = validate_product({"name": "A", "price": float("inf"), "category": "a"})
    assert isinstance(out, ValidationFailure)
    assert out.field == "price"


def test_float_price_kept():
    out = validate_product({"name": "A", "price": 9.99, "category": "a"})
    assert out.price == 9.99


def test_merge_keeps_stored_optionals():
    existing = Product(id="7", name="Old", description="keep me", price=5, category="x", in_stock=False)
    merged = validate_product({"name": "New", "price": 6, "category": "Y"}).merge_into(existing)
    assert merged.to_json() == {
        "id": "7", "name": "New", "description": "keep me", "price": 6, "category": "y", "inStock": False,
    }


def test_to_product_defaults():
    p = validate_product({"name": "A", "price": 1, "category": "b"}).to_product("new-id")
    assert p.description == ""
    assert p.in_stock is True
    assert p.id == "new-id"
