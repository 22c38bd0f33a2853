"""Tests for product form validation and the Product aggregate."""

import json

import pytest
from catalogue.product.events import ProductAdded, ProductUpdated
from catalogue.product.product import Product, validate_product_data
from protean.exceptions import ValidationError

IMAGES = ["https://cdn.example.com/products/a.jpg", "https://cdn.example.com/products/b.jpg"]


def _product(**overrides):
    kwargs = {
        "seller_id": "seller-001",
        "store_name": "Linen & Co",
        "name": "Linen Shirt",
        "price": 45.0,
        "category": "Shirts",
        "image_urls": IMAGES,
        "description": "Relaxed fit",
        "sizes": ["L", "S"],
        "free_shipping": True,
    }
    kwargs.update(overrides)
    return Product.add(**kwargs)


class TestValidateProductData:
    def test_valid_data_passes(self):
        validate_product_data(name="Shirt", price=10, category="Shirts", images=["a.jpg"])

    @pytest.mark.parametrize(
        "overrides, field, message",
        [
            ({"name": "  "}, "name", "Product name is required"),
            ({"price": 0}, "price", "Valid price is required"),
            ({"price": -3}, "price", "Valid price is required"),
            ({"price": None}, "price", "Valid price is required"),
            ({"category": ""}, "category", "Category is required"),
            ({"images": []}, "images", "At least one product image is required"),
        ],
    )
    def test_each_rule(self, overrides, field, message):
        data = {"name": "Shirt", "price": 10, "category": "Shirts", "images": ["a.jpg"]}
        data.update(overrides)
        with pytest.raises(ValidationError) as exc_info:
            validate_product_data(**data)
        assert exc_info.value.messages == {field: [message]}

    def test_only_first_failure_is_reported(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_product_data(name="", price=0, category="", images=[])
        assert list(exc_info.value.messages) == ["name"]


class TestProductAdd:
    def test_add_sets_fields(self):
        product = _product()
        assert product.name == "Linen Shirt"
        assert product.price == 45.0
        assert product.store_name == "Linen & Co"
        assert product.free_shipping is True
        assert product.created_at is not None

    def test_images_keep_upload_order(self):
        assert _product().image_urls == IMAGES

    def test_sizes_are_stored_in_size_order(self):
        product = _product(sizes=["XL", "S", "M"])
        assert product.size_list == ["S", "M", "XL"]
        assert json.loads(product.sizes) == ["S", "M", "XL"]

    def test_unknown_size_is_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            _product(sizes=["XS"])
        assert "sizes" in exc_info.value.messages

    @pytest.mark.parametrize("discount, expected", [(None, None), (0, None), (15, 15.0)])
    def test_discount_normalization(self, discount, expected):
        assert _product(discount=discount).discount == expected

    def test_discount_above_hundred_is_rejected(self):
        with pytest.raises(ValidationError):
            _product(discount=120)

    def test_add_without_images_is_rejected(self):
        with pytest.raises(ValidationError):
            _product(image_urls=[])

    def test_raises_product_added(self):
        product = _product()
        event = product._events[0]
        assert isinstance(event, ProductAdded)
        assert event.name == "Linen Shirt"
        assert event.store_name == "Linen & Co"


class TestProductUpdate:
    def test_partial_update(self):
        product = _product()
        product.update(price=39.5, description=None)
        assert product.price == 39.5
        assert product.description == "Relaxed fit"

    def test_update_raises_event_with_changed_fields(self):
        product = _product()
        product.update(name="Linen Overshirt", free_shipping=False)
        event = product._events[-1]
        assert isinstance(event, ProductUpdated)
        assert json.loads(event.changed_fields) == ["free_shipping", "name"]

    def test_clearing_discount_with_zero(self):
        product = _product(discount=20)
        product.update(discount=0)
        assert product.discount is None

    def test_nothing_to_change_raises_no_event(self):
        product = _product()
        product.update()
        assert len(product._events) == 1

    @pytest.mark.parametrize("changes", [{"price": 0}, {"name": " "}, {"category": ""}])
    def test_invalid_values_are_rejected(self, changes):
        product = _product()
        with pytest.raises(ValidationError):
            product.update(**changes)
        assert product.price == 45.0

    def test_only_listing_fields_can_change(self):
        product = _product()
        with pytest.raises(ValidationError) as exc_info:
            product.update(store_name="Elsewhere")
        assert "store_name" in exc_info.value.messages

    def test_is_listed_by(self):
        product = _product()
        assert product.is_listed_by("seller-001")
        assert not product.is_listed_by("seller-002")
