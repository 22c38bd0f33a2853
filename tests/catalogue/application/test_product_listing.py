"""Application tests for the paginated product grid and seller listings."""

from datetime import datetime, timedelta

import pytest
from catalogue.product.listing import all_products, list_products, product_view, products_for_seller
from catalogue.product.product import Product
from protean import current_domain
from protean.exceptions import ValidationError

BASE_TIME = datetime(2024, 3, 1, 12, 0)


def _stock(seller_id, name, category="Shirts", store_name="Linen & Co", description=None, age_minutes=0):
    product = Product.add(
        seller_id=seller_id,
        store_name=store_name,
        name=name,
        price=20.0,
        category=category,
        image_urls=[f"https://cdn.example.com/products/{name}.jpg"],
        description=description,
    )
    product.created_at = BASE_TIME - timedelta(minutes=age_minutes)
    current_domain.repository_for(Product).add(product)
    return product


@pytest.fixture()
def catalogue_stock():
    return [
        _stock("seller-001", "Linen Shirt", age_minutes=5, description="Breezy summer linen"),
        _stock("seller-001", "Oxford Shirt", age_minutes=4),
        _stock("seller-002", "Slip Dress", category="Dresses", store_name="Sundays", age_minutes=3),
        _stock("seller-002", "Wrap Dress", category="Dresses", store_name="Sundays", age_minutes=2),
        _stock("seller-001", "Denim Jacket", category="Jackets", age_minutes=1, description="Washed LINEN blend"),
    ]


def _names(products):
    return [product.name for product in products]


class TestListProducts:
    def test_newest_first(self, catalogue_stock):
        page, count = list_products()
        assert count == 5
        assert _names(page) == ["Denim Jacket", "Wrap Dress", "Slip Dress", "Oxford Shirt", "Linen Shirt"]

    def test_pagination(self, catalogue_stock):
        first, count = list_products(page=1, page_size=2)
        third, _ = list_products(page=3, page_size=2)
        assert count == 5
        assert _names(first) == ["Denim Jacket", "Wrap Dress"]
        assert _names(third) == ["Linen Shirt"]

    def test_page_past_the_end_is_empty(self, catalogue_stock):
        page, count = list_products(page=4, page_size=2)
        assert page == []
        assert count == 5

    def test_category_filter(self, catalogue_stock):
        page, count = list_products(category="Dresses")
        assert count == 2
        assert _names(page) == ["Wrap Dress", "Slip Dress"]

    def test_store_filter(self, catalogue_stock):
        _, count = list_products(store_name="Linen & Co")
        assert count == 3

    def test_all_disables_filters(self, catalogue_stock):
        _, count = list_products(category="All", store_name="All")
        assert count == 5

    def test_search_matches_name_or_description(self, catalogue_stock):
        page, _ = list_products(search="linen")
        assert _names(page) == ["Denim Jacket", "Linen Shirt"]

    def test_filters_combine(self, catalogue_stock):
        page, count = list_products(category="Shirts", search="oxford")
        assert count == 1
        assert _names(page) == ["Oxford Shirt"]

    def test_no_products(self):
        assert list_products() == ([], 0)

    @pytest.mark.parametrize("page, page_size", [(0, 10), (1, 0)])
    def test_invalid_paging(self, page, page_size):
        with pytest.raises(ValidationError):
            list_products(page=page, page_size=page_size)


class TestSellerProducts:
    def test_only_the_sellers_products(self, catalogue_stock):
        assert _names(products_for_seller("seller-002")) == ["Wrap Dress", "Slip Dress"]

    def test_seller_without_products(self, catalogue_stock):
        assert products_for_seller("seller-999") == []


class TestLargeCatalogue:
    @pytest.fixture()
    def many_products(self):
        return [_stock("seller-001", f"Tee {index:03d}", age_minutes=index) for index in range(120)]

    def test_every_product_is_counted(self, many_products):
        _, count = list_products()
        assert count == 120
        assert len(all_products()) == 120

    def test_last_page_is_reachable(self, many_products):
        page, _ = list_products(page=12, page_size=10)
        assert _names(page)[-1] == "Tee 119"
        assert len(page) == 10

    def test_seller_listing_is_complete(self, many_products):
        assert len(products_for_seller("seller-001")) == 120


class TestProductView:
    def test_view_shape(self, catalogue_stock):
        view = product_view(catalogue_stock[0])
        assert view["name"] == "Linen Shirt"
        assert view["admin_id"] == "seller-001"
        assert view["store_name"] == "Linen & Co"
        assert view["images"] == ["https://cdn.example.com/products/Linen Shirt.jpg"]
        assert view["sizes"] == []
        assert view["discount"] is None
        assert view["created_at"] == (BASE_TIME - timedelta(minutes=5)).isoformat()
