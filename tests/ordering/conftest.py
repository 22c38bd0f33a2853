import pytest
from ordering.cart.storage import MemoryCartStorage
from ordering.cart.store import CartStore
from payments.gateway import set_widget
from payments.gateway.fake_adapter import FakePaymentWidget
from protean import current_domain
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def ordering_bed():
    from ordering.domain import ordering

    bed = DomainFixture(ordering)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(ordering_bed):
    with ordering_bed.domain_context():
        yield


# ---------------------------------------------------------------------------
# Collaborators
# ---------------------------------------------------------------------------
@pytest.fixture()
def storage():
    return MemoryCartStorage()


@pytest.fixture()
def store(storage):
    return CartStore(storage=storage, key="cart")


@pytest.fixture()
def widget():
    fake = FakePaymentWidget()
    set_widget(fake)
    return fake


# ---------------------------------------------------------------------------
# Catalogue payloads as the cart receives them
# ---------------------------------------------------------------------------
@pytest.fixture()
def shirt():
    return {
        "id": "prod-shirt",
        "name": "Linen Shirt",
        "price": 45.0,
        "discount": None,
        "images": ["https://storage.local/products/shirt.jpg"],
        "admin_id": "seller-001",
        "store_name": "Linen & Co",
    }


@pytest.fixture()
def dress():
    return {
        "id": "prod-dress",
        "name": "Summer Dress",
        "price": 20.0,
        "discount": 0,
        "images": ["https://storage.local/products/dress.jpg"],
        "admin_id": "seller-002",
        "store_name": "Sundays",
    }


@pytest.fixture()
def jacket():
    return {
        "id": "prod-jacket",
        "name": "Denim Jacket",
        "price": 80.0,
        "discount": 25,
        "images": ["https://storage.local/products/jacket.jpg"],
        "admin_id": "seller-001",
        "store_name": "Linen & Co",
    }


@pytest.fixture()
def listed_products(catalogue_bed, shirt, dress, jacket):
    """List the shirt, dress and jacket in the catalogue under their fixture ids."""
    from catalogue.product.product import Product, ProductImage

    with catalogue_bed.domain.domain_context():
        repo = current_domain.repository_for(Product)
        for payload in (shirt, dress, jacket):
            repo.add(
                Product(
                    id=payload["id"],
                    seller_id=payload["admin_id"],
                    store_name=payload["store_name"],
                    name=payload["name"],
                    price=payload["price"],
                    category="Apparel",
                    discount=payload["discount"] or None,
                    images=[ProductImage(url=url) for url in payload["images"]],
                )
            )
    yield [shirt, dress, jacket]

    # Leaving the test bed context wipes the catalogue stores
    with catalogue_bed.domain_context():
        pass
