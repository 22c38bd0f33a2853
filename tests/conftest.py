import os
from pathlib import Path

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Pytest hook to run before collecting tests.

    Select the Protean config overlay and keep the storefront on its in-process
    adapters regardless of the developer's shell environment.
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env
    for name in (
        "STOREFRONT_CART_DIR",
        "STOREFRONT_SESSION_LIMIT",
        "PAYPAL_CLIENT_ID",
        "PAYPAL_CLIENT_SECRET",
        "LOG_DIR",
    ):
        os.environ.pop(name, None)


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        # Get the test file path relative to the tests directory
        test_path = Path(item.fspath)

        # Mark tests based on their directory
        if "/domain/" in str(test_path):
            item.add_marker(pytest.mark.domain)
        elif "/application/" in str(test_path):
            item.add_marker(pytest.mark.application)
        elif "/integration/" in str(test_path) or "/bdd/" in str(test_path):
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(scope="session")
def catalogue_bed():
    """The catalogue domain, shared by its own tests and by the cart's product lookups."""
    from catalogue.domain import catalogue
    from protean.integrations.pytest import DomainFixture

    bed = DomainFixture(catalogue)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def reset_adapters():
    """Drop any adapter a test installed through the module-level factories."""
    yield

    from catalogue.images import reset_image_storage
    from catalogue.product.feed import product_feed
    from ordering.api.routes import reset_sessions
    from ordering.cart.storage import reset_storage
    from payments.gateway import reset_widget

    reset_widget()
    reset_storage()
    reset_image_storage()
    reset_sessions()
    product_feed.clear()
