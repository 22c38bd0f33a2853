"""Shared BDD fixtures and step definitions for the Catalogue domain."""

import pytest
from catalogue.seller.registration import RegisterSeller
from protean import current_domain
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def error():
    """Container for captured validation errors."""
    return {"exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a seller "{email}" with store "{store_name}"'), target_fixture="seller")
def seller_with_store(email, store_name, image_storage):
    return current_domain.process(RegisterSeller(email=email, store_name=store_name), asynchronous=False)


@given(parsers.cfparse('a seller "{email}" without a store'), target_fixture="seller")
def seller_without_store(email, image_storage):
    return current_domain.process(RegisterSeller(email=email), asynchronous=False)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the listing fails with "{message}"'))
def listing_fails_with(error, message):
    exc = error["exc"]
    assert isinstance(exc, ValidationError)
    assert message in [text for texts in exc.messages.values() for text in texts]


@then("no images are stored")
def no_images_stored(image_storage):
    assert image_storage.blobs == {}
