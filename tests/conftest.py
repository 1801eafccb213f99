"""
Fixtures used in the tests
"""
import pytest

from tests.fakes import FakeProvider, FakeSerializer, PHRASE


@pytest.fixture()
def provider():
    return FakeProvider()


@pytest.fixture()
def serializer():
    return FakeSerializer()


@pytest.fixture()
def phrase():
    return PHRASE
