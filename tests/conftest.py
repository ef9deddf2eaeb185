import random

import pytest

from dispatcher import InputDispatcher
from mock_data import MockRegistryClient
from navigation import NavigationState


CATALOG = ["alpine", "nginx", "redis"]
TAGS = {
    "alpine": ["3.18", "3.19", "latest"],
    "nginx": ["1.25", "1.25-alpine", "latest", "mainline"],
    "redis": ["7.2", "latest"],
}


@pytest.fixture
def client():
    return MockRegistryClient(repositories=CATALOG, tags=TAGS)


@pytest.fixture
def dispatcher(client):
    return InputDispatcher(client, rng=random.Random(0))


@pytest.fixture
def state():
    return NavigationState()


@pytest.fixture
def started(dispatcher, state):
    """State after a successful startup catalog fetch"""
    assert dispatcher.start(state)
    return state
