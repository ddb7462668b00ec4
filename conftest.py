# conftest.py
import pytest

from manager.tests.factories import ChickStockFactory, FeedStockFactory
from sales.tests.factories import FarmerFactory, ManagerFactory, SalesRepFactory


@pytest.fixture
def manager_user(db):
    """Brooder manager who may move requests through their lifecycle."""
    return ManagerFactory()


@pytest.fixture
def sales_rep(db):
    return SalesRepFactory()


@pytest.fixture
def farmer(db):
    return FarmerFactory()


@pytest.fixture
def broiler_stock(db):
    """One batch of 100 Broiler chicks."""
    return ChickStockFactory(chick_type='Broiler', quantity=100)


@pytest.fixture
def starter_feed(db):
    return FeedStockFactory(feed_type='starter', quantity_bags=10)


@pytest.fixture
def manager_client(client, manager_user):
    client.force_login(manager_user)
    return client


@pytest.fixture
def rep_client(client, sales_rep):
    client.force_login(sales_rep)
    return client
