# manager/tests/factories.py
import factory
from factory.django import DjangoModelFactory
from decimal import Decimal

from manager.models import ChickStock, FeedStock


class ChickStockFactory(DjangoModelFactory):
    class Meta:
        model = ChickStock

    category = 'broiler'
    chick_type = 'Broiler'
    quantity = 100
    age_days = factory.Faker('random_int', min=0, max=7)


class FeedStockFactory(DjangoModelFactory):
    class Meta:
        model = FeedStock

    feed_type = 'starter'
    quantity_bags = 20
    unit_price = Decimal('40000')
