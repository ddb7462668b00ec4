# sales/tests/factories.py
import factory
from factory.django import DjangoModelFactory
from datetime import timedelta
from decimal import Decimal
from django.contrib.auth import get_user_model
from django.utils import timezone

from sales.models import Farmer, ChickRequest, FeedRequest, FeedRequestLine
from sales.services import FEED_PRICES


class UserFactory(DjangoModelFactory):
    class Meta:
        model = get_user_model()
        django_get_or_create = ('username',)

    username = factory.Sequence(lambda n: f"user{n}")
    email = factory.LazyAttribute(lambda obj: f"{obj.username}@example.com")
    first_name = factory.Faker('first_name')
    last_name = factory.Faker('last_name')
    role = 'farmer'
    password = factory.PostGenerationMethodCall('set_password', 'testpass123')


class ManagerFactory(UserFactory):
    username = factory.Sequence(lambda n: f"manager{n}")
    role = 'brooder_manager'


class SalesRepFactory(UserFactory):
    username = factory.Sequence(lambda n: f"rep{n}")
    role = 'sales_rep'


class FarmerFactory(DjangoModelFactory):
    class Meta:
        model = Farmer

    name = factory.Faker('name')
    dob = factory.Faker('date_of_birth', minimum_age=18, maximum_age=30)
    gender = factory.Iterator(['M', 'F'])
    nin = factory.Sequence(lambda n: f"CM{n:012d}")
    recommender = factory.Faker('name')
    contact = factory.Sequence(lambda n: f"07{n:08d}")
    farmer_type = 'starter'


class ChickRequestFactory(DjangoModelFactory):
    class Meta:
        model = ChickRequest

    farmer = factory.SubFactory(FarmerFactory)
    chick_type = 'Broiler'
    quantity = 40
    unit_price = Decimal('1650')
    total_cost = factory.LazyAttribute(lambda obj: obj.unit_price * obj.quantity)


class FeedRequestFactory(DjangoModelFactory):
    """Feed request; pass ``lines=[(feed_type, bags), ...]`` to add its lines."""

    class Meta:
        model = FeedRequest
        skip_postgeneration_save = True

    farmer = factory.SubFactory(FarmerFactory)
    request_code = factory.Sequence(lambda n: f"FD000000{n:03d}")
    quantity_bags = 2
    total_cost = Decimal('0')
    payment_due_date = factory.LazyFunction(lambda: timezone.localdate() + timedelta(days=60))

    @factory.post_generation
    def lines(obj, create, extracted, **kwargs):
        if not create or not extracted:
            return
        total = Decimal('0')
        for feed_type, bags in extracted:
            line = FeedRequestLineFactory(request=obj, feed_type=feed_type, quantity_bags=bags)
            total += line.total_price
        obj.quantity_bags = sum(bags for _, bags in extracted)
        obj.total_cost = total
        obj.save(update_fields=['quantity_bags', 'total_cost'])


class FeedRequestLineFactory(DjangoModelFactory):
    class Meta:
        model = FeedRequestLine

    request = factory.SubFactory(FeedRequestFactory)
    feed_type = 'starter'
    quantity_bags = 1
    unit_price = factory.LazyAttribute(lambda obj: FEED_PRICES[obj.feed_type])
    total_price = factory.LazyAttribute(lambda obj: obj.unit_price * obj.quantity_bags)
