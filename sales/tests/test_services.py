# sales/tests/test_services.py
import logging
import pytest
from datetime import timedelta
from decimal import Decimal
from django.core.exceptions import ValidationError
from django.utils import timezone

from sales.models import ChickRequest, CallLog, FeedRequest
from sales.services import (
    log_call, split_feed_bags, submit_chick_request, submit_feed_request,
)
from sales.tests.factories import ChickRequestFactory, FarmerFactory, FeedRequestFactory


@pytest.mark.django_db
class TestSubmitChickRequest:

    def test_creates_pending_request(self, farmer, sales_rep):
        req = submit_chick_request(farmer, 'Broiler', '50', requested_by=sales_rep)

        assert req.status == 'pending'
        assert req.quantity == 50
        assert req.unit_price == Decimal('1650')
        assert req.total_cost == Decimal('82500')
        assert req.requested_by == sales_rep

    def test_unit_price_from_settings(self, farmer, settings):
        settings.CHICK_UNIT_PRICE = 1800

        req = submit_chick_request(farmer, 'Broiler', 10)

        assert req.total_cost == Decimal('18000')

    @pytest.mark.parametrize('farmer_type, quantity', [
        ('starter', 0), ('starter', 101), ('returning', 299), ('returning', 501),
    ])
    def test_quantity_limits(self, farmer_type, quantity):
        farmer = FarmerFactory(farmer_type=farmer_type)

        with pytest.raises(ValidationError) as exc_info:
            submit_chick_request(farmer, 'Broiler', quantity)

        assert 'quantity' in exc_info.value.message_dict

    def test_returning_farmer_within_limits(self):
        farmer = FarmerFactory(farmer_type='returning')

        req = submit_chick_request(farmer, 'Layer', 400)

        assert req.quantity == 400

    def test_chick_type_required(self, farmer):
        with pytest.raises(ValidationError):
            submit_chick_request(farmer, '  ', 10)

    def test_four_month_rule(self, farmer):
        ChickRequestFactory(farmer=farmer)

        with pytest.raises(ValidationError) as exc_info:
            submit_chick_request(farmer, 'Broiler', 10)

        assert "Next eligible date" in exc_info.value.messages[0]

    def test_eligible_again_after_four_months(self, farmer):
        old = ChickRequestFactory(farmer=farmer)
        ChickRequest.objects.filter(pk=old.pk).update(submitted_on=timezone.now() - timedelta(days=121))

        req = submit_chick_request(farmer, 'Broiler', 10)

        assert farmer.chick_requests.count() == 2
        assert req.pk != old.pk

    def test_submission_is_logged(self, farmer, caplog):
        with caplog.at_level(logging.INFO, logger='sales'):
            req = submit_chick_request(farmer, 'Broiler', 10)

        assert f"ChickRequest #{req.pk} submitted" in caplog.text


class TestSplitFeedBags:

    def test_even_split(self):
        assert split_feed_bags(['starter', 'grower'], 2) == [
            ('starter', 1, Decimal('45000'), Decimal('45000')),
            ('grower', 1, Decimal('42000'), Decimal('42000')),
        ]

    def test_remainder_goes_to_first_type(self):
        lines = split_feed_bags(['layer', 'broiler'], 1)

        assert lines == [('layer', 1, Decimal('40000'), Decimal('40000'))]


@pytest.mark.django_db
class TestSubmitFeedRequest:

    def test_creates_request_and_lines(self, farmer):
        req = submit_feed_request(farmer, ['starter', 'grower'], '2', urgency='urgent')

        assert req.request_code == f"FD{timezone.localdate():%y%m%d}001"
        assert req.quantity_bags == 2
        assert req.total_cost == Decimal('87000')
        assert req.priority == 2
        assert req.payment_due_date == timezone.localdate() + timedelta(days=60)
        assert req.feed_types == ['starter', 'grower']

    def test_codes_count_up_within_a_day(self):
        first = submit_feed_request(FarmerFactory(), ['layer'], 1)
        second = submit_feed_request(FarmerFactory(), ['layer'], 1)

        assert first.request_code[-3:] == '001'
        assert second.request_code[-3:] == '002'

    def test_duplicate_types_collapse(self, farmer):
        req = submit_feed_request(farmer, ['layer', 'layer'], 2)

        assert req.feed_types == ['layer']
        assert req.lines.get().quantity_bags == 2

    @pytest.mark.parametrize('feed_types, bags, field', [
        ([], 1, 'feed_types'),
        (['finisher'], 1, 'feed_types'),
        (['layer'], 3, 'quantity_bags'),
        (['layer'], 0, 'quantity_bags'),
        (['layer'], 'two', 'quantity_bags'),
    ])
    def test_invalid_input(self, farmer, feed_types, bags, field):
        with pytest.raises(ValidationError) as exc_info:
            submit_feed_request(farmer, feed_types, bags)

        assert field in exc_info.value.message_dict
        assert not FeedRequest.objects.exists()

    def test_bad_urgency(self, farmer):
        with pytest.raises(ValidationError) as exc_info:
            submit_feed_request(farmer, ['layer'], 1, urgency='whenever')

        assert 'urgency' in exc_info.value.message_dict

    def test_one_open_request_per_farmer(self, farmer):
        FeedRequestFactory(farmer=farmer, lines=[('layer', 1)])

        with pytest.raises(ValidationError):
            submit_feed_request(farmer, ['layer'], 1)

    def test_closed_request_does_not_block(self, farmer):
        FeedRequestFactory(farmer=farmer, status='rejected', lines=[('layer', 1)])

        req = submit_feed_request(farmer, ['layer'], 1)

        assert req.status == 'pending'


@pytest.mark.django_db
class TestLogCall:

    def test_logs_call(self, sales_rep):
        entry = log_call(sales_rep, ' Jane Nankya ', '0772000111', status='success', notes='Wants layers')

        assert entry.farmer_name == 'Jane Nankya'
        assert entry.call_date is not None
        assert CallLog.objects.filter(sales_rep=sales_rep).count() == 1

    def test_unknown_status(self, sales_rep):
        with pytest.raises(ValidationError):
            log_call(sales_rep, 'Jane', '0772000111', status='voicemail')

    def test_name_and_phone_required(self, sales_rep):
        with pytest.raises(ValidationError):
            log_call(sales_rep, '', '0772000111')
