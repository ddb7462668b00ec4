# sales/tests/test_views.py
import pytest
from django.urls import reverse

from sales.models import CallLog, ChickRequest, FeedRequest


@pytest.mark.django_db
class TestSubmitRequestView:

    def test_chick_request(self, rep_client, farmer):
        response = rep_client.post(reverse('submit_chick_request'), {
            'form_type': 'chick_request', 'farmer': farmer.pk, 'chick_type': 'Broiler', 'quantity': '30',
        })

        assert response.status_code == 201
        body = response.json()
        assert body['success'] is True
        assert ChickRequest.objects.get(pk=body['request_id']).quantity == 30

    def test_chick_request_over_limit(self, rep_client, farmer):
        response = rep_client.post(reverse('submit_chick_request'), {
            'form_type': 'chick_request', 'farmer': farmer.pk, 'chick_type': 'Broiler', 'quantity': '150',
        })

        assert response.status_code == 400
        assert 'quantity' in response.json()['errors']

    def test_feed_request(self, rep_client, farmer):
        response = rep_client.post(reverse('submit_chick_request'), {
            'form_type': 'feed_request', 'farmer': farmer.pk,
            'feed_types': ['starter', 'grower'], 'quantity_bags': '2',
        })

        assert response.status_code == 201
        req = FeedRequest.objects.get(pk=response.json()['request_id'])
        assert req.lines.count() == 2

    def test_unknown_form(self, rep_client, farmer):
        response = rep_client.post(reverse('submit_chick_request'), {'form_type': 'eggs', 'farmer': farmer.pk})

        assert response.status_code == 400

    def test_unknown_farmer(self, rep_client):
        response = rep_client.post(reverse('submit_chick_request'), {'form_type': 'chick_request', 'farmer': 9999})

        assert response.status_code == 404

    @pytest.mark.parametrize('farmer_id', ['abc', ''])
    def test_malformed_farmer_id(self, rep_client, farmer_id):
        response = rep_client.post(reverse('submit_chick_request'), {
            'form_type': 'chick_request', 'farmer': farmer_id, 'chick_type': 'Broiler', 'quantity': '30',
        })

        assert response.status_code == 400
        assert not ChickRequest.objects.exists()

    def test_login_required(self, client, farmer):
        response = client.post(reverse('submit_chick_request'), {'form_type': 'chick_request', 'farmer': farmer.pk})

        assert response.status_code == 302


@pytest.mark.django_db
class TestLogCallView:

    def test_log_call(self, rep_client, sales_rep):
        response = rep_client.post(reverse('log_call'), {
            'farmer_name': 'Ivan Okello', 'phone': '0701234567', 'status': 'no_answer',
            'call_date': '2025-03-04T10:30:00',
        })

        assert response.status_code == 201
        entry = CallLog.objects.get()
        assert entry.sales_rep == sales_rep
        assert entry.status == 'no_answer'
        assert entry.call_date.tzinfo is not None

    def test_bad_date(self, rep_client):
        response = rep_client.post(reverse('log_call'), {
            'farmer_name': 'Ivan Okello', 'phone': '0701234567', 'call_date': 'yesterday',
        })

        assert response.status_code == 400
        assert not CallLog.objects.exists()
