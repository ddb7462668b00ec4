# manager/tests/test_views.py
import pytest
from django.urls import reverse

from manager.models import ChickStock, FeedStock
from sales.tests.factories import ChickRequestFactory, FeedRequestFactory


@pytest.mark.django_db
class TestRequestActionView:

    def url(self, req):
        return reverse('approve_reject_request', args=[req.pk])

    def test_approve(self, manager_client, broiler_stock):
        req = ChickRequestFactory(chick_type='Broiler', quantity=40)

        response = manager_client.post(self.url(req), {'action': 'approve'})

        assert response.status_code == 200
        body = response.json()
        assert body['success'] is True
        assert body['mutatedEntity']['status'] == 'approved'
        assert body['updatedStats']['chick_stock']['by_type'] == {'Broiler': 60}

    def test_reject_with_reason(self, manager_client):
        req = ChickRequestFactory()

        response = manager_client.post(self.url(req), {'action': 'reject', 'rejection_reason': 'Wrong NIN'})

        assert response.status_code == 200
        req.refresh_from_db()
        assert req.rejection_reason == 'Wrong NIN'

    def test_insufficient_stock_is_conflict(self, manager_client, broiler_stock):
        req = ChickRequestFactory(chick_type='Broiler', quantity=140)

        response = manager_client.post(self.url(req), {'action': 'approve'})

        assert response.status_code == 409
        body = response.json()
        assert body['code'] == 'insufficient_stock'
        assert body['details']['available_quantity'] == 100

    def test_illegal_transition_is_conflict(self, manager_client):
        req = ChickRequestFactory()

        response = manager_client.post(self.url(req), {'action': 'dispatch'})

        assert response.status_code == 409
        assert response.json()['message'] == "cannot dispatch a pending request"

    def test_unknown_request(self, manager_client):
        response = manager_client.post(reverse('approve_reject_request', args=[99999]), {'action': 'approve'})

        assert response.status_code == 404

    def test_unknown_action(self, manager_client):
        req = ChickRequestFactory()

        response = manager_client.post(self.url(req), {'action': 'archive'})

        assert response.status_code == 400
        assert response.json()['code'] == 'invalid_action'

    def test_non_manager_is_redirected(self, rep_client):
        req = ChickRequestFactory()

        response = rep_client.post(self.url(req), {'action': 'approve'})

        assert response.status_code == 302
        req.refresh_from_db()
        assert req.status == 'pending'

    def test_get_not_allowed(self, manager_client):
        req = ChickRequestFactory()

        response = manager_client.get(self.url(req))

        assert response.status_code == 405

    def test_feed_request_action(self, manager_client, starter_feed):
        req = FeedRequestFactory(lines=[('starter', 2)])

        response = manager_client.post(reverse('approve_reject_feed_request', args=[req.pk]), {'action': 'approve'})

        assert response.status_code == 200
        starter_feed.refresh_from_db()
        assert starter_feed.quantity_bags == 8

    def test_feed_request_without_lines(self, manager_client, starter_feed):
        req = FeedRequestFactory(quantity_bags=1)

        response = manager_client.post(reverse('approve_reject_feed_request', args=[req.pk]), {'action': 'approve'})

        assert response.status_code == 422
        assert response.json()['code'] == 'invalid_request'


@pytest.mark.django_db
class TestStockViews:

    def test_add_chick_stock(self, manager_client, manager_user):
        response = manager_client.post(reverse('manager_chick_stock'), {
            'chick_type': 'Kuroiler', 'category': 'layer', 'quantity': '250', 'age_days': '2',
        })

        assert response.status_code == 201
        assert response.json()['available'] == 250
        batch = ChickStock.objects.get()
        assert batch.recorded_by == manager_user

    @pytest.mark.parametrize('data', [
        {'chick_type': 'Kuroiler', 'category': 'layer', 'quantity': '', 'age_days': '2'},
        {'chick_type': 'Kuroiler', 'category': 'duck', 'quantity': '10', 'age_days': '2'},
        {'chick_type': 'Kuroiler', 'category': 'layer', 'quantity': 'ten', 'age_days': '2'},
        {'chick_type': 'Kuroiler', 'category': 'layer', 'quantity': '-4', 'age_days': '2'},
    ])
    def test_add_chick_stock_invalid(self, manager_client, data):
        response = manager_client.post(reverse('manager_chick_stock'), data)

        assert response.status_code == 400
        assert not ChickStock.objects.exists()

    def test_add_feed_stock(self, manager_client):
        response = manager_client.post(reverse('add_feed_stock'), {
            'feed_type': 'grower', 'quantity_bags': '12', 'unit_price': '38500', 'expiry_date': '2030-01-31',
        })

        assert response.status_code == 201
        batch = FeedStock.objects.get()
        assert batch.quantity_bags == 12
        assert str(batch.expiry_date) == '2030-01-31'

    def test_add_feed_stock_bad_price(self, manager_client):
        response = manager_client.post(reverse('add_feed_stock'), {
            'feed_type': 'grower', 'quantity_bags': '12', 'unit_price': 'cheap',
        })

        assert response.status_code == 400

    def test_dashboard(self, manager_client, broiler_stock):
        response = manager_client.get(reverse('manager_dashboard'))

        assert response.status_code == 200
        assert response.json()['chick_stock']['total'] == 100

    def test_dashboard_requires_login(self, client):
        response = client.get(reverse('manager_dashboard'))

        assert response.status_code == 302
