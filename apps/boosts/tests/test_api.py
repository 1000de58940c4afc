from datetime import timedelta
from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase
from apps.boosts.constants import ACTIVE, LOCAL_PRODUCT_BOOST, PRODUCT_BOOST, SHOP_BOOST
from apps.boosts.models import BoostRequest
from .factories import PAYMENT, make_admin, make_boost, make_product, make_rule, make_user


class BoostApiTest(APITestCase):
    def setUp(self):
        self.admin = make_admin()
        self.seller = make_user('seller', city='Oyo')
        self.product = make_product(self.seller)
        make_rule(PRODUCT_BOOST, '2000')
        make_rule(LOCAL_PRODUCT_BOOST, '700')

    def submit(self, boost_type=PRODUCT_BOOST):
        self.client.force_authenticate(self.seller)
        return self.client.post(reverse('boost-request-create'), {
            'boost_type': boost_type,
            'duration': 7,
            'product_ids': [self.product.id],
            **PAYMENT,
        }, format='json')

    def test_requires_authentication(self):
        response = self.client.get(reverse('boost-my-requests'))
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_price_preview(self):
        second = make_product(self.seller, 'Second')
        self.client.force_authenticate(self.seller)
        response = self.client.get(reverse('boost-price-preview'), {
            'boost_type': PRODUCT_BOOST,
            'duration': 7,
            'product_ids': f'{self.product.id},{second.id}',
        })
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['pricing']['product_count'], 2)
        self.assertEqual(str(response.data['pricing']['total_price']), '28000.00')

    def test_price_preview_applies_submission_checks(self):
        foreign = make_product(make_user('other'), 'Foreign')
        self.client.force_authenticate(self.seller)
        url = reverse('boost-price-preview')

        response = self.client.get(url, {
            'boost_type': PRODUCT_BOOST, 'duration': 7, 'product_ids': f'{foreign.id},999999',
        })
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

        response = self.client.get(url, {'boost_type': PRODUCT_BOOST, 'duration': 7})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

        make_rule(SHOP_BOOST, '5000', 'per_week')
        response = self.client.get(url, {'boost_type': SHOP_BOOST, 'duration': 7})
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_price_preview_uses_seller_city_rule(self):
        make_rule(PRODUCT_BOOST, '3000', city='Oyo')
        self.client.force_authenticate(self.seller)
        response = self.client.get(reverse('boost-price-preview'), {
            'boost_type': PRODUCT_BOOST, 'duration': 1, 'product_ids': str(self.product.id),
        })
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['pricing']['city'], 'Oyo')
        self.assertEqual(str(response.data['pricing']['total_price']), '3000.00')

    def test_submit_then_conflict(self):
        response = self.submit()
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['boost_request']['status'], 'PENDING')
        self.assertEqual(response.data['boost_request']['ctr'], 0.0)

        response = self.submit(LOCAL_PRODUCT_BOOST)
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data['conflicting_status'], 'PENDING')

    def test_staff_cannot_submit(self):
        self.client.force_authenticate(self.admin)
        response = self.client.post(reverse('boost-request-create'), {
            'boost_type': PRODUCT_BOOST, 'duration': 1, 'product_ids': [self.product.id], **PAYMENT,
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_my_requests_are_paginated(self):
        self.submit()
        response = self.client.get(reverse('boost-my-requests'), {'limit': 5})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['pagination'], {'page': 1, 'limit': 5, 'total': 1, 'pages': 1})

    def test_my_requests_are_for_sellers_only(self):
        blocked = make_user('blocked', is_blocked=True)
        for user in (self.admin, blocked):
            self.client.force_authenticate(user)
            response = self.client.get(reverse('boost-my-requests'))
            self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_admin_approves_request(self):
        request_id = self.submit().data['boost_request']['id']

        self.client.force_authenticate(self.seller)
        url = reverse('boost-admin-status', args=[request_id])
        self.assertEqual(self.client.patch(url, {'status': 'approved'}, format='json').status_code, status.HTTP_403_FORBIDDEN)

        self.client.force_authenticate(self.admin)
        response = self.client.patch(url, {'status': 'approved'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['boost_request']['status'], ACTIVE)

        response = self.client.patch(url, {'status': 'PENDING'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['detail'].code, 'invalid_transition')

    def test_boost_manager_lists_requests(self):
        manager = make_user('manager', can_manage_boosts=True)
        self.submit()
        self.client.force_authenticate(manager)
        response = self.client.get(reverse('boost-admin-requests'), {'status': 'pending'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['pagination']['total'], 1)

        response = self.client.get(reverse('boost-pricing-rules'))
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_tracking_is_anonymous(self):
        now = timezone.now()
        live = make_boost(
            self.seller, PRODUCT_BOOST, [self.product],
            start=now - timedelta(hours=1), end=now + timedelta(hours=1),
        )
        response = self.client.post(reverse('boost-impressions'), {'request_ids': [live.id, 123456]}, format='json')
        self.assertEqual(response.data, {'tracked_count': 1})

        response = self.client.post(reverse('boost-click', args=[live.id]))
        self.assertEqual(response.data['clicks'], 1)

        response = self.client.post(reverse('boost-click', args=[123456]))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

        response = self.client.post(reverse('boost-impressions'), {'request_ids': []}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_priorities_endpoint(self):
        now = timezone.now()
        local = make_boost(
            self.seller, LOCAL_PRODUCT_BOOST, [self.product], city='Oyo',
            start=now - timedelta(hours=1), end=now + timedelta(hours=1),
        )
        make_boost(
            self.seller, PRODUCT_BOOST, [self.product],
            start=now - timedelta(hours=1), end=now + timedelta(hours=1),
        )
        response = self.client.post(reverse('boost-priorities'), {
            'product_ids': [self.product.id], 'viewer_city': 'Oyo',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['product_winner'][self.product.id]['request_id'], local.id)

    def test_dashboard(self):
        now = timezone.now()
        make_boost(
            self.seller, PRODUCT_BOOST, [self.product], total_price='14000',
            start=now - timedelta(hours=1), end=now + timedelta(hours=1),
        )
        self.client.force_authenticate(self.admin)
        response = self.client.get(reverse('boost-admin-dashboard'))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(str(response.data['revenue']['daily']['total_revenue']), '14000.00')
        self.assertEqual(response.data['status']['active'], 1)
        self.assertEqual(response.data['by_city'][0]['city'], 'GLOBAL')
        self.assertEqual(response.data['top_spending_sellers'][0]['seller_id'], self.seller.id)
        self.assertEqual(BoostRequest.objects.count(), 1)

    def test_pricing_rule_admin(self):
        self.client.force_authenticate(self.admin)
        response = self.client.post(reverse('boost-pricing-rules'), {
            'boost_type': PRODUCT_BOOST, 'price_type': 'per_day', 'base_price': '2500',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data['history']), 1)

        response = self.client.post(reverse('boost-seasonal-campaigns'), {
            'name': 'Fetes', 'start_date': '2099-12-01', 'end_date': '2100-01-05', 'multiplier': '1.2',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertFalse(response.data['is_running'])
