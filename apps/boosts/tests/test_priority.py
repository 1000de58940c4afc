from datetime import timedelta
from django.test import TestCase
from apps.boosts.constants import (
    EXPIRED,
    HOMEPAGE_FEATURED,
    LOCAL_PRODUCT_BOOST,
    PRODUCT_BOOST,
    SHOP_BOOST,
)
from apps.boosts.priority import resolve_boost_priorities
from .factories import NOW, make_boost, make_product, make_user


class PriorityResolutionTest(TestCase):
    def setUp(self):
        self.seller = make_user('seller')
        self.product = make_product(self.seller)
        self.local = make_boost(self.seller, LOCAL_PRODUCT_BOOST, [self.product], city='Oyo')
        self.national = make_boost(self.seller, PRODUCT_BOOST, [self.product])

    def test_local_boost_wins_in_its_city(self):
        result = resolve_boost_priorities([self.product.id], [], viewer_city='oyo', now=NOW)
        self.assertEqual(result['product_winner'][self.product.id], {
            'priority': 0,
            'boost_type': LOCAL_PRODUCT_BOOST,
            'request_id': self.local.id,
        })

    def test_local_boost_discarded_elsewhere(self):
        for city in ('Brazzaville', None):
            winner = resolve_boost_priorities([self.product.id], [], viewer_city=city, now=NOW)['product_winner']
            self.assertEqual(winner[self.product.id]['priority'], 1)
            self.assertEqual(winner[self.product.id]['request_id'], self.national.id)

    def test_homepage_loses_to_product_boost(self):
        other = make_product(self.seller, 'Other')
        make_boost(self.seller, HOMEPAGE_FEATURED, [other])
        product_boost = make_boost(self.seller, PRODUCT_BOOST, [other])
        winner = resolve_boost_priorities([other.id], [], now=NOW)['product_winner'][other.id]
        self.assertEqual(winner['request_id'], product_boost.id)

    def test_ties_go_to_most_recent_approval(self):
        other = make_product(self.seller, 'Other')
        make_boost(self.seller, PRODUCT_BOOST, [other], approved_at=NOW - timedelta(hours=5))
        recent = make_boost(self.seller, PRODUCT_BOOST, [other], approved_at=NOW - timedelta(hours=1))
        winner = resolve_boost_priorities([other.id], [], now=NOW)['product_winner'][other.id]
        self.assertEqual(winner['request_id'], recent.id)

    def test_out_of_window_and_closed_requests_ignored(self):
        other = make_product(self.seller, 'Other')
        make_boost(self.seller, PRODUCT_BOOST, [other], start=NOW + timedelta(hours=1), end=NOW + timedelta(days=1))
        make_boost(self.seller, PRODUCT_BOOST, [other], status=EXPIRED)
        result = resolve_boost_priorities([other.id], [], now=NOW)
        self.assertNotIn(other.id, result['product_winner'])

    def test_shop_winner_is_independent(self):
        shop = make_user('shop', account_type='shop')
        shop_boost = make_boost(shop, SHOP_BOOST)
        result = resolve_boost_priorities([self.product.id], [shop.id, self.seller.id], now=NOW)
        self.assertEqual(result['shop_winner'], {shop.id: {'priority': 2, 'request_id': shop_boost.id}})
        self.assertIn(self.product.id, result['product_winner'])
