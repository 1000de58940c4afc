from datetime import timedelta
from django.test import TestCase
from apps.boosts.constants import PENDING, PRODUCT_BOOST
from apps.boosts.engagement import track_click, track_impressions
from apps.boosts.exceptions import BoostNotFoundError, BoostValidationError
from apps.boosts.models import BoostRequest
from .factories import NOW, make_boost, make_product, make_user


class EngagementCounterTest(TestCase):
    def setUp(self):
        self.seller = make_user('seller')
        self.product = make_product(self.seller)

    def test_batch_counts_only_live_requests(self):
        live_ids = [make_boost(self.seller, PRODUCT_BOOST, [self.product]).id for _ in range(10)]
        pending_ids = [make_boost(self.seller, PRODUCT_BOOST, status=PENDING).id for _ in range(5)]
        unknown_ids = list(range(900000, 900035))

        tracked = track_impressions(live_ids + pending_ids + unknown_ids, now=NOW)

        self.assertEqual(tracked, 10)
        self.assertEqual(BoostRequest.objects.filter(id__in=live_ids, impressions=1).count(), 10)
        self.assertEqual(BoostRequest.objects.filter(id__in=pending_ids, impressions=0).count(), 5)

    def test_duplicates_count_once(self):
        live = make_boost(self.seller, PRODUCT_BOOST, [self.product])
        self.assertEqual(track_impressions([live.id, str(live.id), live.id], now=NOW), 1)
        live.refresh_from_db()
        self.assertEqual(live.impressions, 1)

    def test_batch_is_capped(self):
        live = make_boost(self.seller, PRODUCT_BOOST, [self.product])
        ids = list(range(800000, 800100)) + [live.id]
        self.assertEqual(track_impressions(ids, now=NOW), 0)

    def test_empty_batch_is_invalid(self):
        for payload in ([], ['abc', -4, None], 'not-a-list'):
            with self.assertRaises(BoostValidationError):
                track_impressions(payload, now=NOW)

    def test_click_increments_live_request(self):
        live = make_boost(self.seller, PRODUCT_BOOST, [self.product])
        track_impressions([live.id], now=NOW)
        self.assertEqual(track_click(live.id, now=NOW), {'id': live.id, 'impressions': 1, 'clicks': 1})

    def test_click_on_inactive_request_is_not_found(self):
        ended = make_boost(
            self.seller, PRODUCT_BOOST, [self.product],
            start=NOW - timedelta(days=2), end=NOW - timedelta(days=1),
        )
        for request_id in (ended.id, 987654, 'abc'):
            with self.assertRaises(BoostNotFoundError):
                track_click(request_id, now=NOW)
