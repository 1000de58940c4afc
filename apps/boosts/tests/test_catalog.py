from datetime import timedelta
from decimal import Decimal
from django.test import TestCase, override_settings
from apps.boosts.catalog import (
    create_seasonal_campaign,
    list_pricing_rules,
    update_pricing_rule,
    update_seasonal_campaign,
    upsert_pricing_rule,
)
from apps.boosts.constants import PER_DAY, PER_WEEK, PRODUCT_BOOST, SHOP_BOOST
from apps.boosts.exceptions import BoostNotFoundError, BoostValidationError
from apps.boosts.models import PricingRule
from .factories import NOW, make_admin


class PricingCatalogTest(TestCase):
    def setUp(self):
        self.admin = make_admin()

    def test_upsert_supersedes_and_keeps_history(self):
        rule, created = upsert_pricing_rule(self.admin, PRODUCT_BOOST, PER_DAY, '1000')
        self.assertTrue(created)

        rule, created = upsert_pricing_rule(self.admin, 'product_boost', PER_DAY, '1200', multiplier='1.1')

        self.assertFalse(created)
        self.assertEqual(PricingRule.objects.count(), 1)
        self.assertEqual(rule.base_price, Decimal('1200'))
        self.assertEqual(rule.history[0]['base_price'], '1000.00')

    @override_settings(BOOST_PRICING_HISTORY_LIMIT=3)
    def test_history_is_bounded_newest_first(self):
        for price in range(1, 6):
            upsert_pricing_rule(self.admin, SHOP_BOOST, PER_WEEK, price * 1000)
        rule = PricingRule.objects.get(boost_type=SHOP_BOOST)
        self.assertEqual([entry['base_price'] for entry in rule.history], ['4000.00', '3000.00', '2000.00'])

    def test_city_rules_are_separate(self):
        upsert_pricing_rule(self.admin, PRODUCT_BOOST, PER_DAY, '1000')
        upsert_pricing_rule(self.admin, PRODUCT_BOOST, PER_DAY, '1500', city='pointe-noire')
        self.assertEqual(list_pricing_rules(city='Pointe-Noire').get().base_price, Decimal('1500'))
        self.assertEqual(list_pricing_rules(boost_type=PRODUCT_BOOST).count(), 2)

    def test_invalid_values_are_rejected(self):
        for kwargs in (
            {'boost_type': 'BANNER'},
            {'price_type': 'per_month'},
            {'base_price': '-1'},
            {'base_price': 'abc'},
            {'multiplier': '0'},
        ):
            params = {'boost_type': PRODUCT_BOOST, 'price_type': PER_DAY, 'base_price': '1000', **kwargs}
            with self.assertRaises(BoostValidationError):
                upsert_pricing_rule(self.admin, **params)

    def test_partial_update(self):
        rule, _ = upsert_pricing_rule(self.admin, PRODUCT_BOOST, PER_DAY, '1000')
        rule = update_pricing_rule(self.admin, rule.id, {'is_active': False})
        self.assertFalse(rule.is_active)
        self.assertEqual(rule.base_price, Decimal('1000'))
        self.assertEqual(len(rule.history), 1)
        with self.assertRaises(BoostNotFoundError):
            update_pricing_rule(self.admin, 424242, {'is_active': True})


class SeasonalCatalogTest(TestCase):
    def setUp(self):
        self.admin = make_admin()

    def test_create_normalizes_applies_to(self):
        campaign = create_seasonal_campaign(
            self.admin, 'Fetes de fin d annee', NOW.isoformat(), (NOW + timedelta(days=10)).isoformat(),
            multiplier='1.3', applies_to=['product_boost', 'unknown', 'SHOP_BOOST'],
        )
        self.assertEqual(campaign.applies_to, [PRODUCT_BOOST, SHOP_BOOST])
        self.assertTrue(campaign.is_running(NOW + timedelta(days=1)))

    def test_dates_and_multiplier_are_validated(self):
        with self.assertRaises(BoostValidationError):
            create_seasonal_campaign(self.admin, 'Backwards', NOW, NOW - timedelta(days=1))
        with self.assertRaises(BoostValidationError):
            create_seasonal_campaign(self.admin, '', NOW, NOW + timedelta(days=1))
        with self.assertRaises(BoostValidationError):
            create_seasonal_campaign(self.admin, 'Free', NOW, NOW + timedelta(days=1), multiplier='-1')

    def test_update_keeps_window_ordered(self):
        campaign = create_seasonal_campaign(self.admin, 'Rentree', NOW, NOW + timedelta(days=5))
        with self.assertRaises(BoostValidationError):
            update_seasonal_campaign(self.admin, campaign.id, {'end_date': (NOW - timedelta(days=1)).isoformat()})
        campaign = update_seasonal_campaign(self.admin, campaign.id, {'multiplier': '1.5', 'is_active': False})
        self.assertEqual(campaign.multiplier, Decimal('1.5'))
        self.assertFalse(campaign.is_running(NOW))
