from datetime import timedelta
from decimal import Decimal
from types import SimpleNamespace
from django.test import SimpleTestCase, TestCase
from apps.boosts.constants import (
    FIXED,
    HOMEPAGE_FEATURED,
    LOCAL_PRODUCT_BOOST,
    PER_DAY,
    PER_WEEK,
    PRODUCT_BOOST,
    SHOP_BOOST,
)
from apps.boosts.models import SeasonalCampaign
from apps.boosts.pricing import (
    calculate_boost_price,
    compute_billing_units,
    get_active_seasonal_campaign,
    quote_boost,
    resolve_pricing_rule,
)
from .factories import NOW, make_rule


def rule(base_price, price_type=PER_DAY, multiplier='1'):
    return SimpleNamespace(base_price=Decimal(base_price), price_type=price_type, multiplier=Decimal(multiplier))


class PriceCalculatorTest(SimpleTestCase):
    def test_product_boost_end_to_end(self):
        result = calculate_boost_price(
            PRODUCT_BOOST, 7, product_count=3, pricing=rule('2000'), seasonal_multiplier=Decimal('1.2')
        )
        self.assertEqual(result['unit_price'], Decimal('2000.00'))
        self.assertEqual(result['billing_units'], 7)
        self.assertEqual(result['quantity_factor'], 21)
        self.assertEqual(result['subtotal'], Decimal('42000.00'))
        self.assertEqual(result['total_price'], Decimal('50400.00'))

    def test_per_week_rounds_up_to_whole_weeks(self):
        self.assertEqual(compute_billing_units(PER_WEEK, 8), 2)
        self.assertEqual(compute_billing_units(PER_WEEK, 7), 1)
        self.assertEqual(compute_billing_units(PER_WEEK, 1), 1)

    def test_billing_units_are_always_positive(self):
        for price_type in (PER_DAY, PER_WEEK, FIXED):
            for duration in (0, 1, 6, 15, 90):
                self.assertGreaterEqual(compute_billing_units(price_type, duration), 1)
        self.assertEqual(compute_billing_units(FIXED, 30), 1)

    def test_homepage_ignores_duration_and_product_count(self):
        result = calculate_boost_price(HOMEPAGE_FEATURED, 10, product_count=4, pricing=rule('15000', FIXED))
        self.assertEqual(result['quantity_factor'], 1)
        self.assertEqual(result['total_price'], Decimal('15000.00'))

    def test_shop_boost_scales_with_time_only(self):
        result = calculate_boost_price(SHOP_BOOST, 14, product_count=9, pricing=rule('5000', PER_WEEK))
        self.assertEqual(result['quantity_factor'], 2)
        self.assertEqual(result['total_price'], Decimal('10000.00'))

    def test_local_boost_counts_at_least_one_product(self):
        result = calculate_boost_price(LOCAL_PRODUCT_BOOST, 2, product_count=0, pricing=rule('700'))
        self.assertEqual(result['quantity_factor'], 2)

    def test_invalid_multipliers_count_as_one(self):
        for multiplier in ('0', '-2', 'NaN', 'Infinity'):
            result = calculate_boost_price(
                PRODUCT_BOOST, 1, product_count=1, pricing=rule('100', multiplier=multiplier),
                seasonal_multiplier=multiplier,
            )
            self.assertEqual(result['total_price'], Decimal('100.00'))
            self.assertEqual(result['seasonal_multiplier'], Decimal('1'))

    def test_half_up_rounding(self):
        result = calculate_boost_price(
            PRODUCT_BOOST, 1, product_count=1, pricing=rule('10.005'), seasonal_multiplier='1'
        )
        self.assertEqual(result['unit_price'], Decimal('10.01'))

    def test_total_is_unit_times_quantity_times_seasonal(self):
        for duration, count, seasonal in ((3, 2, '1.5'), (9, 1, '0.75'), (1, 5, '2')):
            result = calculate_boost_price(
                PRODUCT_BOOST, duration, product_count=count, pricing=rule('333.33', multiplier='1.1'),
                seasonal_multiplier=seasonal,
            )
            expected = (result['unit_price'] * result['quantity_factor'] * Decimal(seasonal)).quantize(Decimal('0.01'))
            self.assertEqual(result['total_price'], expected)

    def test_unknown_type_or_missing_rule_yields_zeros(self):
        for result in (
            calculate_boost_price('BANNER', 3, pricing=rule('100')),
            calculate_boost_price(PRODUCT_BOOST, 3, pricing=None),
        ):
            self.assertEqual(result['total_price'], Decimal('0'))
            self.assertEqual(result['billing_units'], 0)
            self.assertEqual(result['seasonal_multiplier'], Decimal('1'))


class PricingResolutionTest(TestCase):
    def test_city_rule_wins_over_global(self):
        make_rule(PRODUCT_BOOST, '1000')
        city_rule = make_rule(PRODUCT_BOOST, '1500', city='Brazzaville')
        self.assertEqual(resolve_pricing_rule(PRODUCT_BOOST, 'brazzaville'), city_rule)

    def test_falls_back_to_global_rule(self):
        global_rule = make_rule(PRODUCT_BOOST, '1000')
        make_rule(PRODUCT_BOOST, '1500', city='Brazzaville')
        self.assertEqual(resolve_pricing_rule(PRODUCT_BOOST, 'Oyo'), global_rule)
        self.assertEqual(resolve_pricing_rule(PRODUCT_BOOST, 'Paris'), global_rule)

    def test_inactive_rules_only_for_admin_preview(self):
        inactive = make_rule(SHOP_BOOST, '5000', PER_WEEK, is_active=False)
        self.assertIsNone(resolve_pricing_rule(SHOP_BOOST))
        self.assertEqual(resolve_pricing_rule(SHOP_BOOST, include_inactive=True), inactive)

    def test_quote_without_rule(self):
        self.assertEqual(quote_boost(HOMEPAGE_FEATURED, 1, 1, None, NOW), (None, None, None))


class SeasonalCampaignResolutionTest(TestCase):
    def campaign(self, name, multiplier, applies_to=None, **extra):
        defaults = {
            'start_date': NOW - timedelta(days=1),
            'end_date': NOW + timedelta(days=1),
        }
        defaults.update(extra)
        return SeasonalCampaign.objects.create(
            name=name, multiplier=Decimal(multiplier), applies_to=applies_to or [], **defaults
        )

    def test_highest_multiplier_wins(self):
        self.campaign('Rentree', '1.1')
        fetes = self.campaign('Fetes', '1.5')
        self.assertEqual(get_active_seasonal_campaign(PRODUCT_BOOST, NOW), fetes)

    def test_equal_multipliers_go_to_latest_update(self):
        older = self.campaign('Older', '1.5')
        newer = self.campaign('Newer', '1.5')
        SeasonalCampaign.objects.filter(pk=older.pk).update(updated_at=NOW)
        SeasonalCampaign.objects.filter(pk=newer.pk).update(updated_at=NOW - timedelta(hours=1))
        self.assertEqual(get_active_seasonal_campaign(PRODUCT_BOOST, NOW), older)

    def test_applies_to_filters_types(self):
        self.campaign('Shops only', '2', applies_to=[SHOP_BOOST])
        everyone = self.campaign('Everyone', '1.2')
        self.assertEqual(get_active_seasonal_campaign(PRODUCT_BOOST, NOW), everyone)
        self.assertEqual(get_active_seasonal_campaign(SHOP_BOOST, NOW).name, 'Shops only')

    def test_inactive_or_out_of_window_campaigns_ignored(self):
        self.campaign('Off', '3', is_active=False)
        self.campaign('Past', '3', start_date=NOW - timedelta(days=5), end_date=NOW - timedelta(days=2))
        self.assertIsNone(get_active_seasonal_campaign(PRODUCT_BOOST, NOW))

    def test_quote_applies_seasonal_multiplier(self):
        make_rule(PRODUCT_BOOST, '2000')
        self.campaign('Fetes', '1.2')
        pricing, campaign, computed = quote_boost(PRODUCT_BOOST, 7, 3, None, NOW)
        self.assertEqual(campaign.name, 'Fetes')
        self.assertEqual(computed['total_price'], Decimal('50400.00'))
