"""Boost price calculation and catalog lookups.

``calculate_boost_price`` is pure: it only combines an already-resolved
pricing rule with a duration, a product count and a seasonal multiplier.
The resolvers read the pricing catalog and the seasonal campaign store.
"""
import math
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from .constants import (
    FIXED,
    HOMEPAGE_FEATURED,
    LOCAL_PRODUCT_BOOST,
    PER_DAY,
    PER_WEEK,
    PRODUCT_BOOST,
    normalize_boost_city,
    normalize_boost_type,
)
from .models import PricingRule, SeasonalCampaign

CENT = Decimal('0.01')
ONE = Decimal('1')
ZERO = Decimal('0')


def _money(value):
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def _to_decimal(value):
    try:
        return Decimal(str(value))
    except (InvalidOperation, TypeError, ValueError):
        return None


def safe_multiplier(value):
    """Non-finite, non-positive or unparsable multipliers count as 1."""
    multiplier = _to_decimal(value)
    if multiplier is None or not multiplier.is_finite() or multiplier <= 0:
        return ONE
    return multiplier


def compute_billing_units(price_type, duration):
    try:
        duration = max(1, int(duration or 1))
    except (TypeError, ValueError):
        duration = 1
    if price_type == PER_DAY:
        return duration
    if price_type == PER_WEEK:
        return max(1, math.ceil(duration / 7))
    return 1


def compute_quantity_factor(boost_type, billing_units, product_count):
    if boost_type in (PRODUCT_BOOST, LOCAL_PRODUCT_BOOST):
        return billing_units * max(1, int(product_count or 0))
    if boost_type == HOMEPAGE_FEATURED:
        return 1
    # SHOP_BOOST scales with time only
    return billing_units


def calculate_boost_price(boost_type, duration, product_count=0, pricing=None, seasonal_multiplier=1):
    """Price a boost.

    ``pricing`` is anything exposing ``base_price``, ``multiplier`` and
    ``price_type`` (a ``PricingRule`` in practice). Returns a dict with
    ``billing_units``, ``quantity_factor``, ``unit_price``, ``subtotal``,
    ``total_price`` and ``seasonal_multiplier``; an unknown boost type or a
    missing rule yields zeros, which callers must reject before persisting.
    """
    boost_type = normalize_boost_type(boost_type)
    if not boost_type or pricing is None:
        return {
            'billing_units': 0,
            'quantity_factor': 0,
            'unit_price': ZERO,
            'subtotal': ZERO,
            'total_price': ZERO,
            'seasonal_multiplier': ONE,
        }

    seasonal = safe_multiplier(seasonal_multiplier)
    base_price = _to_decimal(pricing.base_price) or ZERO
    unit_price = _money(base_price * safe_multiplier(pricing.multiplier))
    billing_units = compute_billing_units(pricing.price_type or FIXED, duration)
    quantity_factor = compute_quantity_factor(boost_type, billing_units, product_count)
    subtotal = _money(unit_price * quantity_factor)
    total_price = _money(subtotal * seasonal)

    return {
        'billing_units': billing_units,
        'quantity_factor': quantity_factor,
        'unit_price': unit_price,
        'subtotal': subtotal,
        'total_price': total_price,
        'seasonal_multiplier': seasonal,
    }


def resolve_pricing_rule(boost_type, city=None, include_inactive=False):
    """City-specific rule first, then the global (city NULL) rule."""
    boost_type = normalize_boost_type(boost_type)
    if not boost_type:
        return None

    rules = PricingRule.objects.filter(boost_type=boost_type)
    if not include_inactive:
        rules = rules.filter(is_active=True)

    city = normalize_boost_city(city)
    if city:
        rule = rules.filter(city=city).order_by('-updated_at').first()
        if rule:
            return rule
    return rules.filter(city__isnull=True).order_by('-updated_at').first()


def get_active_seasonal_campaign(boost_type, now):
    """Highest-multiplier running campaign for the type, newest update on ties."""
    boost_type = normalize_boost_type(boost_type)
    candidates = SeasonalCampaign.objects.filter(
        is_active=True,
        start_date__lte=now,
        end_date__gte=now,
    ).order_by('-multiplier', '-updated_at', '-id')

    # applies_to is a JSON list; filtering it in Python keeps SQLite and MySQL aligned
    for campaign in candidates:
        if campaign.applies_to_type(boost_type):
            return campaign
    return None


def build_pricing_breakdown(pricing, seasonal_campaign, computed, product_count, city):
    return {
        'boost_type': pricing.boost_type,
        'city': city or None,
        'base_price': pricing.base_price,
        'price_type': pricing.price_type,
        'pricing_multiplier': safe_multiplier(pricing.multiplier),
        'unit_price': computed['unit_price'],
        'duration': computed['billing_units'],
        'product_count': product_count,
        'subtotal': computed['subtotal'],
        'seasonal_multiplier': computed['seasonal_multiplier'],
        'seasonal_campaign': {
            'id': seasonal_campaign.id,
            'name': seasonal_campaign.name,
            'multiplier': seasonal_campaign.multiplier,
            'start_date': seasonal_campaign.start_date,
            'end_date': seasonal_campaign.end_date,
        } if seasonal_campaign else None,
        'total_price': computed['total_price'],
    }


def quote_boost(boost_type, duration, product_count, city, now):
    """Resolve catalog entries and price a boost.

    Returns ``(pricing_rule, seasonal_campaign, computed)``; the rule is None
    when no active pricing exists for the type.
    """
    pricing = resolve_pricing_rule(boost_type, city)
    if pricing is None:
        return None, None, None
    seasonal_campaign = get_active_seasonal_campaign(boost_type, now)
    seasonal_multiplier = seasonal_campaign.multiplier if seasonal_campaign else ONE
    computed = calculate_boost_price(
        boost_type,
        duration,
        product_count=product_count,
        pricing=pricing,
        seasonal_multiplier=seasonal_multiplier,
    )
    return pricing, seasonal_campaign, computed
