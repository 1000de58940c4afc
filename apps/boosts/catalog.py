import logging
from decimal import Decimal, InvalidOperation
from django.db import IntegrityError, transaction

from .constants import PRICE_TYPES, normalize_boost_city, normalize_boost_type
from .exceptions import BoostConflictError, BoostNotFoundError, BoostValidationError
from .models import PricingRule, SeasonalCampaign
from .utils import parse_moment

logger = logging.getLogger(__name__)


def _parse_decimal(value, field):
    try:
        parsed = Decimal(str(value))
    except (InvalidOperation, TypeError, ValueError):
        raise BoostValidationError(f"Invalid {field}.")
    if not parsed.is_finite():
        raise BoostValidationError(f"Invalid {field}.")
    return parsed


def _validated_base_price(value):
    base_price = _parse_decimal(value, 'base price')
    if base_price < 0:
        raise BoostValidationError("Invalid base price.")
    return base_price


def _validated_multiplier(value):
    multiplier = _parse_decimal(value, 'multiplier')
    if multiplier <= 0:
        raise BoostValidationError("Invalid multiplier.")
    return multiplier


def _validated_price_type(value):
    price_type = str(value or '').strip()
    if price_type not in PRICE_TYPES:
        raise BoostValidationError("Invalid price type.")
    return price_type


def _validated_boost_type(value):
    boost_type = normalize_boost_type(value)
    if not boost_type:
        raise BoostValidationError("Invalid boost type.")
    return boost_type


def list_pricing_rules(boost_type=None, city=None, is_active=None):
    rules = PricingRule.objects.select_related('updated_by')
    boost_type = normalize_boost_type(boost_type)
    city = normalize_boost_city(city)
    if boost_type:
        rules = rules.filter(boost_type=boost_type)
    if city:
        rules = rules.filter(city=city)
    if is_active is not None:
        rules = rules.filter(is_active=is_active)
    return rules.order_by('boost_type', 'city', '-updated_at')


@transaction.atomic
def upsert_pricing_rule(actor, boost_type, price_type, base_price, city=None, multiplier=1, is_active=True):
    """Create or supersede the rule for ``(boost_type, city)``.

    Returns ``(rule, created)``. A superseded rule keeps its previous values
    at the head of its bounded history.
    """
    boost_type = _validated_boost_type(boost_type)
    price_type = _validated_price_type(price_type)
    base_price = _validated_base_price(base_price)
    multiplier = _validated_multiplier(multiplier if multiplier is not None else 1)
    city = normalize_boost_city(city)

    rule = (
        PricingRule.objects.select_for_update()
        .filter(boost_type=boost_type, city=city)
        .first()
    )
    if rule is None:
        rule = PricingRule.objects.create(
            boost_type=boost_type,
            city=city,
            base_price=base_price,
            price_type=price_type,
            multiplier=multiplier,
            is_active=is_active,
            updated_by=actor,
        )
        logger.info(f"Pricing rule {rule} created by {getattr(actor, 'pk', None)}")
        return rule, True

    rule.push_history()
    rule.base_price = base_price
    rule.price_type = price_type
    rule.multiplier = multiplier
    rule.is_active = is_active
    rule.updated_by = actor
    rule.save()
    logger.info(f"Pricing rule {rule} superseded by {getattr(actor, 'pk', None)}")
    return rule, False


@transaction.atomic
def update_pricing_rule(actor, rule_id, data):
    """Partial update of a rule by id; only keys present in ``data`` change."""
    rule = PricingRule.objects.select_for_update().filter(pk=rule_id).first()
    if rule is None:
        raise BoostNotFoundError("Pricing rule not found.")

    rule.push_history()
    if 'boost_type' in data:
        rule.boost_type = _validated_boost_type(data['boost_type'])
    if 'city' in data:
        rule.city = normalize_boost_city(data['city'])
    if 'base_price' in data:
        rule.base_price = _validated_base_price(data['base_price'])
    if 'price_type' in data:
        rule.price_type = _validated_price_type(data['price_type'])
    if 'multiplier' in data:
        rule.multiplier = _validated_multiplier(data['multiplier'])
    if 'is_active' in data:
        rule.is_active = bool(data['is_active'])
    rule.updated_by = actor
    try:
        with transaction.atomic():
            rule.save()
    except IntegrityError:
        raise BoostConflictError("A pricing rule already exists for this boost type and city.")
    return rule


def list_seasonal_campaigns():
    return SeasonalCampaign.objects.select_related('updated_by').order_by('-created_at')


def _validated_applies_to(value):
    if not isinstance(value, (list, tuple)):
        return []
    return sorted({normalize_boost_type(item) for item in value} - {''})


def create_seasonal_campaign(actor, name, start_date, end_date, multiplier=1, is_active=True, applies_to=None):
    name = str(name or '').strip()
    if not name:
        raise BoostValidationError("Campaign name is required.")
    start_date = parse_moment(start_date)
    end_date = parse_moment(end_date)
    if not start_date or not end_date:
        raise BoostValidationError("Invalid campaign dates.")
    if end_date <= start_date:
        raise BoostValidationError("end_date must be after start_date.")

    campaign = SeasonalCampaign.objects.create(
        name=name,
        start_date=start_date,
        end_date=end_date,
        multiplier=_validated_multiplier(multiplier if multiplier is not None else 1),
        is_active=is_active,
        applies_to=_validated_applies_to(applies_to or []),
        updated_by=actor,
    )
    logger.info(f"Seasonal campaign {campaign.id} '{campaign.name}' created by {getattr(actor, 'pk', None)}")
    return campaign


def update_seasonal_campaign(actor, campaign_id, data):
    campaign = SeasonalCampaign.objects.filter(pk=campaign_id).first()
    if campaign is None:
        raise BoostNotFoundError("Seasonal campaign not found.")

    if 'name' in data:
        name = str(data['name'] or '').strip()
        if not name:
            raise BoostValidationError("Campaign name is required.")
        campaign.name = name
    if 'start_date' in data:
        start_date = parse_moment(data['start_date'])
        if not start_date:
            raise BoostValidationError("Invalid start date.")
        campaign.start_date = start_date
    if 'end_date' in data:
        end_date = parse_moment(data['end_date'])
        if not end_date:
            raise BoostValidationError("Invalid end date.")
        campaign.end_date = end_date
    if campaign.end_date <= campaign.start_date:
        raise BoostValidationError("end_date must be after start_date.")
    if 'multiplier' in data:
        campaign.multiplier = _validated_multiplier(data['multiplier'])
    if 'is_active' in data:
        campaign.is_active = bool(data['is_active'])
    if 'applies_to' in data:
        campaign.applies_to = _validated_applies_to(data['applies_to'])
    campaign.updated_by = actor
    campaign.save()
    return campaign
