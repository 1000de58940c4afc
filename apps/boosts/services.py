"""Boost request lifecycle: submission, seller and admin listings, moderation."""
import logging
import re
from datetime import timedelta
from django.db import transaction
from django.utils import timezone

from apps.billing.services import resolve_payment_operator
from apps.notifications.services import notify_boost_managers, notify_user
from apps.products.models import Product
from .claims import claim_resources, find_conflict, release_claims, resource_keys_for
from .constants import (
    ACTIVE,
    APPROVED,
    EXPIRED,
    LOCAL_PRODUCT_BOOST,
    PENDING,
    PRODUCT_SCOPED_TYPES,
    REJECTED,
    SHOP_BOOST,
    normalize_boost_city,
    normalize_boost_type,
    normalize_status,
)
from .exceptions import (
    BoostConflictError,
    BoostNotFoundError,
    BoostValidationError,
    SellerNotEligible,
    StateTransitionError,
)
from .models import BoostRequest
from .pricing import build_pricing_breakdown, quote_boost, safe_multiplier
from .reconciliation import (
    expire_boost_requests,
    project_activation,
    refresh_flags_for_requests,
    sweep_expired_boosts,
)
from .storage import PaymentProofStorage
from .utils import paginate, parse_moment

logger = logging.getLogger(__name__)

STAFF_ROLES = ('admin', 'manager')
TRANSACTION_ID_LENGTH = 10


def ensure_seller_eligible(seller, boost_type=None):
    if seller is None:
        raise BoostNotFoundError("Seller not found.")
    if seller.is_blocked:
        raise SellerNotEligible("Blocked accounts cannot request boosts.")
    if seller.role in STAFF_ROLES:
        raise SellerNotEligible("Staff accounts cannot request seller boosts.")
    if boost_type == SHOP_BOOST and seller.account_type != 'shop':
        raise SellerNotEligible("Shop boosts are reserved for shop accounts.")


def clean_boost_type(value):
    boost_type = normalize_boost_type(value)
    if not boost_type:
        raise BoostValidationError("Invalid boost type.")
    return boost_type


def clean_duration(value):
    try:
        duration = int(value)
    except (TypeError, ValueError):
        raise BoostValidationError("Duration must be a whole number of days.")
    if duration < 1:
        raise BoostValidationError("Duration must be at least one day.")
    return duration


def clean_product_ids(values):
    """Positive integer ids, deduplicated, first occurrence order kept."""
    product_ids = []
    for value in values or []:
        try:
            product_id = int(value)
        except (TypeError, ValueError):
            raise BoostValidationError("Invalid product id.")
        if product_id < 1:
            raise BoostValidationError("Invalid product id.")
        if product_id not in product_ids:
            product_ids.append(product_id)
    return product_ids


def resolve_request_city(boost_type, city, seller=None):
    """Whitelisted city for the request, falling back to the seller's own city."""
    resolved = normalize_boost_city(city)
    if resolved is None and seller is not None:
        resolved = normalize_boost_city(seller.city)
    if resolved is None and boost_type == LOCAL_PRODUCT_BOOST:
        raise BoostValidationError("A supported city is required for local product boosts.")
    return resolved


def validate_product_scope(boost_type, product_ids):
    if boost_type == SHOP_BOOST and product_ids:
        raise BoostValidationError("Shop boosts do not target products.")
    if boost_type in PRODUCT_SCOPED_TYPES and not product_ids:
        raise BoostValidationError("Select at least one product to boost.")


def validate_product_ownership(seller, product_ids):
    owned = Product.objects.filter(
        pk__in=product_ids, seller=seller, status=Product.STATUS_APPROVED
    ).count()
    if owned != len(product_ids):
        raise BoostValidationError("Some products are missing, not yours, or not approved.")


def clean_payment(payment_operator, payment_sender_name, payment_transaction_id):
    operator = resolve_payment_operator(payment_operator)
    if operator is None:
        raise BoostValidationError("Unsupported payment operator.")
    sender_name = str(payment_sender_name or '').strip()
    if not sender_name:
        raise BoostValidationError("Payment sender name is required.")
    transaction_id = re.sub(r'\D', '', str(payment_transaction_id or ''))
    if len(transaction_id) != TRANSACTION_ID_LENGTH:
        raise BoostValidationError("Payment transaction id must contain exactly 10 digits.")
    return operator, sender_name[:120], transaction_id


def preview_boost_price(boost_type, duration, product_ids=None, city=None, seller=None, now=None):
    """Price a prospective boost without persisting anything."""
    now = now or timezone.now()
    sweep_expired_boosts(now)

    boost_type = clean_boost_type(boost_type)
    duration = clean_duration(duration)
    product_ids = clean_product_ids(product_ids)
    if seller is not None:
        ensure_seller_eligible(seller, boost_type)
        validate_product_scope(boost_type, product_ids)
        if product_ids:
            validate_product_ownership(seller, product_ids)
    city = resolve_request_city(boost_type, city, seller)
    product_count = len(product_ids)

    pricing, seasonal_campaign, computed = quote_boost(boost_type, duration, product_count, city, now)
    if pricing is None:
        raise BoostNotFoundError("No active pricing rule for this boost type.")
    return build_pricing_breakdown(pricing, seasonal_campaign, computed, product_count, city)


def submit_boost_request(seller, boost_type, duration, product_ids=None, city=None,
                         payment_operator=None, payment_sender_name=None,
                         payment_transaction_id=None, payment_proof=None, now=None):
    """Validate, price and persist a PENDING request.

    Returns ``(boost_request, breakdown)``. ``payment_proof`` is an optional
    uploaded image file, stored only once every check has passed.
    """
    now = now or timezone.now()
    boost_type = clean_boost_type(boost_type)
    ensure_seller_eligible(seller, boost_type)
    duration = clean_duration(duration)
    product_ids = clean_product_ids(product_ids)
    validate_product_scope(boost_type, product_ids)
    city = resolve_request_city(boost_type, city, seller)
    operator, sender_name, transaction_id = clean_payment(
        payment_operator, payment_sender_name, payment_transaction_id
    )
    if payment_proof is not None:
        PaymentProofStorage.validate(payment_proof)
    if product_ids:
        validate_product_ownership(seller, product_ids)

    sweep_expired_boosts(now)

    conflict = find_conflict(boost_type, seller.pk, product_ids, now)
    if conflict is not None:
        raise BoostConflictError(
            "A boost is already pending or active for this selection.",
            conflicting_request_id=conflict.pk,
            conflicting_status=conflict.status,
        )

    product_count = len(product_ids)
    pricing, seasonal_campaign, computed = quote_boost(boost_type, duration, product_count, city, now)
    if pricing is None:
        raise BoostNotFoundError("No active pricing rule for this boost type.")
    if computed['total_price'] <= 0:
        raise BoostValidationError("Computed boost price must be positive.")

    proof = {}
    if payment_proof is not None:
        proof = PaymentProofStorage().upload_payment_proof(payment_proof, seller.pk)

    with transaction.atomic():
        boost_request = BoostRequest.objects.create(
            seller=seller,
            boost_type=boost_type,
            city=city,
            duration=duration,
            unit_price=computed['unit_price'],
            base_price=pricing.base_price,
            price_type=pricing.price_type,
            pricing_multiplier=safe_multiplier(pricing.multiplier),
            seasonal_multiplier=computed['seasonal_multiplier'],
            seasonal_campaign=seasonal_campaign,
            seasonal_campaign_name=seasonal_campaign.name if seasonal_campaign else '',
            total_price=computed['total_price'],
            payment_operator=operator,
            payment_sender_name=sender_name,
            payment_transaction_id=transaction_id,
            status=PENDING,
            **proof,
        )
        if product_ids:
            boost_request.products.set(product_ids)
        claim_resources(boost_request, resource_keys_for(boost_type, seller.pk, product_ids), now)

    logger.info(
        f"Boost request {boost_request.pk} submitted by seller {seller.pk}: "
        f"{boost_type} x{product_count} for {computed['total_price']}"
    )
    notify_boost_managers(
        f"New {boost_type} request from {seller.display_name} ({computed['total_price']}).",
        actor_id=seller.pk,
        metadata={'boost_request_id': boost_request.pk, 'total_price': str(computed['total_price'])},
    )
    breakdown = build_pricing_breakdown(pricing, seasonal_campaign, computed, product_count, city)
    return boost_request, breakdown


def list_seller_requests(seller, status=None, page=1, limit=None, now=None):
    sweep_expired_boosts(now or timezone.now())
    requests = BoostRequest.objects.filter(seller=seller)
    status = normalize_status(status)
    if status:
        requests = requests.filter(status=status)
    requests = requests.prefetch_related('products').order_by('-created_at', '-id')
    return paginate(requests, page, limit)


def list_requests_admin(status=None, boost_type=None, city=None, seller_id=None, page=1, limit=None, now=None):
    sweep_expired_boosts(now or timezone.now())
    requests = BoostRequest.objects.select_related('seller', 'approved_by', 'rejected_by')
    status = normalize_status(status)
    boost_type = normalize_boost_type(boost_type)
    city = normalize_boost_city(city)
    if status:
        requests = requests.filter(status=status)
    if boost_type:
        requests = requests.filter(boost_type=boost_type)
    if city:
        requests = requests.filter(city=city)
    if seller_id:
        requests = requests.filter(seller_id=seller_id)
    requests = requests.prefetch_related('products').order_by('-created_at', '-id')
    return paginate(requests, page, limit)


def transition_boost_request(actor, request_id, target_status, start_date=None, end_date=None,
                             rejection_reason='', now=None):
    """Admin moderation entry point: activate, reject or force-expire."""
    now = now or timezone.now()
    target = normalize_status(target_status)
    if not target:
        raise BoostValidationError("Invalid status.")
    if target == APPROVED:
        # approval and activation are a single step
        target = ACTIVE

    boost_request = BoostRequest.objects.filter(pk=request_id).first()
    if boost_request is None:
        raise BoostNotFoundError("Boost request not found.")
    if not boost_request.can_transition_to(target):
        raise StateTransitionError(
            f"Cannot move a {boost_request.status} boost request to {target}."
        )

    if target == ACTIVE:
        return activate_boost_request(actor, boost_request, start_date, end_date, now)
    if target == REJECTED:
        return reject_boost_request(actor, boost_request, rejection_reason, now)
    return force_expire_boost_request(actor, boost_request, now)


def _activation_window(boost_request, start_date, end_date, now):
    start = now
    if start_date not in (None, ''):
        start = parse_moment(start_date)
        if start is None:
            raise BoostValidationError("Invalid start date.")
    end = None
    if end_date not in (None, ''):
        end = parse_moment(end_date)
        if end is None:
            raise BoostValidationError("Invalid end date.")
    if end is None or end <= start:
        end = start + timedelta(days=boost_request.duration)
    return start, end


def activate_boost_request(actor, boost_request, start_date, end_date, now):
    start, end = _activation_window(boost_request, start_date, end_date, now)
    previous_status = boost_request.status
    product_ids = list(boost_request.products.values_list('id', flat=True))

    with transaction.atomic():
        if previous_status in (REJECTED, EXPIRED):
            conflict = find_conflict(
                boost_request.boost_type, boost_request.seller_id, product_ids, now,
                exclude_request_id=boost_request.pk,
            )
            if conflict is not None:
                raise BoostConflictError(
                    "Another boost now holds this selection.",
                    conflicting_request_id=conflict.pk,
                    conflicting_status=conflict.status,
                )
        claim_resources(
            boost_request,
            resource_keys_for(boost_request.boost_type, boost_request.seller_id, product_ids),
            now,
        )
        updated = BoostRequest.objects.filter(pk=boost_request.pk, status=previous_status).update(
            status=ACTIVE,
            start_date=start,
            end_date=end,
            approved_by=actor,
            approved_at=now,
            rejected_by=None,
            rejected_at=None,
            rejection_reason='',
            updated_at=now,
        )
        if not updated:
            raise StateTransitionError("Boost request changed while it was being moderated.")

    boost_request.refresh_from_db()
    project_activation(boost_request, now)
    logger.info(
        f"Boost request {boost_request.pk} activated by {actor.pk} "
        f"({previous_status} -> ACTIVE, {start.isoformat()} to {end.isoformat()})"
    )
    notify_user(
        boost_request.seller_id,
        'Boost approved',
        f"Your {boost_request.boost_type} boost is active until {end:%Y-%m-%d %H:%M}.",
        actor_id=actor.pk,
        metadata={'boost_request_id': boost_request.pk, 'status': ACTIVE},
    )
    return boost_request


def reject_boost_request(actor, boost_request, rejection_reason, now):
    previous_status = boost_request.status
    reason = str(rejection_reason or '').strip()[:500]

    with transaction.atomic():
        updated = BoostRequest.objects.filter(pk=boost_request.pk, status=previous_status).update(
            status=REJECTED,
            rejected_by=actor,
            rejected_at=now,
            rejection_reason=reason,
            updated_at=now,
        )
        if not updated:
            raise StateTransitionError("Boost request changed while it was being moderated.")
        release_claims([boost_request.pk])

    if previous_status == ACTIVE:
        refresh_flags_for_requests([boost_request.pk], now)

    boost_request.refresh_from_db()
    logger.info(f"Boost request {boost_request.pk} rejected by {actor.pk} ({previous_status} -> REJECTED)")
    notify_user(
        boost_request.seller_id,
        'Boost rejected',
        f"Your {boost_request.boost_type} boost was rejected." + (f" Reason: {reason}" if reason else ''),
        actor_id=actor.pk,
        metadata={'boost_request_id': boost_request.pk, 'status': REJECTED},
    )
    return boost_request


def force_expire_boost_request(actor, boost_request, now):
    """Close the window at ``now`` and let the sweep do the expiry."""
    start = boost_request.start_date
    if start is None or start >= now:
        start = now - timedelta(seconds=1)
    updated = BoostRequest.objects.filter(pk=boost_request.pk, status=ACTIVE).update(
        start_date=start, end_date=now, updated_at=now
    )
    if not updated:
        raise StateTransitionError("Only active boosts can be expired.")

    expire_boost_requests(now + timedelta(seconds=1))
    boost_request.refresh_from_db()
    logger.info(f"Boost request {boost_request.pk} force-expired by {actor.pk}")
    return boost_request
