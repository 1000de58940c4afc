"""Expiry sweep and the boosted-flag projection.

Product and seller ``boosted`` fields are a cache derived from
``BoostRequest`` rows. This module is the only writer of those fields.
Every mutation is a conditioned queryset update, so concurrent or repeated
sweeps converge on the same state.
"""
import logging
from django.contrib.auth import get_user_model
from django.db import transaction
from django.db.models import Max
from django.utils import timezone

from apps.products.models import Product
from .circuit_breaker import CircuitBreaker
from .claims import release_claims
from .constants import ACTIVE, EXPIRED, SHOP_BOOST
from .models import BoostRequest

logger = logging.getLogger(__name__)

ProductLink = BoostRequest.products.through

PRODUCT_CLEARED = {
    'boosted': False,
    'boost_score': 0,
    'boost_start_date': None,
    'boost_end_date': None,
    'boosted_at': None,
}
SHOP_CLEARED = {
    'shop_boosted': False,
    'shop_boost_score': 0,
    'shop_boost_start_date': None,
    'shop_boost_end_date': None,
    'shop_boosted_at': None,
}


def boost_score(now):
    return int(now.timestamp() * 1000)


def refresh_product_flags(product_ids, now):
    """Recompute product flags from the remaining live requests."""
    product_ids = set(product_ids)
    if not product_ids:
        return
    live = (
        ProductLink.objects.filter(
            product_id__in=product_ids,
            boostrequest__status=ACTIVE,
            boostrequest__start_date__lte=now,
            boostrequest__end_date__gte=now,
        )
        .values('product_id')
        .annotate(
            max_start=Max('boostrequest__start_date'),
            max_end=Max('boostrequest__end_date'),
        )
    )
    score = boost_score(now)
    still_boosted = set()
    for row in live:
        still_boosted.add(row['product_id'])
        Product.objects.filter(pk=row['product_id']).update(
            boosted=True,
            boost_score=score,
            boost_start_date=row['max_start'],
            boost_end_date=row['max_end'],
        )
    cleared = product_ids - still_boosted
    if cleared:
        Product.objects.filter(pk__in=cleared).update(**PRODUCT_CLEARED)


def refresh_shop_flags(seller_ids, now):
    """Recompute seller shop flags from the remaining live shop boosts."""
    seller_ids = set(seller_ids)
    if not seller_ids:
        return
    User = get_user_model()
    live = (
        BoostRequest.objects.filter(
            boost_type=SHOP_BOOST,
            seller_id__in=seller_ids,
            status=ACTIVE,
            start_date__lte=now,
            end_date__gte=now,
        )
        .values('seller_id')
        .annotate(max_start=Max('start_date'), max_end=Max('end_date'))
    )
    score = boost_score(now)
    still_boosted = set()
    for row in live:
        still_boosted.add(row['seller_id'])
        User.objects.filter(pk=row['seller_id']).update(
            shop_boosted=True,
            shop_boost_score=score,
            shop_boost_start_date=row['max_start'],
            shop_boost_end_date=row['max_end'],
        )
    cleared = seller_ids - still_boosted
    if cleared:
        User.objects.filter(pk__in=cleared).update(**SHOP_CLEARED)


def refresh_flags_for_requests(request_ids, now):
    """Recompute flags on every product and shop the given requests touch."""
    request_ids = list(request_ids)
    if not request_ids:
        return
    seller_ids = BoostRequest.objects.filter(
        pk__in=request_ids, boost_type=SHOP_BOOST
    ).values_list('seller_id', flat=True)
    product_ids = ProductLink.objects.filter(
        boostrequest_id__in=request_ids
    ).exclude(boostrequest__boost_type=SHOP_BOOST).values_list('product_id', flat=True)
    refresh_product_flags(product_ids, now)
    refresh_shop_flags(seller_ids, now)


def project_activation(boost_request, now):
    """Mark the entities of a freshly activated request as boosted."""
    score = boost_score(now)
    if boost_request.boost_type == SHOP_BOOST:
        get_user_model().objects.filter(pk=boost_request.seller_id).update(
            shop_boosted=True,
            shop_boost_score=score,
            shop_boost_start_date=boost_request.start_date,
            shop_boost_end_date=boost_request.end_date,
            shop_boosted_at=now,
        )
        return
    Product.objects.filter(boost_requests=boost_request).update(
        boosted=True,
        boost_score=score,
        boost_start_date=boost_request.start_date,
        boost_end_date=boost_request.end_date,
        boosted_at=now,
    )


def expire_boost_requests(now):
    """Flip ACTIVE requests whose window closed before ``now`` to EXPIRED.

    Returns how many rows this call transitioned. Safe to call repeatedly
    and concurrently; if flag repair fails after the status flip, the next
    run over the same entities repairs them.
    """
    stale_ids = list(
        BoostRequest.objects.filter(status=ACTIVE, end_date__lt=now).values_list('id', flat=True)
    )
    if not stale_ids:
        return 0

    with transaction.atomic():
        expired = BoostRequest.objects.filter(
            pk__in=stale_ids, status=ACTIVE, end_date__lt=now
        ).update(status=EXPIRED, updated_at=now)
        release_claims(stale_ids)

    refresh_flags_for_requests(stale_ids, now)
    logger.info(f"Expired {expired} boost request(s), refreshed flags for {len(stale_ids)}")
    return expired


sweep_circuit = CircuitBreaker(failure_threshold=3, recovery_timeout=30, fallback=None)


@sweep_circuit
def sweep_expired_boosts(now=None):
    """Opportunistic sweep for read paths; returns None instead of raising."""
    return expire_boost_requests(now or timezone.now())
