import logging
from django.db import IntegrityError, transaction
from django.db.models import Q

from .constants import OPEN_STATUSES, SHOP_BOOST
from .exceptions import BoostConflictError
from .models import BoostRequest, BoostResourceClaim

logger = logging.getLogger(__name__)


def product_key(product_id):
    return f"product:{product_id}"


def shop_key(seller_id):
    return f"shop:{seller_id}"


def resource_keys_for(boost_type, seller_id, product_ids):
    if boost_type == SHOP_BOOST:
        return [shop_key(seller_id)]
    return sorted({product_key(product_id) for product_id in product_ids})


def open_window_q(now, prefix=''):
    """Requests that still occupy their resources: open status, window not closed."""
    return (
        Q(**{f'{prefix}status__in': OPEN_STATUSES})
        & (Q(**{f'{prefix}end_date__isnull': True}) | Q(**{f'{prefix}end_date__gte': now}))
    )


def find_conflict(boost_type, seller_id, product_ids, now, exclude_request_id=None):
    """First open request competing for the same resource, if any."""
    competing = BoostRequest.objects.filter(open_window_q(now))
    if boost_type == SHOP_BOOST:
        competing = competing.filter(seller_id=seller_id, boost_type=SHOP_BOOST)
    else:
        competing = competing.filter(products__in=list(product_ids)).exclude(boost_type=SHOP_BOOST)
    if exclude_request_id is not None:
        competing = competing.exclude(pk=exclude_request_id)
    return competing.order_by('created_at').first()


def claim_resources(boost_request, keys, now):
    """Insert claim rows for ``keys``; must run inside a transaction.

    Claims left behind by requests whose window has closed are purged first,
    so a missed sweep cannot block a new request. A unique violation means a
    concurrent writer won the resource.
    """
    keys = list(keys)
    BoostResourceClaim.objects.filter(resource_key__in=keys).exclude(
        open_window_q(now, prefix='request__')
    ).delete()
    held = set(
        BoostResourceClaim.objects.filter(resource_key__in=keys, request=boost_request)
        .values_list('resource_key', flat=True)
    )
    missing = [key for key in keys if key not in held]
    try:
        with transaction.atomic():
            BoostResourceClaim.objects.bulk_create([
                BoostResourceClaim(resource_key=key, request=boost_request)
                for key in missing
            ])
    except IntegrityError:
        holder = (
            BoostResourceClaim.objects.filter(resource_key__in=missing)
            .exclude(request=boost_request)
            .select_related('request')
            .first()
        )
        logger.info(f"Resource claim lost for request {boost_request.pk}: {missing}")
        raise BoostConflictError(
            "One of the selected resources is already covered by a pending or active boost.",
            conflicting_request_id=holder.request_id if holder else None,
            conflicting_status=holder.request.status if holder else None,
        )


def release_claims(request_ids):
    return BoostResourceClaim.objects.filter(request_id__in=list(request_ids)).delete()[0]
