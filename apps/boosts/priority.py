"""Pick one winning boost per product card and per shop listing.

Lower priority wins: a local boost matching the viewer's city beats a
product boost, which beats a shop boost, which beats homepage featuring.
Between equal priorities the most recently approved request wins, then the
lowest id.
"""
from django.utils import timezone

from .constants import ACTIVE, LOCAL_PRODUCT_BOOST, PRIORITY_BY_TYPE, SHOP_BOOST
from .models import BoostRequest

ProductLink = BoostRequest.products.through


def _clean_ids(values):
    ids = []
    for value in values or []:
        try:
            value = int(value)
        except (TypeError, ValueError):
            continue
        if value > 0 and value not in ids:
            ids.append(value)
    return ids


def priority_for(boost_type, request_city, viewer_city):
    """Priority of a live request for this viewer, or None when it does not compete."""
    if boost_type == LOCAL_PRODUCT_BOOST:
        if not viewer_city or not request_city:
            return None
        if request_city.strip().lower() != viewer_city.strip().lower():
            return None
    return PRIORITY_BY_TYPE.get(boost_type)


def live_requests(now):
    return BoostRequest.objects.filter(status=ACTIVE, start_date__lte=now, end_date__gte=now)


def resolve_boost_priorities(product_ids=None, seller_ids=None, viewer_city=None, now=None):
    """Returns ``{'product_winner': {...}, 'shop_winner': {...}}``.

    Products or sellers with no competing live boost are absent from the maps.
    """
    now = now or timezone.now()
    product_ids = _clean_ids(product_ids)
    seller_ids = _clean_ids(seller_ids)
    product_winner = {}
    shop_winner = {}

    if product_ids:
        links = (
            ProductLink.objects.filter(
                product_id__in=product_ids,
                boostrequest__in=live_requests(now).exclude(boost_type=SHOP_BOOST),
            )
            .values('product_id', 'boostrequest_id', 'boostrequest__boost_type', 'boostrequest__city')
            .order_by('-boostrequest__approved_at', 'boostrequest_id')
        )
        for link in links:
            priority = priority_for(link['boostrequest__boost_type'], link['boostrequest__city'], viewer_city)
            if priority is None:
                continue
            current = product_winner.get(link['product_id'])
            # rows arrive in tie-break order, so only a strictly better priority replaces
            if current is None or priority < current['priority']:
                product_winner[link['product_id']] = {
                    'priority': priority,
                    'boost_type': link['boostrequest__boost_type'],
                    'request_id': link['boostrequest_id'],
                }

    if seller_ids:
        shop_boosts = (
            live_requests(now)
            .filter(boost_type=SHOP_BOOST, seller_id__in=seller_ids)
            .values('id', 'seller_id')
            .order_by('-approved_at', 'id')
        )
        for boost in shop_boosts:
            shop_winner.setdefault(boost['seller_id'], {
                'priority': PRIORITY_BY_TYPE[SHOP_BOOST],
                'request_id': boost['id'],
            })

    return {'product_winner': product_winner, 'shop_winner': shop_winner}
