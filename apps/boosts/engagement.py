import logging
from django.conf import settings
from django.db.models import F
from django.utils import timezone

from .constants import ACTIVE
from .exceptions import BoostNotFoundError, BoostValidationError
from .models import BoostRequest

logger = logging.getLogger(__name__)


def clean_tracking_ids(values):
    """Unique positive ids in first-seen order, capped at the batch limit."""
    if not isinstance(values, (list, tuple)):
        raise BoostValidationError("requestIds must be a list.")
    ids = []
    for value in values:
        if isinstance(value, bool):
            continue
        try:
            value = int(value)
        except (TypeError, ValueError):
            continue
        if value > 0 and value not in ids:
            ids.append(value)
    ids = ids[:settings.BOOST_TRACKING_BATCH_LIMIT]
    if not ids:
        raise BoostValidationError("No valid boost request ids to track.")
    return ids


def trackable(now):
    return BoostRequest.objects.filter(status=ACTIVE, start_date__lte=now, end_date__gte=now)


def track_impressions(request_ids, now=None):
    """Count one impression on every live request in the batch; returns rows touched."""
    ids = clean_tracking_ids(request_ids)
    now = now or timezone.now()
    modified = trackable(now).filter(pk__in=ids).update(impressions=F('impressions') + 1)
    logger.debug(f"Tracked impressions on {modified}/{len(ids)} boost request(s)")
    return modified


def track_click(request_id, now=None):
    try:
        request_id = int(request_id)
    except (TypeError, ValueError):
        raise BoostNotFoundError("Boost request not found.")
    now = now or timezone.now()

    updated = trackable(now).filter(pk=request_id).update(clicks=F('clicks') + 1)
    if not updated:
        raise BoostNotFoundError("Boost request is not active.")
    return BoostRequest.objects.filter(pk=request_id).values('id', 'impressions', 'clicks').get()
