from celery import shared_task
from django.utils import timezone
from tenacity import retry, stop_after_attempt, wait_exponential
import logging

logger = logging.getLogger(__name__)

@shared_task
@retry(stop=stop_after_attempt(3), wait=wait_exponential(multiplier=1, min=4, max=10), reraise=True)
def expire_boost_requests():
    """Periodic expiry sweep; flags left stale by a failed run are repaired by the next one."""
    from apps.boosts.reconciliation import expire_boost_requests as sweep

    now = timezone.now()
    try:
        expired = sweep(now)
    except Exception as e:
        logger.error(f"Boost expiry sweep failed at {now.isoformat()}: {e}")
        raise

    if expired:
        logger.info(f"Boost expiry sweep at {now.isoformat()}: {expired} request(s) expired")
    return {'expired': expired, 'ran_at': now.isoformat()}
