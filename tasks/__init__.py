from core.celery import app as celery_app

__all__ = ('celery_app',)

# Register tasks explicitly
from .boosts import expire_boost_requests

# Register periodic tasks
from datetime import timedelta
from django.conf import settings

celery_app.conf.beat_schedule = {
    'expire-boost-requests': {
        'task': 'tasks.boosts.expire_boost_requests',
        'schedule': timedelta(minutes=settings.BOOST_SWEEP_INTERVAL_MINUTES),
    },
}
