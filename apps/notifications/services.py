import logging
from django.contrib.auth import get_user_model
from django.db.models import Q
from .models import Notification

logger = logging.getLogger(__name__)

def notify_user(user_id, title, message, actor_id=None, metadata=None):
    notification = Notification.objects.create(
        user_id=user_id,
        actor_id=actor_id,
        title=title,
        message=message,
        metadata=metadata or {},
    )
    logger.debug(f"Notification {notification.id} sent to user {user_id}")
    return notification

def notify_boost_managers(message, actor_id=None, metadata=None):
    """Fan out a notification to admins and boost managers."""
    User = get_user_model()
    recipient_ids = list(
        User.objects.filter(Q(role='admin') | Q(can_manage_boosts=True)).values_list('id', flat=True)
    )
    Notification.objects.bulk_create([
        Notification(
            user_id=recipient_id,
            actor_id=actor_id,
            title='Boost management',
            message=message,
            metadata=metadata or {},
        )
        for recipient_id in recipient_ids
    ])
    return len(recipient_ids)
