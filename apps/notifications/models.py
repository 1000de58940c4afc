from django.conf import settings
from django.db import models

class Notification(models.Model):
    class Meta:
        app_label = 'notifications'
        indexes = [
            models.Index(fields=['user', 'is_read'], name='notification_user_read_idx'),
        ]
        ordering = ['-created_at']

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='notifications')
    actor = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name='+'
    )
    kind = models.CharField(max_length=50, default='admin_broadcast')
    title = models.CharField(max_length=120)
    message = models.TextField()
    metadata = models.JSONField(default=dict, blank=True)
    is_read = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
