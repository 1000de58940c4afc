from django.db import models

class PaymentNetwork(models.Model):
    """Mobile-Money operator sellers may pay boosts through."""

    class Meta:
        app_label = 'billing'
        ordering = ['name']

    name = models.CharField(max_length=50, unique=True)
    is_active = models.BooleanField(default=True, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return self.name
