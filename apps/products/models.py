from django.conf import settings
from django.db import models

class Product(models.Model):
    class Meta:
        app_label = 'products'
        indexes = [
            models.Index(fields=['seller', 'status'], name='product_seller_status_idx'),
            models.Index(fields=['boosted', '-boost_score'], name='product_boosted_score_idx'),
        ]

    STATUS_APPROVED = 'approved'
    STATUS_CHOICES = [
        ('pending', 'Pending'),
        ('approved', 'Approved'),
        ('rejected', 'Rejected'),
    ]

    seller = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='products')
    title = models.CharField(max_length=200)
    city = models.CharField(max_length=80, blank=True, default='')
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='pending')
    created_at = models.DateTimeField(auto_now_add=True)

    # Boost projection, written by apps.boosts.reconciliation only
    boosted = models.BooleanField(default=False)
    boost_score = models.BigIntegerField(default=0)
    boost_start_date = models.DateTimeField(null=True, blank=True)
    boost_end_date = models.DateTimeField(null=True, blank=True)
    boosted_at = models.DateTimeField(null=True, blank=True)

    def __str__(self):
        return self.title
