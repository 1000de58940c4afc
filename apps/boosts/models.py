from decimal import Decimal
from django.conf import settings
from django.db import models
from django.db.models import F, Q

from .constants import (
    ACTIVE,
    APPROVED,
    BOOST_TYPE_CHOICES,
    EXPIRED,
    PENDING,
    PRICE_TYPE_CHOICES,
    REJECTED,
    STATUS_CHOICES,
)


class PricingRule(models.Model):
    class Meta:
        app_label = 'boosts'
        constraints = [
            models.UniqueConstraint(
                fields=['boost_type', 'city'],
                name='unique_pricing_rule_per_city'
            ),
            # NULL cities are distinct in SQL, so the global row needs its own constraint
            models.UniqueConstraint(
                fields=['boost_type'],
                condition=Q(city__isnull=True),
                name='unique_global_pricing_rule'
            ),
        ]
        indexes = [
            models.Index(fields=['boost_type', 'is_active', 'city'], name='pricing_rule_lookup_idx'),
        ]

    boost_type = models.CharField(max_length=30, choices=BOOST_TYPE_CHOICES)
    city = models.CharField(max_length=80, null=True, blank=True)
    base_price = models.DecimalField(max_digits=12, decimal_places=2)
    price_type = models.CharField(max_length=20, choices=PRICE_TYPE_CHOICES)
    multiplier = models.DecimalField(max_digits=8, decimal_places=3, default=Decimal('1'))
    is_active = models.BooleanField(default=True)
    history = models.JSONField(default=list, blank=True)
    updated_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name='+'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.boost_type}@{self.city or 'GLOBAL'}"

    def snapshot(self):
        """Current values as a history entry."""
        return {
            'base_price': str(self.base_price),
            'price_type': self.price_type,
            'multiplier': str(self.multiplier),
            'is_active': self.is_active,
            'updated_by': self.updated_by_id,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None,
        }

    def push_history(self):
        limit = settings.BOOST_PRICING_HISTORY_LIMIT
        self.history = ([self.snapshot()] + list(self.history or []))[:limit]


class SeasonalCampaign(models.Model):
    class Meta:
        app_label = 'boosts'
        constraints = [
            models.CheckConstraint(
                condition=Q(start_date__lt=F('end_date')),
                name='seasonal_campaign_start_before_end'
            ),
        ]
        indexes = [
            models.Index(fields=['is_active', 'start_date', 'end_date'], name='seasonal_window_idx'),
        ]

    name = models.CharField(max_length=120)
    start_date = models.DateTimeField()
    end_date = models.DateTimeField()
    multiplier = models.DecimalField(max_digits=8, decimal_places=3, default=Decimal('1'))
    is_active = models.BooleanField(default=True)
    applies_to = models.JSONField(default=list, blank=True)  # empty = every boost type
    updated_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name='+'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.name

    def applies_to_type(self, boost_type):
        return not self.applies_to or boost_type in self.applies_to

    def is_running(self, now):
        return self.is_active and self.start_date <= now <= self.end_date


class BoostRequest(models.Model):
    class Meta:
        app_label = 'boosts'
        constraints = [
            models.CheckConstraint(
                condition=(
                    Q(start_date__isnull=True)
                    | Q(end_date__isnull=True)
                    | Q(start_date__lt=F('end_date'))
                ),
                name='boost_request_start_before_end'
            ),
        ]
        indexes = [
            models.Index(fields=['status', 'start_date', 'end_date'], name='boost_req_status_window_idx'),
            models.Index(fields=['seller', '-created_at'], name='boost_req_seller_created_idx'),
            models.Index(fields=['boost_type', 'city', 'status'], name='boost_req_type_city_idx'),
        ]

    # EXPIRED -> ACTIVE is the single back-edge (explicit re-activation)
    VALID_TRANSITIONS = {
        PENDING: [ACTIVE, REJECTED],
        APPROVED: [ACTIVE, REJECTED],
        REJECTED: [ACTIVE],
        ACTIVE: [ACTIVE, REJECTED, EXPIRED],
        EXPIRED: [ACTIVE],
    }

    seller = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='boost_requests')
    boost_type = models.CharField(max_length=30, choices=BOOST_TYPE_CHOICES)
    products = models.ManyToManyField('products.Product', blank=True, related_name='boost_requests')
    city = models.CharField(max_length=80, null=True, blank=True)
    duration = models.PositiveIntegerField(default=1)

    # Pricing snapshot taken at submission
    unit_price = models.DecimalField(max_digits=12, decimal_places=2)
    base_price = models.DecimalField(max_digits=12, decimal_places=2)
    price_type = models.CharField(max_length=20, choices=PRICE_TYPE_CHOICES)
    pricing_multiplier = models.DecimalField(max_digits=8, decimal_places=3, default=Decimal('1'))
    seasonal_multiplier = models.DecimalField(max_digits=8, decimal_places=3, default=Decimal('1'))
    seasonal_campaign = models.ForeignKey(
        SeasonalCampaign, on_delete=models.SET_NULL, null=True, blank=True, related_name='boost_requests'
    )
    seasonal_campaign_name = models.CharField(max_length=120, blank=True, default='')
    total_price = models.DecimalField(max_digits=14, decimal_places=2)

    # Seller-declared payment, reviewed manually
    payment_operator = models.CharField(max_length=50)
    payment_sender_name = models.CharField(max_length=120)
    payment_transaction_id = models.CharField(max_length=10)
    payment_proof_url = models.URLField(max_length=500, blank=True, default='')
    payment_proof_path = models.CharField(max_length=300, blank=True, default='')
    payment_proof_mime_type = models.CharField(max_length=50, blank=True, default='')
    payment_proof_size = models.PositiveIntegerField(default=0)
    payment_proof_uploaded_at = models.DateTimeField(null=True, blank=True)

    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=PENDING)
    start_date = models.DateTimeField(null=True, blank=True)
    end_date = models.DateTimeField(null=True, blank=True)

    approved_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name='+'
    )
    approved_at = models.DateTimeField(null=True, blank=True)
    rejection_reason = models.CharField(max_length=500, blank=True, default='')
    rejected_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name='+'
    )
    rejected_at = models.DateTimeField(null=True, blank=True)

    impressions = models.PositiveBigIntegerField(default=0)
    clicks = models.PositiveBigIntegerField(default=0)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"BoostRequest#{self.pk} {self.boost_type} {self.status}"

    def can_transition_to(self, new_status):
        return new_status in self.VALID_TRANSITIONS.get(self.status, [])

    @property
    def ctr(self):
        if not self.impressions:
            return 0.0
        return round(self.clicks / self.impressions * 100, 2)


class BoostResourceClaim(models.Model):
    """Storage-level lock on a contested resource.

    One row per product (``product:<id>``) or shop (``shop:<seller_id>``) held
    by an open request; the unique key rejects a concurrent second writer.
    """

    class Meta:
        app_label = 'boosts'

    resource_key = models.CharField(max_length=64, unique=True)
    request = models.ForeignKey(BoostRequest, on_delete=models.CASCADE, related_name='claims')
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return self.resource_key
