from django.utils import timezone
from rest_framework import serializers
from apps.authentication.serializers import SellerSummarySerializer
from apps.products.serializers import ProductSummarySerializer
from .constants import BOOST_TYPES, PRICE_TYPES, STATUSES
from .models import BoostRequest, PricingRule, SeasonalCampaign


class PricePreviewQuerySerializer(serializers.Serializer):
    boost_type = serializers.CharField()
    duration = serializers.IntegerField(min_value=1, default=1)
    city = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    product_ids = serializers.ListField(child=serializers.IntegerField(min_value=1), required=False)

    def to_internal_value(self, data):
        # product_ids arrives as "1,2,3" in query strings
        if hasattr(data, 'getlist'):
            raw = []
            for chunk in data.getlist('product_ids'):
                raw.extend(part for part in chunk.split(',') if part.strip())
            data = {key: data.get(key) for key in data.keys() if key != 'product_ids'}
            if raw:
                data['product_ids'] = raw
        return super().to_internal_value(data)


class BoostRequestCreateSerializer(serializers.Serializer):
    boost_type = serializers.CharField()
    duration = serializers.IntegerField(min_value=1)
    product_ids = serializers.ListField(
        child=serializers.IntegerField(min_value=1), required=False, allow_empty=True
    )
    city = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    payment_operator = serializers.CharField()
    payment_sender_name = serializers.CharField()
    payment_transaction_id = serializers.CharField()
    payment_proof = serializers.ImageField(required=False, allow_null=True)


class BoostStatusUpdateSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=STATUSES)
    start_date = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    end_date = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    rejection_reason = serializers.CharField(required=False, allow_blank=True, max_length=500)

    def to_internal_value(self, data):
        if hasattr(data, 'get') and isinstance(data.get('status'), str):
            data = {key: data.get(key) for key in data}
            data['status'] = data['status'].strip().upper()
        return super().to_internal_value(data)


class TrackImpressionsSerializer(serializers.Serializer):
    request_ids = serializers.ListField(child=serializers.JSONField(), allow_empty=True)


class PriorityQuerySerializer(serializers.Serializer):
    product_ids = serializers.ListField(child=serializers.IntegerField(min_value=1), required=False, default=list)
    seller_ids = serializers.ListField(child=serializers.IntegerField(min_value=1), required=False, default=list)
    viewer_city = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class BoostRequestSerializer(serializers.ModelSerializer):
    seller = SellerSummarySerializer(read_only=True)
    products = ProductSummarySerializer(many=True, read_only=True)
    ctr = serializers.FloatField(read_only=True)

    class Meta:
        model = BoostRequest
        fields = (
            'id', 'seller', 'boost_type', 'products', 'city', 'duration',
            'unit_price', 'base_price', 'price_type', 'pricing_multiplier',
            'seasonal_multiplier', 'seasonal_campaign', 'seasonal_campaign_name', 'total_price',
            'payment_operator', 'payment_sender_name', 'payment_transaction_id',
            'payment_proof_url', 'payment_proof_mime_type', 'payment_proof_size', 'payment_proof_uploaded_at',
            'status', 'start_date', 'end_date',
            'approved_by', 'approved_at', 'rejection_reason', 'rejected_by', 'rejected_at',
            'impressions', 'clicks', 'ctr', 'created_at', 'updated_at',
        )
        read_only_fields = fields


class PricingRuleSerializer(serializers.ModelSerializer):
    class Meta:
        model = PricingRule
        fields = (
            'id', 'boost_type', 'city', 'base_price', 'price_type', 'multiplier',
            'is_active', 'history', 'updated_by', 'created_at', 'updated_at',
        )
        read_only_fields = fields


class PricingRuleWriteSerializer(serializers.Serializer):
    boost_type = serializers.ChoiceField(choices=BOOST_TYPES)
    city = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    base_price = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0)
    price_type = serializers.ChoiceField(choices=PRICE_TYPES)
    multiplier = serializers.DecimalField(max_digits=8, decimal_places=3, required=False, default=1)
    is_active = serializers.BooleanField(required=False, default=True)


class SeasonalCampaignSerializer(serializers.ModelSerializer):
    is_running = serializers.SerializerMethodField()

    class Meta:
        model = SeasonalCampaign
        fields = (
            'id', 'name', 'start_date', 'end_date', 'multiplier', 'is_active',
            'applies_to', 'is_running', 'updated_by', 'created_at', 'updated_at',
        )
        read_only_fields = fields

    def get_is_running(self, obj):
        return obj.is_running(self.context.get('now') or timezone.now())
