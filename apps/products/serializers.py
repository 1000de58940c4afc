from rest_framework import serializers
from .models import Product

class ProductSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = Product
        fields = ('id', 'title', 'city', 'status', 'boosted', 'boost_end_date')
        read_only_fields = fields
