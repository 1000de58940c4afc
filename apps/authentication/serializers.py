from rest_framework import serializers
from .models import User

class SellerSummarySerializer(serializers.ModelSerializer):
    display_name = serializers.CharField(read_only=True)

    class Meta:
        model = User
        fields = ('id', 'email', 'username', 'display_name', 'shop_name', 'city', 'account_type')
        read_only_fields = fields
