from rest_framework import viewsets
from rest_framework.permissions import IsAuthenticated
from apps.authentication.permissions import IsBoostAdmin
from .models import PaymentNetwork
from .serializers import PaymentNetworkSerializer

class PaymentNetworkViewSet(viewsets.ModelViewSet):
    serializer_class = PaymentNetworkSerializer
    queryset = PaymentNetwork.objects.all()

    def get_permissions(self):
        if self.action in ('list', 'retrieve'):
            return [IsAuthenticated()]
        return [IsAuthenticated(), IsBoostAdmin()]

    def get_queryset(self):
        if self.request.user.is_boost_admin:
            return PaymentNetwork.objects.all()
        return PaymentNetwork.objects.filter(is_active=True)
