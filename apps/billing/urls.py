from django.urls import path, include
from rest_framework.routers import DefaultRouter
from .views import PaymentNetworkViewSet

router = DefaultRouter()
router.register(r'payment-networks', PaymentNetworkViewSet, basename='payment-network')

urlpatterns = [
    path('', include(router.urls)),
]
