from django.test import TestCase
from apps.billing.models import PaymentNetwork
from apps.billing.services import resolve_payment_operator


class ResolvePaymentOperatorTest(TestCase):
    def test_fallback_operators_without_configured_networks(self):
        self.assertEqual(resolve_payment_operator('mtn'), 'MTN')
        self.assertEqual(resolve_payment_operator('Airtel'), 'Airtel')
        self.assertIsNone(resolve_payment_operator('Orange'))
        self.assertIsNone(resolve_payment_operator(''))

    def test_active_networks_replace_fallback(self):
        PaymentNetwork.objects.create(name='Airtel Money')
        PaymentNetwork.objects.create(name='MoMo Pay', is_active=False)
        self.assertEqual(resolve_payment_operator('airtel money'), 'Airtel Money')
        self.assertIsNone(resolve_payment_operator('MTN'))
        self.assertIsNone(resolve_payment_operator('MoMo Pay'))
