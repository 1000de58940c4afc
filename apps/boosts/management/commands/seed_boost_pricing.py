from decimal import Decimal
from django.conf import settings
from django.core.management.base import BaseCommand
from apps.billing.models import PaymentNetwork
from apps.boosts.catalog import upsert_pricing_rule
from apps.boosts.constants import (
    FIXED,
    HOMEPAGE_FEATURED,
    LOCAL_PRODUCT_BOOST,
    PER_DAY,
    PER_WEEK,
    PRODUCT_BOOST,
    SHOP_BOOST,
)
from apps.boosts.models import PricingRule

DEFAULT_RULES = [
    (PRODUCT_BOOST, PER_DAY, Decimal('1000')),
    (LOCAL_PRODUCT_BOOST, PER_DAY, Decimal('700')),
    (SHOP_BOOST, PER_WEEK, Decimal('5000')),
    (HOMEPAGE_FEATURED, FIXED, Decimal('15000')),
]

class Command(BaseCommand):
    help = 'Create missing global boost pricing rules and default payment networks'

    def add_arguments(self, parser):
        parser.add_argument('--skip-networks', action='store_true')

    def handle(self, *args, **options):
        created_rules = 0
        for boost_type, price_type, base_price in DEFAULT_RULES:
            if PricingRule.objects.filter(boost_type=boost_type, city__isnull=True).exists():
                self.stdout.write(f'Global {boost_type} rule already present, leaving it alone')
                continue
            upsert_pricing_rule(None, boost_type, price_type, base_price)
            created_rules += 1

        created_networks = 0
        if not options['skip_networks']:
            for name in settings.BOOST_FALLBACK_PAYMENT_OPERATORS:
                _, created = PaymentNetwork.objects.get_or_create(name=name)
                created_networks += int(created)

        self.stdout.write(
            self.style.SUCCESS(
                f'Seeded {created_rules} pricing rule(s) and {created_networks} payment network(s)'
            )
        )
