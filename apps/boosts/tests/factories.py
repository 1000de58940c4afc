from datetime import datetime, timedelta, timezone as dt_timezone
from decimal import Decimal
from apps.authentication.models import User
from apps.boosts.constants import ACTIVE, PER_DAY
from apps.boosts.models import BoostRequest, PricingRule
from apps.products.models import Product

NOW = datetime(2026, 3, 10, 12, 0, tzinfo=dt_timezone.utc)

PAYMENT = {
    'payment_operator': 'MTN',
    'payment_sender_name': 'Jean Mabiala',
    'payment_transaction_id': '06 123 456 78',
}


def make_user(username, **extra):
    return User.objects.create_user(
        username=username,
        email=f'{username}@example.com',
        password='testpass',
        **extra
    )


def make_admin(username='admin'):
    return make_user(username, role='admin', is_staff=True)


def make_product(seller, title='Product', **extra):
    extra.setdefault('status', 'approved')
    return Product.objects.create(seller=seller, title=title, **extra)


def make_rule(boost_type, base_price, price_type=PER_DAY, city=None, multiplier='1', is_active=True):
    return PricingRule.objects.create(
        boost_type=boost_type,
        city=city,
        base_price=Decimal(str(base_price)),
        price_type=price_type,
        multiplier=Decimal(multiplier),
        is_active=is_active,
    )


def make_boost(seller, boost_type, products=(), status=ACTIVE, start=None, end=None,
               city=None, approved_at=None, total_price='1000'):
    """Persist a request directly, bypassing submission checks."""
    if status == ACTIVE:
        start = start or NOW - timedelta(days=1)
        end = end or NOW + timedelta(days=1)
        approved_at = approved_at or start
    boost_request = BoostRequest.objects.create(
        seller=seller,
        boost_type=boost_type,
        city=city,
        duration=2,
        unit_price=Decimal(total_price),
        base_price=Decimal(total_price),
        price_type=PER_DAY,
        total_price=Decimal(total_price),
        payment_operator='MTN',
        payment_sender_name='Jean Mabiala',
        payment_transaction_id='0612345678',
        status=status,
        start_date=start,
        end_date=end,
        approved_at=approved_at,
    )
    if products:
        boost_request.products.set(products)
    return boost_request
