from django.conf import settings

PRODUCT_BOOST = 'PRODUCT_BOOST'
LOCAL_PRODUCT_BOOST = 'LOCAL_PRODUCT_BOOST'
SHOP_BOOST = 'SHOP_BOOST'
HOMEPAGE_FEATURED = 'HOMEPAGE_FEATURED'

BOOST_TYPES = (PRODUCT_BOOST, LOCAL_PRODUCT_BOOST, SHOP_BOOST, HOMEPAGE_FEATURED)
BOOST_TYPE_CHOICES = [
    (PRODUCT_BOOST, 'Product boost'),
    (LOCAL_PRODUCT_BOOST, 'Local product boost'),
    (SHOP_BOOST, 'Shop boost'),
    (HOMEPAGE_FEATURED, 'Homepage featured'),
]
PRODUCT_SCOPED_TYPES = (PRODUCT_BOOST, LOCAL_PRODUCT_BOOST, HOMEPAGE_FEATURED)

PENDING = 'PENDING'
APPROVED = 'APPROVED'
REJECTED = 'REJECTED'
ACTIVE = 'ACTIVE'
EXPIRED = 'EXPIRED'

STATUS_CHOICES = [
    (PENDING, 'Pending'),
    (APPROVED, 'Approved'),
    (REJECTED, 'Rejected'),
    (ACTIVE, 'Active'),
    (EXPIRED, 'Expired'),
]
STATUSES = tuple(value for value, _ in STATUS_CHOICES)
# Statuses that hold a contested resource while their window is open
OPEN_STATUSES = (PENDING, APPROVED, ACTIVE)

PER_DAY = 'per_day'
PER_WEEK = 'per_week'
FIXED = 'fixed'
PRICE_TYPE_CHOICES = [
    (PER_DAY, 'Per day'),
    (PER_WEEK, 'Per week'),
    (FIXED, 'Fixed'),
]
PRICE_TYPES = (PER_DAY, PER_WEEK, FIXED)

# Lower wins
PRIORITY_BY_TYPE = {
    LOCAL_PRODUCT_BOOST: 0,
    PRODUCT_BOOST: 1,
    SHOP_BOOST: 2,
    HOMEPAGE_FEATURED: 3,
}

PAYMENT_PROOF_MIME_TYPES = {
    'image/jpeg',
    'image/png',
    'image/webp',
    'image/heic',
    'image/heif',
    'image/avif',
}


def normalize_boost_type(value):
    normalized = str(value or '').strip().upper()
    return normalized if normalized in BOOST_TYPES else ''


def normalize_boost_city(value):
    """Map a city onto its whitelisted spelling, or None when unsupported."""
    normalized = str(value or '').strip().lower()
    if not normalized:
        return None
    for city in settings.BOOST_SUPPORTED_CITIES:
        if city.lower() == normalized:
            return city
    return None


def normalize_status(value):
    normalized = str(value or '').strip().upper()
    return normalized if normalized in STATUSES else ''
