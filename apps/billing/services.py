import logging
from django.conf import settings
from .models import PaymentNetwork

logger = logging.getLogger(__name__)

def resolve_payment_operator(operator):
    """Return the canonical operator name, or None when it is not accepted.

    Operators are matched case-insensitively against active networks. When no
    network is configured at all, the fallback operators from settings apply.
    """
    operator = str(operator or '').strip()
    if not operator:
        return None

    network = PaymentNetwork.objects.filter(is_active=True, name__iexact=operator).first()
    if network:
        return network.name

    if not PaymentNetwork.objects.filter(is_active=True).exists():
        for fallback in settings.BOOST_FALLBACK_PAYMENT_OPERATORS:
            if fallback.lower() == operator.lower():
                return fallback

    logger.info(f"Rejected payment operator {operator!r}")
    return None
