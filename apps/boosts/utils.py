from datetime import datetime, time
from django.conf import settings
from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime


def parse_moment(value):
    """Parse an ISO datetime or date into an aware datetime; None if unparsable."""
    if value in (None, ''):
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        raw = str(value).strip()
        try:
            parsed = parse_datetime(raw)
            if parsed is None:
                day = parse_date(raw)
                parsed = datetime.combine(day, time.min) if day else None
        except ValueError:
            return None
    if parsed is not None and timezone.is_naive(parsed):
        parsed = timezone.make_aware(parsed)
    return parsed


def page_params(page=1, limit=None):
    """Clamp page/limit query values; returns ``(page, limit, offset)``."""
    default_size = settings.BOOST_DEFAULT_PAGE_SIZE
    try:
        page = max(1, int(page or 1))
    except (TypeError, ValueError):
        page = 1
    try:
        limit = int(limit or default_size)
    except (TypeError, ValueError):
        limit = default_size
    limit = max(1, min(settings.BOOST_MAX_PAGE_SIZE, limit))
    return page, limit, (page - 1) * limit


def paginate(queryset, page=1, limit=None):
    page, limit, offset = page_params(page, limit)
    total = queryset.count()
    items = list(queryset[offset:offset + limit])
    return items, {
        'page': page,
        'limit': limit,
        'total': total,
        'pages': max(1, -(-total // limit)),
    }
