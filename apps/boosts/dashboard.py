"""Revenue figures for the boost admin dashboard."""
from datetime import timedelta
from decimal import Decimal
from django.db.models import Count, Sum
from django.db.models.functions import Coalesce
from django.utils import timezone

from .constants import ACTIVE, EXPIRED, STATUSES
from .models import BoostRequest
from .reconciliation import sweep_expired_boosts

REVENUE_STATUSES = (ACTIVE, EXPIRED)
ZERO = Decimal('0')


def ctr_percent(clicks, impressions):
    if not impressions:
        return 0.0
    return round(clicks / impressions * 100, 2)


def period_bounds(now):
    """Start/end of the current day, Monday-based week and month in local time."""
    local = timezone.localtime(now)
    day_start = local.replace(hour=0, minute=0, second=0, microsecond=0)
    week_start = day_start - timedelta(days=day_start.weekday())
    month_start = day_start.replace(day=1)
    if month_start.month == 12:
        next_month = month_start.replace(year=month_start.year + 1, month=1)
    else:
        next_month = month_start.replace(month=month_start.month + 1)
    return {
        'daily': (day_start, day_start + timedelta(days=1)),
        'weekly': (week_start, week_start + timedelta(days=7)),
        'monthly': (month_start, next_month),
    }


def _revenue(requests):
    return requests.aggregate(total_revenue=Coalesce(Sum('total_price'), ZERO), total_requests=Count('id'))


def revenue_dashboard(now=None):
    now = now or timezone.now()
    sweep_expired_boosts(now)

    earning = BoostRequest.objects.filter(status__in=REVENUE_STATUSES)

    revenue = {
        period: _revenue(earning.filter(created_at__gte=start, created_at__lt=end))
        for period, (start, end) in period_bounds(now).items()
    }

    by_type = [
        {
            'boost_type': row['boost_type'],
            'revenue': row['revenue'],
            'requests': row['requests'],
            'impressions': row['impressions'],
            'clicks': row['clicks'],
            'ctr': ctr_percent(row['clicks'], row['impressions']),
        }
        for row in earning.values('boost_type').annotate(
            revenue=Sum('total_price'),
            requests=Count('id'),
            impressions=Sum('impressions'),
            clicks=Sum('clicks'),
        ).order_by('-revenue')
    ]

    by_city = [
        {'city': row['city'] or 'GLOBAL', 'revenue': row['revenue'], 'requests': row['requests']}
        for row in earning.values('city').annotate(
            revenue=Sum('total_price'), requests=Count('id')
        ).order_by('-revenue')
    ]

    status_counts = dict.fromkeys((value.lower() for value in STATUSES), 0)
    for row in BoostRequest.objects.values('status').annotate(count=Count('id')).order_by():
        status_counts[row['status'].lower()] = row['count']

    seasonal_performance = [
        {'campaign': row['seasonal_campaign_name'], 'revenue': row['revenue'], 'requests': row['requests']}
        for row in earning.exclude(seasonal_campaign_name='').values('seasonal_campaign_name').annotate(
            revenue=Sum('total_price'), requests=Count('id')
        ).order_by('-revenue')
    ]

    top_sellers = [
        {
            'seller_id': row['seller_id'],
            'seller_name': row['seller__shop_name'] or row['seller__username'] or 'Seller',
            'city': row['seller__city'] or None,
            'revenue': row['revenue'],
            'requests': row['requests'],
        }
        for row in earning.values(
            'seller_id', 'seller__shop_name', 'seller__username', 'seller__city'
        ).annotate(revenue=Sum('total_price'), requests=Count('id')).order_by('-revenue')[:10]
    ]

    return {
        'revenue': revenue,
        'by_type': by_type,
        'by_city': by_city,
        'status': status_counts,
        'seasonal_performance': seasonal_performance,
        'top_spending_sellers': top_sellers,
    }
