from django.utils import timezone
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from apps.authentication.permissions import IsBoostAdmin, IsBoostManager, IsSeller
from . import catalog, services
from .dashboard import revenue_dashboard
from .engagement import track_click, track_impressions
from .priority import resolve_boost_priorities
from .serializers import (
    BoostRequestCreateSerializer,
    BoostRequestSerializer,
    BoostStatusUpdateSerializer,
    PricePreviewQuerySerializer,
    PricingRuleSerializer,
    PricingRuleWriteSerializer,
    PriorityQuerySerializer,
    SeasonalCampaignSerializer,
    TrackImpressionsSerializer,
)


def _bool_param(value):
    if value in (None, ''):
        return None
    return str(value).strip().lower() in ('1', 'true', 'yes')


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def price_preview(request):
    serializer = PricePreviewQuerySerializer(data=request.query_params)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data
    breakdown = services.preview_boost_price(
        data['boost_type'],
        data['duration'],
        product_ids=data.get('product_ids'),
        city=data.get('city'),
        seller=request.user,
        now=timezone.now(),
    )
    return Response({'pricing': breakdown})


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def create_boost_request(request):
    serializer = BoostRequestCreateSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    boost_request, breakdown = services.submit_boost_request(
        request.user, now=timezone.now(), **serializer.validated_data
    )
    return Response({
        'message': 'Boost request submitted.',
        'boost_request': BoostRequestSerializer(boost_request).data,
        'pricing': breakdown,
    }, status=status.HTTP_201_CREATED)


@api_view(['GET'])
@permission_classes([IsSeller])
def my_boost_requests(request):
    items, pagination = services.list_seller_requests(
        request.user,
        status=request.query_params.get('status'),
        page=request.query_params.get('page'),
        limit=request.query_params.get('limit'),
        now=timezone.now(),
    )
    return Response({'items': BoostRequestSerializer(items, many=True).data, 'pagination': pagination})


@api_view(['GET'])
@permission_classes([IsBoostManager])
def admin_boost_requests(request):
    params = request.query_params
    items, pagination = services.list_requests_admin(
        status=params.get('status'),
        boost_type=params.get('boost_type'),
        city=params.get('city'),
        seller_id=params.get('seller_id') or None,
        page=params.get('page'),
        limit=params.get('limit'),
        now=timezone.now(),
    )
    return Response({'items': BoostRequestSerializer(items, many=True).data, 'pagination': pagination})


@api_view(['PATCH'])
@permission_classes([IsBoostManager])
def admin_update_status(request, request_id):
    serializer = BoostStatusUpdateSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data
    boost_request = services.transition_boost_request(
        request.user,
        request_id,
        data['status'],
        start_date=data.get('start_date'),
        end_date=data.get('end_date'),
        rejection_reason=data.get('rejection_reason', ''),
        now=timezone.now(),
    )
    return Response({'boost_request': BoostRequestSerializer(boost_request).data})


@api_view(['GET'])
@permission_classes([IsBoostAdmin])
def admin_dashboard(request):
    return Response(revenue_dashboard(timezone.now()))


@api_view(['GET', 'POST'])
@permission_classes([IsBoostAdmin])
def pricing_rules(request):
    if request.method == 'GET':
        rules = catalog.list_pricing_rules(
            boost_type=request.query_params.get('boost_type'),
            city=request.query_params.get('city'),
            is_active=_bool_param(request.query_params.get('is_active')),
        )
        return Response(PricingRuleSerializer(rules, many=True).data)

    serializer = PricingRuleWriteSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    rule, created = catalog.upsert_pricing_rule(request.user, **serializer.validated_data)
    return Response(
        PricingRuleSerializer(rule).data,
        status=status.HTTP_201_CREATED if created else status.HTTP_200_OK,
    )


@api_view(['PATCH'])
@permission_classes([IsBoostAdmin])
def pricing_rule_detail(request, rule_id):
    rule = catalog.update_pricing_rule(request.user, rule_id, request.data)
    return Response(PricingRuleSerializer(rule).data)


@api_view(['GET', 'POST'])
@permission_classes([IsBoostAdmin])
def seasonal_campaigns(request):
    context = {'now': timezone.now()}
    if request.method == 'GET':
        campaigns = catalog.list_seasonal_campaigns()
        return Response(SeasonalCampaignSerializer(campaigns, many=True, context=context).data)

    data = request.data
    campaign = catalog.create_seasonal_campaign(
        request.user,
        data.get('name'),
        data.get('start_date'),
        data.get('end_date'),
        multiplier=data.get('multiplier', 1),
        is_active=_bool_param(data.get('is_active')) is not False,
        applies_to=data.get('applies_to'),
    )
    return Response(SeasonalCampaignSerializer(campaign, context=context).data, status=status.HTTP_201_CREATED)


@api_view(['PATCH'])
@permission_classes([IsBoostAdmin])
def seasonal_campaign_detail(request, campaign_id):
    campaign = catalog.update_seasonal_campaign(request.user, campaign_id, request.data)
    return Response(SeasonalCampaignSerializer(campaign, context={'now': timezone.now()}).data)


@api_view(['POST'])
@permission_classes([AllowAny])
def impressions(request):
    serializer = TrackImpressionsSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    tracked = track_impressions(serializer.validated_data['request_ids'], now=timezone.now())
    return Response({'tracked_count': tracked})


@api_view(['POST'])
@permission_classes([AllowAny])
def click(request, request_id):
    return Response(track_click(request_id, now=timezone.now()))


@api_view(['POST'])
@permission_classes([AllowAny])
def priorities(request):
    serializer = PriorityQuerySerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data
    return Response(resolve_boost_priorities(
        product_ids=data['product_ids'],
        seller_ids=data['seller_ids'],
        viewer_city=data.get('viewer_city'),
        now=timezone.now(),
    ))
