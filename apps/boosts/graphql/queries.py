import strawberry
from typing import List, Optional
from django.utils import timezone
from apps.boosts.priority import resolve_boost_priorities
from apps.boosts.services import list_seller_requests, preview_boost_price
from .types import (
    BoostPrioritiesType,
    BoostRequestType,
    PricePreviewType,
    ProductWinnerType,
    ShopWinnerType,
)

@strawberry.type
class BoostQueries:

    @strawberry.field
    def boost_priorities(
        self,
        product_ids: List[int],
        seller_ids: List[int],
        viewer_city: Optional[str] = None,
    ) -> BoostPrioritiesType:
        winners = resolve_boost_priorities(product_ids, seller_ids, viewer_city, now=timezone.now())
        return BoostPrioritiesType(
            product_winners=[
                ProductWinnerType(product_id=product_id, **winner)
                for product_id, winner in winners['product_winner'].items()
            ],
            shop_winners=[
                ShopWinnerType(seller_id=seller_id, **winner)
                for seller_id, winner in winners['shop_winner'].items()
            ],
        )

    @strawberry.field
    def boost_price_preview(
        self,
        info: strawberry.Info,
        boost_type: str,
        duration: int,
        product_ids: Optional[List[int]] = None,
        city: Optional[str] = None,
    ) -> PricePreviewType:
        user = info.context.request.user
        breakdown = preview_boost_price(
            boost_type,
            duration,
            product_ids=product_ids,
            city=city,
            seller=user if user.is_authenticated else None,
            now=timezone.now(),
        )
        campaign = breakdown['seasonal_campaign']
        return PricePreviewType(
            boost_type=breakdown['boost_type'],
            city=breakdown['city'],
            base_price=breakdown['base_price'],
            price_type=breakdown['price_type'],
            unit_price=breakdown['unit_price'],
            duration=breakdown['duration'],
            product_count=breakdown['product_count'],
            subtotal=breakdown['subtotal'],
            seasonal_multiplier=breakdown['seasonal_multiplier'],
            seasonal_campaign_name=campaign['name'] if campaign else None,
            total_price=breakdown['total_price'],
        )

    @strawberry.field
    def my_boost_requests(self, info: strawberry.Info, status: Optional[str] = None) -> List[BoostRequestType]:
        user = info.context.request.user
        if not user.is_authenticated:
            return []
        items, _ = list_seller_requests(user, status=status, limit=100, now=timezone.now())
        return items
