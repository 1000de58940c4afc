import strawberry
import strawberry_django
from decimal import Decimal
from typing import List, Optional
from strawberry import auto
from apps.boosts.models import BoostRequest

@strawberry_django.type(BoostRequest)
class BoostRequestType:
    id: auto
    boost_type: auto
    city: auto
    duration: auto
    total_price: auto
    seasonal_campaign_name: auto
    status: auto
    start_date: auto
    end_date: auto
    impressions: auto
    clicks: auto
    created_at: auto

    @strawberry_django.field
    def ctr(self) -> float:
        return self.ctr

    @strawberry_django.field
    def product_ids(self) -> List[int]:
        return [product.id for product in self.products.all()]

@strawberry.type
class ProductWinnerType:
    product_id: int
    priority: int
    boost_type: str
    request_id: int

@strawberry.type
class ShopWinnerType:
    seller_id: int
    priority: int
    request_id: int

@strawberry.type
class BoostPrioritiesType:
    product_winners: List[ProductWinnerType]
    shop_winners: List[ShopWinnerType]

@strawberry.type
class PricePreviewType:
    boost_type: str
    city: Optional[str]
    base_price: Decimal
    price_type: str
    unit_price: Decimal
    duration: int
    product_count: int
    subtotal: Decimal
    seasonal_multiplier: Decimal
    seasonal_campaign_name: Optional[str]
    total_price: Decimal
