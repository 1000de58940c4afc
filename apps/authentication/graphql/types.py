import strawberry_django
from strawberry import auto
from apps.authentication.models import User

@strawberry_django.type(User)
class SellerType:
    id: auto
    username: auto
    shop_name: auto
    account_type: auto
    city: auto
    shop_boosted: auto
    shop_boost_end_date: auto
