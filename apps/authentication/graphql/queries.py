import strawberry
from typing import Optional
from .types import SellerType

@strawberry.type
class AuthQueries:

    @strawberry.field
    def me(self, info: strawberry.Info) -> Optional[SellerType]:
        user = info.context.request.user
        if not user.is_authenticated:
            return None
        return user
