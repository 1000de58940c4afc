import strawberry
from apps.boosts.graphql.queries import BoostQueries
from apps.authentication.graphql.queries import AuthQueries

@strawberry.type
class Query(BoostQueries, AuthQueries):
    pass

schema = strawberry.Schema(query=Query)
