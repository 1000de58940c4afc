from django.test import TestCase
from django.utils import timezone
from datetime import timedelta
from apps.boosts.constants import LOCAL_PRODUCT_BOOST, PRODUCT_BOOST
from core.graphql.schema import schema
from .factories import make_boost, make_product, make_user

QUERY = """
query Priorities($productIds: [Int!]!, $sellerIds: [Int!]!, $city: String) {
  boostPriorities(productIds: $productIds, sellerIds: $sellerIds, viewerCity: $city) {
    productWinners { productId priority boostType requestId }
    shopWinners { sellerId requestId }
  }
}
"""


class BoostPrioritiesQueryTest(TestCase):
    def test_local_boost_wins_for_matching_city(self):
        seller = make_user('seller')
        product = make_product(seller)
        now = timezone.now()
        window = {'start': now - timedelta(hours=1), 'end': now + timedelta(hours=1)}
        local = make_boost(seller, LOCAL_PRODUCT_BOOST, [product], city='Oyo', **window)
        make_boost(seller, PRODUCT_BOOST, [product], **window)

        result = schema.execute_sync(
            QUERY, variable_values={'productIds': [product.id], 'sellerIds': [seller.id], 'city': 'Oyo'}
        )

        self.assertIsNone(result.errors)
        winners = result.data['boostPriorities']['productWinners']
        self.assertEqual(winners, [{
            'productId': product.id,
            'priority': 0,
            'boostType': LOCAL_PRODUCT_BOOST,
            'requestId': local.id,
        }])
        self.assertEqual(result.data['boostPriorities']['shopWinners'], [])


MY_REQUESTS = """
query { myBoostRequests { city productIds } me { id } }
"""


class SellerQueriesTest(TestCase):
    def test_resolvers_read_the_request_user(self):
        seller = make_user('seller')
        product = make_product(seller)
        make_boost(seller, LOCAL_PRODUCT_BOOST, [product], city='Oyo')
        make_boost(make_user('other'), PRODUCT_BOOST)
        self.client.force_login(seller)

        response = self.client.post('/graphql/', {'query': MY_REQUESTS}, content_type='application/json')

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertNotIn('errors', body)
        self.assertEqual(body['data']['myBoostRequests'], [{'city': 'Oyo', 'productIds': [product.id]}])
        self.assertEqual(body['data']['me']['id'], str(seller.id))

    def test_anonymous_viewer_gets_empty_results(self):
        response = self.client.post('/graphql/', {'query': MY_REQUESTS}, content_type='application/json')
        body = response.json()
        self.assertEqual(body['data']['myBoostRequests'], [])
        self.assertIsNone(body['data']['me'])
