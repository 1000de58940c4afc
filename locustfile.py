from locust import HttpUser, task, between
import os
import json
import random


class StorefrontVisitor(HttpUser):
    """Anonymous traffic: priority lookups and engagement tracking."""

    wait_time = between(0.5, 2.5)

    def on_start(self):
        self.headers = {"Content-Type": "application/json"}
        self.product_ids = [int(pid) for pid in os.getenv("LOCUST_PRODUCT_IDS", "1,2,3,4,5").split(",") if pid]
        self.seller_ids = [int(sid) for sid in os.getenv("LOCUST_SELLER_IDS", "1,2").split(",") if sid]
        self.request_ids = [int(rid) for rid in os.getenv("LOCUST_REQUEST_IDS", "1,2,3").split(",") if rid]
        self.city = os.getenv("LOCUST_VIEWER_CITY", "Brazzaville")

    @task(5)
    def resolve_priorities(self):
        payload = json.dumps({
            "product_ids": self.product_ids,
            "seller_ids": self.seller_ids,
            "viewer_city": self.city,
        })
        self.client.post("/api/v1/boosts/priorities/", data=payload, headers=self.headers)

    @task(4)
    def track_impressions(self):
        payload = json.dumps({"request_ids": self.request_ids})
        self.client.post("/api/v1/boosts/track/impressions/", data=payload, headers=self.headers)

    @task(1)
    def track_click(self):
        request_id = random.choice(self.request_ids)
        with self.client.post(
            f"/api/v1/boosts/requests/{request_id}/click/",
            headers=self.headers,
            name="/api/v1/boosts/requests/[id]/click/",
            catch_response=True,
        ) as resp:
            # inactive boosts answer 404 by contract
            if resp.status_code in (200, 404):
                resp.success()


class AuthenticatedSeller(HttpUser):
    """Locust user that authenticates via JWT before running tasks."""

    wait_time = between(1, 3)

    def on_start(self):
        self.headers = {"Content-Type": "application/json"}
        payload = json.dumps({
            "email": os.getenv("LOCUST_EMAIL", "seller@test.com"),
            "password": os.getenv("LOCUST_PASSWORD", "testpass123"),
        })
        with self.client.post("/api/v1/auth/token/", data=payload, headers=self.headers, catch_response=True) as resp:
            token = resp.json().get("access") if resp.status_code == 200 else None
            if token:
                self.headers["Authorization"] = f"Bearer {token}"
                resp.success()
            else:
                resp.failure(f"Login failed: {resp.status_code}")

    @task(3)
    def list_my_requests(self):
        self.client.get("/api/v1/boosts/my/requests/?limit=20", headers=self.headers)

    @task(2)
    def price_preview(self):
        self.client.get(
            "/api/v1/boosts/pricing/preview/?boost_type=PRODUCT_BOOST&duration=7&product_ids=1,2",
            headers=self.headers,
            name="/api/v1/boosts/pricing/preview/",
        )


# Useful for headless CSV output: `locust --headless -u 50 -r 5 -t 2m -f locustfile.py --csv out --host http://localhost:8070`
