"""FoodCourt load test scenario.

One stateful journey: browse a restaurant menu, fill a cart, adjust a line,
check out, then walk the order to Completed. Needs seeded restaurants
(``python src/manage.py seed``).
"""

import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import cart_item_data, delivery_data, user_id
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import CheckoutState


class CheckoutJourney(SequentialTaskSet):
    """Menu -> Add Items -> Update Line -> Checkout -> Confirm -> Prepare -> Complete."""

    def on_start(self):
        self.state = CheckoutState(user_id=user_id())
        self.headers = {"X-User-Id": self.state.user_id}

    @task
    def pick_restaurant(self):
        with self.client.get("/restaurants", catch_response=True, name="GET /restaurants") as resp:
            restaurants = resp.json() if resp.status_code == 200 else []
            if not restaurants:
                resp.failure("No restaurants available; seed the database first")
                self.interrupt()
                return
            self.state.restaurant_id = random.choice(restaurants)["restaurant_id"]

    @task
    def read_menu(self):
        with self.client.get(
            f"/restaurants/{self.state.restaurant_id}/menu",
            catch_response=True,
            name="GET /restaurants/{id}/menu",
        ) as resp:
            items = [i for i in resp.json() if i["is_available"]] if resp.status_code == 200 else []
            if not items:
                resp.failure(f"Empty menu: {resp.status_code} — {extract_error_detail(resp)}")
                self.interrupt()
                return
            self.state.menu_item_ids = [i["menu_item_id"] for i in items]

    @task
    def add_items(self):
        for menu_item_id in random.sample(self.state.menu_item_ids, k=min(2, len(self.state.menu_item_ids))):
            with self.client.post(
                f"/cart/restaurants/{self.state.restaurant_id}/items",
                json=cart_item_data(menu_item_id),
                headers=self.headers,
                catch_response=True,
                name="POST /cart/restaurants/{id}/items",
            ) as resp:
                if resp.status_code == 200:
                    body = resp.json()
                    self.state.cart_id = body["cart_id"]
                    self.state.line_ids = [line["line_id"] for line in body["lines"]]
                else:
                    resp.failure(f"Add item failed: {resp.status_code} — {extract_error_detail(resp)}")
                    self.interrupt()

    @task
    def update_line(self):
        with self.client.put(
            f"/cart/lines/{self.state.line_ids[0]}",
            json={"quantity": random.randint(1, 4)},
            headers=self.headers,
            catch_response=True,
            name="PUT /cart/lines/{id}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Update line failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def checkout(self):
        with self.client.post(
            f"/orders/from-cart/{self.state.cart_id}",
            json=delivery_data(),
            headers=self.headers,
            catch_response=True,
            name="POST /orders/from-cart/{id}",
        ) as resp:
            if resp.status_code == 201:
                self.state.order_id = resp.json()["order_id"]
            else:
                resp.failure(f"Checkout failed: {resp.status_code} — {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def advance_order(self):
        for status in ("Confirmed", "Preparing", "Completed"):
            with self.client.put(
                f"/orders/{self.state.order_id}/status",
                json={"status": status},
                headers=self.headers,
                catch_response=True,
                name=f"PUT /orders/{{id}}/status [{status}]",
            ) as resp:
                if resp.status_code != 200:
                    resp.failure(f"{status} failed: {resp.status_code} — {extract_error_detail(resp)}")
                    self.interrupt()
                    return

    @task
    def done(self):
        self.interrupt(reschedule=False)


class CheckoutUser(HttpUser):
    tasks = [CheckoutJourney]
    wait_time = between(1, 3)
