"""Random customers, addresses and cart picks for the load scenarios.

Payloads match the field names of the FoodCourt API request schemas and
stay inside the domain's limits (phone 15 chars, address 200 chars).
"""

import random

from faker import Faker

fake = Faker()


def user_id() -> str:
    return f"lt-user-{fake.uuid4()[:8]}"


def valid_phone() -> str:
    return "09" + "".join(str(random.randint(0, 9)) for _ in range(8))


def delivery_data() -> dict:
    data = {
        "delivery_address": fake.street_address()[:200],
        "phone_number": valid_phone(),
    }
    if random.random() < 0.3:
        data["special_instructions"] = fake.sentence(nb_words=6)
    return data


def cart_item_data(menu_item_id: str) -> dict:
    data = {"menu_item_id": menu_item_id, "quantity": random.randint(1, 3)}
    if random.random() < 0.2:
        data["note"] = random.choice(["No onions", "Extra spicy", "Sauce on the side"])
    return data
