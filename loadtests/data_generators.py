"""Faker-based data generators for Locust load test scenarios.

Each generator produces payloads that pass the API's Pydantic request
schemas and the domain's validation rules.
"""

import random
import uuid

from faker import Faker

fake = Faker()

CATEGORIES = ["Laptops", "Phones", "Accessories", "Audio", "Monitors"]
BRANDS = ["Acme", "Globex", "Initech", "Umbrella", "Hooli"]

# ---------- Identity ----------


def valid_email() -> str:
    """Generate unique emails: one @, a dotted domain, no spaces."""
    local = fake.user_name()[:20]
    return f"{local}.{uuid.uuid4().hex[:6]}@{fake.free_email_domain()}"


def valid_phone() -> str:
    return f"09{random.randint(10000000, 99999999)}"


def registration_data() -> dict:
    """Generate a RegisterRequest payload. The password is returned alongside for login."""
    return {
        "name": fake.name()[:100],
        "email": valid_email(),
        "password": fake.password(length=10),
        "phone": valid_phone(),
        "gender": random.choice(["MALE", "FEMALE", "OTHER"]),
    }


# ---------- Catalogue ----------


def product_data() -> dict:
    """Generate a CreateProductRequest payload."""
    word = fake.word().capitalize()
    return {
        "name": f"{random.choice(BRANDS)} {word} {uuid.uuid4().hex[:4].upper()}",
        "price": round(random.uniform(5.0, 2500.0), 2),
        "brand": random.choice(BRANDS),
        "category": random.choice(CATEGORIES),
        "short_description": fake.sentence(nb_words=8)[:500],
        "detailed_description": fake.paragraph(nb_sentences=4),
        "images": [f"{uuid.uuid4().hex}_{word.lower()}.webp"],
    }


def search_params() -> dict:
    params = {"category": random.choice(CATEGORIES), "page": 0, "size": 12}
    if random.random() < 0.5:
        params["max_price"] = random.choice([100, 500, 1000])
    if random.random() < 0.3:
        params["sort"] = random.choice(["price,asc", "price,desc", "sold_quantity,desc"])
    return params


# ---------- Ordering ----------


def shipping_data(name: str | None = None) -> dict:
    """Generate a PlaceOrderRequest payload."""
    return {
        "shipping_address": fake.address().replace("\n", ", ")[:500],
        "receiver_name": (name or fake.name())[:100],
        "receiver_phone": valid_phone(),
    }


def admin_status() -> str:
    return random.choice(["CONFIRMED", "SHIPPED", "DELIVERED"])
