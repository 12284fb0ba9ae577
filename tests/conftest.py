import os
from pathlib import Path

# Cheap bcrypt and an isolated environment before anything reads settings
os.environ.setdefault("PROTEAN_ENV", "test")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("SECRET_KEY", "test-secret-key-with-enough-length-for-hs256")
os.environ.pop("SMTP_HOST", None)

import pytest  # noqa: E402
from fastapi import FastAPI  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from protean.integrations.pytest import DomainFixture  # noqa: E402


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)
        elif "/bdd/" in test_path:
            item.add_marker(pytest.mark.bdd)


@pytest.fixture(scope="session")
def storefront_bed():
    from storefront.domain import storefront

    bed = DomainFixture(storefront)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(storefront_bed, tmp_path, monkeypatch):
    """Run each test in the domain context with clean stores and a private upload directory."""
    from protean import current_domain

    from storefront.identity.channel import reset_channel

    monkeypatch.setenv("UPLOAD_DIR", str(tmp_path / "uploads"))
    reset_channel()

    with storefront_bed.domain_context():
        yield

        for _, provider in current_domain.providers.items():
            provider._data_reset()
        current_domain.event_store.store._data_reset()

    reset_channel()


# ---------------------------------------------------------------------------
# Builders shared by every area
# ---------------------------------------------------------------------------
@pytest.fixture()
def make_user():
    """Register a user through the command path and return the persisted aggregate."""
    from protean import current_domain

    from storefront.identity.administration import CreateUser
    from storefront.identity.credentials import hash_password
    from storefront.identity.queries import get_user
    from storefront.identity.user import Role

    counter = {"n": 0}

    def _make(email=None, password="secret123", name="Test User", role=Role.USER.value, **extra):
        counter["n"] += 1
        email = email or f"user{counter['n']}@example.com"
        user_id = current_domain.process(
            CreateUser(
                email=email,
                name=name,
                password_hash=hash_password(password),
                role=role,
                actor="fixtures",
                **extra,
            ),
            asynchronous=False,
        )
        return get_user(user_id)

    return _make


@pytest.fixture()
def make_product():
    import json

    from protean import current_domain

    from storefront.catalogue.management import CreateProduct
    from storefront.catalogue.queries import get_product

    def _make(name="Widget", price=10.0, images=None, **extra):
        product_id = current_domain.process(
            CreateProduct(
                name=name,
                price=price,
                image_urls=json.dumps(images if images is not None else [f"{name.lower()}.webp"]),
                **extra,
            ),
            asynchronous=False,
        )
        return get_product(product_id)

    return _make


# ---------------------------------------------------------------------------
# HTTP
# ---------------------------------------------------------------------------
@pytest.fixture()
def api_app():
    from storefront.api.errors import register_exception_handlers
    from storefront.catalogue.api import product_router, upload_router
    from storefront.dashboard.api import router as dashboard_router
    from storefront.identity.api import admin_user_router, auth_router, user_router
    from storefront.ordering.api import cart_router, order_router

    app = FastAPI()
    for router in (
        auth_router,
        user_router,
        admin_user_router,
        dashboard_router,
        product_router,
        upload_router,
        cart_router,
        order_router,
    ):
        app.include_router(router)
    register_exception_handlers(app)
    return app


@pytest.fixture()
def client(api_app):
    return TestClient(api_app, raise_server_exceptions=False)


@pytest.fixture()
def auth_headers():
    from storefront.identity.credentials import issue_access_token

    def _headers(user):
        return {"Authorization": f"Bearer {issue_access_token(user)}"}

    return _headers


@pytest.fixture()
def shopper(make_user):
    return make_user(email="shopper@example.com", name="Shopper")


@pytest.fixture()
def admin(make_user):
    from storefront.identity.user import Role

    return make_user(email="admin@example.com", name="Admin", role=Role.ADMIN.value)
