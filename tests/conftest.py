import pytest
from fastapi.testclient import TestClient

from coupon_api.main import app
from coupon_api.storage import COUPON_STORE, CouponStore


@pytest.fixture
def store():
    """A fresh, empty store."""
    return CouponStore()


@pytest.fixture
def client():
    """Test client bound to the process-wide store, emptied per test."""
    COUPON_STORE.clear()
    with TestClient(app) as c:
        yield c
    COUPON_STORE.clear()


@pytest.fixture
def sample_coupon():
    return {"name": "SUMMER10", "percent": 10}
