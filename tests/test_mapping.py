from datetime import datetime, timezone

from coupon_api.mapping import to_entity, to_patch, to_view
from coupon_api.models import Coupon, CouponCreateInput, CouponUpdateInput


def test_to_entity_leaves_id_unset():
    entity = to_entity(CouponCreateInput(name="SUMMER10", percent=10))
    assert entity.id is None
    assert entity.name == "SUMMER10"
    assert entity.percent == 10
    assert entity.isActive is True


def test_view_keeps_every_input_field():
    created = datetime(2024, 1, 2, tzinfo=timezone.utc)
    data = CouponCreateInput(name="WINTER20", percent=20, isActive=False, created=created)
    view = to_view(to_entity(data).model_copy(update={"id": 3}))

    assert view.id == 3
    for field, value in data.model_dump().items():
        assert getattr(view, field) == value


def test_to_view_copies_timestamps():
    now = datetime.now(timezone.utc)
    coupon = Coupon(id=1, name="A", percent=5, created=now, lastUpdated=now)
    view = to_view(coupon)
    assert view.created == now
    assert view.lastUpdated == now


def test_to_patch_has_no_id():
    patch = to_patch(CouponUpdateInput(id=4, name="A", percent=5, isActive=False))
    assert patch == {"name": "A", "percent": 5, "isActive": False}
