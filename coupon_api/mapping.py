from typing import Any, Dict
from .models import Coupon, CouponCreateInput, CouponUpdateInput, CouponView


def to_entity(data: CouponCreateInput) -> Coupon:
    """Build an unsaved coupon from create input. The store assigns the id."""
    return Coupon(
        name=data.name,
        percent=data.percent,
        isActive=data.isActive,
        created=data.created,
    )


def to_view(coupon: Coupon) -> CouponView:
    return CouponView(
        id=coupon.id,
        name=coupon.name,
        percent=coupon.percent,
        isActive=coupon.isActive,
        created=coupon.created,
        lastUpdated=coupon.lastUpdated,
    )


def to_patch(data: CouponUpdateInput) -> Dict[str, Any]:
    return {
        "name": data.name,
        "percent": data.percent,
        "isActive": data.isActive,
    }
