import logging
import threading
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional
from .models import Coupon

logger = logging.getLogger(__name__)

MIN_PERCENT = 1
MAX_PERCENT = 50

NAME_EMPTY_MESSAGE = "'Name' must not be empty."
NAME_TAKEN_MESSAGE = "Coupon name already exists"


def percent_range_message(percent: Any) -> str:
    return (
        f"'Percent' must be between {MIN_PERCENT} and {MAX_PERCENT}. "
        f"You entered {percent}."
    )


class InvariantViolation(Exception):
    """Raised when a write would break id/name uniqueness or the percent range."""


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _same_name(a: str, b: str) -> bool:
    return a.lower() == b.lower()


class CouponStore:
    """
    In-memory coupon collection.

    Every operation runs under a single lock. Callers only ever get copies,
    so the stored coupons cannot be changed behind the store's back.
    """

    def __init__(self) -> None:
        self._coupons: List[Coupon] = []
        self._lock = threading.Lock()

    # ---------------------------
    # Reads
    # ---------------------------

    def list(self) -> List[Coupon]:
        with self._lock:
            return [c.model_copy() for c in self._coupons]

    def get_by_id(self, coupon_id: int) -> Optional[Coupon]:
        with self._lock:
            found = self._find_by_id(coupon_id)
            return found.model_copy() if found is not None else None

    def find_by_name(self, name: str) -> Optional[Coupon]:
        with self._lock:
            found = self._find_by_name(name)
            return found.model_copy() if found is not None else None

    # ---------------------------
    # Writes
    # ---------------------------

    def create(self, candidate: Coupon) -> Coupon:
        with self._lock:
            self._check_name_free(candidate.name)
            self._check_percent(candidate.percent)

            next_id = max((c.id for c in self._coupons), default=0) + 1
            coupon = candidate.model_copy(update={
                "id": next_id,
                "created": candidate.created or _utcnow(),
                "lastUpdated": None,
            })
            self._coupons.append(coupon)
            logger.debug("Stored coupon %s with id %d", coupon.name, coupon.id)
            return coupon.model_copy()

    def update(self, coupon_id: int, patch: Dict[str, Any]) -> Optional[Coupon]:
        # id is immutable
        patch = {k: v for k, v in patch.items() if k != "id"}

        with self._lock:
            for index, existing in enumerate(self._coupons):
                if existing.id == coupon_id:
                    break
            else:
                return None

            if "name" in patch:
                self._check_name_free(patch["name"], ignore_id=coupon_id)
            if "percent" in patch:
                self._check_percent(patch["percent"])

            updated = existing.model_copy(update={**patch, "lastUpdated": _utcnow()})
            self._coupons[index] = updated
            return updated.model_copy()

    def delete(self, coupon_id: int) -> bool:
        with self._lock:
            for index, existing in enumerate(self._coupons):
                if existing.id == coupon_id:
                    del self._coupons[index]
                    return True
            return False

    def clear(self) -> None:
        with self._lock:
            self._coupons.clear()

    def seed(self, coupons: Iterable[Coupon]) -> List[Coupon]:
        return [self.create(c) for c in coupons]

    # ---------------------------
    # Helpers (lock must be held)
    # ---------------------------

    def _find_by_id(self, coupon_id: int) -> Optional[Coupon]:
        for c in self._coupons:
            if c.id == coupon_id:
                return c
        return None

    def _find_by_name(self, name: str) -> Optional[Coupon]:
        for c in self._coupons:
            if _same_name(c.name, name):
                return c
        return None

    def _check_name_free(self, name: str, ignore_id: Optional[int] = None) -> None:
        if not name or not name.strip():
            raise InvariantViolation(NAME_EMPTY_MESSAGE)
        clash = self._find_by_name(name)
        if clash is not None and clash.id != ignore_id:
            raise InvariantViolation(NAME_TAKEN_MESSAGE)

    def _check_percent(self, percent: int) -> None:
        if not (MIN_PERCENT <= percent <= MAX_PERCENT):
            raise InvariantViolation(percent_range_message(percent))


# Process-wide store used by the API
COUPON_STORE = CouponStore()
