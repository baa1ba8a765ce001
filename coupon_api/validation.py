from dataclasses import dataclass, field
from typing import Callable, List, NamedTuple, Optional, Set, Tuple, Union
from .models import CouponCreateInput, CouponUpdateInput
from .storage import (
    MAX_PERCENT,
    MIN_PERCENT,
    NAME_EMPTY_MESSAGE,
    NAME_TAKEN_MESSAGE,
    CouponStore,
    percent_range_message,
)

CouponInput = Union[CouponCreateInput, CouponUpdateInput]


@dataclass
class ValidationResult:
    errors: List[Tuple[str, str]] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def messages(self) -> List[str]:
        return [message for _, message in self.errors]


def name_not_empty(data: CouponInput, store: CouponStore) -> bool:
    return bool(data.name and data.name.strip())


def name_is_unique(data: CouponInput, store: CouponStore) -> bool:
    # Point-in-time check, the store verifies again when it writes
    existing = store.find_by_name(data.name)
    if existing is None:
        return True
    # an update may keep its own name
    own_id: Optional[int] = getattr(data, "id", None)
    return own_id is not None and existing.id == own_id


def percent_in_range(data: CouponInput, store: CouponStore) -> bool:
    return MIN_PERCENT <= data.percent <= MAX_PERCENT


class Rule(NamedTuple):
    field: str
    predicate: Callable[[CouponInput, CouponStore], bool]
    message: Callable[[CouponInput], str]
    # skipped once an earlier rule on the same field has failed
    gated: bool = False


# evaluated in order
RULES: List[Rule] = [
    Rule("name", name_not_empty, lambda data: NAME_EMPTY_MESSAGE),
    Rule("name", name_is_unique, lambda data: NAME_TAKEN_MESSAGE, gated=True),
    Rule("percent", percent_in_range, lambda data: percent_range_message(data.percent)),
]


def _run_rules(data: CouponInput, store: CouponStore) -> ValidationResult:
    result = ValidationResult()
    failed: Set[str] = set()

    for rule in RULES:
        if rule.gated and rule.field in failed:
            continue
        if not rule.predicate(data, store):
            result.errors.append((rule.field, rule.message(data)))
            failed.add(rule.field)

    return result


def validate_create(data: CouponCreateInput, store: CouponStore) -> ValidationResult:
    return _run_rules(data, store)


def validate_update(data: CouponUpdateInput, store: CouponStore) -> ValidationResult:
    return _run_rules(data, store)
