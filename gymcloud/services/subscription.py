"""Subscription state evaluation.

The state of a member's access is derived from their role and
``subscription_end_date`` at read time; it is never persisted.
Staff (ADMIN, COACH) never expire.
"""
import enum
import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Optional

from gymcloud.models.user import STAFF_ROLES
from gymcloud.utils.clock import utcnow, to_naive_utc

SECONDS_PER_DAY = 24 * 60 * 60

DEFAULT_WARNING_DAYS = 3
DEFAULT_EXPIRED_MESSAGE = (
    "Your subscription has expired. Please visit the front desk to renew your access."
)
DEFAULT_WARNING_MESSAGE = "Heads up! Your subscription expires in {days} days."


class SubscriptionState(str, enum.Enum):
    OK = "OK"
    WARNING = "WARNING"
    EXPIRED = "EXPIRED"


@dataclass(frozen=True)
class SubscriptionPolicy:
    warning_days: float = DEFAULT_WARNING_DAYS
    expired_message: str = DEFAULT_EXPIRED_MESSAGE
    warning_message: str = DEFAULT_WARNING_MESSAGE

    @classmethod
    def from_config(cls, config):
        return cls(
            warning_days=config.get("SUBSCRIPTION_WARNING_DAYS", DEFAULT_WARNING_DAYS),
            expired_message=config.get("SUBSCRIPTION_EXPIRED_MESSAGE", DEFAULT_EXPIRED_MESSAGE),
            warning_message=config.get("SUBSCRIPTION_WARNING_MESSAGE", DEFAULT_WARNING_MESSAGE),
        )


@dataclass(frozen=True)
class SubscriptionStatus:
    state: SubscriptionState
    message: Optional[str] = None

    @property
    def is_expired(self):
        return self.state == SubscriptionState.EXPIRED

    def to_dict(self):
        return {"state": self.state.value, "message": self.message}


def _read(user, field):
    if isinstance(user, Mapping):
        return user.get(field)
    return getattr(user, field, None)


def _role_value(role):
    return getattr(role, "value", role)


def evaluate_subscription(user, now=None, policy=None) -> SubscriptionStatus:
    """Classify ``user``'s access as OK, WARNING or EXPIRED at ``now``.

    ``user`` may be a model instance or a mapping with ``role`` and
    ``subscription_end_date``. A missing or unparsable end date counts as
    expired.
    """
    if _role_value(_read(user, "role")) in STAFF_ROLES:
        return SubscriptionStatus(SubscriptionState.OK)

    policy = policy or SubscriptionPolicy()
    now = to_naive_utc(now) if now is not None else utcnow()
    end = to_naive_utc(_read(user, "subscription_end_date"))

    if end is None or now > end:
        return SubscriptionStatus(SubscriptionState.EXPIRED, policy.expired_message)

    diff_days = (end - now).total_seconds() / SECONDS_PER_DAY
    if diff_days <= policy.warning_days:
        return SubscriptionStatus(
            SubscriptionState.WARNING,
            policy.warning_message.format(days=math.ceil(diff_days)),
        )

    return SubscriptionStatus(SubscriptionState.OK)
