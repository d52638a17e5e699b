"""Account store operations and the read-time user projection."""
import logging

from flask import current_app

from gymcloud.errors import ConflictError, LastAdminError, NotFoundError
from gymcloud.extensions import db
from gymcloud.models import (
    ExerciseMedia,
    IndependentRoutine,
    MonthlyRoutine,
    User,
    UserRole,
    UserStatus,
    WorkoutLog,
    STAFF_ROLES,
)
from gymcloud.schemas.user import user_schema
from gymcloud.services.audit import record_audit
from gymcloud.services.subscription import (
    SubscriptionPolicy,
    SubscriptionState,
    evaluate_subscription,
)
from gymcloud.utils.clock import utcnow, to_naive_utc

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("name", "role", "is_first_login", "profile_picture")


def staff_subscription_end():
    return current_app.config["STAFF_SUBSCRIPTION_END"]


def current_policy():
    return SubscriptionPolicy.from_config(current_app.config)


def get_user(user_id):
    user = db.session.get(User, user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


def _admin_count():
    return User.query.filter_by(role=UserRole.ADMIN.value).count()


def project_user(user, now=None):
    """Serialize ``user`` with status and subscription derived at ``now``.

    Stored status is ignored: staff are always ACTIVE with the far-future end
    date, members are INACTIVE once expired.
    """
    subscription = evaluate_subscription(user, now, current_policy())
    data = user_schema.dump(user)
    if user.role in STAFF_ROLES:
        data["status"] = UserStatus.ACTIVE.value
        data["subscription_end_date"] = staff_subscription_end().isoformat()
    elif subscription.state == SubscriptionState.EXPIRED:
        data["status"] = UserStatus.INACTIVE.value
    else:
        data["status"] = UserStatus.ACTIVE.value
    data["subscription"] = subscription.to_dict()
    return data


def list_users(role=None, now=None):
    now = now or utcnow()
    query = User.query
    if role:
        query = query.filter_by(role=role)
    users = query.order_by(User.created_at.desc(), User.id.desc()).all()
    return [project_user(user, now) for user in users]


def create_user(actor_id, data):
    """Create an account from already-validated ``data``."""
    email = data["email"].strip().lower()
    if User.query.filter_by(email=email).first():
        raise ConflictError("Email already exists", code="EMAIL_EXISTS")

    role = UserRole(data.get("role") or UserRole.USER.value).value
    user = User(
        email=email,
        name=data["name"].strip(),
        role=role,
        status=UserStatus.ACTIVE.value,
        is_first_login=True,
        profile_picture=data.get("profile_picture"),
        origin=data.get("origin") or "manual",
        provider=data.get("provider"),
        provider_id=data.get("provider_id"),
        created_at=utcnow(),
    )

    if role in STAFF_ROLES:
        user.subscription_end_date = staff_subscription_end()
    else:
        end = to_naive_utc(data.get("subscription_end_date"))
        if end is None:
            end = utcnow()
            logger.warning("Member %s created without a subscription end date; access starts expired", email)
        user.subscription_end_date = end

    if data.get("password"):
        user.set_password(data["password"])

    db.session.add(user)
    db.session.commit()
    logger.info("User %s created with role %s", user.email, user.role)

    record_audit(actor_id, "CREATE_USER", f"Created {user.name} ({user.role})")
    return user


def update_user(actor_id, user_id, changes):
    """Merge ``changes`` into the user, re-pinning staff subscriptions."""
    user = get_user(user_id)

    new_role = changes.get("role")
    if new_role and user.is_admin and new_role != UserRole.ADMIN.value and _admin_count() <= 1:
        raise LastAdminError("Cannot demote the last remaining administrator")

    if "email" in changes:
        email = changes["email"].strip().lower()
        existing = User.query.filter_by(email=email).first()
        if existing is not None and existing.id != user.id:
            raise ConflictError("Email already exists", code="EMAIL_EXISTS")
        user.email = email

    for field in UPDATABLE_FIELDS:
        if field in changes:
            setattr(user, field, changes[field])

    if "subscription_end_date" in changes:
        user.subscription_end_date = to_naive_utc(changes["subscription_end_date"])

    if changes.get("password"):
        user.set_password(changes["password"])

    # a role change must not leave a stale expiry on a staff account
    if user.role in STAFF_ROLES:
        user.subscription_end_date = staff_subscription_end()
        user.status = UserStatus.ACTIVE.value

    db.session.commit()

    record_audit(actor_id, "UPDATE_USER", f"Updated user ID: {user.id}")
    return user


def _release_dependents(user_id):
    """Drop the user's own rows and detach them from rows they authored."""
    WorkoutLog.query.filter_by(user_id=user_id).delete(synchronize_session="fetch")
    for model in (MonthlyRoutine, IndependentRoutine):
        model.query.filter_by(user_id=user_id).delete(synchronize_session="fetch")
        model.query.filter_by(coach_id=user_id).update({"coach_id": None}, synchronize_session="fetch")
    ExerciseMedia.query.filter_by(updated_by=user_id).update({"updated_by": None}, synchronize_session="fetch")


def delete_user(actor_id, user_id):
    """Delete a user with their routines and logs. The last remaining ADMIN can't be deleted."""
    user = get_user(user_id)
    if user.is_admin and _admin_count() <= 1:
        raise LastAdminError()

    email = user.email
    _release_dependents(user.id)
    db.session.delete(user)
    db.session.commit()
    logger.info("User %s deleted by %s", email, actor_id)

    record_audit(actor_id, "DELETE_USER", f"Deleted user ID: {user_id} ({email})")
