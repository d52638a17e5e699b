import hashlib
import logging
import secrets

from flask import current_app

from gymcloud.errors import AuthenticationError, AuthorizationError, ValidationError
from gymcloud.extensions import db
from gymcloud.models import User
from gymcloud.services.accounts import current_policy
from gymcloud.services.audit import record_audit
from gymcloud.services.subscription import evaluate_subscription
from gymcloud.utils.clock import utcnow

logger = logging.getLogger(__name__)


def hash_token(token):
    return hashlib.sha256(token.encode()).hexdigest()


def validate_password(password):
    min_length = current_app.config["PASSWORD_MIN_LENGTH"]
    if len(password or "") < min_length:
        raise ValidationError(f"Password must be at least {min_length} characters", code="WEAK_PASSWORD")


def authenticate(email, password, now=None):
    """Check credentials and subscription. Returns ``(user, subscription)``.

    An EXPIRED member is refused; WARNING is returned for the caller to show.
    """
    email = (email or "").strip().lower()
    user = User.query.filter_by(email=email).first()
    if user is None or not user.check_password(password):
        logger.info("Login failed for %s", email)
        raise AuthenticationError("Invalid email or password")

    subscription = evaluate_subscription(user, now, current_policy())
    if subscription.is_expired:
        logger.info("Login refused for %s: subscription expired", email)
        raise AuthorizationError(subscription.message, code="SUBSCRIPTION_EXPIRED")

    logger.info("Login successful for %s", email)
    return user, subscription


def request_password_reset(email):
    """Issue a reset token for ``email``. Returns the raw token, or None for unknown emails."""
    email = (email or "").strip().lower()
    user = User.query.filter_by(email=email).first()
    if user is None:
        return None

    token = secrets.token_hex(32)
    user.reset_token_hash = hash_token(token)
    user.reset_token_expires_at = utcnow() + current_app.config["RESET_TOKEN_TTL"]
    db.session.commit()

    record_audit(user.id, "FORGOT_PASSWORD", f"Password reset requested for {email}")
    return token


def reset_password(token, new_password):
    validate_password(new_password)

    user = User.query.filter(
        User.reset_token_hash == hash_token(token),
        User.reset_token_expires_at > utcnow(),
    ).first()
    if user is None:
        raise AuthenticationError("Invalid or expired reset token", code="INVALID_RESET_TOKEN")

    user.set_password(new_password)
    user.is_first_login = False
    user.reset_token_hash = None
    user.reset_token_expires_at = None
    db.session.commit()

    record_audit(user.id, "RESET_PASSWORD", f"Password reset for {user.email}")
    return user


def change_password(user, new_password):
    """Set a new password for an authenticated user and end the first-login state."""
    validate_password(new_password)
    user.set_password(new_password)
    user.is_first_login = False
    db.session.commit()

    record_audit(user.id, "CHANGE_PASSWORD", f"Password changed for {user.email}")
    return user
