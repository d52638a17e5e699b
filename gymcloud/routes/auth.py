from flask import Blueprint, current_app, jsonify, request
from flask_jwt_extended import create_access_token, set_access_cookies, unset_jwt_cookies

from gymcloud.extensions import limiter
from gymcloud.schemas.user import (
    ChangePasswordSchema,
    ForgotPasswordSchema,
    LoginSchema,
    ResetPasswordSchema,
)
from gymcloud.services import auth as auth_service
from gymcloud.services.accounts import project_user
from gymcloud.services.subscription import SubscriptionState
from gymcloud.utils.decorators import login_required

auth_bp = Blueprint("auth", __name__)


def _login_limit():
    return current_app.config["LOGIN_RATE_LIMIT"]


@auth_bp.route("/login", methods=["POST"])
@limiter.limit(_login_limit)
def login_post():
    data = LoginSchema().load(request.get_json(silent=True) or {})
    user, subscription = auth_service.authenticate(data["email"], data["password"])

    access_token = create_access_token(
        identity=str(user.id),
        additional_claims={"role": user.role},
    )

    body = {
        "msg": "Login successful",
        "access_token": access_token,
        "user": project_user(user),
        "subscription": subscription.to_dict(),
        "must_change_password": bool(user.is_first_login),
    }
    if subscription.state == SubscriptionState.WARNING:
        body["notice"] = subscription.message

    response = jsonify(body)
    set_access_cookies(response, access_token)
    return response, 200


@auth_bp.route("/me", methods=["GET"])
@login_required
def me(current_user):
    return jsonify(project_user(current_user)), 200


@auth_bp.route("/forgot-password", methods=["POST"])
def forgot_password():
    data = ForgotPasswordSchema().load(request.get_json(silent=True) or {})
    token = auth_service.request_password_reset(data["email"])

    # same answer whether or not the email exists
    body = {"msg": "If the email exists, a reset link has been sent"}
    if token and current_app.config["RESET_TOKEN_IN_RESPONSE"]:
        body["reset_token"] = token
        body["expires_in"] = int(current_app.config["RESET_TOKEN_TTL"].total_seconds())
    return jsonify(body), 200


@auth_bp.route("/reset-password", methods=["POST"])
def reset_password():
    data = ResetPasswordSchema().load(request.get_json(silent=True) or {})
    auth_service.reset_password(data["token"], data["new_password"])
    return jsonify({"msg": "Password reset successfully"}), 200


@auth_bp.route("/change-password", methods=["POST"])
@login_required
def change_password(current_user):
    data = ChangePasswordSchema().load(request.get_json(silent=True) or {})
    user = auth_service.change_password(current_user, data["new_password"])
    return jsonify({"msg": "Password updated", "user": project_user(user)}), 200


@auth_bp.route("/logout", methods=["POST"])
def logout():
    response = jsonify({"msg": "Logout successful"})
    unset_jwt_cookies(response)
    return response, 200
