from flask import Blueprint, jsonify, request

from gymcloud.models import UserRole
from gymcloud.schemas.user import UserCreateSchema, UserSelfUpdateSchema, UserUpdateSchema
from gymcloud.services import accounts
from gymcloud.utils.decorators import login_required, roles_required

users_bp = Blueprint("users", __name__)

ADMIN = UserRole.ADMIN.value
COACH = UserRole.COACH.value


@users_bp.route("", methods=["GET"])
@roles_required(ADMIN, COACH)
def get_users(current_user):
    """List users with their derived status and subscription state"""
    role = request.args.get("role")
    if role and role not in [r.value for r in UserRole]:
        role = None
    return jsonify(accounts.list_users(role=role)), 200


@users_bp.route("", methods=["POST"])
@roles_required(ADMIN)
def create_user(current_user):
    data = UserCreateSchema().load(request.get_json(silent=True) or {})
    user = accounts.create_user(current_user.id, data)
    return jsonify({"msg": "User created successfully", "user": accounts.project_user(user)}), 201


@users_bp.route("/<int:user_id>", methods=["GET"])
@login_required
def get_user(user_id, current_user):
    if not (current_user.is_staff or current_user.id == user_id):
        return jsonify({"msg": "Unauthorized", "code": "FORBIDDEN"}), 403
    return jsonify(accounts.project_user(accounts.get_user(user_id))), 200


@users_bp.route("/<int:user_id>", methods=["PATCH"])
@login_required
def update_user(user_id, current_user):
    """Admins may change anything; members only their own name and picture"""
    payload = request.get_json(silent=True) or {}
    if current_user.is_admin:
        changes = UserUpdateSchema().load(payload)
    elif current_user.id == user_id:
        changes = UserSelfUpdateSchema().load(payload)
    else:
        return jsonify({"msg": "Unauthorized", "code": "FORBIDDEN"}), 403

    user = accounts.update_user(current_user.id, user_id, changes)
    return jsonify({"msg": "User updated successfully", "user": accounts.project_user(user)}), 200


@users_bp.route("/<int:user_id>", methods=["DELETE"])
@roles_required(ADMIN)
def delete_user(user_id, current_user):
    accounts.delete_user(current_user.id, user_id)
    return jsonify({"msg": "User deleted successfully"}), 200
