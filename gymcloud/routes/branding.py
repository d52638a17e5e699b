from flask import Blueprint, jsonify, request

from gymcloud.models import UserRole
from gymcloud.schemas.branding import BrandingSchema
from gymcloud.services import branding
from gymcloud.utils.decorators import roles_required

branding_bp = Blueprint("branding", __name__)


@branding_bp.route("", methods=["GET"])
def get_branding():
    # public: the login screen renders with it
    return jsonify(branding.get_branding()), 200


@branding_bp.route("", methods=["PUT"])
@roles_required(UserRole.ADMIN.value)
def update_branding(current_user):
    changes = BrandingSchema().load(request.get_json(silent=True) or {})
    return jsonify(branding.update_branding(current_user.id, changes)), 200
