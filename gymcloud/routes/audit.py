import csv
import io

from flask import Blueprint, current_app, jsonify, request, send_file

from gymcloud.models import UserRole
from gymcloud.services.audit import list_audit
from gymcloud.utils.clock import utcnow
from gymcloud.utils.decorators import roles_required

audit_bp = Blueprint("audit", __name__)

ADMIN = UserRole.ADMIN.value


@audit_bp.route("", methods=["GET"])
@roles_required(ADMIN)
def get_audit_logs(current_user):
    """Audit trail, newest first"""
    limit = request.args.get("limit", current_app.config["AUDIT_PAGE_SIZE"], type=int)
    return jsonify([entry.to_dict() for entry in list_audit(limit)]), 200


@audit_bp.route("/export", methods=["GET"])
@roles_required(ADMIN)
def export_logs(current_user):
    logs = list_audit(current_app.config["AUDIT_EXPORT_LIMIT"])

    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(["User ID", "Action", "Timestamp", "Details"])

    for log in logs:
        writer.writerow([
            log.user_id or "N/A",
            log.action,
            log.timestamp.strftime("%Y-%m-%d %H:%M:%S"),
            log.details or ""
        ])

    output.seek(0)

    return send_file(
        io.BytesIO(output.getvalue().encode()),
        mimetype="text/csv",
        as_attachment=True,
        download_name=f"audit_logs_{utcnow().strftime('%Y%m%d_%H%M%S')}.csv"
    )
