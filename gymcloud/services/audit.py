import logging

from gymcloud.extensions import db
from gymcloud.models import AuditLog
from gymcloud.utils.clock import utcnow

logger = logging.getLogger(__name__)


def _write_entry(entry):
    db.session.add(entry)
    db.session.commit()


def record_audit(actor_id, action, details=""):
    """Append an audit entry. Failures are logged and never reach the caller."""
    try:
        entry = AuditLog(
            timestamp=utcnow(),
            user_id=int(actor_id) if actor_id is not None else None,
            action=action,
            details=details or "",
        )
        _write_entry(entry)
    except Exception:
        db.session.rollback()
        logger.exception("Could not record audit entry %s for actor %s", action, actor_id)


def list_audit(limit=None):
    """Audit entries, newest first."""
    query = AuditLog.query.order_by(AuditLog.timestamp.desc(), AuditLog.id.desc())
    if limit:
        query = query.limit(limit)
    return query.all()
