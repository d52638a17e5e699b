import enum
from datetime import datetime
from gymcloud.extensions import db


class RoutineStatus(str, enum.Enum):
    ACTIVE = "ACTIVE"
    ARCHIVED = "ARCHIVED"


class RoutineColumns:
    """Columns shared by every routine namespace."""

    id = db.Column(db.Integer, primary_key=True)
    month = db.Column(db.Integer, nullable=False)
    year = db.Column(db.Integer, nullable=False)
    status = db.Column(
        db.String(20),
        default=RoutineStatus.ACTIVE.value,
        nullable=False,
        index=True,
    )
    # weeks -> days -> exercises, kept in order
    weeks = db.Column(db.JSON, nullable=False, default=list)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, index=True)

    @property
    def is_active(self):
        return self.status == RoutineStatus.ACTIVE.value

    def exercise_ids(self):
        """Every exercise identifier assigned anywhere in the routine."""
        ids = set()
        for week in self.weeks or []:
            for day in (week or {}).get("days", []):
                for exercise in (day or {}).get("exercises", []):
                    if isinstance(exercise, dict):
                        ex_id = exercise.get("id") or exercise.get("name")
                    else:
                        ex_id = exercise
                    if ex_id:
                        ids.add(str(ex_id))
        return ids


class MonthlyRoutine(RoutineColumns, db.Model):
    """Routine assigned to a member by a coach or admin."""

    __tablename__ = "routines"

    user_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    # author; nulled when the coach account is deleted
    coach_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)

    user = db.relationship("User", foreign_keys=[user_id])
    coach = db.relationship("User", foreign_keys=[coach_id])

    __table_args__ = (
        db.Index("idx_routines_user_status", "user_id", "status"),
    )


class IndependentRoutine(RoutineColumns, db.Model):
    """Self-managed routine; owner and author are the same member."""

    __tablename__ = "independent_routines"

    user_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    coach_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    title = db.Column(db.String(150), nullable=True)

    user = db.relationship("User", foreign_keys=[user_id])

    __table_args__ = (
        db.Index("idx_independent_routines_user_status", "user_id", "status"),
    )
