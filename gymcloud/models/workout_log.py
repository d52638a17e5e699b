from datetime import datetime
from gymcloud.extensions import db


class WorkoutLog(db.Model):
    __tablename__ = "workout_logs"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    exercise_id = db.Column(db.String(150), nullable=False, index=True)
    # Monthly routine the set was logged against, if any
    routine_id = db.Column(db.Integer, nullable=True, index=True)

    # Performance metrics
    weight_used = db.Column(db.Float, default=0.0)
    weight_unit = db.Column(db.String(10), default="lb")
    reps_done = db.Column(db.Integer, default=0)
    total = db.Column(db.Float, nullable=True)
    rpe = db.Column(db.Float, nullable=True)
    notes = db.Column(db.Text, nullable=True)
    type = db.Column(db.String(20), default="routine")

    date = db.Column(db.DateTime, default=datetime.utcnow, index=True)

    user = db.relationship("User")

    __table_args__ = (
        db.Index("idx_workout_logs_user_date", "user_id", "date"),
    )

    def to_dict(self):
        return {
            "id": self.id,
            "user_id": self.user_id,
            "exercise_id": self.exercise_id,
            "routine_id": self.routine_id,
            "weight_used": self.weight_used,
            "weight_unit": self.weight_unit,
            "reps_done": self.reps_done,
            "total": self.total,
            "rpe": self.rpe,
            "notes": self.notes,
            "type": self.type,
            "date": self.date.isoformat() if self.date else None,
        }
