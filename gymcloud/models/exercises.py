from datetime import datetime
from gymcloud.extensions import db


class ExerciseCategory(db.Model):
    __tablename__ = "exercise_categories"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False, unique=True, index=True)
    exercises = db.Column(db.JSON, nullable=False, default=list)  # ordered exercise names
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<ExerciseCategory {self.name}>"


class ExerciseMedia(db.Model):
    __tablename__ = "exercise_media"

    id = db.Column(db.Integer, primary_key=True)
    exercise_name = db.Column(db.String(150), nullable=False, unique=True, index=True)
    url = db.Column(db.Text, nullable=False)
    updated_by = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<ExerciseMedia {self.exercise_name}>"
