import enum
from datetime import datetime
from werkzeug.security import generate_password_hash, check_password_hash
from gymcloud.extensions import db

USERS_TABLE = "users"


class UserRole(str, enum.Enum):
    ADMIN = "ADMIN"
    COACH = "COACH"
    USER = "USER"


class UserStatus(str, enum.Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


STAFF_ROLES = (UserRole.ADMIN.value, UserRole.COACH.value)


class User(db.Model):
    __tablename__ = USERS_TABLE

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(120), unique=True, nullable=False, index=True)
    name = db.Column(db.String(150), nullable=False)
    password_hash = db.Column(db.String(255), nullable=True)
    role = db.Column(
        db.String(20),
        db.CheckConstraint("role IN ('ADMIN','COACH','USER')"),
        nullable=False,
        default=UserRole.USER.value,
        index=True,
    )
    # Stored value is informational only; readers use the projection in services.accounts
    status = db.Column(
        db.String(20),
        db.CheckConstraint("status IN ('ACTIVE','INACTIVE')"),
        default=UserStatus.ACTIVE.value,
    )
    subscription_end_date = db.Column(db.DateTime, nullable=True)
    is_first_login = db.Column(db.Boolean, default=True, nullable=False)
    profile_picture = db.Column(db.Text, nullable=True)

    # Social sign-up origin
    origin = db.Column(db.String(20), default="manual")
    provider = db.Column(db.String(50), nullable=True)
    provider_id = db.Column(db.String(255), nullable=True)

    # Password reset
    reset_token_hash = db.Column(db.String(64), nullable=True, index=True)
    reset_token_expires_at = db.Column(db.DateTime, nullable=True)

    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    # Helpers
    def set_password(self, password: str):
        self.password_hash = generate_password_hash(password)

    def check_password(self, password: str) -> bool:
        if not self.password_hash:
            return False
        return check_password_hash(self.password_hash, password)

    # ------- helper properties -------
    @property
    def is_admin(self):
        return self.role == UserRole.ADMIN.value

    @property
    def is_staff(self):
        return self.role in STAFF_ROLES

    def __repr__(self):
        return f"<User {self.email} ({self.role})>"
