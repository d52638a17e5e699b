# models/settings.py
from datetime import datetime
from gymcloud.extensions import db

BRANDING_FIELDS = (
    "logo",
    "gym_name",
    "primary_color",
    "secondary_color",
    "login_bg_url",
    "welcome_text",
    "contact_info",
)


class BrandingSettings(db.Model):
    __tablename__ = "branding_settings"

    id = db.Column(db.Integer, primary_key=True)

    logo = db.Column(db.Text)
    gym_name = db.Column(db.String(150))
    primary_color = db.Column(db.String(20))
    secondary_color = db.Column(db.String(20))
    login_bg_url = db.Column(db.Text)
    welcome_text = db.Column(db.String(255))
    contact_info = db.Column(db.String(255))

    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_dict(self):
        return {field: getattr(self, field) for field in BRANDING_FIELDS}
