from flask import current_app

from gymcloud.extensions import db
from gymcloud.models import BrandingSettings
from gymcloud.models.settings import BRANDING_FIELDS
from gymcloud.services.audit import record_audit


def get_branding():
    """Saved branding over the configured defaults."""
    branding = dict(current_app.config["DEFAULT_BRANDING"])
    settings = BrandingSettings.query.first()
    if settings is not None:
        branding.update({key: value for key, value in settings.to_dict().items() if value is not None})
    return branding


def update_branding(actor_id, changes):
    settings = BrandingSettings.query.first()
    if settings is None:
        settings = BrandingSettings()
        db.session.add(settings)
    for field in BRANDING_FIELDS:
        if field in changes:
            setattr(settings, field, changes[field])
    db.session.commit()

    record_audit(actor_id, "UPDATE_BRANDING", ", ".join(sorted(changes)) or "no changes")
    return get_branding()
