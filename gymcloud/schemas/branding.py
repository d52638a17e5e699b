from marshmallow import fields, validate

from gymcloud.schemas.user import BaseSchema

color = validate.Regexp(r"^#[0-9a-fA-F]{6}$", error="Must be a hex color like #eab308")


class BrandingSchema(BaseSchema):
    logo = fields.Str()
    gym_name = fields.Str(validate=validate.Length(min=1, max=150))
    primary_color = fields.Str(validate=color)
    secondary_color = fields.Str(validate=color)
    login_bg_url = fields.Str()
    welcome_text = fields.Str(validate=validate.Length(max=255))
    contact_info = fields.Str(validate=validate.Length(max=255))
