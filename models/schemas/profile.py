from marshmallow import Schema, fields, validate, EXCLUDE


class ProfileCreateSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    name = fields.String(allow_none=True, validate=lambda s: s is None or 0 < len(s.strip()) <= 255)
    age = fields.Integer(allow_none=True, validate=validate.Range(min=18, max=120))
    bio = fields.String(allow_none=True)
    gender = fields.String(allow_none=True, validate=validate.OneOf(["M", "F"]))
    looking_for = fields.String(allow_none=True, validate=validate.OneOf(["M", "F", "A"]))
    latitude = fields.Float(allow_none=True, validate=validate.Range(min=-90, max=90))
    longitude = fields.Float(allow_none=True, validate=validate.Range(min=-180, max=180))
    profile_image = fields.String(allow_none=True, validate=validate.Length(max=512))


class ProfileUpdateSchema(ProfileCreateSchema):
    pass


class ProfileOutSchema(Schema):
    id = fields.String()
    user_id = fields.String()
    name = fields.String(allow_none=True)
    age = fields.Integer(allow_none=True)
    bio = fields.String(allow_none=True)
    gender = fields.String(allow_none=True)
    looking_for = fields.String(allow_none=True)
    latitude = fields.Float(allow_none=True)
    longitude = fields.Float(allow_none=True)
    profile_image = fields.String(allow_none=True)
    created_at = fields.DateTime()
    updated_at = fields.DateTime()
