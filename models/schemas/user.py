from marshmallow import Schema, fields, pre_load, validate, EXCLUDE

# camelCase keys accepted from older web clients
_ALIASES = {"firstName": "first_name", "lastName": "last_name"}


def _norm_email(v):
    return v.strip().lower() if isinstance(v, str) else v


class RegisterSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    email = fields.Email(required=True)
    password = fields.String(required=True, load_only=True, validate=validate.Length(min=1))
    first_name = fields.String(allow_none=True, validate=validate.Length(max=120))
    last_name = fields.String(allow_none=True, validate=validate.Length(max=120))

    @pre_load
    def normalize(self, data, **kwargs):
        if not isinstance(data, dict):
            return data
        data = {_ALIASES.get(k, k): v for k, v in data.items()}
        if "email" in data:
            data["email"] = _norm_email(data["email"])
        if isinstance(data.get("password"), str):
            data["password"] = data["password"].strip()
        return data


class LoginSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    email = fields.String(required=True, validate=validate.Length(min=1))
    password = fields.String(required=True, load_only=True, validate=validate.Length(min=1))

    @pre_load
    def normalize(self, data, **kwargs):
        if isinstance(data, dict) and "email" in data:
            data = dict(data, email=_norm_email(data["email"]))
        return data
