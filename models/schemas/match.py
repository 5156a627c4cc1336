from marshmallow import Schema, fields


class MatchCreateSchema(Schema):
    user1_id = fields.String(required=True)
    user2_id = fields.String(required=True)


class MatchUpdateSchema(Schema):
    notes = fields.String(allow_none=True)
    archived = fields.Boolean()


def participant_summary(user):
    profile = user.profile if user else None
    return {
        "id": user.id if user else None,
        "email": user.email if user else None,
        "name": getattr(profile, "name", None),
        "age": getattr(profile, "age", None),
        "bio": getattr(profile, "bio", None),
        "gender": getattr(profile, "gender", None),
    }


class MatchOutSchema(Schema):
    id = fields.String()
    created_at = fields.DateTime()
    notes = fields.String(allow_none=True)
    archived = fields.Boolean()
    user1 = fields.Method("get_user1")
    user2 = fields.Method("get_user2")

    def get_user1(self, obj):
        return participant_summary(obj.user1)

    def get_user2(self, obj):
        return participant_summary(obj.user2)
