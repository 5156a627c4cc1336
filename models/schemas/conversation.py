from marshmallow import Schema, fields

from models.schemas.message import MessageOutSchema


class ConversationCreateSchema(Schema):
    match_id = fields.String(required=True)


class ConversationOutSchema(Schema):
    id = fields.String()
    match_id = fields.String()
    created_at = fields.DateTime()


class ConversationDetailSchema(ConversationOutSchema):
    other_user_id = fields.String()
    messages = fields.List(fields.Nested(MessageOutSchema))


class ConversationSummarySchema(ConversationOutSchema):
    other_user_id = fields.String()
    other_user_name = fields.String(allow_none=True)
    last_message = fields.String(allow_none=True)
    last_message_at = fields.DateTime(allow_none=True)
