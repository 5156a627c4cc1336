from marshmallow import Schema, fields


class MessageCreateSchema(Schema):
    # Blank-after-trim is rejected by the message store
    content = fields.String(required=True)


class MessageUpdateSchema(MessageCreateSchema):
    pass


class MessageOutSchema(Schema):
    id = fields.String()
    conversation_id = fields.String(allow_none=True)
    sender_id = fields.String()
    sender_name = fields.String(allow_none=True)
    content = fields.String()
    created_at = fields.DateTime()
    updated_at = fields.DateTime()
