from marshmallow import Schema, fields


class SwipeCreateSchema(Schema):
    swipee_id = fields.String(required=True)
    # Parsed by the ledger: L, R, LEFT or RIGHT in any case
    direction = fields.String(required=True)


class SwipeOutSchema(Schema):
    id = fields.String()
    swiper_id = fields.String()
    swipee_id = fields.String()
    direction = fields.Method("get_direction")
    created_at = fields.DateTime()

    def get_direction(self, obj):
        return getattr(obj.direction, "value", obj.direction)
