"""User settings Marshmallow schemas."""

from __future__ import annotations

from marshmallow import Schema, ValidationError, fields, validate, validates


class SettingsUpdateSchema(Schema):
    """Input payload for editing the display name and icon."""

    name = fields.String(required=True, validate=validate.Length(min=1, max=100))
    icon = fields.String(load_default=None, allow_none=True, validate=validate.Length(max=255))

    @validates("name")
    def _name_not_blank(self, value: str, **kwargs) -> None:
        if not value.strip():
            raise ValidationError("Name must not be blank.")


class SubscriptionSchema(Schema):
    """Input payload for a subscription purchase."""

    days = fields.Integer(required=True, strict=True, validate=validate.Range(min=1, max=366))
    payment_token = fields.String(
        data_key="paymentToken", required=True, validate=validate.Length(min=1, max=255)
    )


class SettingsSchema(Schema):
    """Response payload for a settings record."""

    user_id = fields.Integer(data_key="id", required=True)
    name = fields.String(required=True)
    icon = fields.String(allow_none=True)
    coin = fields.Integer(required=True)
    date_of_registration = fields.DateTime(data_key="dateOfRegistration", allow_none=True)
    paid_subscription = fields.Boolean(data_key="paidSubscription")
    date_of_paid_subscription = fields.DateTime(data_key="dateOfPaidSubscription", allow_none=True)
