"""Authentication-related Marshmallow schemas."""

from __future__ import annotations

from marshmallow import Schema, fields, validate


class CredentialsSchema(Schema):
    """Input payload carrying an email/password pair."""

    email = fields.Email(required=True, validate=validate.Length(max=254))
    password = fields.String(required=True, validate=validate.Length(min=6, max=128))


class SignInSchema(CredentialsSchema):
    """Sign-in payload; the device fields label the new session."""

    device_name = fields.String(
        data_key="deviceName", load_default=None, validate=validate.Length(max=100)
    )
    device_info = fields.String(
        data_key="deviceInfo", load_default=None, validate=validate.Length(max=255)
    )


class RefreshTokenSchema(Schema):
    """Input payload for refresh and single-device logout."""

    refresh_token = fields.String(
        data_key="refreshToken", required=True, validate=validate.Length(min=1, max=64)
    )


class TokenPairSchema(Schema):
    """Response payload containing an access/refresh token pair."""

    access_token = fields.String(data_key="accessToken", required=True)
    refresh_token = fields.String(data_key="refreshToken", required=True)


class SessionSchema(Schema):
    """Response item describing one signed-in device."""

    id = fields.Integer(required=True)
    name_device = fields.String(data_key="deviceName", allow_none=True)
    device_info = fields.String(data_key="deviceInfo", allow_none=True)
    created_at = fields.DateTime(data_key="createdAt", allow_none=True)
    expires_at = fields.DateTime(data_key="expiresAt", required=True)
