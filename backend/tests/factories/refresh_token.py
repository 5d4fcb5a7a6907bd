"""Factory Boy definition for :class:`RefreshToken`."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import factory

from account_service.models.refresh_token import RefreshToken
from account_service.services.sessions.service import new_refresh_value
from tests.factories import BaseFactory
from tests.factories.user import UserFactory


class RefreshTokenFactory(BaseFactory):
    """
    Build persisted refresh tokens.

    ``expires_at`` defaults to a full year ahead; pass an explicit value to
    get a token that is expired or due for rotation.
    """

    class Meta:
        model = RefreshToken

    id = None
    user = factory.SubFactory(UserFactory)
    user_id = factory.SelfAttribute("user.id")
    token = factory.LazyFunction(new_refresh_value)
    expires_at = factory.LazyFunction(lambda: datetime.now(UTC) + timedelta(days=365))
    name_device = factory.Sequence(lambda n: f"device-{n}")
    device_info = None
