"""Factory Boy definitions for identities and their settings."""

from __future__ import annotations

import factory

from account_service.core.config import TestingConfig
from account_service.infra.security.credential_hasher import CredentialHasher
from account_service.models.user import User
from account_service.models.user_settings import UserSettings
from tests.factories import BaseFactory

_hasher = CredentialHasher(TestingConfig.PASSWORD_SALT)


class UserFactory(BaseFactory):
    """
    Build persisted :class:`User` instances.

    Pass ``password=...`` to choose the plaintext; the stored column always
    holds its digest.
    """

    class Meta:
        model = User
        exclude = ("password",)

    id = None  # let autoincrement handle it
    email = factory.Sequence(lambda n: f"user{n}@example.com")
    password = "Passw0rd!"
    password_hash = factory.LazyAttribute(lambda o: _hasher.hash(o.password))


class UserSettingsFactory(BaseFactory):
    """Build a settings row, creating its identity when none is given."""

    class Meta:
        model = UserSettings

    user = factory.SubFactory(UserFactory)
    user_id = factory.SelfAttribute("user.id")
    name = factory.Faker("first_name")
    icon = None
    coin = 0
    paid_subscription = False
    date_of_paid_subscription = None
