from account_service.models.refresh_token import RefreshToken
from account_service.models.user import User
from account_service.models.user_settings import UserSettings

__all__ = [
    "RefreshToken",
    "User",
    "UserSettings",
]
