from __future__ import annotations

import hashlib
import hmac


class CredentialHasher:
    """
    Deterministic salted digest of user secrets.

    The digest is ``hex(salt + sha1(secret))``: the raw SHA-1 of the secret
    appended to the salt bytes, hex encoded. One salt is shared by the whole
    deployment, so equal secrets give equal digests and stored digests can be
    compared by equality in queries. Digests are ``2 * len(salt) + 40``
    characters long.
    """

    MAX_SALT_BYTES = 100

    def __init__(self, salt: str) -> None:
        if not salt:
            raise ValueError("Credential salt must be configured.")
        self._salt = salt.encode("utf-8")
        if len(self._salt) > self.MAX_SALT_BYTES:
            raise ValueError(f"Credential salt must be at most {self.MAX_SALT_BYTES} bytes.")

    def hash(self, secret: str) -> str:
        """
        :raises ValueError: If ``secret`` is empty or not a string.
        """
        if not isinstance(secret, str) or not secret:
            raise ValueError("Secret must be a non-empty string.")
        digest = hashlib.sha1(secret.encode("utf-8")).digest()
        return (self._salt + digest).hex()

    def verify(self, secret: str, digest: str) -> bool:
        try:
            candidate = self.hash(secret)
        except ValueError:
            return False
        return hmac.compare_digest(candidate, digest or "")
