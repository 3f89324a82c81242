"""
Request signing for authenticated Abucoins endpoints.

Abucoins uses GDAX-style authentication: the signature is the base64
encoded HMAC-SHA256 of `timestamp + METHOD + path + body`, keyed with the
base64-decoded API secret.
"""

import base64
import hashlib
import hmac
import time


class AbucoinsSigner:
    """Builds authentication headers for private requests."""

    def __init__(self, key: str, secret: str, passphrase: str) -> None:
        self.key = key
        self.secret = secret
        self.passphrase = passphrase

    @property
    def has_credentials(self) -> bool:
        return bool(self.key and self.secret and self.passphrase)

    def sign(self, timestamp: str, method: str, path: str, body: str = "") -> str:
        """
        Compute the request signature.

        Args:
            timestamp: Unix time in seconds, as sent in AC-ACCESS-TIMESTAMP
            method: HTTP method
            path: Request path including the query string
            body: Serialized JSON body, empty for GET/DELETE

        Returns:
            Base64 encoded signature

        """
        message = f"{timestamp}{method.upper()}{path}{body}".encode()
        secret = base64.b64decode(self.secret)
        digest = hmac.new(secret, message, hashlib.sha256).digest()
        return base64.b64encode(digest).decode()

    def headers(
        self, method: str, path: str, body: str = "", timestamp: str | None = None
    ) -> dict[str, str]:
        """Build the AC-ACCESS-* headers of a request."""
        timestamp = timestamp or str(int(time.time()))
        return {
            "AC-ACCESS-KEY": self.key,
            "AC-ACCESS-SIGN": self.sign(timestamp, method, path, body),
            "AC-ACCESS-TIMESTAMP": timestamp,
            "AC-ACCESS-PASSPHRASE": self.passphrase,
        }
