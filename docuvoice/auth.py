# docuvoice/auth.py
"""
Clerk session token verification.

Clerk signs session tokens with RS256. They are verified either against the
instance JWKS endpoint or, without a network round trip, against the PEM public
key shown in the Clerk dashboard.
"""
from typing import Any, Dict, List, Optional

import jwt

from .config import settings
from .errors import UnauthorizedError
from .utils.logging import api_logger

SESSION_COOKIE = "__session"


class ClerkAuthenticator:
    def __init__(self, jwks_url: Optional[str] = None, public_key: Optional[str] = None,
                 issuer: Optional[str] = None, authorized_parties: Optional[List[str]] = None,
                 leeway: int = 5):
        self.public_key = public_key
        self.issuer = issuer
        self.authorized_parties = authorized_parties or []
        self.leeway = leeway
        self._jwks_client = jwt.PyJWKClient(jwks_url) if jwks_url and not public_key else None

    @property
    def configured(self) -> bool:
        return bool(self.public_key or self._jwks_client)

    def _signing_key(self, token: str):
        if self.public_key:
            return self.public_key
        return self._jwks_client.get_signing_key_from_jwt(token).key

    def verify(self, token: str) -> Dict[str, Any]:
        """Return the token claims, raising UnauthorizedError when the token is not acceptable"""
        if not self.configured:
            raise UnauthorizedError("Authentication is not configured")

        try:
            claims = jwt.decode(
                token,
                self._signing_key(token),
                algorithms=["RS256"],
                issuer=self.issuer,
                leeway=self.leeway,
                options={"require": ["exp", "sub"], "verify_aud": False,
                         "verify_iss": self.issuer is not None},
            )
        except jwt.PyJWTError as e:
            api_logger.warning("Rejected session token", extra={"error": str(e)})
            raise UnauthorizedError("Invalid session token") from e

        azp = claims.get("azp")
        if self.authorized_parties and azp and azp not in self.authorized_parties:
            api_logger.warning("Rejected session token from unexpected origin", extra={"azp": azp})
            raise UnauthorizedError("Invalid session token")
        return claims


def extract_token(authorization: Optional[str], session_cookie: Optional[str]) -> Optional[str]:
    """Bearer header first, then Clerk's same-origin session cookie"""
    if authorization:
        scheme, _, credentials = authorization.partition(" ")
        if scheme.lower() == "bearer" and credentials.strip():
            return credentials.strip()
    if session_cookie:
        return session_cookie
    return None


clerk_authenticator = ClerkAuthenticator(
    jwks_url=settings.CLERK_JWKS_URL,
    public_key=settings.CLERK_JWT_KEY,
    issuer=settings.CLERK_ISSUER,
    authorized_parties=settings.authorized_parties,
)
