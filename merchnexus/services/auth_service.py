import datetime as dt
import uuid

from fastapi import HTTPException, status, Depends
from fastapi.security import OAuth2PasswordBearer
from jose import jwt, JWTError

from merchnexus.config import config

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/token", auto_error=True)


class AuthService:
    """
    Resolves the caller's identity from a bearer token.

    Tokens are issued by the external identity provider; this service only
    reads the subject claim. Whether the caller may touch a given row is
    decided by the services that own that row.
    """

    @staticmethod
    def _make_jwt(sub: str, scope: str, ttl: dt.timedelta) -> str:
        now = dt.datetime.now(dt.timezone.utc)
        payload = {
            "iss": "merchnexus-auth",
            "sub": sub,
            "scope": scope,
            "iat": int(now.timestamp()),
            "exp": int((now + ttl).timestamp()),
            "jti": str(uuid.uuid4()),
        }
        return jwt.encode(payload, config.JWT_SECRET, algorithm=config.JWT_ALG)

    @classmethod
    def mint_access(cls, user_id: str) -> str:
        return cls._make_jwt(user_id, "access", dt.timedelta(minutes=config.ACCESS_TTL_MIN))

    @classmethod
    def verify_token(cls, token: str) -> uuid.UUID:
        try:
            payload = jwt.decode(token, config.JWT_SECRET, algorithms=[config.JWT_ALG])
        except JWTError:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token.")

        if payload.get("scope") != "access":
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token scope.")

        try:
            return uuid.UUID(payload["sub"])
        except (KeyError, TypeError, ValueError):
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid subject claim.")

    @classmethod
    async def get_current_user_id(cls, token: str = Depends(oauth2_scheme)) -> uuid.UUID:
        return cls.verify_token(token)
