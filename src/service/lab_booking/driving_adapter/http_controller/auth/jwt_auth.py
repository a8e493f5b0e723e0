"""
Session cookie handling

The browser session is a signed JWT in an http-only cookie. The token carries
the SessionUser claims, so reading the session needs no database query.
"""

from datetime import datetime, timedelta, timezone
from typing import Dict, Optional

from fastapi import Response
import jwt

from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import NotAuthenticatedError
from src.service.lab_booking.domain.session import SessionUser


class JwtAuth:
    def __init__(self) -> None:
        self.secret = settings.SECRET_KEY.get_secret_value()
        self.algorithm = settings.ALGORITHM
        self.token_expire_days = settings.SESSION_EXPIRE_DAYS
        self.cookie_name = settings.SESSION_COOKIE_NAME

    def create_jwt_token(self, session_user: SessionUser) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            **session_user.to_claims(),
            'exp': now + timedelta(days=self.token_expire_days),
            'iat': now,
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def decode_jwt_token(self, token: str) -> Dict:
        try:
            return jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except jwt.PyJWTError as e:
            raise NotAuthenticatedError('Invalid or expired session') from e

    def get_session_user(self, token: Optional[str]) -> SessionUser:
        if not token:
            raise NotAuthenticatedError()

        payload = self.decode_jwt_token(token)
        try:
            return SessionUser.from_claims(payload)
        except (KeyError, ValueError) as e:
            raise NotAuthenticatedError('Invalid session') from e

    def start_session(self, response: Response, session_user: SessionUser) -> None:
        response.set_cookie(
            key=self.cookie_name,
            value=self.create_jwt_token(session_user),
            max_age=self.token_expire_days * 24 * 60 * 60,
            httponly=True,
            samesite='lax',
            secure=False,  # Set to True in production
        )

    def end_session(self, response: Response) -> None:
        response.delete_cookie(key=self.cookie_name, httponly=True, samesite='lax')
