"""
Cookie JWT authentication

Tokens are issued by the marketplace auth service; this side only verifies
them and turns the payload into an Actor (stateless, no DB query).
"""

from datetime import datetime, timedelta, timezone
from typing import Dict, Optional

from dependency_injector.wiring import Provide, inject
from fastapi import Cookie, Depends, HTTPException, status
import jwt

from src.platform.config.core_setting import settings
from src.service.farm_visit.domain.enum.user_role import UserRole
from src.service.farm_visit.domain.value_object.actor import Actor


class JwtAuth:
    def __init__(self) -> None:
        self.secret = settings.SECRET_KEY.get_secret_value()
        self.algorithm = settings.ALGORITHM
        self.token_expire_days = 7

    def create_jwt_token(self, actor: Actor) -> str:
        payload = {
            'sub': str(actor.user_id),
            'exp': datetime.now(timezone.utc) + timedelta(days=self.token_expire_days),
            'iat': datetime.now(timezone.utc),
            'user_id': actor.user_id,
            'email': actor.email,
            'role': actor.role.value,
        }

        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def decode_jwt_token(self, token: str) -> Dict:
        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.algorithm])
            return payload
        except jwt.PyJWTError:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail='Invalid token')

    def get_actor_from_jwt(self, token: Optional[str]) -> Actor:
        if not token:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED, detail='Not authenticated'
            )

        payload = self.decode_jwt_token(token)

        user_id = payload.get('user_id')
        role = payload.get('role')
        if not user_id or not role:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail='Invalid token')

        try:
            user_role = UserRole(role)
        except ValueError:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail='Invalid token')

        return Actor(user_id=int(user_id), role=user_role, email=payload.get('email'))


@inject
async def get_current_actor(
    jwt_auth: JwtAuth = Depends(Provide['jwt_auth']),
    token: Optional[str] = Cookie(None, alias=settings.AUTH_COOKIE_NAME),
) -> Actor:
    return jwt_auth.get_actor_from_jwt(token)


@inject
async def get_optional_actor(
    jwt_auth: JwtAuth = Depends(Provide['jwt_auth']),
    token: Optional[str] = Cookie(None, alias=settings.AUTH_COOKIE_NAME),
) -> Optional[Actor]:
    """Guests get None; a present but invalid cookie is still rejected."""
    if not token:
        return None
    return jwt_auth.get_actor_from_jwt(token)
