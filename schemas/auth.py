from typing import Annotated, Optional

from pydantic import AfterValidator, Field

from models.user import ROLES, ROLE_ADMIN
from schemas.base import RawStr, RequestSchema


def _check_role(value: str) -> str:
    if value not in ROLES:
        raise ValueError(f"Role must be one of: {', '.join(ROLES)}")
    return value


Role = Annotated[str, AfterValidator(_check_role)]


class LoginRequest(RequestSchema):
    username: str = Field(min_length=1, max_length=80)
    password: RawStr = Field(min_length=1, max_length=128)


class UserCreate(RequestSchema):
    username: str = Field(min_length=3, max_length=80)
    password: RawStr = Field(min_length=8, max_length=128)
    role: Role = ROLE_ADMIN


class UserUpdate(RequestSchema):
    NOT_NULL = ("role",)

    password: Optional[RawStr] = Field(default=None, min_length=8, max_length=128)
    role: Optional[Role] = None
