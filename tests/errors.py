"""Error variants shared by the test suites."""

from fastapi import status
from pydantic import BaseModel, Field

from anyof.anyof import AnyOf
from anyof.discriminator import add_discriminator
from anyof.naming import kebab_case


class UserNotFound(BaseModel):
    """Unable to find user"""

    name: str


class WrongPassword(BaseModel):
    """Password is invalid"""

    id: str


class WrongUser(BaseModel):
    """Username is invalid"""

    id: str


class Unrelated(BaseModel):
    id: str


type UserError = UserNotFound | WrongPassword | WrongUser

user_error_schema = add_discriminator(UserError, "error", kebab_case)

any_of = AnyOf(user_error_schema)

STATUS_CODES = {
    UserNotFound: status.HTTP_404_NOT_FOUND,
    WrongPassword: status.HTTP_403_FORBIDDEN,
    WrongUser: status.HTTP_403_FORBIDDEN,
}


class SessionExpired(BaseModel):
    """Session has expired"""

    user: str
    token: str = Field(exclude=True)


session_error_schema = add_discriminator(SessionExpired | WrongUser, "error", kebab_case)
