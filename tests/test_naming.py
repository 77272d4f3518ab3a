"""Unit tests for class name transforms."""

import pytest

from anyof.naming import full_name, identity, kebab_case, simple_name, snake_case
from tests.errors import UserNotFound


@pytest.mark.parametrize(
    "name, expected",
    [
        ("UserNotFound", "user-not-found"),
        ("WrongPassword", "wrong-password"),
        ("HTTPError", "http-error"),
        ("Error2FARequired", "error2-fa-required"),
        ("error", "error"),
    ],
)
def test_kebab_case(name: str, expected: str) -> None:
    assert kebab_case(name) == expected


def test_snake_case() -> None:
    assert snake_case("UserNotFound") == "user_not_found"


def test_transforms_are_deterministic() -> None:
    assert kebab_case("WrongUser") == kebab_case("WrongUser")
    assert identity("WrongUser") == "WrongUser"


def test_full_name_and_simple_name() -> None:
    assert full_name(UserNotFound) == "tests.errors.UserNotFound"
    assert simple_name(full_name(UserNotFound)) == "UserNotFound"
    assert simple_name("UserNotFound") == "UserNotFound"
