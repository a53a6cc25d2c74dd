
"""
This submodule provides the small, immutable records manipulated by the
rest of the package: Slack channels, Slack users, and the references to
users that are provided on the command line.

A user reference is classified exactly once, when it is read: a token
containing an ``@`` is an :py:class:`EmailReference`, anything else is a
:py:class:`UserIdReference`. The resolution of a reference then only
depends on its type.
"""

import typing


__author__ = "slackinvite developers"

__all__ = [
    "Channel",
    "User",

    "EmailReference",
    "UserIdReference",
    "UserReference",

    "to_channel",
    "to_user",
    "to_user_reference",
    "to_user_references",
]


_EMAIL_MARKER = "@"


class Channel(typing.NamedTuple):
    """
    A snapshot of a Slack channel (public or private), as listed by
    ``conversations.list``.
    """

    id: str
    name: str


class User(typing.NamedTuple):
    """
    A snapshot of a Slack user, as returned by ``users.info`` or
    ``users.lookupByEmail``.
    """

    id: str
    name: str = ""
    real_name: str = ""


class EmailReference(typing.NamedTuple):
    email: str


class UserIdReference(typing.NamedTuple):
    user_id: str


UserReference = typing.Union[EmailReference, UserIdReference]


def to_channel(data: typing.Dict[str, typing.Any]) -> Channel:
    return Channel(
        id=data.get("id", ""),
        name=data.get("name", ""),
    )


def to_user(data: typing.Dict[str, typing.Any]) -> User:
    # `real_name` is sometimes only provided in the profile
    real_name = data.get("real_name")
    if real_name is None:
        real_name = data.get("profile", dict()).get("real_name", "")

    return User(
        id=data.get("id", ""),
        name=data.get("name", ""),
        real_name=real_name,
    )


def to_user_reference(token: str) -> UserReference:
    """
    Classifies a token provided by the user as either an email address
    (if it contains an ``@``) or a Slack user ID.
    """
    token = token.strip()
    if _EMAIL_MARKER in token:
        return EmailReference(email=token)
    return UserIdReference(user_id=token)


def to_user_references(tokens: typing.Iterable[str]) -> typing.List[UserReference]:
    return list(map(to_user_reference, tokens))
