
"""
This submodule builds the Slack Web API client used by every other part of
the package, from a token provided explicitly or found in the environment.
"""

import os
import typing

import loguru
import slack_sdk


__author__ = "slackinvite developers"

__all__ = [
    "SLACK_TOKEN",
    "get_token",
    "login",
]


try:
    import dotenv

    if not dotenv.load_dotenv():
        dotenv.load_dotenv(dotenv.find_dotenv())

except ImportError:
    raise


logger = loguru.logger


# Get the slack token from the environment variable
# this token is called the "OAuth Access Token" and instructions to obtain it
# should be contained in this package's README.md

SLACK_TOKEN = os.getenv("SLACK_TOKEN")
"""
The OAuth token of a Slack app installed in the target workspace, with
at least the following scopes:

- ``channels:read``, ``channels:manage`` to list public channels and
  invite users to them, or remove users from them;
- ``groups:read``, ``groups:write`` to do the same for private channels
  (only required with ``--private``, and when listing the channels of a user);
- ``users:read``, ``users:read.email`` to look users up by ID and by email.

Both the "User OAuth Token" and the "Bot User OAuth Token" work, but a bot
can only act on the private channels it has been added to.
"""


def get_token(token: typing.Optional[str] = None) -> typing.Optional[str]:
    """
    Returns the token to use: :py:data:`token` if it is provided, otherwise
    the ``SLACK_TOKEN`` environment variable (possibly set by a ``.env`` file).
    """
    if token is not None and token.strip() != "":
        return token.strip()

    env_token = os.getenv("SLACK_TOKEN", SLACK_TOKEN)
    if env_token is not None and env_token.strip() != "":
        return env_token.strip()

    return


def login(
        token: typing.Optional[str] = None,
) -> slack_sdk.WebClient:
    """
    Returns a Slack Web API client authenticated with a bearer token.

    The client is created without any retry handler: each call is attempted
    exactly once, and relies on the library's default timeout.

    :param token: A valid Slack OAuth token (if none is provided,
         will try to obtain it from the environment)

    :raises PermissionError: If no non-empty token is available

    :return: A Slack Web API client
    """

    token = get_token(token=token)

    if token is None:
        raise PermissionError(
            "The `SLACK_TOKEN` variable is unset, and no `token` was provided. "
            "Cannot initialize Slack API client.")

    logger.debug("creating Slack Web API client")

    return slack_sdk.WebClient(
        token=token,
        retry_handlers=[],
    )
