
"""
This submodule is the only place where requests are actually sent to the
Slack Web API. :py:func:`api_call` issues one authenticated request to one of
a fixed set of endpoints, and either returns the decoded JSON payload of a
successful response, or raises one of the failures of
:py:mod:`slackinvite.slack.exceptions`:

- :py:exc:`TransportFailure` if no HTTP response was received;
- :py:exc:`HTTPStatusFailure` if the status code is not ``200 OK``;
- :py:exc:`APILogicalFailure` if the payload has ``"ok": false``.

There are no retries: a call is attempted exactly once.

:py:class:`slack_sdk.WebClient` sends every method as a ``POST`` (Slack
accepts it for all of them), whatever the verb it is given: arguments
passed as ``params`` go out form-encoded, and arguments passed as ``json``
go out as a JSON body.
"""

import typing

import loguru
import slack_sdk

import slackinvite.slack.exceptions


__author__ = "slackinvite developers"

__all__ = [
    "CONVERSATIONS_INVITE",
    "CONVERSATIONS_KICK",
    "CONVERSATIONS_LIST",
    "CONVERSATIONS_MEMBERS",
    "USERS_LOOKUP_BY_EMAIL",
    "USERS_INFO",
    "ENDPOINT_HTTP_METHODS",

    "api_call",
]


# https://api.slack.com/methods
CONVERSATIONS_INVITE = "conversations.invite"
CONVERSATIONS_KICK = "conversations.kick"
CONVERSATIONS_LIST = "conversations.list"
CONVERSATIONS_MEMBERS = "conversations.members"
USERS_LOOKUP_BY_EMAIL = "users.lookupByEmail"
USERS_INFO = "users.info"

ENDPOINT_HTTP_METHODS: typing.Dict[str, str] = {
    CONVERSATIONS_LIST: "GET",
    CONVERSATIONS_MEMBERS: "GET",
    USERS_LOOKUP_BY_EMAIL: "GET",
    USERS_INFO: "GET",
    CONVERSATIONS_INVITE: "POST",
    CONVERSATIONS_KICK: "POST",
}
"""
The endpoints this package is allowed to call, with their HTTP method.
The method only selects how the arguments are encoded: read-only
endpoints receive them form-encoded, and the endpoints that modify
membership receive a JSON body. The request itself is always a ``POST``.
"""


logger = loguru.logger


def api_call(
        client: slack_sdk.WebClient,
        endpoint: str,
        arguments: typing.Optional[typing.Dict[str, typing.Any]] = None,
) -> typing.Dict[str, typing.Any]:
    """
    Calls the Slack Web API method :py:data:`endpoint` with the provided
    :py:data:`arguments`, and returns the decoded payload.

    :param client: A Slack Web API client (see
        :py:func:`slackinvite.slack.clients.login`)

    :param endpoint: One of the keys of :py:data:`ENDPOINT_HTTP_METHODS`

    :param arguments: The arguments of the method, sent form-encoded for
        ``GET`` endpoints and as a JSON body for ``POST`` endpoints

    :raises ValueError: If :py:data:`endpoint` is not a known endpoint

    :raises slackinvite.slack.exceptions.SlackCallFailure: If the call
        did not succeed

    :return: The decoded JSON payload of the response
    """

    http_verb = ENDPOINT_HTTP_METHODS.get(endpoint)
    if http_verb is None:
        raise ValueError("Unknown Slack API endpoint `{}`".format(endpoint))

    arguments = dict(arguments or dict())

    request_args = {"params": arguments} if http_verb == "GET" else {"json": arguments}

    logger.trace("{} {} {}", http_verb, endpoint, arguments)

    with slackinvite.slack.exceptions.translate_slack_errors(endpoint=endpoint):
        response = client.api_call(
            api_method=endpoint,
            http_verb=http_verb,
            **request_args
        )

    # `WebClient` validates a `SlackResponse`, but not a bare payload
    status_code = getattr(response, "status_code", None)
    data = getattr(response, "data", response)

    if status_code is not None and status_code != slackinvite.slack.exceptions.HTTP_STATUS_OK:
        raise slackinvite.slack.exceptions.HTTPStatusFailure(
            endpoint=endpoint,
            status_code=status_code,
            body=data,
        )

    if not isinstance(data, dict) or not data.get("ok", False):
        raise slackinvite.slack.exceptions.APILogicalFailure(
            endpoint=endpoint,
            error=data.get("error") if isinstance(data, dict) else None,
            data=data,
        )

    return data
