
"""
This submodule defines the failures that can be raised when talking to the
Slack Web API, and the context manager :py:func:`translate_slack_errors`
that turns the exceptions thrown by the vendor client (and by the transport
beneath it) into those failures. Nothing above the call wrapper in
:py:mod:`slackinvite.slack.calls` should ever have to handle a vendor
exception.
"""

import contextlib
import typing

import slack_sdk.errors


__author__ = "slackinvite developers"

__all__ = [
    "HTTP_STATUS_OK",

    "SlackInviteError",
    "SlackCallFailure",
    "TransportFailure",
    "HTTPStatusFailure",
    "APILogicalFailure",
    "PaginationFailure",
    "NotFound",
    "ConfigurationFailure",

    "handle_slack_errors",
    "translate_slack_errors",
]


HTTP_STATUS_OK = 200


class SlackInviteError(Exception):

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class SlackCallFailure(SlackInviteError):
    """
    A single call to the Slack Web API did not succeed.
    """

    def __init__(self, message: str, endpoint: typing.Optional[str] = None):
        super().__init__(message)
        self.endpoint = endpoint


class TransportFailure(SlackCallFailure):
    """
    The request never produced an HTTP response (DNS, connection reset,
    TLS, timeout, ...).
    """

    def __init__(self, endpoint: str, cause: Exception):
        super().__init__(
            message="Transport failure while calling `{}`: {}".format(endpoint, cause),
            endpoint=endpoint,
        )
        self.cause = cause


class HTTPStatusFailure(SlackCallFailure):
    """
    The Slack Web API answered with a status other than ``200 OK``; the
    body is kept as-is for diagnostics.
    """

    def __init__(self, endpoint: str, status_code: int, body: typing.Any = None):
        super().__init__(
            message="Non-200 status code ({}) while calling `{}`: {}".format(
                status_code, endpoint, body),
            endpoint=endpoint,
        )
        self.status_code = status_code
        self.body = body


class APILogicalFailure(SlackCallFailure):
    """
    The Slack Web API answered ``200 OK`` but with ``{"ok": false}``; the
    remote ``error`` code is available as :py:attr:`error`.
    """

    def __init__(self, endpoint: str, error: typing.Optional[str], data: typing.Any = None):
        super().__init__(
            message="Non-ok response while calling `{}`: {}".format(endpoint, error),
            endpoint=endpoint,
        )
        self.error = error
        self.data = data


class PaginationFailure(SlackCallFailure):
    """
    One page of a paginated listing failed; the whole listing is discarded.
    The failure of that page is available as :py:attr:`cause`.
    """

    def __init__(self, endpoint: str, page: int, cause: SlackCallFailure):
        super().__init__(
            message="Failed to retrieve page {} of `{}`: {}".format(page, endpoint, cause.message),
            endpoint=endpoint,
        )
        self.page = page
        self.cause = cause


class NotFound(SlackInviteError):

    def __init__(self, kind: str, key: str):
        super().__init__("{} '{}' not found".format(kind.capitalize(), key))
        self.kind = kind
        self.key = key


class ConfigurationFailure(SlackInviteError):
    pass


def _response_details(
        response: typing.Any,
) -> typing.Tuple[int, typing.Any]:
    # a body that is not JSON comes as the raw `{"status", "headers", "body"}`
    # of the transport
    if isinstance(response, dict) and "status" in response and "body" in response:
        return response["status"], response["body"]

    # a `SlackResponse` carries both; a bare payload (as some callers and
    # mocks provide) is assumed to come with a 200
    status_code = getattr(response, "status_code", None)
    data = getattr(response, "data", response)
    return (HTTP_STATUS_OK if status_code is None else status_code), data


def handle_slack_errors(
        exc_val: Exception,
        endpoint: str,
) -> typing.Optional[SlackCallFailure]:
    """
    Returns the :py:class:`SlackCallFailure` corresponding to an exception
    thrown while calling :py:data:`endpoint`, or :py:data:`None` if the
    exception is not one that comes from the Slack client or its transport.
    """

    if isinstance(exc_val, SlackCallFailure):
        return exc_val

    if isinstance(exc_val, slack_sdk.errors.SlackApiError):
        (status_code, data) = _response_details(exc_val.response)

        if status_code != HTTP_STATUS_OK:
            return HTTPStatusFailure(
                endpoint=endpoint,
                status_code=status_code,
                body=data,
            )

        error = data.get("error") if hasattr(data, "get") else None
        return APILogicalFailure(
            endpoint=endpoint,
            error=error,
            data=data,
        )

    # `urllib.error.URLError`, `socket.timeout`, `ConnectionError`, ... are
    # all `OSError`
    if isinstance(exc_val, OSError):
        return TransportFailure(endpoint=endpoint, cause=exc_val)

    return


@contextlib.contextmanager
def translate_slack_errors(endpoint: str) -> typing.Iterator[None]:
    """
    Context manager re-raising any exception coming from the Slack client as
    the matching :py:class:`SlackCallFailure`; other exceptions propagate
    untouched.
    """
    try:
        yield
    except Exception as exc:
        failure = handle_slack_errors(exc_val=exc, endpoint=endpoint)
        if failure is None or failure is exc:
            raise
        raise failure from exc
