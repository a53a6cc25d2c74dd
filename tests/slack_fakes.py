
"""
Fakes standing in for the Slack Web API in tests.
"""

import typing
import unittest.mock

import slack_sdk
import slack_sdk.errors
import slack_sdk.web


class FakeSlackApi:
    """
    Scripted stand-in for the Slack Web API: each endpoint is answered by a
    handler receiving the arguments of the call, and every call is recorded.
    """

    def __init__(self):
        self.handlers: typing.Dict[str, typing.Callable[[dict], dict]] = dict()
        self.calls: typing.List[typing.Tuple[str, str, dict]] = []

        self.client = unittest.mock.MagicMock(spec=slack_sdk.WebClient)
        self.client.api_call.side_effect = self._api_call

    def _api_call(self, api_method, http_verb="POST", params=None, json=None, **kwargs):
        arguments = dict(params if params is not None else (json or dict()))
        self.calls.append((api_method, http_verb, arguments))
        return self.handlers[api_method](arguments)

    def on(self, endpoint: str, handler: typing.Callable[[dict], dict]) -> "FakeSlackApi":
        self.handlers[endpoint] = handler
        return self

    def calls_to(self, endpoint: str) -> typing.List[dict]:
        return [
            arguments
            for (api_method, _, arguments) in self.calls
            if api_method == endpoint
        ]


def slack_api_error(
        error: str = "internal_error",
        status_code: int = 200,
        body: typing.Optional[dict] = None,
) -> slack_sdk.errors.SlackApiError:
    response = slack_sdk.web.SlackResponse(
        client=None,
        http_verb="GET",
        api_url="https://slack.com/api/test",
        req_args={},
        data=body if body is not None else {"ok": False, "error": error},
        headers={},
        status_code=status_code,
    )
    return slack_sdk.errors.SlackApiError(
        message="The request to the Slack API failed.",
        response=response,
    )


def paged(field: str, pages: typing.List[list]) -> typing.Callable[[dict], dict]:
    """
    Handler for a cursor-paginated listing serving :py:data:`pages` in order.
    """

    def _handler(arguments: dict) -> dict:
        cursor = arguments.get("cursor", "")
        index = 0 if cursor == "" else int(cursor.split("-")[1])
        next_cursor = "page-{}".format(index + 1) if index + 1 < len(pages) else ""
        return {
            "ok": True,
            field: pages[index],
            "response_metadata": {"next_cursor": next_cursor},
        }

    return _handler


def failing(error: str = "internal_error", status_code: int = 200) -> typing.Callable[[dict], dict]:

    def _handler(arguments: dict) -> dict:
        raise slack_api_error(error=error, status_code=status_code)

    return _handler


def channel(name: str, id: str) -> dict:
    return {"id": id, "name": name}


def user(id: str, name: str = "", real_name: str = "") -> dict:
    return {
        "id": id,
        "name": name or id.lower(),
        "real_name": real_name or "User {}".format(id),
    }


def users_by_email(directory: typing.Dict[str, str]) -> typing.Callable[[dict], dict]:

    def _handler(arguments: dict) -> dict:
        if arguments["email"] not in directory:
            raise slack_api_error("users_not_found")
        return {"ok": True, "user": user(directory[arguments["email"]])}

    return _handler


def users_by_id(known_ids: typing.Iterable[str]) -> typing.Callable[[dict], dict]:
    known_ids = set(known_ids)

    def _handler(arguments: dict) -> dict:
        if arguments["user"] not in known_ids:
            raise slack_api_error("user_not_found")
        return {"ok": True, "user": user(arguments["user"])}

    return _handler


def ok(arguments: dict) -> dict:
    return {"ok": True}
