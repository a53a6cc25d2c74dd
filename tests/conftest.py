
import typing

import loguru
import pytest

import slackinvite.cli.helpers

from slack_fakes import FakeSlackApi
from slack_server import SlackServer


@pytest.fixture
def fake_api() -> FakeSlackApi:
    return FakeSlackApi()


@pytest.fixture
def slack_server() -> typing.Iterator[SlackServer]:
    server = SlackServer().start()
    yield server
    server.stop()


@pytest.fixture
def log_messages() -> typing.Iterator[typing.List[str]]:
    messages = []
    handler_id = loguru.logger.add(
        lambda message: messages.append(str(message)),
        level="DEBUG",
        format="{message}",
    )
    yield messages
    loguru.logger.remove(handler_id)


@pytest.fixture
def reset_cli_logging() -> typing.Iterator[None]:
    yield
    if slackinvite.cli.helpers._log_handler_id is not None:
        loguru.logger.remove(slackinvite.cli.helpers._log_handler_id)
        slackinvite.cli.helpers._log_handler_id = None
