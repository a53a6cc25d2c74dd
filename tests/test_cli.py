
import json

import click.testing
import pytest

import slackinvite.cli.__main__
import slackinvite.slack.clients

from slack_fakes import channel, failing, ok, paged, users_by_email, users_by_id


pytestmark = pytest.mark.usefixtures("reset_cli_logging")


@pytest.fixture
def runner():
    return click.testing.CliRunner()


@pytest.fixture
def logged_in(fake_api, monkeypatch):
    monkeypatch.setattr(
        slackinvite.slack.clients,
        "login",
        lambda token=None: fake_api.client,
    )
    return fake_api


def _invoke(runner, *args):
    return runner.invoke(
        slackinvite.cli.__main__.cli,
        ["--token", "xoxp-test"] + list(args),
    )


def test_add_users_to_two_channels(runner, logged_in):
    logged_in.on("conversations.list", paged("channels", [
        [channel("general", "C1")],
        [channel("random", "C2")],
    ]))
    logged_in.on("users.lookupByEmail", users_by_email({"a@x.com": "U1", "b@x.com": "U2"}))
    logged_in.on("conversations.invite", ok)

    result = _invoke(runner, "--action", "add", "--emails", "a@x.com,b@x.com", "--channels", "general,random")

    assert result.exit_code == 0, result.output
    assert logged_in.calls_to("conversations.invite") == [
        {"channel": "C1", "users": "U1,U2"},
        {"channel": "C2", "users": "U1,U2"},
    ]
    assert "All done!" in result.output


def test_remove_users(runner, logged_in):
    logged_in.on("conversations.list", paged("channels", [[channel("general", "C1")]]))
    logged_in.on("users.info", users_by_id(["U1", "U2"]))
    logged_in.on("conversations.kick", ok)

    result = _invoke(runner, "--action", "remove", "--emails", "U1,U2", "--channels", "general")

    assert result.exit_code == 0, result.output
    assert logged_in.calls_to("conversations.kick") == [
        {"channel": "C1", "user": "U1"},
        {"channel": "C1", "user": "U2"},
    ]


def test_unknown_channel_is_skipped(runner, logged_in, log_messages):
    logged_in.on("conversations.list", paged("channels", [
        [channel("general", "C1")],
        [channel("random", "C2")],
    ]))
    logged_in.on("users.lookupByEmail", users_by_email({"a@x.com": "U1"}))
    logged_in.on("conversations.invite", ok)

    result = _invoke(runner, "--emails", "a@x.com", "--channels", "general,nope,random")

    assert result.exit_code == 0, result.output
    assert [arguments["channel"] for arguments in logged_in.calls_to("conversations.invite")] == ["C1", "C2"]
    assert any("Channel 'nope' not found -- skipping" in message for message in log_messages)
    assert "All done!" in result.output


def test_no_resolved_users_aborts(runner, logged_in):
    logged_in.on("users.lookupByEmail", users_by_email({}))
    logged_in.on("conversations.invite", ok)

    result = _invoke(runner, "--emails", "nobody@x.com", "--channels", "general")

    assert result.exit_code != 0
    assert "No users found" in result.output
    assert logged_in.calls_to("conversations.invite") == []
    assert logged_in.calls_to("conversations.list") == []


def test_missing_token_is_a_usage_error(runner, fake_api, monkeypatch):
    monkeypatch.delenv("SLACK_TOKEN", raising=False)
    monkeypatch.setattr(slackinvite.slack.clients, "SLACK_TOKEN", None)

    result = runner.invoke(
        slackinvite.cli.__main__.cli,
        ["--emails", "a@x.com", "--channels", "general"],
    )

    assert result.exit_code != 0
    assert "Usage:" in result.output
    assert fake_api.calls == []


@pytest.mark.parametrize("args", [
    ["--emails", "a@x.com"],
    ["--channels", "general"],
    ["--action", "remove"],
    ["--emails", " , ", "--channels", "general"],
])
def test_incomplete_arguments_are_a_usage_error(runner, logged_in, args):
    result = _invoke(runner, *args)

    assert result.exit_code != 0
    assert "Usage:" in result.output
    assert logged_in.calls == []


def test_invalid_action_is_a_usage_error(runner, logged_in):
    result = _invoke(runner, "--action", "promote", "--emails", "a@x.com", "--channels", "general")

    assert result.exit_code != 0
    assert logged_in.calls == []


def test_list_channels_sorted_by_name(runner, logged_in):
    logged_in.on("conversations.list", paged("channels", [
        [channel("zeta", "C1"), channel("alpha", "C2")],
        [channel("mu", "C3")],
    ]))

    result = _invoke(runner, "--list")

    assert result.exit_code == 0, result.output
    assert "alpha,mu,zeta" in result.stdout
    rows = [line for line in result.stdout.splitlines() if "-->" in line]
    assert [row.split()[1] for row in rows] == ["alpha", "mu", "zeta"]
    assert logged_in.calls_to("conversations.list")[0]["types"] == "public_channel"


def test_list_action_is_list_mode(runner, logged_in):
    logged_in.on("conversations.list", paged("channels", [[channel("general", "C1")]]))

    result = _invoke(runner, "--action", "list", "--private", "--format", "json")

    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout) == [{"name": "general", "id": "C1"}]
    assert logged_in.calls_to("conversations.list")[0]["types"] == "private_channel,public_channel"


def test_list_channel_members(runner, logged_in):
    logged_in.on("conversations.list", paged("channels", [[channel("general", "C1")]]))
    logged_in.on("conversations.members", paged("members", [["U1"], ["U2"]]))
    logged_in.on("users.info", users_by_id(["U1", "U2"]))

    result = _invoke(runner, "--list", "--channels", "general,nope")

    assert result.exit_code == 0, result.output
    assert "Users of channel general (C1):" in result.stdout
    assert "User U1" in result.stdout
    assert "U1,U2" in result.stdout
    assert logged_in.calls_to("conversations.invite") == []


def test_list_user_channels(runner, logged_in):
    logged_in.on("users.lookupByEmail", users_by_email({"a@x.com": "U1"}))
    logged_in.on("conversations.list", paged("channels", [[channel("zeta", "C1"), channel("alpha", "C2")]]))
    logged_in.on("conversations.members", lambda arguments: {
        "ok": True,
        "members": ["U1"],
        "response_metadata": {"next_cursor": ""},
    })

    result = _invoke(runner, "--list", "--emails", "a@x.com", "--channels", "ignored")

    assert result.exit_code == 0, result.output
    assert "User U1 is part of the following channels:" in result.stdout
    assert result.stdout.index("alpha") < result.stdout.index("zeta")


def test_list_user_channels_without_resolved_users_is_not_fatal(runner, logged_in):
    logged_in.on("users.lookupByEmail", users_by_email({}))

    result = _invoke(runner, "--list", "--emails", "nobody@x.com")

    assert result.exit_code == 0, result.output
    assert logged_in.calls_to("conversations.list") == []


def test_channel_listing_failure_terminates(runner, logged_in):
    logged_in.on("users.lookupByEmail", users_by_email({"a@x.com": "U1"}))
    logged_in.on("conversations.list", failing("invalid_auth", status_code=401))

    result = _invoke(runner, "--emails", "a@x.com", "--channels", "general")

    assert result.exit_code == 1
    assert "ERROR" in result.output
    assert "401" in result.output


def test_dry_run_does_not_invite(runner, logged_in):
    logged_in.on("conversations.list", paged("channels", [[channel("general", "C1")]]))
    logged_in.on("users.lookupByEmail", users_by_email({"a@x.com": "U1"}))

    result = _invoke(runner, "--dry-run", "--emails", "a@x.com", "--channels", "general")

    assert result.exit_code == 0, result.output
    assert logged_in.calls_to("conversations.invite") == []


def test_list_channels_as_csv(runner, logged_in):
    logged_in.on("conversations.list", paged("channels", [[channel("zeta", "C1"), channel("alpha", "C2")]]))

    result = _invoke(runner, "--list", "--format", "csv")

    assert result.exit_code == 0, result.output
    assert "name,id\nalpha,C2\nzeta,C1\n" in result.stdout.replace("\r\n", "\n")


@pytest.mark.parametrize("debug", [False, True])
def test_page_counts_are_logged_only_with_debug(runner, logged_in, debug):
    logged_in.on("conversations.list", paged("channels", [[channel("general", "C1")], [channel("random", "C2")]]))

    result = _invoke(runner, "--list", *(["--debug"] if debug else []))

    assert result.exit_code == 0, result.output
    assert ("# of items returned in page" in result.output) == debug


def test_arguments_from_environment(runner, logged_in):
    logged_in.on("conversations.list", paged("channels", [[channel("general", "C1"), channel("random", "C2")]]))
    logged_in.on("users.lookupByEmail", users_by_email({"a@x.com": "U1", "b@x.com": "U2"}))
    logged_in.on("conversations.invite", ok)

    result = runner.invoke(
        slackinvite.cli.__main__.cli,
        ["--token", "xoxp-test"],
        env={
            "SLACKINVITE_ACTION": "add",
            "SLACKINVITE_EMAILS": "a@x.com,b@x.com",
            "SLACKINVITE_CHANNELS": "random",
        },
    )

    assert result.exit_code == 0, result.output
    assert logged_in.calls_to("conversations.invite") == [{"channel": "C2", "users": "U1,U2"}]
