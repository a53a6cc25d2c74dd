
import sys
import typing

import click
import click_spinner
import loguru
import slack_sdk

import slackinvite.cli.helpers
import slackinvite.cli.output
import slackinvite.helpers.collections
import slackinvite.macros.manage
import slackinvite.macros.report
import slackinvite.macros.resolve
import slackinvite.slack.classes
import slackinvite.slack.clients
import slackinvite.slack.exceptions
import slackinvite.slack.methods


__author__ = "slackinvite developers"


logger = loguru.logger


def _channels_list(
        client: slack_sdk.WebClient,
        include_private: bool,
) -> typing.Dict[str, str]:
    with click_spinner.spinner(stream=sys.stderr):
        return slackinvite.slack.methods.channels_list(
            client=client,
            include_private=include_private,
        )


def _resolve_users(
        client: slack_sdk.WebClient,
        emails: typing.List[str],
) -> typing.List[slackinvite.slack.classes.User]:
    logger.info("Looking up users ...")
    return slackinvite.macros.resolve.resolve_users(
        client=client,
        references=slackinvite.slack.classes.to_user_references(emails),
    )


def run_report(
        client: slack_sdk.WebClient,
        emails: typing.List[str],
        channels: typing.List[str],
        private: bool = False,
        format: slackinvite.cli.helpers.OutputFormatType = "term",
) -> None:
    """
    Prints one of three reports, depending on which lists are provided:
    all channels (no emails and no channels), the members of some channels
    (channels but no emails), or the channels of some users (emails).
    """

    if len(emails) == 0 and len(channels) == 0:
        channels_by_name = _channels_list(client=client, include_private=private)
        click.echo(slackinvite.cli.output.render_channels(
            channels=slackinvite.macros.report.channels_sorted(channels_by_name),
            format=format,
        ))
        return

    if len(emails) == 0:
        channels_by_name = _channels_list(client=client, include_private=private)
        click.echo(slackinvite.cli.output.render_channels_members(
            items=slackinvite.macros.report.channels_members(
                client=client,
                channel_names=channels,
                channels_by_name=channels_by_name,
            ),
            format=format,
        ))
        return

    # finding nobody is not an error when only reporting
    users = _resolve_users(client=client, emails=emails)
    if len(users) == 0:
        logger.warning("No users found")

    logger.info("Listing channels the provided users are part of.")

    click.echo(slackinvite.cli.output.render_users_channels(
        items=slackinvite.macros.report.users_channel_names(
            client=client,
            users=users,
        ),
        format=format,
    ))


def run_update(
        client: slack_sdk.WebClient,
        action: str,
        emails: typing.List[str],
        channels: typing.List[str],
        private: bool = False,
        dry_run: bool = False,
) -> typing.List[slackinvite.macros.manage.ChannelOutcome]:
    """
    Adds the users of :py:data:`emails` to the channels of
    :py:data:`channels`, or removes them.

    :raises slackinvite.slack.exceptions.ConfigurationFailure: If none of
        the users could be found
    """

    users = _resolve_users(client=client, emails=emails)
    if len(users) == 0:
        raise slackinvite.slack.exceptions.ConfigurationFailure("No users found - aborting")

    channels_by_name = _channels_list(client=client, include_private=private)

    if action == slackinvite.macros.manage.ACTION_ADD:
        logger.info("Inviting users to channels ...")
    else:
        logger.info("Removing users from channels ...")

    outcomes = slackinvite.macros.manage.channels_update(
        client=client,
        action=action,
        channel_names=channels,
        channels_by_name=channels_by_name,
        user_ids=slackinvite.macros.resolve.user_ids(users),
        dry_run=dry_run,
    )

    failures = [outcome for outcome in outcomes if not outcome.ok]
    if len(failures) > 0:
        logger.warning(
            "{} of {} channel(s) could not be processed: {}",
            len(failures),
            len(outcomes),
            ", ".join(outcome.channel_name for outcome in failures),
        )

    return outcomes


@slackinvite.cli.helpers.cli_root
def cli(token, action, emails, channels, private, list_mode, debug, dry_run, format):
    """
    Invites users (by email or Slack user ID) to Slack channels (by name),
    or removes them; or lists channels, the users of channels, or the
    channels of users.

    Examples:

    \b
      slackinvite --emails alice@example.com,bob@example.com --channels general,random
      slackinvite --action remove --emails U012AB3CD --channels random
      slackinvite --list
      slackinvite --list --channels general
      slackinvite --list --emails alice@example.com
    """

    slackinvite.cli.helpers.configure_logging(debug=debug)

    token = slackinvite.slack.clients.get_token(token=token)
    if token is None:
        raise click.UsageError("A Slack token is required (--token or $SLACK_TOKEN).")

    action = action.lower()
    if action == slackinvite.macros.manage.ACTION_LIST:
        list_mode = True

    email_list = slackinvite.helpers.collections.split_comma_list(emails)
    channel_list = slackinvite.helpers.collections.split_comma_list(channels)

    if not list_mode and (len(email_list) == 0 or len(channel_list) == 0):
        raise click.UsageError("Both --emails and --channels are required to {} users.".format(action))

    client = slackinvite.slack.clients.login(token=token)

    try:
        if list_mode:
            run_report(
                client=client,
                emails=email_list,
                channels=channel_list,
                private=private,
                format=format,
            )
            return

        run_update(
            client=client,
            action=action,
            emails=email_list,
            channels=channel_list,
            private=private,
            dry_run=dry_run,
        )

    except slackinvite.slack.exceptions.ConfigurationFailure as exc:
        raise click.UsageError(exc.message)

    except slackinvite.slack.exceptions.PaginationFailure as exc:
        click.secho("ERROR: ", nl=False, err=True, fg="red", bold=True)
        click.secho(exc.message, err=True, fg="red")
        sys.exit(1)

    click.echo("All done! You're welcome =)")


def main():
    return sys.exit(cli())


if __name__ == "__main__":
    main()
