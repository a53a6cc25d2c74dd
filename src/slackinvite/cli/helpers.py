
import sys
import typing

import click
import click_help_colors
import loguru

import slackinvite
import slackinvite.macros.manage


__author__ = "slackinvite developers"

__all__ = [
    "chain_functions",
    "configure_logging",

    "OutputFormatType",

    "cli_root_command_green",
    "cli_opt_token",
    "cli_opt_action",
    "cli_opt_emails",
    "cli_opt_channels",
    "cli_opt_private",
    "cli_opt_list",
    "cli_opt_debug",
    "cli_opt_dry_run",
    "cli_opt_output_format",
    "cli_opt_version",

    "cli_root",
]


logger = loguru.logger

LOG_FORMAT = "<level>{level: <8}</level> | {message}"

# identifier of the sink installed by `configure_logging`
_log_handler_id: typing.Optional[int] = None


def configure_logging(debug: bool = False) -> int:
    """
    Replaces the default stderr sink of :py:mod:`loguru` (or the one
    installed by a previous call) by a stderr sink at level ``INFO``, or
    ``DEBUG`` if :py:data:`debug` is set. Other sinks are left alone.
    """
    global _log_handler_id

    try:
        # handler 0 is the default sink loguru installs on import
        logger.remove(_log_handler_id if _log_handler_id is not None else 0)
    except ValueError:
        pass

    _log_handler_id = logger.add(
        sys.stderr,
        level="DEBUG" if debug else "INFO",
        format=LOG_FORMAT,
    )

    return _log_handler_id


# From: https://stackoverflow.com/a/58005342/408734
def chain_functions(*funcs: typing.List[typing.Callable]) -> typing.Callable:

    def _chain(*args, **kwargs):
        cur_args, cur_kwargs = args, kwargs
        ret = None
        for f in reversed(funcs):
            f = typing.cast(typing.Callable, f)
            cur_args, cur_kwargs = (f(*cur_args, **cur_kwargs), ), {}
            ret = cur_args[0]
        return ret

    return _chain


cli_root_command_green = click.command(
    cls=click_help_colors.HelpColorsCommand,
    help_headers_color='bright_green',
    help_options_color='green'
)

cli_opt_token = click.option(
    "--token", "--api-token", "token",
    envvar="SLACK_TOKEN", metavar="$SLACK_TOKEN",
    help="Slack OAuth access token."
)

cli_opt_action = click.option(
    "-a", "--action",
    type=click.Choice(slackinvite.macros.manage.ACTIONS, case_sensitive=False),
    default=slackinvite.macros.manage.ACTION_ADD, envvar="SLACKINVITE_ACTION",
    show_default=True,
    help="'add' to invite users, 'remove' to remove users, 'list' to only report."
)

cli_opt_emails = click.option(
    "-e", "--emails",
    envvar="SLACKINVITE_EMAILS", metavar="LIST",
    help="Comma-separated list of emails (or user IDs) of Slack users."
)

cli_opt_channels = click.option(
    "-c", "--channels",
    envvar="SLACKINVITE_CHANNELS", metavar="LIST",
    help="Comma-separated list of channel names to modify, or to list the users of."
)

cli_opt_private = click.option(
    "-p", "--private",
    is_flag=True, envvar="SLACKINVITE_PRIVATE", default=False,
    help="Include private channels (requires the OAuth scopes 'groups:read' and 'groups:write')."
)

cli_opt_list = click.option(
    "-l", "--list", "list_mode",
    is_flag=True, envvar="SLACKINVITE_LIST", default=False,
    help="List channels, the users of the given --channels, or the channels of the given --emails."
)

cli_opt_debug = click.option(
    "--debug",
    is_flag=True, envvar="SLACKINVITE_DEBUG", default=False,
    help="Enable debug logging (e.g.: page counts of listings)."
)

cli_opt_dry_run = click.option(
    "-y", "--dry-run",
    is_flag=True, envvar="SLACKINVITE_DRY_RUN", default=False,
    help="Do not actually add or remove users."
)

OutputFormatType = typing.Union[
    typing.Literal["term"],
    typing.Literal["json"],
    typing.Literal["csv"],
]

cli_opt_output_format = click.option(
    "--format", "-f",
    type=click.Choice(["term", "json", "csv"], case_sensitive=False),
    default="term", envvar="SLACKINVITE_FORMAT", metavar="FORMAT",
    help="Output format of listings (e.g.: term, json, csv, ...)"
)

cli_opt_version = click.version_option(version=slackinvite.__version__)


cli_root = chain_functions(*[
    cli_root_command_green,
    cli_opt_token, cli_opt_action, cli_opt_emails, cli_opt_channels,
    cli_opt_private, cli_opt_list, cli_opt_debug, cli_opt_dry_run,
    cli_opt_output_format, cli_opt_version,
])
