
"""
This submodule renders the reports of :py:mod:`slackinvite.macros.report`
for the terminal (aligned tables followed by a comma-separated line that
can be pasted back as a command-line argument), or as JSON or CSV.
"""

import json
import textwrap
import typing

import jinja2

import slackinvite.helpers.collections
import slackinvite.macros.report
import slackinvite.slack.classes


__author__ = "slackinvite developers"

__all__ = [
    "render_channels",
    "render_channels_members",
    "render_users_channels",
]


_env = jinja2.Environment(
    trim_blocks=True,
    lstrip_blocks=True,
    undefined=jinja2.StrictUndefined,
)


CHANNELS_TEMPLATE = _env.from_string(textwrap.dedent("""
    List of found channels (use --private to include private channels):
    {% for channel in channels %}
    \t • {{ channel.name.ljust(width) }}  --> {{ channel.id }}
    {% endfor %}
    {{ channels | map(attribute="name") | join(",") }}
    """[1:-1]))

CHANNEL_MEMBERS_TEMPLATE = _env.from_string(textwrap.dedent("""
    Users of channel {{ item.channel.name }} ({{ item.channel.id }}):
    {% for user in item.members %}
    \t • {{ user.id.ljust(width) }}  --> {{ user.real_name }} ({{ user.name }})
    {% endfor %}
    Full list of users for channel {{ item.channel.name }}:
    {{ item.member_ids | join(",") }}
    """[1:-1]))

USER_CHANNELS_TEMPLATE = _env.from_string(textwrap.dedent("""
    User {{ item.user.id }} is part of the following channels:
    {% for name in item.channel_names %}
    \t • {{ name }}
    {% endfor %}
    """[1:-1]))


def _dumps(rows: typing.List[typing.Dict[str, typing.Any]], format: str) -> str:
    if format == "json":
        return json.dumps(obj=rows, indent=4)

    # format == "csv"
    import comma
    return comma.dumps(rows)


def render_channels(
        channels: typing.List[slackinvite.slack.classes.Channel],
        format: str = "term",
) -> str:
    format = format.lower()

    if format == "term":
        return CHANNELS_TEMPLATE.render(
            channels=channels,
            width=slackinvite.helpers.collections.max_length(
                map(lambda channel: channel.name, channels)) + 3,
        )

    return _dumps(
        rows=[{"name": channel.name, "id": channel.id} for channel in channels],
        format=format,
    )


def render_channels_members(
        items: typing.List[slackinvite.macros.report.ChannelMembers],
        format: str = "term",
) -> str:
    format = format.lower()

    if format == "term":
        return "\n".join(
            CHANNEL_MEMBERS_TEMPLATE.render(
                item=item,
                width=slackinvite.helpers.collections.max_length(item.member_ids) + 3,
            )
            for item in items
        )

    return _dumps(
        rows=[
            {
                "channel": item.channel.name,
                "channel_id": item.channel.id,
                "id": user.id,
                "real_name": user.real_name,
                "name": user.name,
            }
            for item in items
            for user in item.members
        ],
        format=format,
    )


def render_users_channels(
        items: typing.List[slackinvite.macros.report.UserChannels],
        format: str = "term",
) -> str:
    format = format.lower()

    if format == "term":
        return "\n".join(
            USER_CHANNELS_TEMPLATE.render(item=item)
            for item in items
        )

    return _dumps(
        rows=[
            {"user_id": item.user.id, "channel": channel_name}
            for item in items
            for channel_name in item.channel_names
        ],
        format=format,
    )
