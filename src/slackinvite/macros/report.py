
"""
This submodule gathers the data of the read-only reports: the channels of
the workspace, the members of some channels, and the channels some users
are members of. Nothing is printed here (see :py:mod:`slackinvite.cli.output`),
and nothing is modified in the workspace.
"""

import typing

import loguru
import slack_sdk

import slackinvite.helpers.collections
import slackinvite.slack.classes
import slackinvite.slack.exceptions
import slackinvite.slack.methods


__author__ = "slackinvite developers"

__all__ = [
    "ChannelMembers",
    "UserChannels",

    "channels_sorted",
    "channel_members",
    "channels_members",
    "user_channel_names",
    "users_channel_names",
]


logger = loguru.logger


class ChannelMembers(typing.NamedTuple):
    channel: slackinvite.slack.classes.Channel

    # members whose names could be looked up
    members: typing.List[slackinvite.slack.classes.User]

    # IDs of all members, as listed by Slack
    member_ids: typing.List[str]


class UserChannels(typing.NamedTuple):
    user: slackinvite.slack.classes.User
    channel_names: typing.List[str]


def channels_sorted(
        channels_by_name: typing.Dict[str, str],
) -> typing.List[slackinvite.slack.classes.Channel]:
    """
    Returns the channels of a name-to-ID dictionary, sorted by name.
    """
    return [
        slackinvite.slack.classes.Channel(id=channels_by_name[name], name=name)
        for name in slackinvite.helpers.collections.sorted_keys(channels_by_name)
    ]


def channel_members(
        client: slack_sdk.WebClient,
        channel: slackinvite.slack.classes.Channel,
) -> ChannelMembers:
    """
    Returns the members of a channel, with their names. A member whose
    names cannot be looked up is logged, and left out of
    :py:attr:`ChannelMembers.members` (but not of
    :py:attr:`ChannelMembers.member_ids`).

    :raises slackinvite.slack.exceptions.PaginationFailure: If the
        membership of the channel could not be listed
    """

    member_ids = slackinvite.slack.methods.conversation_member_ids(
        client=client,
        conversation_id=channel.id,
    )

    members = []
    for member_id in member_ids:
        try:
            user = slackinvite.slack.methods.user_info(
                client=client,
                user_id=member_id,
            )
        except (
            slackinvite.slack.exceptions.SlackCallFailure,
            slackinvite.slack.exceptions.NotFound,
        ) as exc:
            logger.error("Error while getting user name for {}: {}", member_id, exc.message)
            continue

        members.append(user._replace(id=member_id))

    return ChannelMembers(
        channel=channel,
        members=members,
        member_ids=member_ids,
    )


def channels_members(
        client: slack_sdk.WebClient,
        channel_names: typing.List[str],
        channels_by_name: typing.Dict[str, str],
) -> typing.List[ChannelMembers]:
    """
    Returns the members of each of the channels of :py:data:`channel_names`
    that exist; channels that do not exist, or whose membership cannot be
    listed, are logged and skipped.
    """

    result = []

    for channel_name in channel_names:
        try:
            channel_id = slackinvite.slack.methods.channel_id_by_name(
                channels_by_name=channels_by_name,
                channel_name=channel_name,
            )
        except slackinvite.slack.exceptions.NotFound as exc:
            logger.warning("{} -- skipping", exc.message)
            continue

        logger.info("Listing users for channel {}", channel_name)

        try:
            result.append(channel_members(
                client=client,
                channel=slackinvite.slack.classes.Channel(id=channel_id, name=channel_name),
            ))
        except slackinvite.slack.exceptions.PaginationFailure as exc:
            logger.error("Error while listing users for channel {}: {}", channel_name, exc.message)
            continue

    return result


def user_channel_names(
        client: slack_sdk.WebClient,
        user_id: str,
) -> typing.List[str]:
    """
    Returns the names of all channels, public and private, that the user
    :py:data:`user_id` is a member of, sorted.

    There is no way to ask Slack for the channels of a user, so this
    lists the members of every channel of the workspace: this is slow on
    large workspaces.

    :raises slackinvite.slack.exceptions.PaginationFailure: If the
        channels, or the members of any channel, could not be listed
    """

    channels_by_name = slackinvite.slack.methods.channels_list(
        client=client,
        include_private=True,
    )

    member_of = []

    for (channel_name, channel_id) in channels_by_name.items():
        member_ids = slackinvite.slack.methods.conversation_member_ids(
            client=client,
            conversation_id=channel_id,
        )
        if user_id in member_ids:
            member_of.append(channel_name)

    return sorted(member_of)


def users_channel_names(
        client: slack_sdk.WebClient,
        users: typing.List[slackinvite.slack.classes.User],
) -> typing.List[UserChannels]:
    """
    Returns, for each user of :py:data:`users`, the sorted names of the
    channels they are a member of (see :py:func:`user_channel_names`).

    :raises slackinvite.slack.exceptions.PaginationFailure: If any listing
        failed; no partial result is returned
    """

    return [
        UserChannels(
            user=user,
            channel_names=user_channel_names(client=client, user_id=user.id),
        )
        for user in users
    ]
