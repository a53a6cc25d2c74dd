
"""
This submodule provides an intermediate abstraction layer to the methods
of the Slack Web API that are needed to manage channel membership. Each
function performs one operation (draining all pages where the method is
paginated), returns the wrapper classes defined in
:py:mod:`slackinvite.slack.classes`, and raises the failures defined in
:py:mod:`slackinvite.slack.exceptions`.
"""

import typing

import loguru
import slack_sdk

import slackinvite.slack.calls
import slackinvite.slack.classes
import slackinvite.slack.exceptions
import slackinvite.slack.pagination


__author__ = "slackinvite developers"

__all__ = [
    "CHANNEL_TYPES_PUBLIC",
    "CHANNEL_TYPES_ALL",

    "channels_list",
    "channel_id_by_name",
    "conversation_member_ids",

    "user_lookup_by_email",
    "user_info",

    "conversation_invite",
    "conversation_kick",
]


CHANNEL_TYPES_PUBLIC = "public_channel"

CHANNEL_TYPES_ALL = "private_channel,public_channel"


logger = loguru.logger


def _decode_channels(data: typing.Dict[str, typing.Any]) -> typing.List[slackinvite.slack.classes.Channel]:
    return list(map(
        slackinvite.slack.classes.to_channel,
        data.get("channels") or list(),
    ))


def _decode_members(data: typing.Dict[str, typing.Any]) -> typing.List[str]:
    return list(data.get("members") or list())


def _add_channel(
        channels_by_name: typing.Dict[str, str],
        channel: slackinvite.slack.classes.Channel,
) -> typing.Dict[str, str]:
    # if a name is listed twice, the last one wins
    channels_by_name[channel.name] = channel.id
    return channels_by_name


def _found_user(data: typing.Dict[str, typing.Any], key: str) -> slackinvite.slack.classes.User:
    user = slackinvite.slack.classes.to_user(data.get("user") or dict())
    if user.id == "":
        raise slackinvite.slack.exceptions.NotFound(kind="user", key=key)
    return user


def _add_member(
        member_ids: typing.List[str],
        member_id: str,
) -> typing.List[str]:
    member_ids.append(member_id)
    return member_ids


def channels_list(
        client: slack_sdk.WebClient,
        include_private: bool = False,
) -> typing.Dict[str, str]:
    """
    Returns a dictionary mapping the name of every non-archived channel of
    the workspace to its ID.

    :param client: A Slack Web API client

    :param include_private: Flag to also list the private channels (which
        requires the ``groups:read`` scope)

    :raises slackinvite.slack.exceptions.PaginationFailure: If any page
        of the listing failed

    :return: A dictionary mapping channel names to channel IDs
    """

    channel_types = CHANNEL_TYPES_ALL if include_private else CHANNEL_TYPES_PUBLIC

    channels_by_name = slackinvite.slack.pagination.drain(
        client=client,
        endpoint=slackinvite.slack.calls.CONVERSATIONS_LIST,
        arguments={
            "exclude_archived": "true",
            "types": channel_types,
        },
        decode_page=_decode_channels,
        accumulate=_add_channel,
        initial=dict(),
    )

    logger.debug("Total # of channels retrieved: {}", len(channels_by_name))

    return channels_by_name


def conversation_member_ids(
        client: slack_sdk.WebClient,
        conversation_id: str,
) -> typing.List[str]:
    """
    Returns the IDs of all the members of a channel, in the order in which
    Slack lists them.

    :raises slackinvite.slack.exceptions.PaginationFailure: If any page
        of the listing failed
    """

    return slackinvite.slack.pagination.drain(
        client=client,
        endpoint=slackinvite.slack.calls.CONVERSATIONS_MEMBERS,
        arguments={
            "channel": conversation_id,
        },
        decode_page=_decode_members,
        accumulate=_add_member,
        initial=list(),
    )


def user_lookup_by_email(
        client: slack_sdk.WebClient,
        email: str,
) -> slackinvite.slack.classes.User:
    """
    Returns the Slack user whose email address is :py:data:`email`.

    :raises slackinvite.slack.exceptions.SlackCallFailure: If the lookup
        failed (an unknown email yields an
        :py:exc:`~slackinvite.slack.exceptions.APILogicalFailure` with
        error ``users_not_found``)

    :raises slackinvite.slack.exceptions.NotFound: If the reply carries
        no user
    """

    data = slackinvite.slack.calls.api_call(
        client=client,
        endpoint=slackinvite.slack.calls.USERS_LOOKUP_BY_EMAIL,
        arguments={"email": email},
    )

    return _found_user(data=data, key=email)


def user_info(
        client: slack_sdk.WebClient,
        user_id: str,
) -> slackinvite.slack.classes.User:
    """
    Returns the Slack user whose ID is :py:data:`user_id`.

    :raises slackinvite.slack.exceptions.SlackCallFailure: If the lookup
        failed (an unknown ID yields an
        :py:exc:`~slackinvite.slack.exceptions.APILogicalFailure` with
        error ``user_not_found``)

    :raises slackinvite.slack.exceptions.NotFound: If the reply carries
        no user
    """

    data = slackinvite.slack.calls.api_call(
        client=client,
        endpoint=slackinvite.slack.calls.USERS_INFO,
        arguments={"user": user_id},
    )

    return _found_user(data=data, key=user_id)


def conversation_invite(
        client: slack_sdk.WebClient,
        conversation_id: str,
        user_ids: typing.List[str],
) -> typing.Dict[str, typing.Any]:
    """
    Invites all the users of :py:data:`user_ids` to a channel, in a single
    call.
    """

    return slackinvite.slack.calls.api_call(
        client=client,
        endpoint=slackinvite.slack.calls.CONVERSATIONS_INVITE,
        arguments={
            "channel": conversation_id,
            "users": ",".join(user_ids),
        },
    )


def conversation_kick(
        client: slack_sdk.WebClient,
        conversation_id: str,
        user_id: str,
) -> typing.Dict[str, typing.Any]:
    """
    Removes one user from a channel (the Slack API does not allow removing
    several users in one call).
    """

    return slackinvite.slack.calls.api_call(
        client=client,
        endpoint=slackinvite.slack.calls.CONVERSATIONS_KICK,
        arguments={
            "channel": conversation_id,
            "user": user_id,
        },
    )


def channel_id_by_name(
        channels_by_name: typing.Dict[str, str],
        channel_name: str,
) -> str:
    """
    Returns the ID of the channel named :py:data:`channel_name`.

    :raises slackinvite.slack.exceptions.NotFound: If there is no such
        channel in :py:data:`channels_by_name`
    """

    channel_id = channels_by_name.get(channel_name)
    if channel_id is None or channel_id == "":
        raise slackinvite.slack.exceptions.NotFound(kind="channel", key=channel_name)

    return channel_id
