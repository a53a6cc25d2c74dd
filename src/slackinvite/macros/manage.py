
"""
This submodule adds users to, or removes users from, a list of channels
designated by name. Each channel is processed independently: a channel
that does not exist, or for which a call fails, is reported and skipped,
and the remaining channels are still processed.
"""

import typing

import loguru
import slack_sdk

import slackinvite.slack.exceptions
import slackinvite.slack.methods


__author__ = "slackinvite developers"

__all__ = [
    "ACTION_ADD",
    "ACTION_REMOVE",
    "ACTION_LIST",
    "ACTIONS",
    "MUTATING_ACTIONS",

    "ERROR_ALREADY_IN_CHANNEL",

    "STATUS_INVITED",
    "STATUS_ALREADY_IN_CHANNEL",
    "STATUS_REMOVED",
    "STATUS_NOT_FOUND",
    "STATUS_FAILED",
    "STATUS_DRY_RUN",

    "ChannelOutcome",

    "channel_invite",
    "channel_kick",
    "channels_update",
]


ACTION_ADD = "add"
ACTION_REMOVE = "remove"
ACTION_LIST = "list"

ACTIONS = [ACTION_ADD, ACTION_REMOVE, ACTION_LIST]

MUTATING_ACTIONS = [ACTION_ADD, ACTION_REMOVE]


# error code of `conversations.invite` when inviting a current member
ERROR_ALREADY_IN_CHANNEL = "already_in_channel"


STATUS_INVITED = "invited"
STATUS_ALREADY_IN_CHANNEL = "already_in_channel"
STATUS_REMOVED = "removed"
STATUS_NOT_FOUND = "not_found"
STATUS_FAILED = "failed"
STATUS_DRY_RUN = "dry_run"


logger = loguru.logger


class ChannelOutcome(typing.NamedTuple):
    """
    What happened to one of the channels that were requested.
    """

    channel_name: str
    channel_id: typing.Optional[str]
    status: str
    attempted_user_ids: typing.Tuple[str, ...] = ()
    error: typing.Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status in [
            STATUS_INVITED,
            STATUS_ALREADY_IN_CHANNEL,
            STATUS_REMOVED,
            STATUS_DRY_RUN,
        ]


def channel_invite(
        client: slack_sdk.WebClient,
        channel_name: str,
        channel_id: str,
        user_ids: typing.List[str],
) -> ChannelOutcome:
    """
    Invites all users of :py:data:`user_ids` to a channel in a single call.
    If Slack reports that the users are already in the channel, this is
    not considered a failure.
    """

    try:
        slackinvite.slack.methods.conversation_invite(
            client=client,
            conversation_id=channel_id,
            user_ids=user_ids,
        )

    except slackinvite.slack.exceptions.SlackCallFailure as exc:
        if getattr(exc, "error", None) == ERROR_ALREADY_IN_CHANNEL:
            logger.info("User already in channel: {}", channel_name)
            return ChannelOutcome(
                channel_name=channel_name,
                channel_id=channel_id,
                status=STATUS_ALREADY_IN_CHANNEL,
                attempted_user_ids=tuple(user_ids),
            )

        logger.error(
            "Error while inviting users to {} ({}): {}",
            channel_name, channel_id, exc.message,
        )
        return ChannelOutcome(
            channel_name=channel_name,
            channel_id=channel_id,
            status=STATUS_FAILED,
            attempted_user_ids=tuple(user_ids),
            error=exc.message,
        )

    logger.info("Users invited to '{}'", channel_name)

    return ChannelOutcome(
        channel_name=channel_name,
        channel_id=channel_id,
        status=STATUS_INVITED,
        attempted_user_ids=tuple(user_ids),
    )


def channel_kick(
        client: slack_sdk.WebClient,
        channel_name: str,
        channel_id: str,
        user_ids: typing.List[str],
) -> ChannelOutcome:
    """
    Removes the users of :py:data:`user_ids` from a channel, one call per
    user (this is a limitation of the Slack API). The first failure stops
    the removals for this channel: the following users are not attempted.
    """

    logger.info("Removing users from channel: {}", channel_name)

    attempted = []

    for user_id in user_ids:
        attempted.append(user_id)

        try:
            slackinvite.slack.methods.conversation_kick(
                client=client,
                conversation_id=channel_id,
                user_id=user_id,
            )

        except slackinvite.slack.exceptions.SlackCallFailure as exc:
            logger.debug(
                "Error while removing user {} from channel {}: {}",
                user_id, channel_id, exc.message,
            )
            logger.error(
                "Error while removing users from {} ({}): user {}: {}",
                channel_name, channel_id, user_id, exc.message,
            )
            return ChannelOutcome(
                channel_name=channel_name,
                channel_id=channel_id,
                status=STATUS_FAILED,
                attempted_user_ids=tuple(attempted),
                error=exc.message,
            )

    logger.info("Users removed from '{}'", channel_name)

    return ChannelOutcome(
        channel_name=channel_name,
        channel_id=channel_id,
        status=STATUS_REMOVED,
        attempted_user_ids=tuple(attempted),
    )


def channels_update(
        client: slack_sdk.WebClient,
        action: str,
        channel_names: typing.List[str],
        channels_by_name: typing.Dict[str, str],
        user_ids: typing.List[str],
        dry_run: bool = False,
) -> typing.List[ChannelOutcome]:
    """
    Adds (``action="add"``) or removes (``action="remove"``) the users of
    :py:data:`user_ids` to/from each channel of :py:data:`channel_names`.

    :param client: A Slack Web API client

    :param action: Either :py:data:`ACTION_ADD` or :py:data:`ACTION_REMOVE`

    :param channel_names: The names of the channels to modify, in order

    :param channels_by_name: A dictionary mapping channel names to their IDs
        (see :py:func:`slackinvite.slack.methods.channels_list`)

    :param user_ids: The IDs of the users to add or remove

    :param dry_run: Flag to only report what would be done, without
        modifying any channel

    :raises ValueError: If :py:data:`action` is not a mutating action

    :return: One :py:class:`ChannelOutcome` per requested channel name
    """

    if action not in MUTATING_ACTIONS:
        raise ValueError("Invalid action `{}` (expected one of: {})".format(
            action, ", ".join(MUTATING_ACTIONS)))

    outcomes = []

    for channel_name in channel_names:

        try:
            channel_id = slackinvite.slack.methods.channel_id_by_name(
                channels_by_name=channels_by_name,
                channel_name=channel_name,
            )
        except slackinvite.slack.exceptions.NotFound as exc:
            logger.warning("{} -- skipping", exc.message)
            outcomes.append(ChannelOutcome(
                channel_name=channel_name,
                channel_id=None,
                status=STATUS_NOT_FOUND,
                error=exc.message,
            ))
            continue

        if dry_run:
            logger.info(
                "[dry-run] would {} users {} {} '{}' ({})",
                action,
                ",".join(user_ids),
                "to" if action == ACTION_ADD else "from",
                channel_name,
                channel_id,
            )
            outcomes.append(ChannelOutcome(
                channel_name=channel_name,
                channel_id=channel_id,
                status=STATUS_DRY_RUN,
            ))
            continue

        if action == ACTION_ADD:
            outcome = channel_invite(
                client=client,
                channel_name=channel_name,
                channel_id=channel_id,
                user_ids=user_ids,
            )
        else:
            outcome = channel_kick(
                client=client,
                channel_name=channel_name,
                channel_id=channel_id,
                user_ids=user_ids,
            )

        outcomes.append(outcome)

    return outcomes
