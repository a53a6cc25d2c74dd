
"""
This submodule turns the user references provided on the command line
(email addresses or Slack user IDs) into Slack users.
"""

import typing

import loguru
import slack_sdk

import slackinvite.slack.classes
import slackinvite.slack.exceptions
import slackinvite.slack.methods


__author__ = "slackinvite developers"

__all__ = [
    "resolve_user",
    "resolve_users",
    "user_ids",
]


logger = loguru.logger


def resolve_user(
        client: slack_sdk.WebClient,
        reference: slackinvite.slack.classes.UserReference,
) -> slackinvite.slack.classes.User:
    """
    Looks up the Slack user designated by :py:data:`reference`: by email for
    an :py:class:`~slackinvite.slack.classes.EmailReference`, by ID for a
    :py:class:`~slackinvite.slack.classes.UserIdReference` (only to check
    the user exists, and obtain their names).

    :raises slackinvite.slack.exceptions.SlackCallFailure: If the lookup failed

    :raises slackinvite.slack.exceptions.NotFound: If Slack returned no user
    """

    if isinstance(reference, slackinvite.slack.classes.EmailReference):
        user = slackinvite.slack.methods.user_lookup_by_email(
            client=client,
            email=reference.email,
        )
        logger.info("Valid user (ID: {}) found for '{}'", user.id, reference.email)
        return user

    user = slackinvite.slack.methods.user_info(
        client=client,
        user_id=reference.user_id,
    )

    # the ID that was provided is kept, even if Slack echoes another one
    user = user._replace(id=reference.user_id)
    logger.info("Valid user (ID: {}) provided for {} ({})", user.id, user.real_name, user.name)
    return user


def resolve_users(
        client: slack_sdk.WebClient,
        references: typing.Iterable[slackinvite.slack.classes.UserReference],
) -> typing.List[slackinvite.slack.classes.User]:
    """
    Resolves every reference of :py:data:`references`, in order. A
    reference that cannot be resolved is logged and skipped, and does
    not prevent the resolution of the other references. Duplicates are
    kept.

    :param client: A Slack Web API client

    :param references: References as produced by
        :py:func:`slackinvite.slack.classes.to_user_references`

    :return: The users that could be resolved, in the order of their references
    """

    users = []

    for reference in references:
        try:
            user = resolve_user(client=client, reference=reference)

        except (
            slackinvite.slack.exceptions.SlackCallFailure,
            slackinvite.slack.exceptions.NotFound,
        ) as exc:
            if isinstance(reference, slackinvite.slack.classes.EmailReference):
                logger.error(
                    "Error while looking up user with email {}: {}",
                    reference.email,
                    exc.message,
                )
            else:
                logger.error(
                    "Invalid user provided: {}: {}",
                    reference.user_id,
                    exc.message,
                )
            continue

        users.append(user)

    return users


def user_ids(users: typing.Iterable[slackinvite.slack.classes.User]) -> typing.List[str]:
    return [user.id for user in users]
