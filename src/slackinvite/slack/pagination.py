
"""
This submodule drains cursor-paginated listings of the Slack Web API.

Listing methods such as ``conversations.list`` or ``conversations.members``
return one page of results together with an opaque cursor, in
``response_metadata.next_cursor``; the next page is requested by passing
that cursor back, and an empty cursor means the last page has been reached
(see `the Slack documentation <https://api.slack.com/docs/pagination>`_).
"""

import typing

import loguru
import slack_sdk

import slackinvite.slack.calls
import slackinvite.slack.exceptions


__author__ = "slackinvite developers"

__all__ = [
    "DEFAULT_PAGE_SIZE",
    "next_cursor",
    "drain",
]


DEFAULT_PAGE_SIZE: int = 200
"""
Page size requested from listing methods (Slack recommends no more
than 200 results per page).
"""


logger = loguru.logger


# type variables
_item = typing.TypeVar("_item")
_accumulator = typing.TypeVar("_accumulator")


def next_cursor(data: typing.Dict[str, typing.Any]) -> str:
    """
    Returns the continuation cursor of a page, or an empty string if this
    is the last page.
    """
    metadata = data.get("response_metadata") or dict()
    return metadata.get("next_cursor") or ""


def drain(
        client: slack_sdk.WebClient,
        endpoint: str,
        arguments: typing.Dict[str, typing.Any],
        decode_page: typing.Callable[[typing.Dict[str, typing.Any]], typing.Iterable[_item]],
        accumulate: typing.Callable[[_accumulator, _item], _accumulator],
        initial: _accumulator,
        page_size: int = DEFAULT_PAGE_SIZE,
) -> _accumulator:
    """
    Requests every page of the listing method :py:data:`endpoint` and folds
    all of their items into a single accumulator.

    The first page is requested with an empty cursor, and the following ones
    with the cursor returned by the previous page, until a page returns an
    empty cursor. The items of each page, as extracted by
    :py:data:`decode_page`, are merged one at a time with
    :py:data:`accumulate`, starting from :py:data:`initial`. The result only
    depends on the items and their order, not on how they were split into
    pages.

    :param client: A Slack Web API client

    :param endpoint: A listing endpoint (see :py:mod:`slackinvite.slack.calls`)

    :param arguments: The arguments of every request, besides the cursor
        and the page size

    :param decode_page: Function extracting the items from a page

    :param accumulate: Function returning the accumulator updated with
        one more item

    :param initial: The accumulator before any item has been merged

    :param page_size: The number of items requested per page

    :raises slackinvite.slack.exceptions.PaginationFailure: If any page
        failed; the items of the previous pages are discarded

    :return: The accumulator after all items have been merged
    """

    acc = initial
    cursor = ""
    page = 0
    item_count = 0

    while True:
        page += 1

        page_arguments = dict(arguments)
        page_arguments.update({
            "cursor": cursor,
            "limit": page_size,
        })

        try:
            data = slackinvite.slack.calls.api_call(
                client=client,
                endpoint=endpoint,
                arguments=page_arguments,
            )
        except slackinvite.slack.exceptions.SlackCallFailure as exc:
            raise slackinvite.slack.exceptions.PaginationFailure(
                endpoint=endpoint,
                page=page,
                cause=exc,
            ) from exc

        items = list(decode_page(data))
        item_count += len(items)

        logger.debug("{}: # of items returned in page {}: {}", endpoint, page, len(items))

        for item in items:
            acc = accumulate(acc, item)

        # paginate if necessary
        cursor = next_cursor(data)
        if cursor == "":
            break

    logger.debug("{}: {} item(s) retrieved over {} page(s)", endpoint, item_count, page)

    return acc
