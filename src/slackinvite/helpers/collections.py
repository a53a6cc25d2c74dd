
import typing


__author__ = "slackinvite developers"

__all__ = [
    "split_comma_list",
    "sorted_keys",
    "max_length",
]


# type variable
_alpha = typing.TypeVar("_alpha")


def split_comma_list(value: typing.Optional[str]) -> typing.List[str]:
    """
    Returns the items of a comma-separated list, with the surrounding
    whitespace of each item removed and empty items dropped.

    :param value: A comma-separated list, such as ``"general, random"``,
        or ``None``

    :return: The list of items, possibly empty
    """
    if value is None:
        return []

    return [
        item.strip()
        for item in value.split(",")
        if item.strip() != ""
    ]


def sorted_keys(mapping: typing.Mapping[str, _alpha]) -> typing.List[str]:
    return sorted(mapping.keys())


def max_length(values: typing.Iterable[str]) -> int:
    return max(map(len, values), default=0)
