"""Slug derivation shared by categories, subcategories and brand pages."""

import re

_NON_WORD = re.compile(r"[^\w\s]")
_WHITESPACE = re.compile(r"\s+")


def slugify(name: str) -> str:
    """Lower-case *name*, drop punctuation and join words with hyphens.

    >>> slugify("Dahua Saudi")
    'dahua-saudi'
    >>> slugify("IP Cameras (4K)")
    'ip-cameras-4k'
    """
    return _WHITESPACE.sub("-", _NON_WORD.sub("", name.lower()))
