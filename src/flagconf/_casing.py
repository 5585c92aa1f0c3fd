"""SCREAMING_SNAKE_CASE conversion used to derive environment variable names."""

from __future__ import annotations


def _is_upper(char: str) -> bool:
    return "A" <= char <= "Z"


def _is_lower(char: str) -> bool:
    return "a" <= char <= "z"


def _is_digit(char: str) -> bool:
    return "0" <= char <= "9"


def _starts_word(name: str, index: int) -> bool:
    """True when a word boundary falls between ``index - 1`` and ``index``."""
    prev, char = name[index - 1], name[index]

    # helloWorld, hello1World
    if (_is_lower(prev) or _is_digit(prev)) and _is_upper(char):
        return True

    # HELLOWorld: split before the last capital of an acronym
    if _is_upper(prev) and _is_upper(char):
        return index + 1 < len(name) and _is_lower(name[index + 1])

    # hello1world: digits close the word they follow
    return _is_digit(prev) and _is_lower(char)


def envify(name: str) -> str:
    """Convert an identifier to SCREAMING_SNAKE_CASE.

    Hyphens become underscores and word boundaries inside camel-cased runs get
    an underscore. Digits stay attached to the word before them. Applying the
    function to its own output changes nothing.

    >>> envify("HELLOWorld")
    'HELLO_WORLD'
    >>> envify("Hello1World2")
    'HELLO1_WORLD2'
    >>> envify("cmd_Sub-Config-String")
    'CMD_SUB_CONFIG_STRING'
    """
    out: list[str] = []
    for index, char in enumerate(name):
        if index > 0 and _starts_word(name, index):
            out.append("_")
        if char == "-":
            out.append("_")
        elif _is_lower(char):
            out.append(char.upper())
        else:
            out.append(char)
    return "".join(out)
