"""Wildcard matching of catch patterns against step failures.

A catch pattern is a plain string optionally prefixed and/or suffixed with ``*``:

* ``"*Timeout*"`` matches any description containing ``Timeout``
* ``"*Timeout"`` matches descriptions ending with ``Timeout``
* ``"Timeout*"`` matches descriptions starting with ``Timeout``
* ``"Timeout"`` matches only the exact description

Matching is case-sensitive.
"""

from __future__ import annotations

from typing import Any

__all__ = ["WILDCARD", "describe_error", "error_matches", "matches"]

WILDCARD = "*"


def matches(pattern: str, text: str) -> bool:
    """Check whether ``text`` matches a wildcard catch ``pattern``.

    Only a single leading and a single trailing wildcard are significant; a lone
    ``"*"`` matches everything, including the empty string.

    Args:
        pattern: The catch pattern.
        text: The failure description to test.

    Returns:
        True if the pattern matches the text, False otherwise.

    Example:
        >>> matches("*Timeout*", "Upstream Timeout reached")
        True
        >>> matches("Timeout*", "timeout")
        False
    """
    leading = pattern.startswith(WILDCARD)
    trailing = pattern.endswith(WILDCARD)

    trimmed = pattern[1:] if leading else pattern
    if trailing and trimmed.endswith(WILDCARD):
        trimmed = trimmed[:-1]

    if leading and trailing:
        return trimmed in text
    if leading:
        return text.endswith(trimmed)
    if trailing:
        return text.startswith(trimmed)
    return text == pattern


def describe_error(error: Any) -> list[str]:
    """Build the descriptions of a failure that catch patterns are tested against.

    Exceptions are described by their message first and then by their qualified
    form (``"ValueError: bad input"``, or just ``"ValueError"`` when the message is
    empty). Any other failure value is described by its string form.

    Args:
        error: The exception raised by a step, or the value it failed with.

    Returns:
        The candidate descriptions, most specific first.
    """
    if isinstance(error, BaseException):
        message = str(error)
        qualified = f"{type(error).__name__}: {message}" if message else type(error).__name__
        return [message, qualified]
    return [str(error)]


def error_matches(pattern: str, error: Any) -> bool:
    """Check whether a catch pattern matches any description of ``error``.

    Args:
        pattern: The catch pattern.
        error: The step failure.

    Returns:
        True if one of the descriptions from :func:`describe_error` matches.
    """
    return any(matches(pattern, text) for text in describe_error(error))
