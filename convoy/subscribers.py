"""Subscriber metadata embedded in convoy descriptions.

A convoy description is free text written by humans. Notification targets live
on a single metadata line inside it:

  Subscribers: mayor/, deacon/, human@email.com

Older convoys used ``Notify:`` for the same list. It is still read, and
rewritten as ``Subscribers:`` the next time the list is updated.
"""

import logging
from typing import Optional, Sequence

logger = logging.getLogger("convoy.subscribers")

# (prefix, deprecated), tried in order. Current format first.
SUBSCRIBER_FORMATS: tuple[tuple[str, bool], ...] = (
    ("Subscribers:", False),
    ("Notify:", True),
)

CURRENT_PREFIX = SUBSCRIBER_FORMATS[0][0]


def _metadata_format(line: str) -> Optional[tuple[str, bool]]:
    """Return the (prefix, deprecated) entry a line is written in, if any."""
    stripped = line.strip()
    for prefix, deprecated in SUBSCRIBER_FORMATS:
        if stripped.startswith(prefix):
            return prefix, deprecated
    return None


def _find_metadata_line(lines: list[str]) -> Optional[tuple[int, str, bool]]:
    """Locate the authoritative metadata line.

    Formats are tried in priority order, so a ``Subscribers:`` line anywhere
    wins over an earlier ``Notify:`` line.

    Returns:
        Tuple of (line index, prefix, deprecated) or None
    """
    for prefix, deprecated in SUBSCRIBER_FORMATS:
        for i, line in enumerate(lines):
            if line.strip().startswith(prefix):
                return i, prefix, deprecated
    return None


def extract_subscribers(description: str) -> list[str]:
    """Read the subscriber list from a description.

    Args:
        description: Convoy description text

    Returns:
        Subscriber tokens in the order written, or an empty list when there is
        no metadata line or it carries no tokens.
    """
    lines = description.split("\n")
    found = _find_metadata_line(lines)
    if found is None:
        return []

    index, prefix, deprecated = found
    payload = lines[index].strip()[len(prefix):]
    if deprecated:
        logger.debug(f"Reading subscribers from deprecated '{prefix}' line {index}")

    if not payload.strip():
        return []
    return [token.strip() for token in payload.split(",") if token.strip()]


def render_subscribers_line(subscribers: Sequence[str]) -> str:
    """Render the metadata line for a subscriber list.

    Tokens are kept verbatim except that line breaks inside a token become
    spaces, so the result is always a single line.
    """
    tokens = [" ".join(token.splitlines()) for token in subscribers]
    return f"{CURRENT_PREFIX} {', '.join(tokens)}"


def update_subscribers(description: str, subscribers: Sequence[str]) -> str:
    """Write a subscriber list into a description.

    The existing metadata line is replaced in place, migrating a deprecated
    ``Notify:`` line to ``Subscribers:``. Without one, the line is appended.
    Any other metadata lines are dropped so the result holds at most one. An
    empty list removes the metadata line altogether.

    All other lines are returned unchanged and in their original order.
    """
    lines = description.split("\n")
    found = _find_metadata_line(lines)

    if found is None:
        if not subscribers:
            return description
        new_line = render_subscribers_line(subscribers)
        if not description:
            return new_line
        if description.endswith("\n"):
            return description + new_line
        return description + "\n" + new_line

    index, prefix, deprecated = found
    if deprecated:
        logger.debug(f"Migrating '{prefix}' line {index} to '{CURRENT_PREFIX}'")

    result = []
    for i, line in enumerate(lines):
        if i == index:
            if subscribers:
                result.append(render_subscribers_line(subscribers))
            continue
        if _metadata_format(line) is not None:
            logger.debug(f"Dropping extra metadata line {i}: {line.strip()!r}")
            continue
        result.append(line)
    return "\n".join(result)


def add_subscribers(current: Sequence[str], new: Sequence[str]) -> list[str]:
    """Append tokens from ``new`` that are not already subscribed."""
    result = list(current)
    for token in new:
        if token not in result:
            result.append(token)
    return result


def remove_subscribers(current: Sequence[str], gone: Sequence[str]) -> list[str]:
    """Drop every occurrence of the tokens in ``gone``."""
    drop = set(gone)
    return [token for token in current if token not in drop]
