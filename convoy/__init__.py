"""Convoy: subscriber metadata and message templates for convoy tracking."""

__version__ = "0.3.0"

from .subscribers import (  # noqa: E402
    extract_subscribers,
    update_subscribers,
    add_subscribers,
    remove_subscribers,
)

__all__ = [
    "__version__",
    "extract_subscribers",
    "update_subscribers",
    "add_subscribers",
    "remove_subscribers",
]
