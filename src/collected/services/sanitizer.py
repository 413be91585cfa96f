"""Allow-list HTML sanitizer for user-generated content - shared across layers."""

from __future__ import annotations

import logging

import nh3

logger = logging.getLogger(__name__)

GENERIC_ATTRIBUTES: set[str] = {"class", "lang", "title"}


class UGCPolicy:
    """nh3-based policy for untrusted command output."""

    def __init__(self) -> None:
        self._tags: set[str] = set(nh3.ALLOWED_TAGS)
        self._attributes: dict[str, set[str]] = {
            tag: set(attrs) for tag, attrs in nh3.ALLOWED_ATTRIBUTES.items()
        }
        self._attributes["*"] = self._attributes.get("*", set()) | GENERIC_ATTRIBUTES

    def sanitize(self, html: str) -> str:
        """Strip scripts, event handlers and disallowed elements."""
        clean = nh3.clean(html, tags=self._tags, attributes=self._attributes)
        if clean != html:
            logger.debug("Sanitizer rewrote %d chars of HTML to %d", len(html), len(clean))
        return clean


ugc_policy = UGCPolicy()
