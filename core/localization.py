"""Localization and display helpers for pipeline messages.

`translate` is the message-key-to-display-string function handed to the
transform pipeline. `render_message_markup` converts the `[ul]`/`[li]`
markers a message may carry into escaped HTML for the error display.
"""

from __future__ import annotations

import re

from django.utils.html import escape
from django.utils.safestring import SafeString, mark_safe
from django.utils.translation import gettext

from chartspec.messages import DEFAULT_MESSAGES

_MARKER_RE = re.compile(r"\[(/?)(ul|li)\]")


def translate(key: str) -> str:
    """Return the active-language display string for a message key.

    The English default text doubles as the gettext message id; unknown keys
    are returned unchanged.
    """

    return gettext(DEFAULT_MESSAGES.get(key, key))


def _markers_paired(message: str) -> bool:
    """Return True when every list marker has a matching closing marker."""

    depth: list[str] = []
    for match in _MARKER_RE.finditer(message):
        closing, tag = match.groups()
        if not closing:
            depth.append(tag)
            continue
        if not depth or depth.pop() != tag:
            return False
    return not depth


def render_message_markup(message: str) -> SafeString:
    """Render a pipeline message as HTML.

    Message text is escaped first; paired `[ul]`/`[li]` markers are then
    converted into list tags. Unpaired markers are left as literal text.

    Args:
        message: Display message, possibly containing list markers.

    Returns:
        SafeString suitable for direct insertion into a template.
    """

    escaped = str(escape(message))
    if not _markers_paired(message):
        return mark_safe(escaped)
    return mark_safe(_MARKER_RE.sub(lambda match: f"<{match.group(1)}{match.group(2)}>", escaped))


def render_messages(messages: tuple[str, ...] | list[str]) -> list[str]:
    """Render every message in order (see `render_message_markup`)."""

    return [str(render_message_markup(message)) for message in messages]
