"""Application name extraction and normalization.

A matched node is identified by the first non-empty of its Wayland app_id,
X11 window class or X11 window title. The raw identity is then reduced to a
short lowercase token suitable for a workspace label.
"""

import re
from typing import Callable, List, Optional

from .models import TreeNode


def _app_id(node: TreeNode) -> Optional[str]:
    return node.app_id


def _window_class(node: TreeNode) -> Optional[str]:
    if node.window_properties is None:
        return None
    return node.window_properties.window_class


def _window_title(node: TreeNode) -> Optional[str]:
    if node.window_properties is None:
        return None
    return node.window_properties.title


# Evaluated in order, first non-empty wins
NAME_SOURCES: List[Callable[[TreeNode], Optional[str]]] = [
    _app_id,
    _window_class,
    _window_title,
]


def application_name(node: TreeNode) -> str:
    """Guess the application of a node from its app_id, window class or title.

    Returns:
        Raw identity string, or "" if the node carries none
    """
    for source in NAME_SOURCES:
        value = source(node)
        if value:
            return value
    return ""


_MATCH_FQN = re.compile(r"([a-z0-9]+\.)+")
_MATCH_NUMBER_DISAMBIGUATION = re.compile(r"[0-9.\-_/|]+($|\s)")
_MATCH_TRAILING_PAREN = re.compile(r"\s*[\[({].*")
_MATCH_NON_ALNUM = re.compile(r"[^a-z0-9]")
_MATCH_CHANNEL = re.compile(r"\b(latest|beta|unstable)\b")
_MATCH_WHITESPACE = re.compile(r"\s+")


def format_name(name: str) -> str:
    """Normalize a raw application identity into a label token.

    Steps run in a fixed order since later patterns assume the earlier
    ones already lowercased and stripped the input.

    Examples:
        "org.mozilla.firefox" -> "firefox"
        "Slack (2) " -> "slack"
        "app-1.2.3" -> "app"
        "Code - Insiders [Profile]" -> "code insiders"
        "google-chrome-beta" -> "google chrome"

    Returns:
        Normalized token; "" means the identity is unusable
    """
    name = name.strip().lower()
    name = _MATCH_FQN.sub("", name)                    # com.example.xxx -> xxx
    name = _MATCH_NUMBER_DISAMBIGUATION.sub("", name)  # xxx.123 -> xxx
    name = _MATCH_TRAILING_PAREN.sub("", name)         # xxx (yyy) -> xxx
    name = _MATCH_NON_ALNUM.sub(" ", name)             # x-y -> x y
    name = _MATCH_CHANNEL.sub(" ", name)               # chrome beta -> chrome
    name = _MATCH_WHITESPACE.sub(" ", name)
    return name.strip()
