"""Test utilities for warble.

Provides an in-memory browser host, recording elements, and activation
assertions. All public names are re-exported here::

    from warble.testing import Browser, RecordingElement, assert_active
"""

from warble.testing.assertions import (
    assert_active,
    assert_group_active,
    assert_inactive,
    assert_only_active,
)
from warble.testing.browser import (
    Browser,
    CustomEvent,
    Document,
    Element,
    Event,
    History,
    MouseEvent,
    PopStateEvent,
    Window,
    parse_selector,
)
from warble.testing.components import HookCall, RecordingElement

__all__ = [
    "Browser",
    "CustomEvent",
    "Document",
    "Element",
    "Event",
    "History",
    "HookCall",
    "MouseEvent",
    "PopStateEvent",
    "RecordingElement",
    "Window",
    "assert_active",
    "assert_group_active",
    "assert_inactive",
    "assert_only_active",
    "parse_selector",
]
