"""Location snapshot: the read-only view of "where the browser is".

A ``Location`` is taken once per reconciliation pass from the host's
current URL and never mutated, so every component in a pass is judged
against the same path and hash.
"""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import urlsplit


@dataclass(frozen=True, slots=True)
class Location:
    """Path segments and hash of a URL.

    Segments come from splitting the URL path on ``/`` without dropping
    empty parts, so the leading slash yields an empty first segment and
    a trailing slash yields an empty last one::

        Location.from_url("http://example.com/users/42").segments
        # ("", "users", "42")
        Location.from_url("http://example.com/users/").segments
        # ("", "users", "")

    ``hash`` excludes the ``#``. Percent-escapes are kept as written.
    """

    segments: tuple[str, ...]
    hash: str = ""
    href: str = ""

    @classmethod
    def from_url(cls, url: str) -> Location:
        """Build a snapshot from an absolute or root-relative URL."""
        parts = urlsplit(url)
        path = parts.path or "/"
        return cls(segments=tuple(path.split("/")), hash=parts.fragment, href=url)

    @property
    def path(self) -> str:
        """The path portion, re-joined (``/users/42``)."""
        return "/".join(self.segments)

    def __str__(self) -> str:
        if self.hash:
            return f"{self.path}#{self.hash}"
        return self.path
