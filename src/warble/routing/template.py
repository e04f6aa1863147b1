"""Path template parsing.

A template is a URL path made of literal segments, ``:name`` captures
and ``*`` wildcards, optionally followed by a hash constraint::

    "/users"            literal only
    "/users/:id"        binds ``id``
    "/files/*"          any non-empty segment
    "/inbox#*"          any non-empty hash
    "/inbox#"           hash must be empty
    "/inbox#compose"    hash must equal ``compose``

Templates are resolved against ``http://localhost/`` the way a browser
resolves a relative URL, so ``"page"`` and ``"/page"`` are the same
template and a query string is ignored.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from functools import lru_cache
from urllib.parse import quote, urljoin, urlsplit

_BASE_URL = "http://localhost/"

# Characters a browser leaves unescaped in a URL path
_PATH_SAFE = "/:*%@!$&'()+,;=[]|^"


class SegmentKind(StrEnum):
    LITERAL = "literal"
    PARAM = "param"
    WILDCARD = "wildcard"


@dataclass(frozen=True, slots=True)
class TemplateSegment:
    """A parsed segment of a path template.

    Literal:   ``users``  (kind=LITERAL, value="users")
    Param:     ``:id``    (kind=PARAM, value=":id", name="id")
    Wildcard:  ``*``      (kind=WILDCARD, value="*")
    """

    value: str
    kind: SegmentKind = SegmentKind.LITERAL
    name: str | None = None

    def accepts(self, part: str) -> bool:
        """Whether this segment matches a location segment *part*."""
        if self.kind is SegmentKind.PARAM:
            return True
        if self.kind is SegmentKind.WILDCARD and part:
            return True
        return self.value == part


@dataclass(frozen=True, slots=True)
class PathTemplate:
    """A parsed path template.

    ``hash`` is the fragment after ``#`` (``"*"`` for the wildcard form).
    ``hash_must_be_empty`` is set when the raw template ends with a bare
    ``#``.
    """

    source: str
    segments: tuple[TemplateSegment, ...]
    hash: str = ""
    hash_must_be_empty: bool = False

    @property
    def constrains_hash(self) -> bool:
        return bool(self.hash) or self.hash_must_be_empty

    @property
    def param_names(self) -> tuple[str, ...]:
        return tuple(s.name for s in self.segments if s.name is not None)

    def hash_matches(self, location_hash: str) -> bool:
        """Apply the hash rule to a location's hash (without ``#``)."""
        if not self.constrains_hash:
            return True
        if self.hash_must_be_empty and location_hash:
            return False
        if self.hash == "*" and location_hash:
            return True
        return self.hash == location_hash


def _parse_segment(part: str) -> TemplateSegment:
    if part.startswith(":"):
        return TemplateSegment(value=part, kind=SegmentKind.PARAM, name=part[1:])
    if part == "*":
        return TemplateSegment(value=part, kind=SegmentKind.WILDCARD)
    return TemplateSegment(value=part)


@lru_cache(maxsize=512)
def parse_template(source: str) -> PathTemplate:
    """Parse a template string into segments and a hash rule.

    Examples::

        "/page-one/:id" -> segments ("", "page-one", ":id")
        "/a#*"          -> hash="*"
        "/a#"           -> hash_must_be_empty=True
        "/café"         -> segments ("", "caf%C3%A9")

    The path is percent-encoded as a browser would encode it, so a
    template written with non-ASCII text or spaces matches the encoded
    location the host reports.
    """
    parts = urlsplit(urljoin(_BASE_URL, source))
    path = quote(parts.path or "/", safe=_PATH_SAFE)
    return PathTemplate(
        source=source,
        segments=tuple(_parse_segment(part) for part in path.split("/")),
        hash=parts.fragment,
        hash_must_be_empty=source.endswith("#"),
    )
