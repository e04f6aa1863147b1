"""Pattern matcher: template(s) x location x validator -> params.

``match()`` returns a ``dict`` of bound parameters on success and
``None`` on failure. An empty dict is a successful match of a template
without captures, so callers must test ``is not None``::

    params = match("/page-one/:id", location)
    if params is not None:
        show(params["id"])
"""

from collections.abc import Callable, Mapping, Sequence
from typing import TypeAlias

from warble.routing.location import Location
from warble.routing.template import SegmentKind, parse_template

# One template string, or alternatives tried in order
Template: TypeAlias = str | Sequence[str]

# Receives the bound parameters; a falsy result rejects the match
Validator: TypeAlias = Callable[[Mapping[str, str]], object]


def match_one(source: str, location: Location, validator: Validator | None = None) -> dict[str, str] | None:
    """Match a single template string against *location*."""
    template = parse_template(source)

    if len(template.segments) != len(location.segments):
        return None

    if not template.hash_matches(location.hash):
        return None

    params: dict[str, str] = {}
    for segment, part in zip(template.segments, location.segments, strict=True):
        if not segment.accepts(part):
            return None
        if segment.kind is SegmentKind.PARAM and segment.name is not None:
            params[segment.name] = part

    if validator is not None and not validator(params):
        return None
    return params


def match(template: Template | None, location: Location, validator: Validator | None = None) -> dict[str, str] | None:
    """Match *template* (or the first matching alternative) against *location*.

    A missing or empty template never matches. With a list of
    alternatives the first successful match wins.
    """
    if not template:
        return None
    if isinstance(template, str):
        return match_one(template, location, validator)
    for alternative in template:
        params = match_one(alternative, location, validator)
        if params is not None:
            return params
    return None
