"""Routing: location snapshots, path templates, and the pattern matcher.

Templates are parsed once and cached; matching is a single left-to-right
walk over equal-length segment lists.
"""

from warble.routing.location import Location
from warble.routing.matcher import Template, Validator, match, match_one
from warble.routing.template import PathTemplate, SegmentKind, TemplateSegment, parse_template

__all__ = [
    "Location",
    "PathTemplate",
    "SegmentKind",
    "Template",
    "TemplateSegment",
    "Validator",
    "match",
    "match_one",
    "parse_template",
]
