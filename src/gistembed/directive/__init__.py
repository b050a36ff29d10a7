"""Parsing and resolution of ``gist:`` directives."""

from gistembed.directive.query import GistQuery, coerce_lines, parse_directive
from gistembed.directive.ranges import expand_range
from gistembed.directive.reference import GistReference, resolve_reference

__all__ = [
    "GistQuery",
    "GistReference",
    "coerce_lines",
    "expand_range",
    "parse_directive",
    "resolve_reference",
]
