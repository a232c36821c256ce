"""
Waypoint string parsing.

Format: waypoints separated by ";", each waypoint is "x,y,heading_degrees".
The whole message may be URL-encoded. Rules:
- the literal token "NaN" in any field means 0;
- empty segments (for example a trailing ";") are ignored;
- any other token that is not a finite number is an error.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List
from urllib.parse import unquote

from splinegen.geombase import Pose2d

NAN_TOKEN = "NaN"
WAYPOINT_SEPARATOR = ";"
FIELD_SEPARATOR = ","
FIELD_NAMES = ("x", "y", "heading")


class WaypointParseError(ValueError):
    """A waypoint string could not be parsed."""

    def __init__(self, message: str, token: str = None, index: int = None, field: str = None):
        super().__init__(message)
        self.token = token
        self.index = index
        self.field = field


@dataclass(frozen=True)
class Waypoint:
    """Position and heading (degrees) the path must pass through."""

    x: float
    y: float
    heading_degrees: float = 0.0

    def to_pose(self) -> Pose2d:
        return Pose2d.from_degrees(self.x, self.y, self.heading_degrees)


def parse_number(token: str, index: int = None, field: str = None) -> float:
    """Parse one field. "NaN" is 0 by convention."""
    token = token.strip()
    if token == NAN_TOKEN:
        return 0.0
    try:
        value = float(token)
    except ValueError:
        raise WaypointParseError(
            f"waypoint {index}: field '{field}' is not a number: {token!r}",
            token=token, index=index, field=field) from None
    if not math.isfinite(value):
        raise WaypointParseError(
            f"waypoint {index}: field '{field}' is not finite: {token!r}",
            token=token, index=index, field=field)
    return value


def parse_waypoint(text: str, index: int = 0) -> Waypoint:
    fields = text.split(FIELD_SEPARATOR)
    if len(fields) != len(FIELD_NAMES):
        raise WaypointParseError(
            f"waypoint {index}: expected {len(FIELD_NAMES)} fields 'x,y,heading', got {text!r}",
            token=text, index=index)
    x, y, heading = (parse_number(token, index, name) for token, name in zip(fields, FIELD_NAMES))
    return Waypoint(x, y, heading)


def parse_waypoints(message: str, url_decode: bool = True) -> List[Waypoint]:
    """
    Parse a waypoint message.

    Returns:
        Waypoints in message order. Indices in errors count only non-empty segments.
    """
    if url_decode:
        message = unquote(message)
    segments = [s for s in message.split(WAYPOINT_SEPARATOR) if s.strip()]
    return [parse_waypoint(segment, index) for index, segment in enumerate(segments)]
