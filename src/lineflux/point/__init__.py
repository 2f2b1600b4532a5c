"""Point data model."""

from lineflux.point.models import FieldValue, Point, Points, Tag, Tags, UInt

__all__ = [
    "FieldValue",
    "Point",
    "Points",
    "Tag",
    "Tags",
    "UInt",
]
