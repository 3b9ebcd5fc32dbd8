"""
Log categories: named substring rules used to classify log messages
"""

from dataclasses import dataclass
from typing import Iterable, List, Mapping, Tuple


class CategoryConfigError(ValueError):
    """Raised when a category definition is invalid"""


@dataclass(frozen=True)
class Category:
    """A named classification rule over rendered log messages

    An event belongs to the category if its message contains at least one
    of the markers. Markers are matched case-sensitively, exactly as given.
    """

    name: str
    markers: Tuple[str, ...]

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise CategoryConfigError("category name must be a non-empty string")

        if isinstance(self.markers, str):
            raise CategoryConfigError(
                f"category '{self.name}': markers must be a sequence of strings, not a string"
            )
        markers = tuple(self.markers)
        if not markers:
            raise CategoryConfigError(f"category '{self.name}' has no markers")
        for marker in markers:
            if not isinstance(marker, str) or not marker:
                raise CategoryConfigError(
                    f"category '{self.name}': invalid marker {marker!r}"
                )

        # Accept any iterable from callers, store a tuple
        object.__setattr__(self, "markers", markers)


FILLS = Category("fills", ("PartialFill", "TotalFill"))
ORDERS = Category("orders", ("Ask", "Bid"))

DEFAULT_CATEGORIES: Tuple[Category, ...] = (FILLS, ORDERS)


def parse_categories(value: str) -> List[Category]:
    """
    Parse categories from a compact string

    Format: ``name=marker1,marker2;other=marker3``. Whitespace around names
    and markers is stripped and empty segments are skipped.

    Raises:
        CategoryConfigError: if a segment is malformed or a name repeats
    """
    categories = []
    for segment in value.split(";"):
        segment = segment.strip()
        if not segment:
            continue
        name, sep, raw_markers = segment.partition("=")
        if not sep:
            raise CategoryConfigError(
                f"malformed category definition {segment!r}, expected name=marker[,marker]"
            )
        markers = tuple(m.strip() for m in raw_markers.split(",") if m.strip())
        categories.append(Category(name.strip(), markers))

    ensure_unique_names(categories)
    return categories


def categories_from_mapping(mapping: Mapping[str, Iterable[str]]) -> List[Category]:
    """Build categories from a ``{name: [markers]}`` mapping, preserving order"""
    if not isinstance(mapping, Mapping):
        raise CategoryConfigError(
            f"categories must be a mapping of name to markers, got {type(mapping).__name__}"
        )
    categories = []
    for name, markers in mapping.items():
        if isinstance(markers, str):
            markers = [markers]
        categories.append(Category(name, tuple(markers)))
    return categories


def ensure_unique_names(categories: Iterable[Category]) -> None:
    """Raise CategoryConfigError if two categories share a name"""
    seen = set()
    for category in categories:
        if category.name in seen:
            raise CategoryConfigError(f"duplicate category name '{category.name}'")
        seen.add(category.name)
