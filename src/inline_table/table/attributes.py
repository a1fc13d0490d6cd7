"""Cell attribute rewriting for rich rendering.

Before a cell is rendered for display its attributes are copied onto a
wrapping group element: any ``width`` declaration is removed from the inline
style (the display layer sizes columns itself) and the cell marker class is
prefixed to the class list so the frontend can find and unwrap the group.
"""

from bs4 import Tag

from inline_table.table.patterns import CELL_MARKER_CLASS, WIDTH_STRIPPER_RE
from inline_table.table.schema import CellAttributes


def strip_width(style: str) -> str:
    """Remove every ``width:`` declaration from an inline style, keeping the others.

    'color: red; width: 20px; border: 0' -> 'color: red;; border: 0'
    """
    return WIDTH_STRIPPER_RE.sub(r"\1", style)


def read_cell_attributes(cell: Tag) -> CellAttributes:
    """Split a cell element's attributes into style, class, and everything else."""
    other: dict[str, str] = {}
    for name, value in cell.attrs.items():
        if name in ("style", "class"):
            continue
        # Multi-valued attributes (rel, headers, ...) come back as lists
        other[name] = " ".join(value) if isinstance(value, list) else str(value)

    raw_class = cell.get("class") or []
    css_class = " ".join(raw_class) if isinstance(raw_class, list) else str(raw_class)
    return CellAttributes(style=cell.get("style"), css_class=css_class, other=other)


def rewrite_for_display(attributes: CellAttributes) -> CellAttributes:
    """Return a copy with widths stripped from the style and the marker class prefixed."""
    style = strip_width(attributes.style) if attributes.style is not None else None
    css_class = f"{CELL_MARKER_CLASS} {attributes.css_class}".strip()
    return CellAttributes(style=style, css_class=css_class, other=dict(attributes.other))
