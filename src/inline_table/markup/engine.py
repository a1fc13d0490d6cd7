"""HTML markup collaborator: parsing, plain/rich rendering, and macro transformations.

The inline-table pipeline only needs four capabilities from its host markup
engine: parse markup into a tree, render a node as plain text, render a node
as rich markup for a target syntax, and run the transformation pass that
expands macros (recursively, since a cell may contain another macro call).
This module provides them over BeautifulSoup.

Macro calls are elements carrying a ``data-macro`` attribute; the other
``data-*`` attributes are the macro parameters and the element's inner
markup is the macro content:

    <div data-macro="inline-table" data-date-formats="%d.%m.%Y">
      <table>...</table>
    </div>
"""

import copy
import logging
from typing import Callable, Iterable

from bs4 import BeautifulSoup, PageElement, Tag
from pydantic import BaseModel

from inline_table.config import DEFAULT_TARGET_SYNTAX, MAX_NESTING_DEPTH
from inline_table.errors import InlineTableError, RenderingFailure

logger = logging.getLogger(__name__)

MACRO_ATTR = "data-macro"
_PARAM_PREFIX = "data-"

# Target syntaxes rendered as markup; the annotated ones signal WYSIWYG editing
RICH_SYNTAXES = {"html/5.0", "xhtml/1.0", "annotatedhtml/5.0", "annotatedxhtml/1.0"}
PLAIN_SYNTAX = "plain/1.0"

_ROW_GROUPS = ("thead", "tbody", "tfoot")

# (parameters, content, context) -> elements replacing the macro call
Macro = Callable[[dict[str, str], str, "TransformationContext"], list[PageElement]]


class TransformationContext(BaseModel):
    """Per-render state handed to macros during the transformation pass."""

    target_syntax: str = DEFAULT_TARGET_SYNTAX
    action: str = "view"
    depth: int = 0
    max_depth: int = MAX_NESTING_DEPTH

    @property
    def is_edit(self) -> bool:
        """True when rendering for the WYSIWYG editor (annotated output)."""
        return self.target_syntax.startswith("annotated")

    def nested(self) -> "TransformationContext":
        """Return the context for a macro call one level deeper."""
        return self.model_copy(update={"depth": self.depth + 1})


class MarkupEngine:
    """Parse and render HTML markup, expanding registered macros."""

    def __init__(self, parser: str = "html.parser"):
        self.parser = parser
        self._macros: dict[str, Macro] = {}

    def register_macro(self, name: str, macro: Macro) -> None:
        self._macros[name] = macro

    # ─── Tree Access ─────────────────────────────────────────────────────

    def parse(self, markup: str) -> BeautifulSoup:
        return BeautifulSoup(markup, self.parser)

    def new_element(self, name: str, attrs: dict[str, str], children: Iterable[PageElement] = ()) -> Tag:
        """Build a detached element holding copies of *children*."""
        element = BeautifulSoup("", self.parser).new_tag(name, attrs=attrs)
        for child in children:
            element.append(copy.copy(child))
        return element

    @staticmethod
    def rows(table: Tag) -> list[Tag]:
        """Return the table's own rows, including those inside thead/tbody/tfoot but not nested tables."""
        rows: list[Tag] = []
        for child in table.find_all(True, recursive=False):
            if child.name == "tr":
                rows.append(child)
            elif child.name in _ROW_GROUPS:
                rows.extend(child.find_all("tr", recursive=False))
        return rows

    @staticmethod
    def cells(row: Tag) -> list[Tag]:
        return row.find_all(["td", "th"], recursive=False)

    @staticmethod
    def is_header_cell(cell: Tag) -> bool:
        return cell.name == "th"

    @staticmethod
    def top_level_tables(root: Tag) -> list[Tag]:
        """Return tables under *root* that are not nested inside another table."""
        return [table for table in root.find_all("table") if not _has_ancestor(table, root, lambda t: t.name == "table")]

    # ─── Rendering ───────────────────────────────────────────────────────

    @staticmethod
    def render_plain_text(node: PageElement) -> str:
        """Render a node as whitespace-collapsed plain text."""
        text = node.get_text() if isinstance(node, Tag) else str(node)
        return " ".join(text.split())

    def render_rich(self, node: PageElement, target_syntax: str = DEFAULT_TARGET_SYNTAX) -> str:
        """Render a node as markup in *target_syntax*."""
        if target_syntax == PLAIN_SYNTAX:
            return self.render_plain_text(node)
        if target_syntax not in RICH_SYNTAXES:
            raise RenderingFailure(f"No renderer available for syntax {target_syntax}")
        return node.decode() if isinstance(node, Tag) else str(node)

    # ─── Transformations ─────────────────────────────────────────────────

    def run_transformations(self, node: Tag, context: TransformationContext) -> Tag:
        """Replace every top-most macro call under *node* with the macro's output.

        Macro calls nested inside another call are left for that macro, which
        runs its own transformation pass over the content it renders.
        """
        calls = [
            element
            for element in node.find_all(attrs={MACRO_ATTR: True})
            if not _has_ancestor(element, node, lambda t: t.has_attr(MACRO_ATTR))
        ]
        for call in calls:
            name = call[MACRO_ATTR]
            macro = self._macros.get(name)
            if macro is None:
                logger.warning("Unknown macro %r left untouched", name)
                continue

            parameters = {
                key[len(_PARAM_PREFIX) :]: " ".join(value) if isinstance(value, list) else value
                for key, value in call.attrs.items()
                if key.startswith(_PARAM_PREFIX) and key != MACRO_ATTR
            }
            logger.debug("Running macro %s at depth %d", name, context.depth + 1)
            try:
                output = macro(parameters, call.decode_contents(), context.nested())
            except InlineTableError:
                raise
            except Exception as exc:  # pylint: disable=broad-exception-caught
                raise RenderingFailure(f"Macro {name} failed: {exc}") from exc
            call.replace_with(*output)
        return node

    def transform(self, markup: str, context: TransformationContext | None = None) -> str:
        """Parse *markup*, expand its macros, and render it in the context's target syntax."""
        context = context or TransformationContext()
        root = self.parse(markup)
        self.run_transformations(root, context)
        return self.render_rich(root, context.target_syntax)


def _has_ancestor(element: Tag, root: Tag, predicate: Callable[[Tag], bool]) -> bool:
    """True if an ancestor of *element* strictly below *root* satisfies *predicate*."""
    for parent in element.parents:
        if parent is root:
            return False
        if predicate(parent):
            return True
    return False
