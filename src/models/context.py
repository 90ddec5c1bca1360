"""
Context data models

Types describing the tab / composable-selection state a code example
inherits from the structure surrounding it.
"""

from enum import Enum
from dataclasses import dataclass


class ContextKind(Enum):
    """Kinds of line-range-scoped context blocks"""
    TAB = "tab"                             # .. tab:: with :tabid:
    SELECTED_CONTENT = "selected-content"   # .. selected-content:: with :selections:


# Option key that carries the selector for each block kind
SELECTOR_KEYS = {
    ContextKind.TAB: "tabid",
    ContextKind.SELECTED_CONTENT: "selections",
}


@dataclass(frozen=True)
class CodeContext:
    """
    Resolved context for one directive

    Attributes:
        tab_id: Driver tab identifier (e.g., "python", "java-sync")
        language: Composable language selection (e.g., "nodejs")
        interface: Composable interface selection (e.g., "mongosh", "driver")
    """
    tab_id: str = ""
    language: str = ""
    interface: str = ""

    def is_empty(self) -> bool:
        return not (self.tab_id or self.language or self.interface)


@dataclass
class ContextBlock:
    """
    Line interval during which a tab or selected-content block is active

    The selector is filled in by the block's option header and stays empty for
    malformed blocks. end_line is inclusive.

    Attributes:
        kind: Block kind
        selector: Tab ID or selection value
        start_line: Line of the opening marker
        end_line: Last line belonging to the block
        indent: Indentation of the opening marker
    """
    kind: ContextKind
    selector: str = ""
    start_line: int = 0
    end_line: int = 0
    indent: int = 0

    def contains(self, line_num: int) -> bool:
        return self.start_line <= line_num <= self.end_line

    def context_make(self) -> CodeContext:
        """Convert the block selector to a CodeContext (empty if unset)"""
        if self.kind == ContextKind.TAB:
            return CodeContext(tab_id=self.selector)
        return CodeContext(language=self.selector)
