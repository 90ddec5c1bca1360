"""
Context block tracking and resolution

Code examples inherit product context from the structure around them:

    .. tabs-drivers::

       .. tab::
          :tabid: python

          .. code-block:: python      <- tab_id "python"

    .. selected-content::
       :selections: nodejs

       .. include:: /includes/x.rst   <- x.rst inherits language "nodejs"

This module computes the line intervals of tab and selected-content blocks,
the whole-file contexts of composable tutorials, and the include-to-selector
map, and resolves the context that applies to a given line.
"""

from pathlib import Path
from typing import Dict, List, Optional, Sequence, Set, Union

from ..models.context import CodeContext, ContextBlock, SELECTOR_KEYS
from .patterns import (
    COMPOSABLE_TUTORIAL_PATTERN,
    CONTEXT_PATTERNS,
    contextKind_match,
    indent_measure,
    option_match,
)
from .includes import includeMarkers_find, includePath_resolve
from .scanner import codeBodyLines_find


class ContextBlockTracker:
    """
    Computes tab / selected-content intervals with an indentation stack

    A block opens at its marker line. Any later non-blank, non-option line at
    or below the marker's indentation closes it (end_line is the previous
    line); nested blocks close innermost first. Blocks still open at the end
    of input close on the last line.

    Lines inside code-example bodies are sample text and are skipped.

    Attributes:
        lines: Source lines (tabs expanded)
        code_lines: Line numbers inside code-example bodies
        open_blocks: Stack of blocks not yet closed
        blocks: Finalized blocks, in closing order
    """

    def __init__(self, source: str):
        self.lines: List[str] = source.expandtabs(8).splitlines()
        self.code_lines: Set[int] = codeBodyLines_find(source)
        self.open_blocks: List[ContextBlock] = []
        self.blocks: List[ContextBlock] = []

    def blocks_track(self) -> List[ContextBlock]:
        """
        Scan the source and return all context block intervals

        Example:
            >>> source = ".. tab::\\n   :tabid: python\\n\\n   text\\nafter\\n"
            >>> block = ContextBlockTracker(source).blocks_track()[0]
            >>> (block.selector, block.start_line, block.end_line)
            ('python', 1, 4)
        """
        self.open_blocks = []
        self.blocks = []

        for line_num, line in enumerate(self.lines, start=1):
            if line_num in self.code_lines:
                continue
            stripped = line.strip()
            indent = indent_measure(line)

            if stripped and not stripped.startswith(":"):
                self.blocks_close(indent, line_num - 1)

            kind = contextKind_match(stripped)
            if kind is not None:
                self.open_blocks.append(ContextBlock(kind=kind, start_line=line_num, indent=indent))
                continue

            self.selector_fill(stripped)

        self.blocks_close(-1, len(self.lines))
        return self.blocks

    def blocks_close(self, indent: int, end_line: int) -> None:
        """Close every open block whose marker is indented at least `indent`"""
        while self.open_blocks and self.open_blocks[-1].indent >= indent:
            block = self.open_blocks.pop()
            block.end_line = end_line
            self.blocks.append(block)

    def selector_fill(self, stripped: str) -> None:
        """Fill the innermost block's selector from its own option key"""
        if not self.open_blocks:
            return
        top = self.open_blocks[-1]
        if top.selector:
            return
        option = option_match(stripped)
        if option and option[0] == SELECTOR_KEYS[top.kind]:
            top.selector = option[1]


def composableOptions_parse(options: str) -> CodeContext:
    """
    Parse a composable-tutorial options string

    Any key containing "language" or "lang" sets the language; any key
    containing "interface" sets the interface. Malformed parts are ignored.

    Example:
        >>> composableOptions_parse("language=python; interface=driver")
        CodeContext(tab_id='', language='python', interface='driver')
    """
    language = ""
    interface = ""
    for part in options.split(";"):
        key, sep, value = part.strip().partition("=")
        if not sep:
            continue
        key = key.strip()
        value = value.strip()
        if "language" in key or "lang" in key:
            language = value
        if "interface" in key:
            interface = value
    return CodeContext(language=language, interface=interface)


def headerOption_find(lines: Sequence[str], marker_index: int, key: str) -> Optional[str]:
    """
    Look for an option in the header directly after a marker

    Stops at the first blank or non-option line.
    """
    for line in lines[marker_index + 1:]:
        stripped = line.strip()
        if not stripped:
            return None
        option = option_match(stripped)
        if option is None:
            return None
        if option[0] == key:
            return option[1]
    return None


def fileContexts_parse(source: str) -> List[CodeContext]:
    """
    Collect whole-file contexts without interval tracking

    Gathers one context per tab carrying :tabid: and per composable tutorial
    carrying :options:, in document order.

    Returns:
        List of contexts (empty if the file has none)
    """
    lines = source.splitlines()
    code_lines = codeBodyLines_find(source)
    tab_pattern = CONTEXT_PATTERNS[0][1]
    contexts: List[CodeContext] = []

    for index, line in enumerate(lines):
        if index + 1 in code_lines:
            continue
        stripped = line.strip()
        if tab_pattern.match(stripped):
            tab_id = headerOption_find(lines, index, "tabid")
            if tab_id:
                contexts.append(CodeContext(tab_id=tab_id))
        elif COMPOSABLE_TUTORIAL_PATTERN.match(stripped):
            options = headerOption_find(lines, index, "options")
            if options:
                contexts.append(composableOptions_parse(options))

    return contexts


def innermostBlock_find(line_num: int, blocks: Sequence[ContextBlock]) -> Optional[ContextBlock]:
    """Return the innermost block containing a line that has a selector"""
    best: Optional[ContextBlock] = None
    for block in blocks:
        if not block.selector or not block.contains(line_num):
            continue
        if best is None or block.start_line > best.start_line:
            best = block
    return best


def context_resolve(
    line_num: int,
    blocks: Sequence[ContextBlock],
    file_contexts: Sequence[CodeContext],
) -> List[CodeContext]:
    """
    Resolve the contexts that apply to a line

    The innermost enclosing block with a selector wins; otherwise the
    file-level contexts apply; otherwise a single empty context.

    Args:
        line_num: 1-based line of the directive
        blocks: Context block intervals of the file
        file_contexts: Whole-file contexts of the file

    Returns:
        Contexts to try in order
    """
    block = innermostBlock_find(line_num, blocks)
    if block is not None:
        return [block.context_make()]
    if file_contexts:
        return list(file_contexts)
    return [CodeContext()]


def includeSelectors_parse(
    file_path: Union[str, Path],
    source: str,
    blocks: Sequence[ContextBlock],
) -> Dict[str, str]:
    """
    Map include targets to the selector of the block enclosing the include

    Only includes inside a tab or selected-content block with a selector are
    recorded. When the same target is included from several blocks the
    first one wins.

    Args:
        file_path: File the source was read from
        source: File contents
        blocks: Context block intervals of the file

    Returns:
        Resolved include path -> tab ID or selection value
    """
    selectors: Dict[str, str] = {}
    for line_num, include_arg in includeMarkers_find(source):
        block = innermostBlock_find(line_num, blocks)
        if block is None:
            continue
        resolved = includePath_resolve(file_path, include_arg)
        if resolved is not None:
            selectors.setdefault(resolved, block.selector)
    return selectors
