"""
Line-oriented scanner for code-example directives

Finds literalinclude, code-block and io-code-block markers in
reStructuredText (or RST embedded in YAML block scalars) and turns each into
a Directive record.

The scanner works in one pass over the lines:
1. Match the line against the ordered marker registry (first match wins)
2. Read the option header (indented :key: value lines)
3. Read the body until indentation returns to the marker's level
4. For io-code-block, scan the body for .. input:: / .. output:: sub-blocks
5. Resume scanning after the body

Lines that match no marker are skipped, and malformed directives are still
emitted so classification can fall back to defaults.

Example:
    >>> scanner = DirectiveScanner(".. code-block:: python\\n\\n   print(1)\\n")
    >>> directives = scanner.directives_scan()
    >>> directives[0].argument
    'python'
    >>> directives[0].content
    'print(1)'
"""

import os
import textwrap
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Set, Union

from ..models.directives import Directive, DirectiveType, SubDirective
from .patterns import (
    DIRECTIVE_PATTERNS,
    INPUT_PATTERN,
    OUTPUT_PATTERN,
    indent_measure,
    option_match,
)
from .yamlsteps import yamlSteps_parse, YAML_EXTENSIONS
from .log import LOG


@dataclass
class MarkerMatch:
    """
    A directive marker found on a line

    Attributes:
        type: Directive type of the marker
        argument: Text after "::" (stripped, may be empty)
        indent: Indentation of the marker line
    """
    type: DirectiveType
    argument: str
    indent: int


@dataclass
class BlockExtent:
    """
    Option header and body that follow a marker

    Attributes:
        options: Parsed :key: value header, in source order
        body: Raw body lines (not dedented)
        body_start: Index of the first body line
        end: Index of the first line after the block
    """
    options: Dict[str, str] = field(default_factory=dict)
    body: List[str] = field(default_factory=list)
    body_start: int = 0
    end: int = 0


class DirectiveScanner:
    """
    Scanner for code-example directives in one text

    Attributes:
        source: Text being scanned
        lines: Source split into lines (tabs expanded)
        position: Index of the line being scanned
        body_lines: 1-based numbers of the body lines skipped so far
    """

    def __init__(self, source: str):
        self.source = source
        self.lines: List[str] = source.expandtabs(8).splitlines()
        self.position = 0
        self.body_lines: Set[int] = set()

    def directives_scan(self) -> List[Directive]:
        """
        Scan the source for directives

        Returns:
            Directives in document order
        """
        directives: List[Directive] = []
        self.position = 0
        self.body_lines = set()

        while self.position < len(self.lines):
            marker = self.marker_match(self.lines[self.position])
            if marker is None:
                self.position += 1
                continue

            line_num = self.position + 1
            extent = self.block_read(self.position, marker.indent)
            directives.append(self.directive_build(marker, extent, line_num))

            # Body text is never re-scanned (code blocks may show RST markup)
            self.body_lines.update(range(extent.body_start + 1, extent.end + 1))
            self.position = max(extent.end, self.position + 1)

        return directives

    def marker_match(self, line: str) -> Optional[MarkerMatch]:
        """
        Match a line against the directive registry

        Returns:
            MarkerMatch for the first matching pattern, or None
        """
        stripped = line.strip()
        if not stripped.startswith('..'):
            return None

        for directive_type, pattern in DIRECTIVE_PATTERNS:
            match = pattern.match(stripped)
            if match:
                return MarkerMatch(
                    type=directive_type,
                    argument=(match.group(1) or "").strip(),
                    indent=indent_measure(line),
                )
        return None

    def block_read(self, marker_index: int, marker_indent: int) -> BlockExtent:
        """
        Read the option header and body following a marker line

        The header ends at the first blank or non-option line. The body runs
        until a non-blank line at or below the marker's indentation.

        Args:
            marker_index: Index of the marker line
            marker_indent: Indentation of the marker line

        Returns:
            BlockExtent describing the header and body
        """
        extent = BlockExtent()
        index = marker_index + 1

        while index < len(self.lines):
            line = self.lines[index]
            stripped = line.strip()
            if not stripped or indent_measure(line) <= marker_indent:
                break
            option = option_match(stripped)
            if option is None:
                break
            key, value = option
            extent.options[key] = value
            index += 1

        extent.body_start = index
        while index < len(self.lines):
            line = self.lines[index]
            if line.strip() and indent_measure(line) <= marker_indent:
                break
            index += 1

        extent.body = self.lines[extent.body_start:index]
        extent.end = index
        return extent

    def directive_build(self, marker: MarkerMatch, extent: BlockExtent, line_num: int) -> Directive:
        """Create the Directive for a marker and its block"""
        if marker.type == DirectiveType.IO_CODE_BLOCK:
            input_block, output_block = self.subDirectives_read(extent)
            return Directive(
                type=marker.type,
                argument=marker.argument,
                options=extent.options,
                input=input_block,
                output=output_block,
                line_num=line_num,
            )

        content = ""
        if marker.type == DirectiveType.CODE_BLOCK:
            content = body_dedent(extent.body)

        return Directive(
            type=marker.type,
            argument=marker.argument,
            options=extent.options,
            line_num=line_num,
            content=content,
        )

    def subDirectives_read(self, extent: BlockExtent):
        """
        Find the .. input:: and .. output:: sub-blocks of an io-code-block

        Only the first of each is kept.

        Returns:
            (input, output) tuple of Optional[SubDirective]
        """
        input_block: Optional[SubDirective] = None
        output_block: Optional[SubDirective] = None

        index = extent.body_start
        while index < extent.end:
            line = self.lines[index]
            stripped = line.strip()
            input_match = INPUT_PATTERN.match(stripped)
            output_match = OUTPUT_PATTERN.match(stripped)
            match = input_match or output_match
            if match is None:
                index += 1
                continue

            sub_extent = self.block_read(index, indent_measure(line))
            sub_directive = SubDirective(
                argument=(match.group(1) or "").strip(),
                options=sub_extent.options,
                content=body_dedent(sub_extent.body),
            )
            if input_match and input_block is None:
                input_block = sub_directive
            elif output_match and output_block is None:
                output_block = sub_directive

            index = max(min(sub_extent.end, extent.end), index + 1)

        return input_block, output_block


def body_dedent(lines: List[str]) -> str:
    """Dedent body lines and drop surrounding blank lines"""
    return textwrap.dedent("\n".join(lines)).strip("\n")


def directives_parse(source: str, file_path: Union[str, Path] = "") -> List[Directive]:
    """
    Parse all directives in a text

    For YAML files the legacy steps sub-parser runs as well, and its
    directives are merged in line order.

    Args:
        source: File contents
        file_path: Name of the file (selects the YAML sub-parser by extension)

    Returns:
        Directives ordered by line number
    """
    directives = DirectiveScanner(source).directives_scan()

    if os.path.splitext(str(file_path))[1].lower() in YAML_EXTENSIONS:
        legacy = yamlSteps_parse(source)
        if legacy:
            LOG(f"{len(legacy)} legacy YAML code blocks in {file_path}", level=3)
            directives = sorted(directives + legacy, key=lambda d: d.line_num)

    return directives


def directives_parseFile(file_path: Union[str, Path]) -> List[Directive]:
    """
    Read a file and parse its directives

    Raises:
        OSError: If the file cannot be read
        UnicodeDecodeError: If the file is not valid UTF-8
    """
    source = Path(file_path).read_text(encoding="utf-8")
    return directives_parse(source, file_path)


def codeBodyLines_find(source: str) -> Set[int]:
    """
    Line numbers inside code-example bodies

    Markers on these lines are sample text, not structure, so the include
    finder and the context tracker skip them.

    Example:
        >>> sorted(codeBodyLines_find(".. code-block:: rst\\n\\n   .. include:: /x.rst\\n"))
        [2, 3]
    """
    scanner = DirectiveScanner(source)
    scanner.directives_scan()
    return scanner.body_lines
