"""
Directive marker vocabulary

All regular expressions for reStructuredText markers live here so the
scanner, the context tracker and the include finder agree on the grammar.
Patterns are matched against a line with its indentation stripped.

Marker grammar:
    .. <name>::[ argument]
       :key: value
       ...
       <body>
"""

import re
from typing import List, Optional, Pattern, Tuple

from ..models.directives import DirectiveType
from ..models.context import ContextKind


def _marker(names: str) -> Pattern[str]:
    return re.compile(r'^\.\.\s+(?:' + names + r')::(?:\s+(.*))?$')


# Code-example markers, evaluated top to bottom; first match wins.
DIRECTIVE_PATTERNS: List[Tuple[DirectiveType, Pattern[str]]] = [
    (DirectiveType.LITERAL_INCLUDE, _marker(r'literalinclude')),
    (DirectiveType.CODE_BLOCK, _marker(r'code-block|sourcecode|code')),
    (DirectiveType.IO_CODE_BLOCK, _marker(r'io-code-block')),
]

# Sub-markers inside an io-code-block
INPUT_PATTERN = _marker(r'input')
OUTPUT_PATTERN = _marker(r'output')

INCLUDE_PATTERN = _marker(r'include')

# Context-providing markers
CONTEXT_PATTERNS: List[Tuple[ContextKind, Pattern[str]]] = [
    (ContextKind.TAB, _marker(r'tab')),
    (ContextKind.SELECTED_CONTENT, _marker(r'selected-content')),
]

COMPOSABLE_TUTORIAL_PATTERN = _marker(r'composable-tutorial')

# :key: value
OPTION_PATTERN = re.compile(r'^:([\w-]+):(?:\s+(.*))?$')


def indent_measure(line: str) -> int:
    """Number of leading spaces on a line"""
    return len(line) - len(line.lstrip(' '))


def option_match(stripped: str) -> Optional[Tuple[str, str]]:
    """
    Parse an option line

    Returns:
        (key, value) with the value stripped, or None if not an option line

    Example:
        >>> option_match(':language: python')
        ('language', 'python')
    """
    match = OPTION_PATTERN.match(stripped)
    if not match:
        return None
    return match.group(1), (match.group(2) or "").strip()


def contextKind_match(stripped: str) -> Optional[ContextKind]:
    """Return the context block kind opened by a line, if any"""
    for kind, pattern in CONTEXT_PATTERNS:
        if pattern.match(stripped):
            return kind
    return None
