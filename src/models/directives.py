"""
Directive data models

Defines the closed set of code-example directive types and the immutable
records the scanner produces for them.
"""

from enum import Enum
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional


class DirectiveType(Enum):
    """
    Code-example directive types recognized by the scanner

    Values are the directive names reported in CodeExample.type.
    """
    LITERAL_INCLUDE = "literalinclude"    # .. literalinclude:: /path/file.py
    CODE_BLOCK = "code-block"             # .. code-block:: python (also .. code::)
    IO_CODE_BLOCK = "io-code-block"       # .. io-code-block:: with input/output
    YAML_CODE_BLOCK = "yaml-code-block"   # legacy action: blocks in steps files


@dataclass(frozen=True)
class SubDirective:
    """
    Nested .. input:: or .. output:: block of an io-code-block

    Attributes:
        argument: File path given on the marker line (may be empty)
        options: Option header of the sub-block
        content: Dedented inline body
    """
    argument: str = ""
    options: Dict[str, str] = field(default_factory=dict)
    content: str = ""

    def language_resolve(self, parent_options: Optional[Mapping[str, str]] = None) -> str:
        """
        Resolve the sub-block language

        Precedence: own :language: option, then the extension of the
        referenced file, then the parent io-code-block's :language: option,
        then "undefined". Aliases are normalized ("js" -> "javascript").
        """
        from ..lib.language import language_fromExtension, language_normalize

        language = self.options.get("language", "").strip()
        if not language and self.argument:
            language = language_fromExtension(self.argument)
        if not language and parent_options:
            language = parent_options.get("language", "").strip()
        return language_normalize(language)


@dataclass(frozen=True)
class Directive:
    """
    A code-example directive found in a documentation file

    Attributes:
        type: Directive type
        argument: Text after "::" on the marker line (language or file path)
        options: Option header, in source order
        input: Input sub-block (io-code-block only)
        output: Output sub-block (io-code-block only)
        line_num: 1-based line number of the marker
        content: Dedented body (code blocks only)

    Example:
        For the source

            .. code-block:: python
               :copyable: true

               print("hi")

        Directive(type=DirectiveType.CODE_BLOCK, argument="python",
                  options={"copyable": "true"}, line_num=1,
                  content='print("hi")')
    """
    type: DirectiveType
    argument: str = ""
    options: Dict[str, str] = field(default_factory=dict)
    input: Optional[SubDirective] = None
    output: Optional[SubDirective] = None
    line_num: int = 0
    content: str = ""

    def language_resolve(self) -> str:
        """
        Resolve the directive language

        Precedence: the argument (for directive types whose argument is a
        language), then the :language: option, then the file extension (for
        literalinclude), then "undefined".

        Code and YAML code blocks keep the value as written (lowercased).
        Other directives reference files, and their aliases are normalized.

        Example:
            >>> Directive(DirectiveType.CODE_BLOCK, argument="python",
            ...           options={"language": "javascript"}).language_resolve()
            'python'
            >>> Directive(DirectiveType.LITERAL_INCLUDE, argument="/a.txt",
            ...           options={"language": "ts"}).language_resolve()
            'typescript'
        """
        from ..lib.language import language_fromExtension, language_normalize, UNDEFINED

        if self.type in (DirectiveType.CODE_BLOCK, DirectiveType.YAML_CODE_BLOCK):
            language = self.argument.strip() or self.options.get("language", "").strip()
            return language.lower() if language else UNDEFINED

        language = self.options.get("language", "").strip()
        if not language and self.type == DirectiveType.LITERAL_INCLUDE:
            language = language_fromExtension(self.argument)
        return language_normalize(language)
