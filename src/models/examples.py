"""
Classification output models

CodeExample records produced by the classifier, the product mapping tables
used to produce them, and the per-page report structures built from them.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List


@dataclass
class CodeExample:
    """
    A single classified code example

    Attributes:
        type: Directive type name (literalinclude, code-block, ...)
        language: Resolved language
        product: Display product the example is attributed to
        is_input: Input half of an io-code-block
        is_output: Output half of an io-code-block
        is_tested: References a file under the tested code tree
        is_testable: Product has automated test infrastructure
        is_maybe_testable: Product is ambiguous and needs manual review
        file_path: Referenced file (literalinclude, io-code-block)
        source_file: Documentation file containing the directive
    """
    type: str
    language: str = ""
    product: str = ""
    is_input: bool = False
    is_output: bool = False
    is_tested: bool = False
    is_testable: bool = False
    is_maybe_testable: bool = False
    file_path: str = ""
    source_file: str = ""


@dataclass(frozen=True)
class ProductMappings:
    """
    Option-ID to display-name tables from the canonical specification

    Attributes:
        tab_id_to_product: Driver tab IDs, e.g. "java-sync" -> "Java (Sync)"
        language_to_product: Composable languages, e.g. "nodejs" -> "Node.js"
        interface_to_product: Composable interfaces, e.g. "mongosh" -> "MongoDB Shell"
    """
    tab_id_to_product: Dict[str, str] = field(default_factory=dict)
    language_to_product: Dict[str, str] = field(default_factory=dict)
    interface_to_product: Dict[str, str] = field(default_factory=dict)


@dataclass
class PageEntry:
    """
    A page queued for analysis

    Attributes:
        rank: Position of the page in the batch (e.g. traffic rank)
        path: Page source file
    """
    rank: int
    path: Path


@dataclass
class PageAnalysis:
    """Code examples collected for one documentation page"""
    source_path: str
    rank: int = 0
    content_dir: str = ""
    error: str = ""
    code_examples: List[CodeExample] = field(default_factory=list)


@dataclass
class ProductStats:
    """Counts for one product on a page"""
    product: str
    total_count: int = 0
    input_count: int = 0
    output_count: int = 0
    tested_count: int = 0
    testable_count: int = 0
    maybe_testable_count: int = 0


@dataclass
class PageReport:
    """Aggregated statistics for one page"""
    source_path: str
    rank: int = 0
    content_dir: str = ""
    error: str = ""
    total_examples: int = 0
    total_input: int = 0
    total_output: int = 0
    total_tested: int = 0
    total_testable: int = 0
    total_maybe_testable: int = 0
    by_product: Dict[str, ProductStats] = field(default_factory=dict)
