"""
rstaudit - Testable code example audit for reStructuredText corpora

Scanner, context tracking, classification and inclusion walking.
"""

__version__ = "1.0.0"

from .scanner import DirectiveScanner, directives_parse, directives_parseFile
from .contexts import ContextBlockTracker, context_resolve, fileContexts_parse
from .classifier import classify, directive_examples
from .manifest import canonical_load, mappings_merge
from .walker import examples_collect, file_classify, page_analyze
from .report import pageReport_build, report_toDict
from .pages import pagesFile_parse, inputFiles_rank
from .errors import AuditError, PageResolutionError, MappingLoadError, ManifestError, PagesFileError
from .log import LOG, state_connectToLogger

__all__ = [
    "DirectiveScanner",
    "directives_parse",
    "directives_parseFile",
    "ContextBlockTracker",
    "context_resolve",
    "fileContexts_parse",
    "classify",
    "directive_examples",
    "canonical_load",
    "mappings_merge",
    "examples_collect",
    "file_classify",
    "page_analyze",
    "pageReport_build",
    "report_toDict",
    "pagesFile_parse",
    "inputFiles_rank",
    "AuditError",
    "PageResolutionError",
    "MappingLoadError",
    "ManifestError",
    "PagesFileError",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
