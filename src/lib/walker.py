"""
Inclusion walker

Collects the code examples of a page by scanning its source file and
recursively following `.. include::` directives. Context is threaded through
the inclusion graph: an include nested inside a tab or selected-content block
passes that selector to everything in the included file (and its own
includes, transitively).

    page.txt (no inherited context)
      ├── code-block in .. tab:: python         -> context from block
      └── include inside :selections: nodejs
            └── shared.rst (inherited language "nodejs")
                  └── nested.rst (inherited language "nodejs")

Each file is processed at most once per page, so inclusion cycles terminate.
"""

import os
from pathlib import Path
from typing import List, Optional, Set, Union

from ..models.context import CodeContext
from ..models.examples import CodeExample, PageAnalysis, ProductMappings
from .scanner import directives_parse
from .contexts import (
    ContextBlockTracker,
    context_resolve,
    fileContexts_parse,
    includeSelectors_parse,
)
from .includes import includes_find
from .classifier import directive_examples
from .manifest import mappings_merge
from .errors import PageResolutionError
from .log import LOG
from ..config import appsettings


def includeContext_make(selector: str, mappings: ProductMappings) -> CodeContext:
    """
    Interpret an include selector

    Selectors that are known driver tab IDs become tab contexts; anything else
    is treated as a composable language selection.
    """
    if selector in mappings.tab_id_to_product:
        return CodeContext(tab_id=selector)
    return CodeContext(language=selector)


def examples_collect(
    file_path: Union[str, Path],
    content_dir: str,
    visited: Set[str],
    inherited: Optional[CodeContext],
    mappings: ProductMappings,
) -> List[CodeExample]:
    """
    Collect code examples from a file and everything it includes

    Args:
        file_path: File to process
        content_dir: Content directory of the page
        visited: Files already processed for this page (updated in place)
        inherited: Context passed down from the including file, or None
        mappings: Option-ID to product tables

    Returns:
        The file's own examples in scan order, followed by those of each
        include in include order (depth first)

    Raises:
        OSError, UnicodeDecodeError: If this file cannot be read. Failures
        in included files are logged and skipped.
    """
    path = os.path.abspath(str(file_path))
    if path in visited:
        LOG(f"Already visited: {path}", level=3)
        return []
    visited.add(path)

    source = Path(path).read_text(encoding="utf-8")
    directives = directives_parse(source, path)
    blocks = ContextBlockTracker(source).blocks_track()

    if inherited is not None:
        file_contexts = [inherited]
        directive_blocks = []
    else:
        file_contexts = fileContexts_parse(source)
        directive_blocks = blocks

    examples: List[CodeExample] = []
    for directive in directives:
        contexts = context_resolve(directive.line_num, directive_blocks, file_contexts)
        examples.extend(directive_examples(directive, path, content_dir, contexts, mappings))
    LOG(f"{len(examples)} examples in {path}", level=3)

    selectors = includeSelectors_parse(path, source, blocks)
    for include_path in includes_find(path, source):
        if include_path in selectors:
            include_context: Optional[CodeContext] = includeContext_make(selectors[include_path], mappings)
        else:
            include_context = inherited
        try:
            examples.extend(
                examples_collect(include_path, content_dir, visited, include_context, mappings)
            )
        except (OSError, UnicodeDecodeError) as e:
            LOG(f"Skipping include {include_path}: {e}", level=2)

    return examples


def file_classify(
    file_path: Union[str, Path],
    content_dir: str,
    mappings: ProductMappings,
) -> List[CodeExample]:
    """
    Collect and classify all code examples reachable from a page

    Raises:
        PageResolutionError: If the page itself cannot be read
    """
    try:
        return examples_collect(file_path, content_dir, set(), None, mappings)
    except (OSError, UnicodeDecodeError) as e:
        raise PageResolutionError(f"Cannot read {file_path}: {e}") from e


def contentDir_derive(file_path: Union[str, Path]) -> str:
    """
    Derive the content directory of a page from its path

    Example:
        >>> contentDir_derive('/corpus/content/node/current/source/index.txt')
        'node'
    """
    parts = Path(file_path).parts
    boundary = appsettings.corpus_boundary_dirname
    for index, part in enumerate(parts[:-1]):
        if part == boundary and index + 1 < len(parts) - 1:
            return parts[index + 1]
    return ""


def page_analyze(
    file_path: Union[str, Path],
    mappings: ProductMappings,
    content_dir: Optional[str] = None,
    rank: int = 0,
) -> PageAnalysis:
    """
    Analyze one page

    Project manifest overrides are merged into the mappings first. A page
    that cannot be read produces an analysis carrying the error instead of
    raising, so a batch run can carry on with the next page.

    Args:
        file_path: Page source file
        mappings: Canonical mappings
        content_dir: Content directory (derived from the path if not given)
        rank: Position of the page in its batch

    Returns:
        PageAnalysis for the page
    """
    if content_dir is None:
        content_dir = contentDir_derive(file_path)

    analysis = PageAnalysis(source_path=str(file_path), rank=rank, content_dir=content_dir)
    merged = mappings_merge(mappings, file_path)
    try:
        analysis.code_examples = file_classify(file_path, content_dir, merged)
    except PageResolutionError as e:
        LOG(str(e), level=1)
        analysis.error = str(e)
    return analysis
