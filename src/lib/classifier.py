"""
Language/product classifier

Turns a resolved language plus its surrounding context into a product and
testability flags, and converts scanned directives into CodeExample records.

Product resolution, first hit wins:
1. Non-driver languages (bash, json, yaml, ...) ignore context
2. Shell-ambiguous languages (shell, javascript, js) in a shell-product
   context are shell-product code; bare "shell" elsewhere is a system shell
3. Context tab ID / composable language / composable interface
4. Content directory
5. Raw language
6. "Unknown" when no language is known
"""

from typing import List, Optional, Sequence, Tuple

from ..config import appsettings
from ..models.context import CodeContext
from ..models.directives import Directive, DirectiveType, SubDirective
from ..models.examples import CodeExample, ProductMappings
from .language import UNDEFINED, nonDriver_is, product_fromLanguage, shellAmbiguous_is
from .products import maybeTestable_is, product_fromContentDir, testable_is


UNKNOWN_PRODUCT = "Unknown"


def shellContext_is(content_dir: str, contexts: Sequence[CodeContext]) -> bool:
    """
    Check whether examples are in a shell-product context

    True for pages in the shell content directory, or when any context
    selects the shell interface.
    """
    if content_dir == appsettings.shell_content_dir:
        return True
    return any(ctx.interface == appsettings.shell_interface_id for ctx in contexts)


def contextProduct_find(contexts: Sequence[CodeContext], mappings: ProductMappings) -> str:
    """Return the product of the first context with a known selector, or empty string"""
    for ctx in contexts:
        if ctx.tab_id and ctx.tab_id in mappings.tab_id_to_product:
            return mappings.tab_id_to_product[ctx.tab_id]
        if ctx.language and ctx.language in mappings.language_to_product:
            return mappings.language_to_product[ctx.language]
        if ctx.interface and ctx.interface in mappings.interface_to_product:
            return mappings.interface_to_product[ctx.interface]
    return ""


def product_determine(
    language: str,
    content_dir: str,
    contexts: Sequence[CodeContext],
    mappings: ProductMappings,
) -> str:
    """
    Determine the product an example is attributed to

    Args:
        language: Resolved example language ("undefined" if unknown)
        content_dir: Content directory of the page (e.g., "node")
        contexts: Contexts resolved for the directive, in priority order
        mappings: Option-ID to product tables

    Returns:
        Display product name

    Example:
        >>> mappings = ProductMappings(tab_id_to_product={"python": "Python"})
        >>> product_determine("json", "", [CodeContext(tab_id="python")], mappings)
        'JSON'
        >>> product_determine("py", "", [CodeContext(tab_id="python")], mappings)
        'Python'
    """
    known = bool(language) and language != UNDEFINED

    if known and nonDriver_is(language):
        return product_fromLanguage(language)

    if known and shellAmbiguous_is(language):
        if shellContext_is(content_dir, contexts):
            return appsettings.shell_product
        if language.lower() == "shell":
            return "Shell"

    product = contextProduct_find(contexts, mappings)
    if product:
        return product

    product = product_fromContentDir(content_dir)
    if product:
        return product

    if known:
        return product_fromLanguage(language)

    return UNKNOWN_PRODUCT


def classify(
    language: str,
    content_dir: str,
    contexts: Sequence[CodeContext],
    mappings: ProductMappings,
) -> Tuple[str, bool, bool]:
    """
    Classify one example

    Returns:
        (product, is_testable, is_maybe_testable)
    """
    product = product_determine(language, content_dir, contexts, mappings)
    return product, testable_is(product), maybeTestable_is(product)


def example_make(
    directive_type: DirectiveType,
    language: str,
    source_file: str,
    content_dir: str,
    contexts: Sequence[CodeContext],
    mappings: ProductMappings,
    file_path: str = "",
    **flags: bool,
) -> CodeExample:
    """Build a classified CodeExample"""
    product, is_testable, is_maybe_testable = classify(language, content_dir, contexts, mappings)
    return CodeExample(
        type=directive_type.value,
        language=language,
        product=product,
        is_tested=appsettings.testedPath_is(file_path),
        is_testable=is_testable,
        is_maybe_testable=is_maybe_testable,
        file_path=file_path,
        source_file=source_file,
        **flags,
    )


def directive_examples(
    directive: Directive,
    source_file: str,
    content_dir: str,
    contexts: Sequence[CodeContext],
    mappings: ProductMappings,
) -> List[CodeExample]:
    """
    Convert a directive into classified code examples

    literalinclude, code-block and yaml-code-block yield one example; an
    io-code-block yields its input then its output (each only if present).
    Only file-referencing examples can be tested.

    Args:
        directive: Scanned directive
        source_file: Documentation file containing the directive
        content_dir: Content directory of the page
        contexts: Contexts resolved for the directive's line
        mappings: Option-ID to product tables

    Returns:
        Examples in emission order
    """
    if directive.type == DirectiveType.LITERAL_INCLUDE:
        return [example_make(
            directive.type, directive.language_resolve(), source_file,
            content_dir, contexts, mappings, file_path=directive.argument,
        )]

    if directive.type == DirectiveType.IO_CODE_BLOCK:
        examples: List[CodeExample] = []
        halves: List[Tuple[Optional[SubDirective], str]] = [
            (directive.input, "is_input"),
            (directive.output, "is_output"),
        ]
        for sub_directive, flag in halves:
            if sub_directive is None:
                continue
            examples.append(example_make(
                directive.type, sub_directive.language_resolve(directive.options), source_file,
                content_dir, contexts, mappings, file_path=sub_directive.argument, **{flag: True},
            ))
        return examples

    return [example_make(
        directive.type, directive.language_resolve(), source_file,
        content_dir, contexts, mappings,
    )]
