"""
Models package for rstaudit

Contains data structures and type definitions for the analysis pipeline.
"""

from .state import ProgramState, pipeline
from .directives import Directive, DirectiveType, SubDirective
from .context import CodeContext, ContextBlock, ContextKind, SELECTOR_KEYS
from .examples import CodeExample, PageAnalysis, PageEntry, PageReport, ProductMappings, ProductStats

__all__ = [
    "ProgramState",
    "pipeline",
    "Directive",
    "DirectiveType",
    "SubDirective",
    "CodeContext",
    "ContextBlock",
    "ContextKind",
    "SELECTOR_KEYS",
    "CodeExample",
    "PageAnalysis",
    "PageEntry",
    "PageReport",
    "ProductMappings",
    "ProductStats",
]
