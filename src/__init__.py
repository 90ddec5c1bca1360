"""
rstaudit - Testable code example audit for reStructuredText corpora

Classifies the code examples of a documentation page (following its
includes) by product, and reports which are tested, testable, or need
review.
"""

__version__ = "1.0.0"

from .lib import file_classify, page_analyze, canonical_load, LOG, state_connectToLogger

__all__ = ["file_classify", "page_analyze", "canonical_load", "LOG", "state_connectToLogger", "__version__"]
