"""
Exception types for rstaudit

Only entry-level failures reach callers: unreadable page or pages files and
an unloadable canonical mapping file. Failures inside the inclusion graph are
logged and skipped by the walker.
"""


class AuditError(Exception):
    """Base class for rstaudit errors"""
    pass


class PageResolutionError(AuditError):
    """Raised when the entry file of a page cannot be read"""
    pass


class MappingLoadError(AuditError):
    """Raised when the canonical mapping specification cannot be loaded"""
    pass


class PagesFileError(AuditError):
    """Raised when a batch pages file cannot be read"""
    pass


class ManifestError(AuditError):
    """Raised when a project manifest cannot be parsed"""
    pass
