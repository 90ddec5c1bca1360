"""
Language tables for code example classification

Static, read-only lookup data:
- file extension -> language (used when a directive references a file)
- language -> display product name
- the "non-driver" languages that never inherit tab/composable context
- the shell-ambiguous languages that depend on a shell-product context
- alias -> canonical language name, for :language: options and file references
"""

import os
from typing import Dict, FrozenSet


UNDEFINED = "undefined"


EXTENSION_TO_LANGUAGE: Dict[str, str] = {
    ".py": "python",
    ".js": "javascript",
    ".ts": "typescript",
    ".go": "go",
    ".java": "java",
    ".cs": "csharp",
    ".cpp": "cpp",
    ".c": "c",
    ".rb": "ruby",
    ".rs": "rust",
    ".swift": "swift",
    ".kt": "kotlin",
    ".scala": "scala",
    ".sh": "shell",
    ".bash": "shell",
    ".ps1": "powershell",
    ".json": "json",
    ".yaml": "yaml",
    ".yml": "yaml",
    ".xml": "xml",
    ".html": "html",
    ".css": "css",
    ".sql": "sql",
    ".txt": "text",
    ".php": "php",
}


CANONICAL_LANGUAGES: FrozenSet[str] = frozenset({
    "bash", "c", "cpp", "csharp", "console", "css", "go", "html", "java",
    "javascript", "json", "kotlin", "php", "powershell", "ps5", "python",
    "ruby", "rust", "scala", "shell", "sql", "swift", "text", "typescript",
    "xml", "yaml",
})


NORMALIZE: Dict[str, str] = {
    **{name: name for name in CANONICAL_LANGUAGES},
    "c++": "cpp",
    "c#": "csharp",
    "cs": "csharp",
    "golang": "go",
    "js": "javascript",
    "kt": "kotlin",
    "py": "python",
    "rb": "ruby",
    "rs": "rust",
    "sh": "shell",
    "ts": "typescript",
    "txt": "text",
    "ps1": "powershell",
    "yml": "yaml",
    "": UNDEFINED,
    "none": UNDEFINED,
}


LANGUAGE_TO_PRODUCT: Dict[str, str] = {
    "python": "Python",
    "javascript": "JavaScript",
    "js": "JavaScript",
    "typescript": "TypeScript",
    "ts": "TypeScript",
    "go": "Go",
    "golang": "Go",
    "java": "Java",
    "csharp": "C#",
    "c#": "C#",
    "cs": "C#",
    "cpp": "C++",
    "c++": "C++",
    "c": "C",
    "ruby": "Ruby",
    "rb": "Ruby",
    "rust": "Rust",
    "rs": "Rust",
    "swift": "Swift",
    "kotlin": "Kotlin",
    "kt": "Kotlin",
    "scala": "Scala",
    "php": "PHP",
    "mongosh": "MongoDB Shell",
    "bash": "Shell",
    "sh": "Shell",
    "shell": "Shell",
    "console": "Shell",
    "powershell": "PowerShell",
    "ps1": "PowerShell",
    "json": "JSON",
    "yaml": "YAML",
    "yml": "YAML",
    "xml": "XML",
    "html": "HTML",
    "css": "CSS",
    "sql": "SQL",
    "ini": "INI",
    "toml": "TOML",
    "properties": "Properties",
    "text": "Text",
    "txt": "Text",
    "none": "Text",
}


# Markup, config and system-shell languages. Driver pages embed these (install
# commands, sample documents) without them being driver code.
NON_DRIVER_LANGUAGES: FrozenSet[str] = frozenset({
    "bash",
    "sh",
    "console",
    "text",
    "json",
    "yaml",
    "xml",
    "ini",
    "toml",
    "properties",
    "sql",
    "none",
    "http",
})


# Languages that are shell-product code only inside a shell-product context.
SHELL_AMBIGUOUS_LANGUAGES: FrozenSet[str] = frozenset({
    "shell",
    "javascript",
    "js",
})


def _key(language: str) -> str:
    return language.strip().lower()


def language_fromExtension(file_path: str) -> str:
    """
    Infer the language from a file extension

    Returns:
        Language name, or empty string for unrecognized extensions

    Example:
        >>> language_fromExtension('/code-examples/tested/python/insert.py')
        'python'
    """
    extension = os.path.splitext(file_path)[1].lower()
    return EXTENSION_TO_LANGUAGE.get(extension, "")


def language_normalize(language: str) -> str:
    """
    Fold a language alias into its canonical name

    Matching is case-insensitive. Unknown languages are returned lowercased.

    Example:
        >>> language_normalize('TS')
        'typescript'
        >>> language_normalize('none')
        'undefined'
    """
    key = _key(language)
    return NORMALIZE.get(key, key)


def product_fromLanguage(language: str) -> str:
    """
    Map a raw language value to a display product name

    Unknown languages are returned unchanged.
    """
    return LANGUAGE_TO_PRODUCT.get(_key(language), language)


def nonDriver_is(language: str) -> bool:
    """Check whether a language bypasses tab/composable context"""
    return _key(language) in NON_DRIVER_LANGUAGES


def shellAmbiguous_is(language: str) -> bool:
    """Check whether a language may be shell-product code"""
    return _key(language) in SHELL_AMBIGUOUS_LANGUAGES
