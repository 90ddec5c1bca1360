"""
Include directive discovery and path resolution

Resolves `.. include::` targets to files using the corpus conventions:

- `/includes/foo.rst` is relative to the project's source directory
- `foo.rst` is relative to the including file
- `/includes/steps/foo.rst` may live in `/includes/steps-foo.yaml`
- `/includes/extracts/foo.rst` may live in an `/includes/extracts-*.yaml`
  file declaring `ref: foo`

Targets that do not resolve to an existing file are dropped.
"""

import os
import re
from pathlib import Path
from typing import List, Optional, Tuple, Union

from ..config import appsettings
from .patterns import INCLUDE_PATTERN
from .scanner import codeBodyLines_find
from .log import LOG


def sourceDir_find(file_path: Union[str, Path]) -> Path:
    """
    Find the project source directory for a file

    Returns:
        Nearest ancestor named like the configured source directory, or the
        file's own directory if there is none
    """
    directory = Path(file_path).parent
    for candidate in (directory, *directory.parents):
        if candidate.name == appsettings.source_dirname:
            return candidate
    return directory


def stepsFile_resolve(target: Path) -> Optional[Path]:
    """Map includes/steps/<name>.rst to includes/steps-<name>.yaml"""
    if target.parent.name != "steps":
        return None
    candidate = target.parent.parent / f"steps-{target.stem}.yaml"
    return candidate if candidate.is_file() else None


def extractsFile_resolve(target: Path) -> Optional[Path]:
    """Map includes/extracts/<ref>.rst to the extracts YAML file declaring that ref"""
    if target.parent.name != "extracts":
        return None
    ref_pattern = re.compile(r'^ref:\s*' + re.escape(target.stem) + r'\s*$', re.MULTILINE)
    for candidate in sorted(target.parent.parent.glob("extracts-*.yaml")):
        try:
            text = candidate.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            continue
        if ref_pattern.search(text):
            return candidate
    return None


def includePath_resolve(file_path: Union[str, Path], include_arg: str) -> Optional[str]:
    """
    Resolve an include argument to an existing file

    Args:
        file_path: File containing the include directive
        include_arg: Argument of the include directive

    Returns:
        Normalized path of the target, or None if it cannot be found

    Example:
        For /docs/content/node/source/usage.txt including
        /includes/connect.rst, returns
        /docs/content/node/source/includes/connect.rst (if it exists)
    """
    include_arg = include_arg.strip()
    if not include_arg:
        return None

    if include_arg.startswith("/"):
        target = sourceDir_find(file_path) / include_arg.lstrip("/")
    else:
        target = Path(file_path).parent / include_arg

    target = Path(os.path.normpath(str(target)))
    if target.is_file():
        return str(target)

    resolved = stepsFile_resolve(target) or extractsFile_resolve(target)
    if resolved is not None:
        return str(resolved)

    return None


def includeMarkers_find(source: str) -> List[Tuple[int, str]]:
    """
    Find include markers in a text

    Markers shown inside code-example bodies are not includes.

    Returns:
        (line_num, argument) pairs in document order, 1-based line numbers
    """
    markers: List[Tuple[int, str]] = []
    code_lines = codeBodyLines_find(source)
    for index, line in enumerate(source.splitlines(), start=1):
        if index in code_lines:
            continue
        match = INCLUDE_PATTERN.match(line.strip())
        if match and match.group(1):
            markers.append((index, match.group(1).strip()))
    return markers


def includes_find(file_path: Union[str, Path], source: str) -> List[str]:
    """
    Resolve every include in a file

    Args:
        file_path: File the source was read from
        source: File contents

    Returns:
        Resolved target paths in marker order (duplicates kept)
    """
    targets: List[str] = []
    for line_num, include_arg in includeMarkers_find(source):
        resolved = includePath_resolve(file_path, include_arg)
        if resolved is None:
            LOG(f"Unresolved include '{include_arg}' at {file_path}:{line_num}", level=2)
            continue
        targets.append(resolved)
    return targets
