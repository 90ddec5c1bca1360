"""
Product mapping sources: canonical specification and project manifests

The canonical specification (rstspec.toml) defines driver tabs and
composable options for the whole corpus:

    [tabs]
    drivers = [
        {id = "python", title = "Python"},
        {id = "java-sync", title = "Java (Sync)"},
    ]

    [[composables]]
    id = "language"
    options = [{id = "nodejs", title = "Node.js"}]

A project may override composable options in its own manifest
(snooty.toml, same [[composables]] shape). Parsed manifests are cached by
path; the cache is shared by every page analyzed in the process and guarded
by a reader/writer lock.
"""

import threading
import tomllib
from pathlib import Path
from typing import Any, Dict, Iterator, List, Mapping, Optional, Union
from contextlib import contextmanager

from ..config import appsettings
from ..models.examples import ProductMappings
from .errors import ManifestError, MappingLoadError
from .log import LOG


# Composable option tables: composable id -> {option id: title}
ComposableTables = Dict[str, Dict[str, str]]


class ReadWriteLock:
    """
    Many concurrent readers or one exclusive writer

    Writers wait for active readers to drain; new readers wait while a
    writer holds the lock.
    """

    def __init__(self):
        self._condition = threading.Condition(threading.Lock())
        self._readers = 0
        self._writing = False

    @contextmanager
    def read_locked(self) -> Iterator[None]:
        with self._condition:
            while self._writing:
                self._condition.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._condition:
                self._readers -= 1
                if self._readers == 0:
                    self._condition.notify_all()

    @contextmanager
    def write_locked(self) -> Iterator[None]:
        with self._condition:
            while self._writing or self._readers:
                self._condition.wait()
            self._writing = True
        try:
            yield
        finally:
            with self._condition:
                self._writing = False
                self._condition.notify_all()


class ManifestCache:
    """
    Parsed project manifests keyed by resolved path

    Attributes:
        entries: Manifest path -> composable tables
        lock: Guards entries
    """

    def __init__(self):
        self.entries: Dict[str, ComposableTables] = {}
        self.lock = ReadWriteLock()

    def get(self, manifest_path: str) -> Optional[ComposableTables]:
        with self.lock.read_locked():
            return self.entries.get(manifest_path)

    def put(self, manifest_path: str, tables: ComposableTables) -> None:
        with self.lock.write_locked():
            self.entries[manifest_path] = tables

    def tables_load(self, manifest_path: str) -> ComposableTables:
        """
        Return the cached tables for a manifest, parsing it on a miss

        Raises:
            ManifestError: If the manifest cannot be parsed (not cached)
        """
        tables = self.get(manifest_path)
        if tables is not None:
            LOG(f"Manifest cache hit: {manifest_path}", level=3)
            return tables
        tables = manifest_parse(manifest_path)
        self.put(manifest_path, tables)
        LOG(f"Manifest cached: {manifest_path}", level=3)
        return tables

    def clear(self) -> None:
        with self.lock.write_locked():
            self.entries.clear()


# Process-wide cache shared by all page analyses
manifest_cache = ManifestCache()


def manifest_find(source_path: Union[str, Path]) -> Optional[Path]:
    """
    Find the project manifest governing a source file

    Walks up from the file's directory, stopping after the corpus boundary
    directory or at the filesystem root.

    Example:
        /corpus/content/atlas/source/foo.txt -> /corpus/content/atlas/snooty.toml
    """
    directory = Path(source_path).absolute().parent
    while True:
        candidate = directory / appsettings.manifest_filename
        if candidate.is_file():
            return candidate
        if directory.name == appsettings.corpus_boundary_dirname:
            return None
        if directory.parent == directory:
            return None
        directory = directory.parent


def _toml_read(path: Union[str, Path]) -> Dict[str, Any]:
    with open(path, "rb") as f:
        return tomllib.load(f)


def composableTables_build(composables: Any) -> ComposableTables:
    """
    Collect option id -> title per composable id

    Later composables with the same id add to (and override) earlier ones.
    Entries without an id are ignored.
    """
    tables: ComposableTables = {}
    if not isinstance(composables, list):
        return tables
    for composable in composables:
        if not isinstance(composable, dict) or not composable.get("id"):
            continue
        table = tables.setdefault(str(composable["id"]), {})
        for option in composable.get("options") or []:
            if isinstance(option, dict) and option.get("id"):
                table[str(option["id"])] = str(option.get("title", ""))
    return tables


def manifest_parse(manifest_path: Union[str, Path]) -> ComposableTables:
    """
    Parse a project manifest into composable option tables

    Returns:
        Composable id -> {option id: title}; empty if the manifest declares
        no composables

    Raises:
        ManifestError: If the file cannot be read or is not valid TOML
    """
    try:
        data = _toml_read(manifest_path)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ManifestError(f"Failed to parse {manifest_path}: {e}") from e
    return composableTables_build(data.get("composables"))


def mappings_merge(
    base: ProductMappings,
    source_path: Union[str, Path],
    cache: Optional[ManifestCache] = None,
) -> ProductMappings:
    """
    Overlay a project's composable options onto the base mappings

    Args:
        base: Canonical mappings (never modified)
        source_path: Page being analyzed
        cache: Manifest cache (defaults to the process-wide cache)

    Returns:
        `base` itself if there is no manifest, it fails to parse, or it has
        no composables; otherwise a new ProductMappings in which project
        language / interface options take precedence
    """
    cache = cache if cache is not None else manifest_cache

    manifest_path = manifest_find(source_path)
    if manifest_path is None:
        return base

    try:
        tables = cache.tables_load(str(manifest_path.resolve()))
    except ManifestError as e:
        LOG(f"Ignoring project manifest: {e}", level=2)
        return base

    if not tables:
        return base

    LOG(f"Merging project composables from {manifest_path}", level=2)
    return ProductMappings(
        tab_id_to_product=dict(base.tab_id_to_product),
        language_to_product={**base.language_to_product, **tables.get("language", {})},
        interface_to_product={**base.interface_to_product, **tables.get("interface", {})},
    )


def tabTable_build(tabs: Any, tabset_id: str) -> Dict[str, str]:
    """Collect tab id -> title for one tabset"""
    table: Dict[str, str] = {}
    if not isinstance(tabs, Mapping):
        return table
    options: List[Any] = tabs.get(tabset_id) or []
    for option in options:
        if isinstance(option, dict) and option.get("id"):
            table[str(option["id"])] = str(option.get("title", ""))
    return table


def canonical_load(rstspec_path: Optional[Union[str, Path]] = None) -> ProductMappings:
    """
    Load the canonical product mappings from a local rstspec.toml

    Args:
        rstspec_path: Specification file (defaults to the configured path)

    Returns:
        ProductMappings built from the driver tabset and the language /
        interface composables

    Raises:
        MappingLoadError: If the file is missing or not valid TOML
    """
    path = Path(rstspec_path) if rstspec_path else appsettings.rstspec_path
    try:
        data = _toml_read(path)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise MappingLoadError(f"Failed to load canonical mappings from {path}: {e}") from e

    composables = composableTables_build(data.get("composables"))
    mappings = ProductMappings(
        tab_id_to_product=tabTable_build(data.get("tabs"), appsettings.tabset_id),
        language_to_product=composables.get("language", {}),
        interface_to_product=composables.get("interface", {}),
    )
    LOG(
        f"Loaded {len(mappings.tab_id_to_product)} tab, "
        f"{len(mappings.language_to_product)} language and "
        f"{len(mappings.interface_to_product)} interface mappings from {path}",
        level=2,
    )
    return mappings
