"""
Batch page lists

A pages file is CSV with a rank column and a page path column:

    rank,path
    1,content/node/current/source/crud.txt
    2,content/golang/current/source/find.txt

The header row is optional. Without one the first column is the rank and
the second the path. Relative paths are resolved against the corpus root.
"""

import csv
from pathlib import Path
from typing import List, Sequence, Union

from ..models.examples import PageEntry
from .errors import PagesFileError


RANK_COLUMNS = ("rank", "site rank", "siterank")
PATH_COLUMNS = ("path", "page", "url")


def rank_parse(value: str) -> int:
    """Parse a rank, accepting float notation such as "3.0" """
    try:
        return int(value)
    except ValueError:
        return int(float(value))


def pagesFile_parse(pages_file: Union[str, Path], root: Union[str, Path]) -> List[PageEntry]:
    """
    Read a ranked page list

    Args:
        pages_file: CSV file of rank and path rows
        root: Directory relative page paths are resolved against

    Returns:
        Page entries in file order

    Raises:
        PagesFileError: If the file cannot be read, has fewer than two
            columns, carries an invalid rank, or lists no pages
    """
    try:
        with open(pages_file, newline="", encoding="utf-8") as f:
            rows = [row for row in csv.reader(f) if any(cell.strip() for cell in row)]
    except (OSError, UnicodeDecodeError, csv.Error) as e:
        raise PagesFileError(f"Cannot read pages file {pages_file}: {e}") from e

    if not rows:
        raise PagesFileError(f"Pages file {pages_file} is empty")
    if len(rows[0]) < 2:
        raise PagesFileError(f"Pages file {pages_file} needs rank and path columns")

    rank_index, path_index = 0, 1
    try:
        rank_parse(rows[0][0].strip())
    except (ValueError, OverflowError):
        for index, column in enumerate(rows[0]):
            name = column.strip().lower()
            if name in RANK_COLUMNS:
                rank_index = index
            elif name in PATH_COLUMNS:
                path_index = index
        rows = rows[1:]

    entries: List[PageEntry] = []
    for row_num, row in enumerate(rows, start=1):
        if len(row) <= max(rank_index, path_index):
            continue
        rank_text = row[rank_index].strip()
        path_text = row[path_index].strip()
        if not rank_text or not path_text:
            continue
        try:
            rank = rank_parse(rank_text)
        except (ValueError, OverflowError):
            raise PagesFileError(f"Invalid rank '{rank_text}' in {pages_file}, row {row_num}")
        entries.append(PageEntry(rank=rank, path=Path(root) / path_text))

    if not entries:
        raise PagesFileError(f"Pages file {pages_file} lists no pages")
    return entries


def inputFiles_rank(input_files: Sequence[str], root: Union[str, Path]) -> List[PageEntry]:
    """Rank pages given on the command line by their order, starting at 1"""
    return [PageEntry(rank=index, path=Path(root) / name) for index, name in enumerate(input_files, start=1)]
