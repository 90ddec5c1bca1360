#!/usr/bin/env python3
"""
rstaudit - Testable code example audit for reStructuredText corpora

Reports, for a batch of documentation pages, every code example each page
shows (including those pulled in through `.. include::`), which product each
belongs to, and whether it is tested, testable, or needs manual review.

As with other ChRIS-style apps, this codebase uses the ChRIS "plugin"
concept/pattern as a general purpose python app development framework.

Philosophy:
    - Context-aware: tabs, composable tutorials and selected-content blocks
      decide which product an example belongs to
    - Include-following: shared include files inherit the context of the
      block that includes them
    - Conservative: raw "javascript" or "shell" without context is flagged
      for review rather than counted as testable

Usage:
    rstaudit inputdir/ outputdir/ --inputFile content/node/current/source/crud.txt
    rstaudit inputdir/ outputdir/ --pagesFile pages.csv

    The report, one entry per page, is written to outputdir/ as JSON. A page
    that cannot be read gets an entry carrying its error.

    The pages file is CSV with rank and path columns, header optional:

        rank,path
        1,content/node/current/source/crud.txt
        2,content/golang/current/source/find.txt

Examples:
    # Analyze one page with the default canonical mappings
    rstaudit corpus/ out/ --inputFile content/node/current/source/crud.txt

    # Several pages, ranked in the order given
    rstaudit corpus/ out/ --inputFile a.txt --inputFile b.txt

    # Explicit mappings file and content directory
    rstaudit corpus/ out/ --inputFile page.txt --rstspec rstspec.toml --contentDir node

    # Verbose output
    rstaudit corpus/ out/ --inputFile page.txt -vv
"""

import sys
import json
from pathlib import Path
from argparse import ArgumentParser, Namespace, ArgumentDefaultsHelpFormatter

from chris_plugin import chris_plugin
from .lib import (
    page_analyze,
    canonical_load,
    pagesFile_parse,
    inputFiles_rank,
    pageReport_build,
    report_toDict,
    __version__,
    LOG,
    state_connectToLogger,
)
from .lib.errors import MappingLoadError, PagesFileError
from .config import appsettings
from .models import ProgramState, pipeline


DISPLAY_TITLE = r"""
            _                    _ _ _
  _ __ ___| |_ __ _ _   _  __| (_) |_
 | '__/ __| __/ _` | | | |/ _` | | __|
 | |  \__ \ || (_| | |_| | (_| | | |_
 |_|  |___/\__\__,_|\__,_|\__,_|_|\__|

  Testable code example audit
"""

# Define CLI arguments
parser = ArgumentParser(
    description="rstaudit - classify the code examples of reStructuredText pages",
    formatter_class=ArgumentDefaultsHelpFormatter,
)

pages_group = parser.add_mutually_exclusive_group(required=True)

pages_group.add_argument(
    "--inputFile",
    action="append",
    default=None,
    type=str,
    help="Page source file (relative to inputdir). Repeat for several pages",
)

pages_group.add_argument(
    "--pagesFile",
    default=None,
    type=str,
    help="CSV of rank and page path rows (relative to inputdir)",
)

parser.add_argument(
    "--contentDir",
    default=None,
    type=str,
    help="Content directory of every page (e.g. node). Derived from each path if omitted",
)

parser.add_argument(
    "--rstspec",
    default=None,
    type=str,
    help="Canonical directive specification (rstspec.toml). Defaults to RSTAUDIT_RSTSPEC_PATH",
)

parser.add_argument(
    "-v",
    "--verbosity",
    action="count",
    default=1,
    help="Increase output verbosity (can be repeated: -v, -vv, -vvv)",
)

parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")


def env_check(inputstate: ProgramState) -> ProgramState:
    """
    Validate environment and resolve the pages to analyze.

    Pages that do not exist stay in the batch; their report entry carries
    the error.

    Args:
        inputstate: Initial program state with CLI options

    Returns:
        ProgramState with added fields:
            - pages: Ranked pages, paths resolved against inputdir
            - envOK: True if environment is valid

    Exits:
        1 if no pages are given or the pages file cannot be read
    """

    state = inputstate.copy()

    if state.verbosity >= 2:
        LOG(DISPLAY_TITLE, level=2)

    LOG("Checking environment...", level=2)

    if state.pagesFile:
        try:
            state.pages = pagesFile_parse(state.inputdir / state.pagesFile, state.inputdir)
        except PagesFileError as e:
            print(f"Error: {e}", file=sys.stderr)
            state.envOK = False
            sys.exit(1)
    else:
        state.pages = inputFiles_rank(state.inputFile or [], state.inputdir)

    if not state.pages:
        print("Error: No pages to analyze", file=sys.stderr)
        state.envOK = False
        sys.exit(1)

    LOG(f"Pages: {len(state.pages)}", level=2)
    for page in state.pages:
        if not page.path.is_file():
            LOG(f"Page not found: {page.path} (rank {page.rank})", level=1)

    state.outputdir.mkdir(parents=True, exist_ok=True)
    LOG(f"Output directory: {state.outputdir}", level=2)

    state.envOK = True
    return state


def mappings_load(inputstate: ProgramState) -> ProgramState:
    """
    Load canonical product mappings.

    Returns:
        ProgramState with added field:
            - mappings: ProductMappings from the canonical specification

    Exits:
        1 if the specification cannot be loaded
    """

    state = inputstate.copy()

    LOG("Loading product mappings...", level=1)

    try:
        state.mappings = canonical_load(state.rstspec)
    except MappingLoadError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    return state


def examples_collect(inputstate: ProgramState) -> ProgramState:
    """
    Collect and classify the code examples of every page and its includes.

    A page that fails is recorded with its error and the batch carries on.

    Returns:
        ProgramState with added field:
            - analyses: PageAnalysis per page, in batch order
    """

    state = inputstate.copy()

    LOG(f"Collecting code examples from {len(state.pages)} pages...", level=1)

    analyses = []
    for page in state.pages:
        analysis = page_analyze(page.path, state.mappings, state.contentDir, rank=page.rank)
        if analysis.error:
            LOG(f"[{page.rank}] {analysis.error}", level=1)
        else:
            LOG(f"[{page.rank}] {len(analysis.code_examples)} code examples in {page.path}", level=2)
        analyses.append(analysis)

    state.analyses = analyses
    return state


def report_write(inputstate: ProgramState) -> ProgramState:
    """
    Aggregate the analyses and write the JSON report.

    Returns:
        ProgramState with added fields:
            - reports: PageReport per page
            - reportFile: Path of the written report
    """

    state = inputstate.copy()

    state.reports = [pageReport_build(analysis) for analysis in state.analyses]
    state.reportFile = state.outputdir / appsettings.report_filename

    payload = [
        report_toDict(report, analysis) for report, analysis in zip(state.reports, state.analyses)
    ]
    state.reportFile.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")
    LOG(f"Report written to {state.reportFile}", level=2)
    return state


def results_report(inputstate: ProgramState) -> ProgramState:
    """
    Display the batch summary to the user.

    Returns:
        ProgramState unchanged (terminal pipeline stage)

    Exits:
        1 if no report was produced
    """
    state: ProgramState = inputstate.copy()
    if not state.reports:
        print("Error: Analysis failed", file=sys.stderr)
        sys.exit(1)

    failed = [report for report in state.reports if report.error]
    LOG("\n✓ Analysis complete", level=1)
    LOG(f"  Pages:          {len(state.reports)} ({len(failed)} failed)", level=1)
    LOG(f"  Examples:       {sum(r.total_examples for r in state.reports)}", level=1)
    LOG(f"  Tested:         {sum(r.total_tested for r in state.reports)}", level=1)
    LOG(f"  Testable:       {sum(r.total_testable for r in state.reports)}", level=1)
    LOG(f"  Needs review:   {sum(r.total_maybe_testable for r in state.reports)}", level=1)
    for report in state.reports:
        status = report.error or f"{report.total_examples} examples, {report.total_testable} testable"
        LOG(f"    [{report.rank}] {report.source_path}: {status}", level=2)
    LOG(f"  Report: {state.reportFile}", level=1)
    return state


@chris_plugin(
    parser=parser,
    title="rstaudit - Testable code example audit",
    category="Documentation",
    min_memory_limit="100Mi",
    min_cpu_limit="500m",
)
def main(options: Namespace, inputdir: Path, outputdir: Path):
    """
    Main entry point - audit the code examples of a batch of pages.

    Orchestrates the analysis pipeline:
        1. env_check: Resolve the ranked pages
        2. mappings_load: Load canonical product mappings
        3. examples_collect: Walk each page and its includes
        4. report_write: Aggregate and write the JSON report
        5. results_report: Display the summary

    Args:
        options: CLI arguments from argparse
            - inputFile: Optional[List[str]] - Pages relative to inputdir
            - pagesFile: Optional[str] - CSV of rank and page path rows
            - contentDir: Optional[str] - Content directory override
            - rstspec: Optional[str] - Canonical specification path
            - verbosity: int - Logging verbosity level (1-3)
        inputdir: Root of the documentation corpus
        outputdir: Directory where the report will be written

    Note:
        This function is wrapped by @chris_plugin which handles CLI
        argument parsing and invokes this function with parsed values.
    """

    state: ProgramState = ProgramState.state_createFromNamespace(
        options=options, inputdir=inputdir, outputdir=outputdir
    )

    # Connect state to logger for entire pipeline
    state_connectToLogger(state)

    pipeline(state, env_check, mappings_load, examples_collect, report_write, results_report)


if __name__ == "__main__":
    main()  # type: ignore  # @chris_plugin decorator transforms signature
