"""
Program state model and pipeline helper

Defines ProgramState dataclass for the functional pipeline pattern and
the pipeline() helper for composing analysis stages.
"""

from pathlib import Path
from argparse import Namespace
from typing import List, Optional, Type, TypeVar, Callable
from dataclasses import dataclass, field

from .examples import PageAnalysis, PageEntry, PageReport, ProductMappings


PS = TypeVar("PS", bound="ProgramState")


@dataclass
class ProgramState:
    """
    Central state container for the analysis pipeline (state bus pattern).

    This dataclass carries all program state through the functional pipeline,
    with each stage adding new fields as the analysis progresses.

    Pipeline stages and their state additions:
        - Initial: inputdir, outputdir, verbosity, inputFile, pagesFile, contentDir, rstspec
        - env_check: pages, envOK
        - mappings_load: mappings
        - examples_collect: analyses
        - report_write: reports, reportFile
        - results_report: (no additions, terminal stage)

    Attributes:
        inputdir: Root of the documentation corpus
        outputdir: Directory the JSON report is written to
        verbosity: Logging verbosity level (1-3)
        inputFile: Pages to analyze (relative to inputdir), in rank order
        pagesFile: CSV of rank and page path rows (relative to inputdir)
        contentDir: Optional content directory override
        rstspec: Optional canonical specification path override
        envOK: Environment validation passed
        pages: Ranked pages of the batch
        mappings: Canonical product mappings
        analyses: Collected code examples, one analysis per page
        reports: Aggregated statistics, one report per page
        reportFile: Path of the written report
    """

    # CLI arguments
    inputdir: Optional[Path] = field(default=None)
    outputdir: Optional[Path] = field(default=None)
    verbosity: int = field(default=1)
    inputFile: Optional[List[str]] = field(default=None)
    pagesFile: Optional[str] = field(default=None)
    contentDir: Optional[str] = field(default=None)
    rstspec: Optional[str] = field(default=None)

    # Pipeline state
    envOK: bool = field(default=False)
    pages: List[PageEntry] = field(default_factory=list)
    mappings: Optional[ProductMappings] = field(default=None)
    analyses: List[PageAnalysis] = field(default_factory=list)
    reports: List[PageReport] = field(default_factory=list)
    reportFile: Optional[Path] = field(default=None)

    @classmethod
    def state_createFromNamespace(
        cls: Type["ProgramState"], options: Namespace, inputdir: Path, outputdir: Path
    ) -> "ProgramState":
        """
        Create ProgramState from argparse Namespace and directory paths.

        Args:
            options: Parsed CLI arguments (inputFile, pagesFile, contentDir, etc.)
            inputdir: Corpus root directory
            outputdir: Directory for the report

        Returns:
            ProgramState instance with all CLI options as attributes
        """
        import dataclasses

        options_dict = vars(options)
        valid_fields = {f.name for f in dataclasses.fields(cls)}
        filtered_options = {k: v for k, v in options_dict.items() if k in valid_fields}

        merged_args = {**filtered_options, "inputdir": inputdir, "outputdir": outputdir}
        return cls(**merged_args)

    def copy(self: PS) -> PS:
        """
        Creates a shallow copy of the ProgramState instance.

        Returns:
            A new ProgramState instance.
        """
        return type(self)(**self.__dict__)


def pipeline(
    initial_state: ProgramState, *stages: Callable[[ProgramState], ProgramState]
) -> ProgramState:
    """
    Execute a functional pipeline of state transformations.

    Each stage is a function (ProgramState) -> ProgramState that receives
    the output of the previous stage and returns a new state.

    Example:
        final_state = pipeline(
            initial_state,
            env_check,
            mappings_load,
            examples_collect,
            report_write,
            results_report
        )
    """
    from functools import reduce
    return reduce(lambda state, stage: stage(state), stages, initial_state)
