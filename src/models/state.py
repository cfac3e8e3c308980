"""
Batch run state and the stage pipeline

ProgramState is passed from stage to stage of the CLI; each stage returns a
copy with its own results filled in.  pipeline() threads one state through
a sequence of stages.
"""

import dataclasses
from argparse import Namespace
from dataclasses import dataclass, field
from functools import reduce
from pathlib import Path
from typing import Callable, Dict, List, Optional, Type, TypeVar

from .job import ParsedJob


PS = TypeVar("PS", bound="ProgramState")


@dataclass
class ProgramState:
    """
    Everything a batch run knows, accumulated stage by stage

    Fields by stage:
        - command line: inputdir, outputdir, verbosity, inputFile, outputSubdir
        - env_check: inputJobFile, renderOutputdir, envOK
        - jobs_parse: parsedJobs
        - jobs_render: renderResult
        - results_report: nothing new

    Attributes:
        inputdir: Directory holding the YAML job file
        outputdir: Root directory for rendered files
        verbosity: LOG threshold (1 progress, 2 per job, 3 traces)
        inputFile: Job file name, relative to inputdir
        outputSubdir: Directory under outputdir that receives the files
        envOK: Set once env_check has accepted the paths
        inputJobFile: Absolute job file path
        renderOutputdir: outputdir / outputSubdir, created by env_check
        parsedJobs: One ParsedJob per job file entry
        renderResult: Summary written by jobs_render
    """

    # Command line
    inputdir: Optional[Path] = None
    outputdir: Optional[Path] = None
    verbosity: int = 1
    inputFile: str = ""
    outputSubdir: str = "."

    # Filled in by the stages
    envOK: bool = False
    inputJobFile: Path = field(default=Path("/"))
    renderOutputdir: Path = field(default=Path("/"))
    parsedJobs: Optional[List[ParsedJob]] = None
    renderResult: Optional[Dict] = None

    @classmethod
    def state_createFromNamespace(
        cls: Type[PS], options: Namespace, inputdir: Path, outputdir: Path
    ) -> PS:
        """
        Build the initial state from parsed CLI options

        Options without a matching field (chris_plugin adds its own) are
        dropped.
        """
        known = {f.name for f in dataclasses.fields(cls)}
        values = {k: v for k, v in vars(options).items() if k in known}
        values.update(inputdir=inputdir, outputdir=outputdir)
        return cls(**values)

    def copy(self: PS) -> PS:
        """Shallow copy; stages modify the copy, never their input"""
        return dataclasses.replace(self)


def pipeline(
    initial_state: ProgramState, *stages: Callable[[ProgramState], ProgramState]
) -> ProgramState:
    """
    Feed initial_state through stages, left to right

    pipeline(state, env_check, jobs_parse) is jobs_parse(env_check(state)).
    """
    return reduce(lambda state, stage: stage(state), stages, initial_state)
