#!/usr/bin/env python3
"""
clformat - Common Lisp FORMAT-style control strings

Batch front end: renders every job of a YAML job file to its own text file.


Job file format:
    - name: totals
      control: "Total: ~10,'_:D~%"
      args: [-4200]
    - name: crew
      control: "~{~A~^, ~}~%"
      args: [["ook", "onk", "nork"]]

Usage:
    clformat inputdir/ outputdir/ --inputFile jobs.yml

    Each job is written to outputdir/<outputSubdir>/<name>.txt.

Examples:
    # Basic batch run
    clformat . output/ --inputFile jobs.yml

    # Into a subdirectory, echoing highlighted control strings
    clformat . output/ --inputFile jobs.yml --outputSubdir reports/ -vv
"""

import sys
from pathlib import Path
from argparse import ArgumentParser, Namespace, ArgumentDefaultsHelpFormatter

import yaml
from chris_plugin import chris_plugin

from .config import appsettings
from .lib import Formatter, Parser, ParseError, RenderError, __version__, LOG, state_connectToLogger
from .lib.lexer import control_highlight
from .lib.log import logger_configure
from .models import ParsedJob, ProgramState, pipeline


DISPLAY_TITLE = r"""
       _  __                            _
   ___| |/ _| ___  _ __ _ __ ___   __ _| |_
  / __| | |_ / _ \| '__| '_ ` _ \ / _` | __|
 | (__| |  _| (_) | |  | | | | | | (_| | |_
  \___|_|_|  \___/|_|  |_| |_| |_|\__,_|\__|

  Common Lisp FORMAT for Python
"""

# Define CLI arguments
parser = ArgumentParser(
    description="clformat - render FORMAT control strings from a YAML job file",
    formatter_class=ArgumentDefaultsHelpFormatter,
)

parser.add_argument(
    "--inputFile", required=True, type=str, help="YAML job file (relative to inputdir)"
)

parser.add_argument(
    "--outputSubdir",
    default=".",
    type=str,
    help="Subdirectory within outputdir for the rendered files",
)

parser.add_argument(
    "-v",
    "--verbosity",
    action="count",
    default=1,
    help="Increase output verbosity (can be repeated: -v, -vv)",
)

parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")


def env_check(inputstate: ProgramState) -> ProgramState:
    """
    Resolve the job file and create the output directory.

    Args:
        inputstate: State built from the command line

    Returns:
        ProgramState with added fields:
            - inputJobFile: Resolved path to the YAML job file
            - renderOutputdir: Created output directory path
            - envOK: True if environment is valid

    Exits:
        1 if the job file is not found
    """
    state = inputstate.copy()

    if state.verbosity >= 2:
        LOG(DISPLAY_TITLE, level=2)

    LOG("Checking environment...", level=2)

    job_file = state.inputdir / state.inputFile
    if not job_file.exists():
        print(f"Error: Job file not found: {job_file}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)

    state.inputJobFile = job_file
    LOG(f"Job file: {job_file}", level=2)

    state.renderOutputdir = state.outputdir / state.outputSubdir
    state.renderOutputdir.mkdir(parents=True, exist_ok=True)
    LOG(f"Output directory: {state.renderOutputdir}", level=2)

    state.envOK = True
    return state


def job_build(entry: object, position: int) -> ParsedJob:
    """
    Validate one job file entry and parse its control string

    Args:
        entry: Raw YAML value for the job
        position: Index of the entry in the job file (for messages)

    Returns:
        ParsedJob with directives populated

    Raises:
        ValueError: If the entry is not a mapping with a string control, or
            its name is not a plain file name
        ParseError: If the control string is malformed
    """
    if not isinstance(entry, dict):
        raise ValueError(f"job {position} must be a mapping, got {type(entry).__name__}")

    control = entry.get("control")
    if not isinstance(control, str):
        raise ValueError(f"job {position} needs a string 'control'")

    args = entry.get("args") or []
    if not isinstance(args, list):
        raise ValueError(f"job {position} 'args' must be a list")

    name = str(entry.get("name") or f"job{position}")
    if name in (".", "..") or any(sep in name for sep in ("/", "\\", "\0")):
        raise ValueError(f"job {position} name {name!r} must be a plain file name")
    LOG(f"Job '{name}': {control_highlight(control)}", level=3)

    return ParsedJob(
        name=name,
        control=control,
        args=args,
        directives=Parser(control).parse(),
    )


def jobs_parse(inputstate: ProgramState) -> ProgramState:
    """
    Read the YAML job file and parse every control string.

    Args:
        inputstate: Program state with inputJobFile set

    Returns:
        ProgramState with added field:
            - parsedJobs: List[ParsedJob]

    Exits:
        1 if the file cannot be read or any job is malformed
    """
    state = inputstate.copy()

    LOG("Reading job file...", level=1)
    try:
        document = yaml.safe_load(state.inputJobFile.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as e:
        print(f"Error reading job file: {e}", file=sys.stderr)
        sys.exit(1)

    if isinstance(document, dict):
        document = document.get("jobs")
    if not isinstance(document, list):
        print("Error: Job file must contain a list of jobs", file=sys.stderr)
        sys.exit(1)

    LOG("Parsing control strings...", level=1)
    jobs = []
    for position, entry in enumerate(document):
        try:
            jobs.append(job_build(entry, position))
        except ValueError as e:
            print(f"Job error: {e}", file=sys.stderr)
            sys.exit(1)
        except ParseError as e:
            print(f"Parse error in job {position}: {e}", file=sys.stderr)
            sys.exit(1)

    state.parsedJobs = jobs
    LOG(f"Parsed {len(jobs)} jobs", level=2)
    return state


def jobs_render(inputstate: ProgramState) -> ProgramState:
    """
    Render each parsed job into its own output file.

    Args:
        inputstate: Program state with parsedJobs

    Returns:
        ProgramState with added field:
            - renderResult: Dict containing:
                - status: bool (every job rendered)
                - output_files: List[str] (paths written)
                - job_count: int

    Exits:
        1 if parsedJobs is None, a job fails to render, or its file cannot
          be written
    """
    state = inputstate.copy()

    LOG("Rendering jobs...", level=1)

    if state.parsedJobs is None:
        print("Error: No parsed jobs available", file=sys.stderr)
        sys.exit(1)

    output_files = []
    for job in state.parsedJobs:
        output_file = state.renderOutputdir / f"{job.name}{appsettings.job_suffix}"
        try:
            with output_file.open("w", encoding="utf-8") as stream:
                Formatter(job.directives)(stream, *job.args)
        except RenderError as e:
            print(f"Render error in job '{job.name}': {e}", file=sys.stderr)
            sys.exit(1)
        except OSError as e:
            print(f"Cannot write job '{job.name}': {e}", file=sys.stderr)
            sys.exit(1)
        LOG(f"Job '{job.name}' -> {output_file}", level=2)
        output_files.append(str(output_file))

    state.renderResult = {
        'status': True,
        'output_files': output_files,
        'job_count': len(output_files),
    }
    return state


def results_report(inputstate: ProgramState) -> ProgramState:
    """
    Display render results to the user.

    Args:
        inputstate: Program state with renderResult populated

    Returns:
        ProgramState unchanged (terminal pipeline stage)

    Exits:
        1 if renderResult is None
    """
    state: ProgramState = inputstate.copy()
    if not state.renderResult:
        print("Error: Rendering failed", file=sys.stderr)
        sys.exit(1)

    LOG("\n✓ Rendering successful!", level=1)
    LOG(f"  Jobs: {state.renderResult['job_count']}", level=1)
    LOG(f"  Output: {state.renderOutputdir}", level=1)
    return state


@chris_plugin(
    parser=parser,
    title="clformat - Common Lisp FORMAT control strings",
    category="Utility",
    min_memory_limit="100Mi",
    min_cpu_limit="500m",
)
def main(options: Namespace, inputdir: Path, outputdir: Path):
    """
    Main entry point - render every job of a YAML job file.

    Orchestrates the pipeline:
        1. env_check: Resolve the job file and output directory
        2. jobs_parse: Read the job file and parse control strings
        3. jobs_render: Render each job to outputdir
        4. results_report: Summarise what was written

    Note:
        @chris_plugin parses the command line and calls this with the
        options and the two directory arguments.
    """
    state: ProgramState = ProgramState.state_createFromNamespace(
        options=options, inputdir=inputdir, outputdir=outputdir
    )

    logger_configure()
    state_connectToLogger(state)

    pipeline(state, env_check, jobs_parse, jobs_render, results_report)


if __name__ == "__main__":
    main()  # type: ignore  # @chris_plugin decorator transforms signature
