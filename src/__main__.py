#!/usr/bin/env python3
"""
linecheck - FileCheck-style line verification engine

Verifies that a target text (typically a compiler's textual IR) contains the
patterns of a CHECK directive file in the required order and adjacency.

As an aside, this codebase leverages the ChRIS "plugin" concept/pattern as
general purpose python app development framework.

Directive language:
    CHECK: pattern        - appears on some later line
    CHECK-NEXT: pattern   - appears on the very next line
    CHECK-SAME: pattern   - appears later on the same line as the previous match
    CHECK-NOT: pattern    - does not appear before the next match
    # comment             - ignored

    Patterns are literal text with {{.*}} wildcards.

Usage:
    linecheck inputdir/ outputdir/ --checkFile profile.check --inputFile profile.ll

    The verdict is written to outputdir/verdict.json; the process exits 1 if
    any directive is unsatisfied.

Examples:
    # Basic verification
    linecheck . out/ --checkFile test.check --inputFile test.ll

    # Custom directive prefix
    linecheck . out/ --checkFile test.check --inputFile test.ll --checkPrefix PROF

    # Per-line match trace
    linecheck . out/ --checkFile test.check --inputFile test.ll -vvv
"""

import sys
import json
from pathlib import Path
from argparse import ArgumentParser, Namespace, ArgumentDefaultsHelpFormatter

from chris_plugin import chris_plugin
from .config import appsettings, AppSettings
from .lib import __version__, LOG, state_connectToLogger, CheckError, StreamMatcher, directives_load
from .lib.parser import lines_split
from .lib.report import verdict_render
from .models import ProgramState, Verdict, pipeline


DISPLAY_TITLE = r"""
  _ _                 _               _
 | (_)_ __   ___  ___| |__   ___  ___| | __
 | | | '_ \ / _ \/ __| '_ \ / _ \/ __| |/ /
 | | | | | |  __/ (__| | | |  __/ (__|   <
 |_|_|_| |_|\___|\___|_| |_|\___|\___|_|\_\

  FileCheck-style line verification
"""

# Define CLI arguments
parser = ArgumentParser(
    description="linecheck - verify text against CHECK directives",
    formatter_class=ArgumentDefaultsHelpFormatter,
)

parser.add_argument(
    "--checkFile", required=True, type=str, help="Directive file (relative to inputdir)"
)

parser.add_argument(
    "--inputFile", required=True, type=str, help="Text to verify (relative to inputdir)"
)

parser.add_argument(
    "--checkPrefix",
    default=None,
    type=str,
    help="Directive keyword prefix. Defaults to LINECHECK_CHECK_PREFIX or CHECK",
)

parser.add_argument(
    "--verdictFile",
    default="verdict.json",
    type=str,
    help="Verdict filename written within outputdir",
)

parser.add_argument(
    "-v",
    "--verbosity",
    action="count",
    default=1,
    help="Increase output verbosity (can be repeated: -v, -vv, -vvv)",
)

parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")


def settings_resolve(state: ProgramState) -> AppSettings:
    """Application settings with CLI overrides applied"""
    if state.checkPrefix:
        return appsettings.model_copy(update={"check_prefix": state.checkPrefix})
    return appsettings


def env_check(inputstate: ProgramState) -> ProgramState:
    """
    Validate environment and resolve all file paths.

    Args:
        inputstate: Initial program state with CLI options

    Returns:
        ProgramState with added fields:
            - checkSourceFile: Resolved path to the directive file
            - targetSourceFile: Resolved path to the target text
            - envOK: True if environment is valid

    Exits:
        1 if either input file is missing
    """

    state = inputstate.copy()

    if state.verbosity >= 2:
        LOG(DISPLAY_TITLE, level=2)

    LOG("Checking environment...", level=2)

    check_file = state.inputdir / state.checkFile
    if not check_file.exists():
        print(f"Error: Directive file not found: {check_file}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)

    target_file = state.inputdir / state.inputFile
    if not target_file.exists():
        print(f"Error: Input file not found: {target_file}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)

    state.checkSourceFile = check_file
    state.targetSourceFile = target_file
    LOG(f"Directive file: {check_file}", level=2)
    LOG(f"Input file: {target_file}", level=2)

    state.outputdir.mkdir(parents=True, exist_ok=True)
    LOG(f"Output directory: {state.outputdir}", level=2)

    state.envOK = True
    return state


def directives_parse(inputstate: ProgramState) -> ProgramState:
    """
    Read, parse and compile the directive file.

    Parse-time errors do not exit here: they become a failing verdict so that
    results_report handles every failure the same way.

    Args:
        inputstate: Program state with checkSourceFile set

    Returns:
        ProgramState with added fields:
            - directiveSource: Raw directive text
            - compiledDirectives: List[CompiledDirective], or None on error
            - verdict: Failing Verdict if parsing or compiling failed

    Exits:
        1 if the file cannot be read
    """

    state = inputstate.copy()

    LOG("Reading directive file...", level=1)
    try:
        state.directiveSource = state.checkSourceFile.read_text(encoding="utf-8")
    except Exception as e:
        print(f"Error reading directive file: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        state.compiledDirectives = directives_load(state.directiveSource, settings_resolve(state))
        LOG(f"Compiled {len(state.compiledDirectives)} directives", level=2)
    except CheckError as e:
        LOG(f"Directive file rejected: {e.diagnostic()}", level=2)
        state.verdict = Verdict(passed=False, failure=e)
    return state


def text_verify(inputstate: ProgramState) -> ProgramState:
    """
    Run the stream matcher over the target text.

    Args:
        inputstate: Program state with compiledDirectives

    Returns:
        ProgramState with added field:
            - verdict: Verdict of the run (left untouched if parsing already failed)

    Exits:
        1 if the target text cannot be read
    """

    state = inputstate.copy()
    if state.verdict is not None:
        return state

    LOG("Verifying input text...", level=1)
    try:
        target = state.targetSourceFile.read_text(encoding="utf-8")
    except Exception as e:
        print(f"Error reading input file: {e}", file=sys.stderr)
        sys.exit(1)

    lines = lines_split(target)
    LOG(f"Read {len(lines)} lines from {state.targetSourceFile.name}", level=2)

    try:
        state.verdict = StreamMatcher(state.compiledDirectives, lines).run()
    except CheckError as e:
        state.verdict = Verdict(passed=False, failure=e)
    return state


def results_report(inputstate: ProgramState) -> ProgramState:
    """
    Write the verdict file and report the outcome.

    Args:
        inputstate: Program state with verdict populated

    Returns:
        ProgramState unchanged (terminal pipeline stage) when verification passed

    Exits:
        1 if verification failed or no verdict exists
    """
    state: ProgramState = inputstate.copy()
    if state.verdict is None:
        print("Error: Verification did not run", file=sys.stderr)
        sys.exit(1)

    verdict_path = state.outputdir / state.verdictFile
    verdict_path.write_text(json.dumps(state.verdict.to_dict(), indent=2), encoding="utf-8")
    LOG(f"Wrote {verdict_path}", level=2)

    report = verdict_render(
        state.verdict,
        state.directiveSource,
        check_name=state.checkFile,
        input_name=state.inputFile,
        color=appsettings.color_diagnostics and sys.stderr.isatty(),
        prefix=settings_resolve(state).check_prefix,
    )

    if not state.verdict.passed:
        print(report, file=sys.stderr)
        sys.exit(1)

    LOG(f"\n✓ {report}", level=1)
    return state


@chris_plugin(
    parser=parser,
    title="linecheck - FileCheck-style line verification",
    category="Utility",
    min_memory_limit="100Mi",
    min_cpu_limit="500m",
)
def main(options: Namespace, inputdir: Path, outputdir: Path):
    """
    Main entry point - verify one input text against one directive file.

    Orchestrates the pipeline:
        1. env_check: Validate paths and environment
        2. directives_parse: Read, parse and compile the directive file
        3. text_verify: Run the matcher over the input text
        4. results_report: Write verdict.json and report

    Args:
        options: CLI arguments from argparse
        inputdir: Directory containing the directive file and input text
        outputdir: Directory where the verdict is written

    Note:
        This function is wrapped by @chris_plugin which handles CLI
        argument parsing and invokes this function with parsed values.
    """

    state: ProgramState = ProgramState.state_createFromNamespace(
        options=options, inputdir=inputdir, outputdir=outputdir
    )

    # Connect state to logger for entire pipeline
    state_connectToLogger(state)

    pipeline(state, env_check, directives_parse, text_verify, results_report)


if __name__ == "__main__":
    main()  # type: ignore  # @chris_plugin decorator transforms signature
