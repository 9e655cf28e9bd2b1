"""
Program state model and pipeline helper

Defines ProgramState dataclass for the functional pipeline pattern and
the pipeline() helper for composing transformation stages.
"""

from pathlib import Path
from argparse import Namespace
from typing import Any, Optional, Type, TypeVar, List, Callable, TYPE_CHECKING
from dataclasses import dataclass, field

# Forward reference for type hint - avoid circular import
if TYPE_CHECKING:
    from .verdict import Verdict


PS = TypeVar("PS", bound="ProgramState")


@dataclass
class ProgramState:
    """
    Central state container for the verification pipeline (state bus pattern).

    Pipeline stages and their state additions:
        - Initial: inputdir, outputdir, verbosity, checkFile, inputFile, checkPrefix, verdictFile
        - env_check: checkSourceFile, targetSourceFile, envOK
        - directives_parse: directiveSource, compiledDirectives
        - text_verify: verdict
        - results_report: (no additions, terminal stage)

    Attributes:
        inputdir: Directory containing the directive file and target text
        outputdir: Directory where the verdict file is written
        verbosity: Logging verbosity level (1-3)
        checkFile: Directive filename (relative to inputdir)
        inputFile: Target text filename (relative to inputdir)
        checkPrefix: Optional directive prefix overriding the configured one
        verdictFile: Verdict JSON filename (relative to outputdir)
        envOK: Environment validation passed
        checkSourceFile: Resolved path to the directive file
        targetSourceFile: Resolved path to the target text
        directiveSource: Raw directive file text
        compiledDirectives: Parsed and compiled directives
        verdict: Result of the verification run
    """

    # CLI arguments
    inputdir: Optional[Path] = field(default=None)
    outputdir: Optional[Path] = field(default=None)
    verbosity: int = field(default=1)
    checkFile: str = field(default="")
    inputFile: str = field(default="")
    checkPrefix: Optional[str] = field(default=None)
    verdictFile: str = field(default="verdict.json")

    # Pipeline state
    envOK: bool = field(default=False)
    checkSourceFile: Path = field(default=Path("/"))
    targetSourceFile: Path = field(default=Path("/"))
    directiveSource: str = field(default="")
    compiledDirectives: Optional[List[Any]] = field(default=None)  # List[CompiledDirective] at runtime
    verdict: Optional["Verdict"] = field(default=None)

    @classmethod
    def state_createFromNamespace(
        cls: Type["ProgramState"], options: Namespace, inputdir: Path, outputdir: Path
    ) -> "ProgramState":
        """
        Create ProgramState from argparse Namespace and directory paths.

        Args:
            options: Parsed CLI arguments (checkFile, inputFile, etc.)
            inputdir: Directory containing input files
            outputdir: Directory for the verdict file

        Returns:
            ProgramState instance with all CLI options as attributes
        """
        options_dict = vars(options)

        # Only keep options that are ProgramState fields
        import dataclasses
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
            directives_parse,
            text_verify,
            results_report
        )

    This is equivalent to:
        results_report(text_verify(directives_parse(env_check(initial_state))))
    """
    from functools import reduce
    return reduce(lambda state, stage: stage(state), stages, initial_state)
