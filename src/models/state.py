"""
Program state model and pipeline helper

Defines ProgramState dataclass for the functional pipeline pattern and
the pipeline() helper for composing transformation stages.
"""

from pathlib import Path
from argparse import Namespace
from typing import Any, Optional, Type, TypeVar, List, Dict, Callable, Tuple
from dataclasses import dataclass, field


PS = TypeVar("PS", bound="ProgramState")


@dataclass
class ProgramState:
    """
    Central state container for the import pipeline (state bus pattern).

    This dataclass carries all program state through the functional pipeline,
    with each stage adding new fields as processing progresses.

    Pipeline stages and their state additions:
        - Initial: inputdir, outputdir, verbosity and the CLI options
        - env_check: settings, documents, envOK
        - documents_import: importResults
        - results_report: (no additions, terminal stage)

    Attributes:
        inputdir: Directory containing the Markdown documents
        outputdir: Directory receiving the imported documents
        verbosity: Logging verbosity level (1-3)
        pattern: Glob selecting documents inside inputdir
        configFile: Optional YAML options file
        rootDir: Sandbox root (defaults to inputdir)
        asyncMode: Read imported files concurrently
        preserveTrailingNewline: Keep trailing empty line of open ranges
        removeRedundantIndentations: Strip common indentation of imports
        allowImportingFromOutside: Disable the sandbox check
        envOK: Environment validation passed
        settings: Effective AppSettings for the run
        documents: (input document, output document) pairs
        importResults: Output document path → ImportResult
    """

    # CLI arguments
    inputdir: Optional[Path] = field(default=None)
    outputdir: Optional[Path] = field(default=None)
    verbosity: int = field(default=1)
    pattern: str = field(default="**/*.md")
    configFile: Optional[str] = field(default=None)
    rootDir: Optional[str] = field(default=None)
    asyncMode: bool = field(default=False)
    preserveTrailingNewline: bool = field(default=False)
    removeRedundantIndentations: bool = field(default=False)
    allowImportingFromOutside: bool = field(default=False)

    # Pipeline state
    envOK: bool = field(default=False)
    settings: Optional[Any] = field(default=None)  # AppSettings at runtime
    documents: List[Tuple[Path, Path]] = field(default_factory=list)
    importResults: Dict[str, Any] = field(default_factory=dict)  # ImportResult values

    @classmethod
    def state_createFromNamespace(
        cls: Type["ProgramState"], options: Namespace, inputdir: Path, outputdir: Path
    ) -> "ProgramState":
        """
        Create ProgramState from argparse Namespace and directory paths.

        Args:
            options: Parsed CLI arguments
            inputdir: Directory containing source documents
            outputdir: Directory for imported documents

        Returns:
            ProgramState instance with all CLI options as attributes
        """
        options_dict = vars(options)

        import dataclasses
        valid_fields = {f.name for f in dataclasses.fields(cls)}

        # Only keep options that are ProgramState fields
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
            documents_import,
            results_report
        )

    This is equivalent to:
        results_report(documents_import(env_check(initial_state)))
    """
    from functools import reduce
    return reduce(lambda state, stage: stage(state), stages, initial_state)
