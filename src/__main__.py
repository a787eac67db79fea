#!/usr/bin/env python3
"""
codeimport - Embed source files into Markdown code blocks

Fills placeholder code fences with the content of the files they name, so
documentation always shows the code as it is in the repository.

As with other ChRIS plugins, the program maps an input directory of
documents onto an output directory.

Directive syntax (in the fence info string, after the language):

    ```python file=./src/app.py               whole file
    ```python file=./src/app.py#L12           line 12
    ```python file=./src/app.py#L12-          line 12 to the end
    ```python file=./src/app.py#L12-L30       lines 12 to 30
    ```python file=<rootDir>/src/app.py       path from the sandbox root
    ```python file=./src/app.py inline        marker groups (see below)

In inline mode the existing body of the fence is a template; a template
line containing "group <name>" is replaced by the lines between the next
two "group <name>" markers in the source file.

Usage:
    codeimport inputdir/ outputdir/

Examples:
    # Import all Markdown documents below docs/
    codeimport docs/ build/docs/

    # Read files concurrently, strip common indentation
    codeimport docs/ build/docs/ --async --removeRedundantIndentations

    # Options from a YAML file, verbose output
    codeimport docs/ build/docs/ --config codeimport.yaml -vv
"""

import sys
from pathlib import Path
from typing import Optional
from argparse import ArgumentParser, Namespace, ArgumentDefaultsHelpFormatter

from chris_plugin import chris_plugin
from .config import appsettings, AppSettings
from .lib import CodeImporter, OptionsFile, CodeImportError, __version__, LOG, state_connectToLogger
from .models import ProgramState, pipeline


DISPLAY_TITLE = r"""
                  _       _                            _
   ___ ___   __| | ___ (_)_ __ ___  _ __   ___  _ __| |_
  / __/ _ \ / _` |/ _ \| | '_ ` _ \| '_ \ / _ \| '__| __|
 | (_| (_) | (_| |  __/| | | | | | | |_) | (_) | |  | |_
  \___\___/ \__,_|\___||_|_| |_| |_| .__/ \___/|_|   \__|
                                   |_|
  Source files into Markdown code blocks
"""

# Define CLI arguments
parser = ArgumentParser(
    description="codeimport - embed source file content into Markdown code blocks",
    formatter_class=ArgumentDefaultsHelpFormatter,
)

parser.add_argument(
    "--pattern",
    default=appsettings.document_glob,
    type=str,
    help="Glob selecting Markdown documents inside inputdir",
)

parser.add_argument(
    "--config",
    dest="configFile",
    default=None,
    type=str,
    help="YAML options file (async, preserveTrailingNewline, removeRedundantIndentations, rootDir, allowImportingFromOutside)",
)

parser.add_argument(
    "--rootDir",
    default=None,
    type=str,
    help="Sandbox root for imports. Defaults to inputdir",
)

parser.add_argument(
    "--async",
    dest="asyncMode",
    action="store_true",
    help="Read all imported files of a document concurrently",
)

parser.add_argument(
    "--preserveTrailingNewline",
    action="store_true",
    help="Keep the trailing empty line when importing up to the end of a file",
)

parser.add_argument(
    "--removeRedundantIndentations",
    action="store_true",
    help="Strip indentation common to all imported lines",
)

parser.add_argument(
    "--allowImportingFromOutside",
    action="store_true",
    help="Allow imports from outside the sandbox root",
)

parser.add_argument(
    "-v",
    "--verbosity",
    action="count",
    default=1,
    help="Increase output verbosity (can be repeated: -v, -vv, -vvv)",
)

parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")


def settings_build(state: ProgramState, base: Optional[AppSettings] = None) -> AppSettings:
    """
    Combine environment settings, the options file and CLI flags.

    Precedence (lowest to highest): environment/.env, options file, CLI.
    A root directory given nowhere defaults to the input directory.

    Args:
        state: Program state carrying the CLI options
        base: Settings read from the environment; defaults to appsettings

    Raises:
        ConfigurationError: On an invalid options file or a relative root
    """
    settings = base if base is not None else appsettings
    if state.configFile:
        settings = OptionsFile(state.configFile).settings_merge(settings)

    overrides = {}
    if state.rootDir:
        overrides["root_dir"] = state.rootDir
    elif not settings.root_dir and state.inputdir is not None:
        overrides["root_dir"] = str(Path(state.inputdir).absolute())
    if state.asyncMode:
        overrides["async_mode"] = True
    if state.preserveTrailingNewline:
        overrides["preserve_trailing_newline"] = True
    if state.removeRedundantIndentations:
        overrides["remove_redundant_indentations"] = True
    if state.allowImportingFromOutside:
        overrides["allow_importing_from_outside"] = True

    settings = settings.model_copy(update=overrides)
    settings.rootDir_check()
    return settings


def env_check(inputstate: ProgramState) -> ProgramState:
    """
    Validate the environment and collect the documents to process.

    Args:
        inputstate: Initial program state with CLI options

    Returns:
        ProgramState with added fields:
            - settings: Effective AppSettings
            - documents: (input, output) document path pairs
            - envOK: True if environment is valid

    Exits:
        1 if inputdir is missing or the configuration is invalid
    """

    state = inputstate.copy()

    if state.verbosity >= 2:
        LOG(DISPLAY_TITLE, level=2)

    LOG("Checking environment...", level=2)

    if state.inputdir is None or not Path(state.inputdir).is_dir():
        print(f"Error: Input directory not found: {state.inputdir}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)

    try:
        state.settings = settings_build(state)
    except CodeImportError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)

    LOG(f"Sandbox root: {state.settings.rootDir_get()}", level=2)

    inputdir = Path(state.inputdir)
    outputdir = Path(state.outputdir)
    state.documents = [
        (document, outputdir / document.relative_to(inputdir))
        for document in sorted(inputdir.glob(state.pattern))
        if document.is_file()
    ]
    LOG(f"Found {len(state.documents)} documents matching {state.pattern}", level=2)

    state.envOK = True
    return state


def documents_import(inputstate: ProgramState) -> ProgramState:
    """
    Run an import pass over every document and write the results.

    Args:
        inputstate: Program state with settings and documents

    Returns:
        ProgramState with added field:
            - importResults: output path → ImportResult

    Exits:
        1 on the first fatal import error; nothing further is written
    """

    state = inputstate.copy()

    LOG("Importing code into documents...", level=1)

    try:
        importer = CodeImporter(state.settings)
        for document, output in state.documents:
            result = importer.file_import(document)
            output.parent.mkdir(parents=True, exist_ok=True)
            output.write_text(result.text, encoding="utf-8")
            state.importResults[str(output)] = result
            LOG(f"{document.name}: {result.imported} code blocks imported", level=2)
    except CodeImportError as e:
        print(f"Import error: {e}", file=sys.stderr)
        sys.exit(1)

    return state


def results_report(inputstate: ProgramState) -> ProgramState:
    """
    Display import results to the user.

    Returns:
        ProgramState unchanged (terminal pipeline stage)
    """
    state: ProgramState = inputstate.copy()

    blocks = sum(result.imported for result in state.importResults.values())
    LOG("\n✓ Import complete!", level=1)
    LOG(f"  Documents: {len(state.importResults)}", level=1)
    LOG(f"  Code blocks: {blocks}", level=1)

    for output, result in state.importResults.items():
        for message in result.diagnostics:
            LOG(f"  {output}: {message}", level=1)
    return state


@chris_plugin(
    parser=parser,
    title="codeimport - Source files into Markdown code blocks",
    category="Utility",
    min_memory_limit="100Mi",
    min_cpu_limit="500m",
)
def main(options: Namespace, inputdir: Path, outputdir: Path):
    """
    Main entry point - import code into every Markdown document of inputdir.

    Orchestrates the pipeline:
        1. env_check: Validate paths, build settings, find documents
        2. documents_import: Import code blocks and write documents
        3. results_report: Display results to user

    Note:
        This function is wrapped by @chris_plugin which handles CLI
        argument parsing and invokes this function with parsed values.
    """

    state: ProgramState = ProgramState.state_createFromNamespace(
        options=options, inputdir=inputdir, outputdir=outputdir
    )

    # Connect state to logger for entire pipeline
    state_connectToLogger(state)

    pipeline(state, env_check, documents_import, results_report)


if __name__ == "__main__":
    main()  # type: ignore  # @chris_plugin decorator transforms signature
