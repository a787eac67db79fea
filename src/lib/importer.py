"""
Code import orchestration

Runs an import pass over a Markdown document:

1. Find fenced code blocks (document.codeBlocks_find)
2. Parse each block's metadata into a Directive; skip blocks without one
3. Resolve the directive path inside the sandbox root
4. Read the referenced files, either one after the other or all at once
5. Extract the requested content and write it back into its block

Reading is delegated to a reader callable and indentation clean-up to a
normalizer callable, so both scheduling strategies share one extraction
path (job_apply) and differ only in how reads are issued.

Any fatal error aborts the whole pass; no partially imported document is
returned.

Example:
    >>> importer = CodeImporter(AppSettings(root_dir="/srv/docs"))
    >>> result = importer.file_import(Path("/srv/docs/guide.md"))
    >>> result.imported
    3
"""

import asyncio
import textwrap
from pathlib import Path
from typing import Callable, List, Optional, Tuple, Union

from ..config import appsettings, AppSettings
from ..models.document import CodeBlock, ImportJob, ImportResult
from .directive import directive_parse
from .document import codeBlocks_find, codeBlocks_replace
from .errors import FileReadError
from .extract import content_extract
from .log import LOG
from .resolver import path_resolve

ContentReader = Callable[[Path], str]
Normalizer = Callable[[str], str]


def file_read(path: Path) -> str:
    """
    Read a UTF-8 text file

    Raises:
        FileReadError: If the file is missing, unreadable or not UTF-8
    """
    try:
        return path.read_text(encoding='utf-8')
    except OSError as e:
        raise FileReadError(str(path), e.strerror or str(e)) from e
    except UnicodeDecodeError as e:
        raise FileReadError(str(path), str(e)) from e


def indent_strip(text: str) -> str:
    """Remove the indentation common to all non-blank lines"""
    return textwrap.dedent(text)


class CodeImporter:
    """
    Imports file content into the placeholder code blocks of documents

    Attributes:
        settings: Import options and directive grammar tokens
        root_dir: Validated absolute sandbox root
        reader: Callable returning the text of a file
        normalizer: Callable applied to extracted text when
                    settings.remove_redundant_indentations is set
    """

    def __init__(
        self,
        settings: Optional[AppSettings] = None,
        reader: ContentReader = file_read,
        normalizer: Normalizer = indent_strip,
    ) -> None:
        """
        Raises:
            ConfigurationError: If the configured root is not absolute
        """
        self.settings = settings or appsettings
        self.root_dir = self.settings.rootDir_check()
        self.reader = reader
        self.normalizer = normalizer

    def job_make(self, block: CodeBlock, base_dir: Path) -> Optional[ImportJob]:
        """
        Parse a block's directive and resolve its path

        Returns:
            ImportJob, or None if the block carries no directive

        Raises:
            DirectiveSyntaxError: Malformed directive
            SandboxViolationError: Path outside the root
        """
        directive = directive_parse(block.meta, self.settings)
        if directive is None:
            return None

        path = path_resolve(
            directive.path,
            base_dir,
            self.root_dir,
            allow_outside=self.settings.allow_importing_from_outside,
            root_token=self.settings.root_token,
        )
        return ImportJob(block=block, directive=directive, path=path)

    def job_apply(self, job: ImportJob, content: str) -> Tuple[str, List[str]]:
        """
        Extract a job's content from the text of its file

        Returns:
            (new block body, diagnostics)
        """
        extraction = content_extract(
            job.directive,
            content,
            job.block.value,
            preserve_trailing_newline=self.settings.preserve_trailing_newline,
            token=self.settings.marker_token,
        )
        value = extraction.text
        if self.settings.remove_redundant_indentations:
            value = self.normalizer(value)

        diagnostics = [
            f"Group {group} not found in {job.path} (line {job.block.start_line + 1})"
            for group in extraction.missing
        ]
        return value, diagnostics

    def result_build(
        self, text: str, jobs: List[ImportJob], applied: List[Tuple[str, List[str]]]
    ) -> ImportResult:
        """Write extracted bodies back into the document"""
        replacements = [(job.block, value) for job, (value, _) in zip(jobs, applied)]
        diagnostics = [message for _, messages in applied for message in messages]
        return ImportResult(
            text=codeBlocks_replace(text, replacements),
            imported=len(jobs),
            diagnostics=diagnostics,
        )

    def document_importSequential(self, text: str, document_path: Optional[Path] = None) -> ImportResult:
        """
        Import pass where each file read blocks before the next block is handled
        """
        base_dir = self.baseDir_get(document_path)
        jobs: List[ImportJob] = []
        applied: List[Tuple[str, List[str]]] = []

        for block in codeBlocks_find(text):
            job = self.job_make(block, base_dir)
            if job is None:
                continue
            LOG(f"Importing {job.path}", level=2)
            jobs.append(job)
            applied.append(self.job_apply(job, self.reader(job.path)))

        return self.result_build(text, jobs, applied)

    async def document_importAsync(self, text: str, document_path: Optional[Path] = None) -> ImportResult:
        """
        Import pass where all file reads are issued together

        Directives are parsed and paths resolved before any read starts.
        Reads run in worker threads and are awaited as one batch; the first
        failing read fails the pass. Reads already started are not cancelled.
        """
        base_dir = self.baseDir_get(document_path)
        jobs = [
            job for job in (self.job_make(block, base_dir) for block in codeBlocks_find(text))
            if job is not None
        ]

        LOG(f"Reading {len(jobs)} files concurrently", level=2)
        contents = await asyncio.gather(*(asyncio.to_thread(self.reader, job.path) for job in jobs))

        applied = [self.job_apply(job, content) for job, content in zip(jobs, contents)]
        return self.result_build(text, jobs, applied)

    def document_import(self, text: str, document_path: Optional[Union[str, Path]] = None) -> ImportResult:
        """
        Import all placeholder blocks of a Markdown document

        Uses the concurrent strategy when settings.async_mode is set.
        Must not be called from a running event loop in that case; await
        document_importAsync() there instead.

        Args:
            text: Markdown source
            document_path: Path of the document; relative directive paths
                           resolve against its directory (default: cwd)

        Returns:
            ImportResult with the rewritten document

        Raises:
            CodeImportError: On any fatal condition
        """
        path = Path(document_path) if document_path is not None else None
        if self.settings.async_mode:
            return asyncio.run(self.document_importAsync(text, path))
        return self.document_importSequential(text, path)

    def file_import(self, document_path: Union[str, Path]) -> ImportResult:
        """Read a Markdown file and import its placeholder blocks"""
        path = Path(document_path)
        LOG(f"Processing document {path}", level=2)
        return self.document_import(file_read(path), path)

    @staticmethod
    def baseDir_get(document_path: Optional[Path]) -> Path:
        """Directory that relative import paths resolve against"""
        if document_path is None:
            return Path.cwd()
        return Path(document_path).absolute().parent
