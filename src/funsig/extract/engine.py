"""Declaration extraction engine.

Entry points:
- ``DeclarationExtractor.parse_file``: one file -> FileDeclaration
- ``DeclarationExtractor.parse_directory``: a tree of files -> [FileDeclaration]
- ``DeclarationExtractor.parse_directory_legacy``: flat [FunctionDeclaration]
  with ``file_name`` and heuristic ``depend_on`` populated

Each top-level call starts a new run: ids restart at 1 and the run gets a
fresh correlation id. Per-file faults (missing grammar, unreadable or
oversized file) are logged and become empty records; they never propagate.

An extractor is not thread-safe. Run one extractor per worker for parallel
extraction; extractors share no mutable state.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import replace
from pathlib import Path

import structlog
import tree_sitter

from funsig.config.models import ExtractionConfig
from funsig.core.errors import FunsigError, InternalError, SourceError
from funsig.core.logging import set_run_id
from funsig.core.progress import progress
from funsig.extract.assembler import DeclarationAssembler, ExtractionContext
from funsig.extract.comments import build_comment_index
from funsig.extract.dependencies import infer_dependencies
from funsig.extract.grammars import GrammarResolver
from funsig.extract.models import FileDeclaration, FunctionDeclaration
from funsig.extract.packs import get_pack
from funsig.extract.scanner import detect_file_extensions, find_files
from funsig.extract.visitor import traverse

logger = structlog.get_logger()

_BYTES_PER_MB = 1024 * 1024


class DeclarationExtractor:
    """Extracts function and class declarations from source files.

    Loaded grammars are cached for the lifetime of the extractor.
    """

    def __init__(self, config: ExtractionConfig | None = None) -> None:
        self.config = config or ExtractionConfig()
        self.grammars = GrammarResolver()
        self._parser = tree_sitter.Parser()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def parse_file(self, path: str | Path) -> FileDeclaration:
        """Parse one file. Unsupported or failing files yield an empty record."""
        set_run_id()
        path = Path(path)
        grammar = self.grammars.resolve(path)
        if grammar is None:
            return FileDeclaration.empty(str(path))
        record, _ = self._extract(path, grammar, ExtractionContext())
        return record

    def parse_directory(
        self,
        directory: str | Path,
        extensions: Iterable[str] | None = None,
    ) -> list[FileDeclaration]:
        """Parse every matching file under ``directory``, in sorted path order.

        Args:
            directory: Root of the scan.
            extensions: Extensions to include (``".ts"``). Auto-detected when
                omitted or empty.

        Returns:
            One record per parsed file. Unsupported files contribute nothing;
            a directory that cannot be scanned yields ``[]``.
        """
        set_run_id()
        return [record for record, _ in self._scan(Path(directory), extensions)]

    def parse_file_legacy(self, path: str | Path) -> list[FunctionDeclaration]:
        """Flat function list of one file with ``file_name``/``depend_on`` set."""
        set_run_id()
        path = Path(path)
        grammar = self.grammars.resolve(path)
        if grammar is None:
            return []
        return _flatten(*self._extract(path, grammar, ExtractionContext()))

    def parse_directory_legacy(
        self,
        directory: str | Path,
        extensions: Iterable[str] | None = None,
    ) -> list[FunctionDeclaration]:
        """Flat function list across a directory scan.

        Per file: top-level functions, then class methods, each carrying its
        file name and the ids of same-file functions it appears to call.
        """
        set_run_id()
        flat: list[FunctionDeclaration] = []
        for record, source in self._scan(Path(directory), extensions):
            flat.extend(_flatten(record, source))
        return flat

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _scan(
        self,
        directory: Path,
        extensions: Iterable[str] | None,
    ) -> list[tuple[FileDeclaration, bytes | None]]:
        exts = list(extensions or ())
        if not exts:
            exts = detect_file_extensions(
                directory,
                self.config.default_extensions,
                self.config.extra_excluded_dirs,
            )
        try:
            files = find_files(directory, exts, self.config.extra_excluded_dirs)
        except OSError as e:
            logger.error("directory_scan_failed", directory=str(directory), error=str(e))
            return []

        logger.info(
            "extraction_started",
            directory=str(directory),
            extensions=exts,
            files=len(files),
        )
        context = ExtractionContext()
        results: list[tuple[FileDeclaration, bytes | None]] = []
        for path in progress(files, desc="Parsing", label=lambda p: p.name):
            grammar = self.grammars.resolve(path)
            if grammar is None:
                continue
            results.append(self._extract(path, grammar, context))

        logger.info(
            "extraction_complete",
            directory=str(directory),
            files=len(results),
            declarations=sum(record.declaration_count for record, _ in results),
        )
        return results

    def _extract(
        self,
        path: Path,
        grammar: str,
        context: ExtractionContext,
    ) -> tuple[FileDeclaration, bytes | None]:
        """Parse one resolved file against a shared run context."""
        try:
            source = self._read_source(path)
            self._parser.language = self.grammars.load(grammar)
        except FunsigError as e:
            logger.warning(
                "file_parse_failed",
                path=str(path),
                error=e.error_name,
                message=e.message,
            )
            return FileDeclaration.empty(str(path)), None

        tree = self._parser.parse(source)
        pack = get_pack(grammar)
        if pack is None:
            raise InternalError.unexpected("resolved grammar has no language pack", grammar=grammar)

        comments = build_comment_index(source, pack.comment_syntax, tree.root_node)
        assembler = DeclarationAssembler(
            source,
            pack,
            comments,
            context,
            max_comment_distance=self.config.comment_max_distance,
        )
        traverse(tree.root_node, pack.declarations, assembler)

        record = FileDeclaration(
            file_name=str(path),
            functions=assembler.functions,
            classes=assembler.classes,
        )
        logger.debug(
            "file_parsed",
            path=str(path),
            grammar=grammar,
            functions=len(record.functions),
            classes=len(record.classes),
            comments=len(comments),
        )
        return record, source

    def _read_source(self, path: Path) -> bytes:
        limit = self.config.max_file_size_mb * _BYTES_PER_MB
        try:
            size = path.stat().st_size
            if limit and size > limit:
                raise SourceError.too_large(str(path), size, limit)
            return path.read_bytes()
        except OSError as e:
            raise SourceError.read_failed(str(path), e.strerror or str(e)) from e


def _flatten(record: FileDeclaration, source: bytes | None) -> list[FunctionDeclaration]:
    functions = record.all_functions()
    if source is None:
        dependencies: dict[int, set[int]] = {}
    else:
        dependencies = infer_dependencies(functions, source.decode("utf-8", errors="replace"))
    return [
        replace(fn, file_name=record.file_name, depend_on=dependencies.get(fn.id, set()))
        for fn in functions
    ]


def parse_file(path: str | Path, config: ExtractionConfig | None = None) -> FileDeclaration:
    """Parse one file with a throwaway extractor."""
    return DeclarationExtractor(config).parse_file(path)


def parse_directory(
    directory: str | Path,
    extensions: Iterable[str] | None = None,
    config: ExtractionConfig | None = None,
) -> list[FileDeclaration]:
    """Parse a directory with a throwaway extractor."""
    return DeclarationExtractor(config).parse_directory(directory, extensions)
