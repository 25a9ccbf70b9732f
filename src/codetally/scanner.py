"""Scan orchestrator: parse each file, run the metric visitors, commit to the index.

Usage:
    from codetally.scanner import scan, scan_single_file

    index = scan(["Foo.m", "Bar.m"], ScanConfig(ignore_header_comments=True))
    for entity in index.files():
        print(entity.key, entity.measures)
    for failure in index.failures:
        print(failure.path, failure.reason)

    entity = scan_single_file("Foo.m")
"""

from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Iterable, Optional, Sequence, Union

from .config import DEFAULT_CONFIG, ScanConfig
from .exceptions import (
    AnalysisError,
    FileAccessError,
    InvariantViolation,
    PreconditionError,
)
from .infrastructure.entities import Entity, EntityType
from .infrastructure.index import SourceIndex
from .logging_config import get_logger
from .scanning.base import SourceParser
from .scanning.comments import CommentAnalyzer
from .scanning.factory import create_parser
from .scanning.languages import DEFAULT_LANGUAGE, detect_language, get_language_config
from .visitors.base import MetricAccumulator, MetricVisitor
from .visitors.comments import CommentsVisitor
from .visitors.lines import LinesOfCodeVisitor, LinesVisitor

logger = get_logger(__name__)

PathLike = Union[str, Path]


def default_visitors(config: ScanConfig = DEFAULT_CONFIG) -> list[MetricVisitor]:
    """The standard visitor set: lines, lines of code, comment lines."""
    language = get_language_config(config.language or DEFAULT_LANGUAGE)
    return [
        LinesVisitor(),
        LinesOfCodeVisitor(),
        CommentsVisitor(
            analyzer=CommentAnalyzer(language.comment_families),
            ignore_header_comments=config.ignore_header_comments,
            no_sonar_marker=config.no_sonar_marker,
        ),
    ]


class AstScanner:
    """Drives parsing and measurement for one scan session.

    The scanner owns the session's SourceIndex. Visitors are run in
    registration order, each over the same immutable tree, and a file's
    results become visible only once every visitor has finished with it.

    With no explicit parser, each file is parsed as ``config.language`` or,
    when that is unset, as the language its extension maps to.
    """

    def __init__(
        self,
        config: ScanConfig,
        parser: Optional[SourceParser],
        visitors: Sequence[MetricVisitor],
        index: Optional[SourceIndex] = None,
    ) -> None:
        self.config = config
        self.parser = parser
        self.visitors = list(visitors)
        self.index = index or SourceIndex(config.project_name)
        self._parsers: dict[str, SourceParser] = {}
        self._parsers_lock = threading.Lock()
        logger.debug(
            f"Initialized {type(self).__name__} with "
            f"{parser.name if parser else config.parser_backend} parser and "
            f"visitors {self.visitors}"
        )

    def scan_files(self, paths: Iterable[PathLike]) -> SourceIndex:
        """Measure a batch of files.

        Per-file parse and read failures are recorded in ``index.failures``
        and never abort the batch.

        Raises:
            PreconditionError: If ``paths`` is empty or any path is not a
                regular file. Nothing is scanned in that case.
        """
        files = [Path(p) for p in paths]
        if not files:
            raise PreconditionError("<none>", "no files to scan")
        for path in files:
            _require_regular_file(path)

        workers = self.config.workers or 1
        if workers == 1 or len(files) == 1:
            results = [self.scan_file(path, strict=False) for path in files]
        else:
            with ThreadPoolExecutor(max_workers=workers) as executor:
                results = list(executor.map(lambda p: self.scan_file(p, strict=False), files))

        measured = sum(1 for entity in results if entity is not None)
        logger.info(f"Scan complete: {measured} measured, {len(files) - measured} failed")
        return self.index

    def scan_file(self, path: PathLike, strict: bool = True) -> Optional[Entity]:
        """Parse and measure one file.

        Args:
            path: File to scan
            strict: Re-raise parse and read errors instead of recording them

        Returns:
            The committed FILE entity, or None if the file failed in
            non-strict mode

        Raises:
            UnsupportedLanguageError: If no parser can be built for the
                file's language. This is a configuration problem and is
                raised even when ``strict`` is False.
        """
        path = Path(path)
        key = str(path.resolve())
        parser = self._parser_for(path)
        try:
            text = self._read(path)
            tree = parser.parse(key, text)
        except AnalysisError as e:
            if strict:
                raise
            logger.warning(f"Skipping {path}: {e}")
            self.index.record_failure(key, getattr(e, "reason", str(e)), e)
            return None

        accumulator = MetricAccumulator(key)
        for visitor in self.visitors:
            visitor.observe(tree, accumulator.scoped(visitor.metrics))
        accumulator.annotate("language", tree.language)

        entity = self.index.commit(key, accumulator.measures, accumulator.metadata)
        logger.debug(f"Measured {path}: {_format_measures(entity)}")
        return entity

    def _parser_for(self, path: Path) -> SourceParser:
        if self.parser is not None:
            return self.parser
        language = self.config.language or detect_language(path)
        with self._parsers_lock:
            parser = self._parsers.get(language)
            if parser is None:
                parser = self._parsers[language] = create_parser(self.config, language)
            return parser

    def _read(self, path: Path) -> str:
        try:
            size = path.stat().st_size
            if size > self.config.max_file_size_bytes:
                raise FileAccessError(
                    path, f"file too large ({size} bytes > {self.config.max_file_size_bytes})"
                )
            return path.read_text(encoding=self.config.encoding, errors="replace")
        except OSError as e:
            raise FileAccessError(path, str(e)) from e


def create_scanner(
    config: Optional[ScanConfig] = None,
    visitors: Optional[Sequence[MetricVisitor]] = None,
    parser: Optional[SourceParser] = None,
) -> AstScanner:
    """Build a scanner with a fresh index.

    Args:
        config: Scan configuration (defaults to ScanConfig())
        visitors: Visitors to register, in order; None registers default_visitors()
        parser: Parser adapter used for every file; None resolves one per
            language from the configuration
    """
    config = config or DEFAULT_CONFIG
    if visitors is None:
        visitors = default_visitors(config)
    return AstScanner(config, parser, visitors)


def scan(
    files: Iterable[PathLike],
    config: Optional[ScanConfig] = None,
    visitors: Optional[Sequence[MetricVisitor]] = None,
) -> SourceIndex:
    """Measure a batch of files and return the populated index."""
    return create_scanner(config, visitors).scan_files(files)


def scan_single_file(
    path: PathLike,
    config: Optional[ScanConfig] = None,
    visitors: Optional[Sequence[MetricVisitor]] = None,
) -> Entity:
    """Measure exactly one file and return its FILE entity.

    Raises:
        PreconditionError: If ``path`` is not a regular file
        ParseError: If the file cannot be parsed
        InvariantViolation: If the scan did not yield exactly one FILE entity
    """
    path = Path(path)
    _require_regular_file(path)

    scanner = create_scanner(config, visitors)
    scanner.scan_file(path, strict=True)

    sources = scanner.index.search(EntityType.FILE)
    if len(sources) != 1:
        raise InvariantViolation(
            f"only one file entity was expected whereas {len(sources)} were indexed",
            path=path,
        )
    return sources[0]


def _require_regular_file(path: Path) -> None:
    if not path.is_file():
        raise PreconditionError(path, "not found or not a regular file")


def _format_measures(entity: Entity) -> str:
    return ", ".join(f"{m.value}={v}" for m, v in entity.measures.items())
