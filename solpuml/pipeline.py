"""Pipeline orchestration: enumerate, parse, extract, serialize, write."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable, List, Sequence, Tuple, TypeVar

from .errors import FileError, WriteError
from .extractor import extract_contracts
from .logging import get_logger, log_file_error
from .models import ContractMetadata, FileResult
from .parsing import SolidityParser, SourceParser
from .serializer import DiagramSerializer
from .sources import SourceEnumerator

_T = TypeVar("_T")


@dataclass
class RunReport:
    """Result of a diagram run: the document plus any per-file failures."""

    document: str
    contracts: List[ContractMetadata] = field(default_factory=list)
    errors: List[FileError] = field(default_factory=list)
    files: List[str] = field(default_factory=list)

    @property
    def degraded(self) -> bool:
        """True when a document was produced but at least one file failed."""
        return bool(self.errors)


class DiagramPipeline:
    """Coordinates the conversion of a source tree into a diagram document."""

    def __init__(
        self,
        parser: SourceParser | None = None,
        enumerator: SourceEnumerator | None = None,
        *,
        jobs: int = 1,
    ) -> None:
        if jobs < 1:
            raise ValueError("jobs must be at least 1")
        self.parser = parser or SolidityParser()
        self.enumerator = enumerator or SourceEnumerator()
        self.jobs = jobs
        self.logger = get_logger("pipeline")

    def run(self, root: str | Path) -> RunReport:
        """Diagram every source file under ``root``.

        ``EnumerationError`` propagates; per-file failures are collected in the
        returned report.
        """
        root_path = Path(root)
        self.logger.info("Scanning %s", root_path)
        paths = self.enumerator.discover(root_path)
        self.logger.debug("Processing %d files with %d job(s)", len(paths), self.jobs)
        results = self._map(self.process_file, paths)
        return self._assemble(results)

    def run_sources(self, sources: Sequence[Tuple[str, str]]) -> RunReport:
        """Diagram in-memory ``(path, text)`` pairs in the order given."""

        def _process(item: Tuple[str, str]) -> FileResult:
            path, text = item
            return self.process_source(text, path)

        return self._assemble(self._map(_process, list(sources)))

    def process_file(self, path: Path) -> FileResult:
        display = str(path)
        try:
            tree = self.parser.parse_file(path)
            contracts = extract_contracts(tree, display)
        except FileError as exc:
            return self._failed(display, exc)
        self.logger.debug("Extracted %d contract(s) from %s", len(contracts), display)
        return FileResult(path=display, contracts=contracts)

    def process_source(self, text: str, path: str) -> FileResult:
        try:
            tree = self.parser.parse(text, path)
            contracts = extract_contracts(tree, path)
        except FileError as exc:
            return self._failed(path, exc)
        return FileResult(path=path, contracts=contracts)

    def _failed(self, path: str, exc: FileError) -> FileResult:
        log_file_error(self.logger, exc)
        return FileResult(path=path, error=exc)

    def _map(self, func: Callable[[_T], FileResult], items: Sequence[_T]) -> List[FileResult]:
        if self.jobs == 1 or len(items) < 2:
            return [func(item) for item in items]
        # Executor.map yields in submission order, so block order never depends on timing.
        with ThreadPoolExecutor(max_workers=self.jobs) as executor:
            return list(executor.map(func, items))

    def _assemble(self, results: Iterable[FileResult]) -> RunReport:
        serializer = DiagramSerializer()
        errors: List[FileError] = []
        files: List[str] = []
        for result in results:
            files.append(result.path)
            if result.error is not None:
                errors.append(result.error)
                continue
            serializer.extend(result.contracts)

        if errors:
            self.logger.warning("%d of %d file(s) failed", len(errors), len(files))
        self.logger.info("Rendered %d class block(s) from %d file(s)", len(serializer), len(files))
        return RunReport(
            document=serializer.render(),
            contracts=list(serializer.contracts),
            errors=errors,
            files=files,
        )


def write_document(document: str, output_file: str | Path) -> Path:
    """Write ``document`` to ``output_file``, creating parent directories."""
    target = Path(output_file).expanduser()
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(document, encoding="utf-8")
    except OSError as exc:
        raise WriteError(f"Could not write {target}: {exc}") from exc
    get_logger("writer").debug("Diagram written to %s", target)
    return target


__all__ = ["DiagramPipeline", "RunReport", "write_document"]
