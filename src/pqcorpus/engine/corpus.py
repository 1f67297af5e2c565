from __future__ import annotations
import logging
from pathlib import Path
from typing import Iterable, List, Optional

import pyarrow as pa

from ..errors import BatchValidationError, CorpusError, CorpusIOError, DirectoryError
from ..outputs.base import BaseWriterDriver
from ..types import CorpusEntry, Scenario, WriterConfig
from ..utils.naming import DEFAULT_PREFIX, SampleNamer
from .registry import get_writer_driver

logger = logging.getLogger(__name__)


class CorpusWriter:
    def __init__(
            self,
            config: WriterConfig,
            prefix: str = DEFAULT_PREFIX,
            driver: Optional[BaseWriterDriver] = None,
    ) -> None:
        """Set up a corpus writer.

        :param config: Writer settings applied to every file.
        :param prefix: File name prefix; files are ``<prefix><id>`` with ids from 1.
        :param driver: Writer driver, the Parquet driver by default.
        """
        self.config = config
        self.prefix = prefix
        self.driver = driver or get_writer_driver("parquet")

    @staticmethod
    def _ensure_dir(output_dir: Path) -> None:
        try:
            output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise DirectoryError(str(output_dir), exc) from exc

    @staticmethod
    def _close(sink: pa.NativeFile, path: Path) -> None:
        try:
            sink.close()
        except OSError as exc:
            raise CorpusIOError("close", str(path), exc) from exc

    def _write_entry(self, entry: CorpusEntry) -> None:
        try:
            sink = pa.OSFile(str(entry.path), "wb")
        except OSError as exc:
            raise CorpusIOError("open", str(entry.path), exc) from exc
        try:
            self.driver.write(entry.batch, self.config, sink, label=str(entry.path))
        except CorpusError:
            # partial output is left in place for inspection
            logger.warning("write failed, partial file left at %s", entry.path)
            raise
        finally:
            self._close(sink, entry.path)

    def run(self, output_dir: str | Path, scenarios: Iterable[Scenario]) -> List[Path]:
        """Generate and write one file per scenario, in order.

        Fails fast: the first error aborts the run and files already written
        stay on disk.

        :param output_dir: Directory for the corpus; created if missing.
        :param scenarios: Scenarios in output order.
        :return: Paths written, in order.
        :raises DirectoryError: If ``output_dir`` cannot be created.
        :raises BatchValidationError: With ``scenario_index`` set (0-based).
        """
        out = Path(output_dir)
        self._ensure_dir(out)
        namer = SampleNamer(self.prefix)
        written: List[Path] = []
        for index, scenario in enumerate(scenarios):
            try:
                batch = scenario.build()
                sample_id, path = namer.next_path(out)
                entry = CorpusEntry(sample_id=sample_id, path=path, batch=batch)
                logger.info("%s", entry.path)
                self._write_entry(entry)
            except BatchValidationError as exc:
                exc.scenario_index = index
                raise
            written.append(path)
        return written
