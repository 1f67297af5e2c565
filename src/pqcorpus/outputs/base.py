from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any, Optional

from ..types import LogicalBatch, WriterConfig


class BaseWriterDriver(ABC):
    """Abstract base for drivers that serialize a batch into an open sink.

    Drivers never open or close the sink; lifecycle belongs to the caller.
    """

    @abstractmethod
    def write(self, batch: LogicalBatch, config: WriterConfig, sink: Any, *, label: Optional[str] = None) -> None:
        """Serialize ``batch`` into ``sink``.

        :param batch: Validated batch; re-validated before encoding.
        :param config: Row group size and per-column encoding overrides.
        :param sink: Writable file object or pyarrow ``NativeFile``.
        :param label: Name used for the sink in error messages.
        """
        ...
