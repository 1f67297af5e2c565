from __future__ import annotations
from abc import ABC, abstractmethod

from ..types import ColumnSpec, GeneratedColumn


class ColumnGenerator(ABC):
    """Abstract column generator interface.

    Implementations turn a ``ColumnSpec`` into a ``GeneratedColumn``. Output
    must depend only on the spec and the generator's seed state, so that a
    fixed seed always reproduces the same corpus.
    """

    @abstractmethod
    def generate(self, spec: ColumnSpec) -> GeneratedColumn:
        """Produce one column for ``spec``.

        :param spec: Column recipe.
        :return: Generated column owning its buffers.
        :raises ConfigurationError: If ``spec`` is invalid; raised before any
            value is drawn.
        """
