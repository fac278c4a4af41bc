# =============================================================================
# Capability Interfaces
# =============================================================================
# Abstract base classes describing what the rest of the import pipeline may
# do with a feature database: initialize it from a mapping and insert batches.
# =============================================================================

from abc import ABC, abstractmethod
from typing import Any, Sequence

from featuredb.models import Mapping

__all__ = ["Initializable", "BatchInsertable", "FeatureDatabase"]


class Initializable(ABC):
    """A database whose tables can be (re)built from an abstract mapping."""

    @abstractmethod
    def init(self, mapping: Mapping) -> None:
        """
        Create the schema and rebuild every table in ``mapping``.

        Args:
            mapping: Abstract mapping of feature tables
        """
        pass


class BatchInsertable(ABC):
    """A database accepting atomic batches of rows per table."""

    @abstractmethod
    def insert_batch(self, table: str, rows: Sequence[Sequence[Any]]) -> int:
        """
        Insert all ``rows`` into ``table`` atomically.

        Args:
            table: Registered table name
            rows: Row values in column order

        Returns:
            Number of rows inserted
        """
        pass


class FeatureDatabase(Initializable, BatchInsertable):
    """
    Full capability contract of a feature database backend.

    Marker class combining Initializable and BatchInsertable.
    """
    pass
