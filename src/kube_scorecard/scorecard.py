"""Registry of graded resources keyed by resource identity."""

from __future__ import annotations

import logging
import threading
from typing import Any, Dict, Iterator, List, Mapping, Optional

from .models import Grade, ResourceIdentity, ResourceRecord

logger = logging.getLogger(__name__)


class Scorecard:
    """Deduplicated, insertion-ordered collection of :class:`ResourceRecord`."""

    def __init__(self) -> None:
        self._records: Dict[ResourceIdentity, ResourceRecord] = {}
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    def register(
        self,
        identity: ResourceIdentity,
        metadata: Optional[Mapping[str, Any]] = None,
    ) -> ResourceRecord:
        """Return the record for ``identity``, creating it on first registration.

        A later registration of the same identity returns the existing record
        and its ``metadata`` (including any ignore annotation) is not applied.
        """

        with self._lock:
            existing = self._records.get(identity)
            if existing is not None:
                logger.debug("Resource %s already registered", identity.key)
                return existing

            record = ResourceRecord(identity, metadata)
            self._records[identity] = record
            return record

    def get(self, identity: ResourceIdentity) -> ResourceRecord | None:
        with self._lock:
            return self._records.get(identity)

    def records(self) -> List[ResourceRecord]:
        with self._lock:
            return list(self._records.values())

    def __iter__(self) -> Iterator[ResourceRecord]:
        return iter(self.records())

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def __contains__(self, identity: object) -> bool:
        with self._lock:
            return identity in self._records

    # ------------------------------------------------------------------
    def any_at_or_below(self, threshold: Grade) -> bool:
        """Return ``True`` when any resource holds an outcome at or below ``threshold``."""

        return any(record.any_at_or_below(threshold) for record in self.records())

    def lowest_grade(self) -> Grade:
        return min((record.grade() for record in self.records()), default=Grade.ALL_OK)

    def counts_by_grade(self) -> dict[Grade, int]:
        counts = {grade: 0 for grade in Grade}
        for record in self.records():
            counts[record.grade()] += 1
        return counts


__all__ = ["Scorecard"]
