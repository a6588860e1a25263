"""Resource identity and the per-resource outcome accumulator."""

from __future__ import annotations

import threading
from dataclasses import dataclass, replace
from typing import Any, FrozenSet, Iterator, List, Mapping, Optional

from .grade import Grade
from .outcome import Check, CheckOutcome

IGNORED_CHECKS_ANNOTATION = "kube-score/ignore"


@dataclass(frozen=True, slots=True)
class ResourceIdentity:
    """Composite key identifying a resource across input documents."""

    kind: str
    api_version: str
    namespace: str = ""
    name: str = ""

    @property
    def key(self) -> str:
        return f"{self.kind}/{self.api_version}/{self.namespace}/{self.name}"

    def human_friendly_ref(self) -> str:
        ref = self.name
        if self.namespace:
            ref += f"/{self.namespace}"
        return f"{ref} {self.api_version}/{self.kind}"


def parse_ignored_checks(metadata: Optional[Mapping[str, Any]]) -> FrozenSet[str]:
    """Return the check IDs listed in the ``kube-score/ignore`` annotation.

    Anything unexpected (no annotations, non-mapping annotations, non-string
    values) yields an empty set.
    """

    if not isinstance(metadata, Mapping):
        return frozenset()

    annotations = metadata.get("annotations")
    if not isinstance(annotations, Mapping):
        return frozenset()

    raw = annotations.get(IGNORED_CHECKS_ANNOTATION)
    if not isinstance(raw, str):
        return frozenset()

    return frozenset(item.strip() for item in raw.split(",") if item.strip())


class ResourceRecord:
    """Collects the outcomes of every check run against one resource."""

    def __init__(
        self,
        identity: ResourceIdentity,
        metadata: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self.identity = identity
        self.metadata: Mapping[str, Any] = dict(metadata or {})
        self.ignored_checks = parse_ignored_checks(metadata)
        self._outcomes: List[CheckOutcome] = []
        self._lock = threading.Lock()

    def __repr__(self) -> str:
        return f"ResourceRecord({self.identity.key!r}, outcomes={len(self._outcomes)})"

    # ------------------------------------------------------------------
    @property
    def kind(self) -> str:
        return self.identity.kind

    @property
    def api_version(self) -> str:
        return self.identity.api_version

    @property
    def namespace(self) -> str:
        return self.identity.namespace

    @property
    def name(self) -> str:
        return self.identity.name

    @property
    def outcomes(self) -> tuple[CheckOutcome, ...]:
        """Snapshot of the recorded outcomes in evaluation order."""

        with self._lock:
            return tuple(self._outcomes)

    def __iter__(self) -> Iterator[CheckOutcome]:
        return iter(self.outcomes)

    def __len__(self) -> int:
        with self._lock:
            return len(self._outcomes)

    # ------------------------------------------------------------------
    def is_ignored(self, check: Check) -> bool:
        return check.id in self.ignored_checks

    def add(self, outcome: CheckOutcome, check: Check) -> None:
        """Record ``outcome`` for ``check`` unless the check is suppressed."""

        if self.is_ignored(check):
            return

        if outcome.check != check:
            outcome = replace(outcome, check=check)
        with self._lock:
            self._outcomes.append(outcome)

    def grade(self) -> Grade:
        """Return the worst grade recorded, or ``ALL_OK`` when nothing was recorded."""

        return min((outcome.grade for outcome in self.outcomes), default=Grade.ALL_OK)

    def any_at_or_below(self, threshold: Grade) -> bool:
        return any(outcome.grade.is_at_or_below(threshold) for outcome in self.outcomes)

    def human_friendly_ref(self) -> str:
        return self.identity.human_friendly_ref()
