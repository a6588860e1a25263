"""Check interfaces and the runner that records their outcomes on a scorecard."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Iterable, List, Sequence

from ..models import Check, CheckOutcome, ResourceIdentity, ResourceRecord
from ..normalization import ManifestResource
from ..scorecard import Scorecard

logger = logging.getLogger(__name__)


class CheckExecutionError(RuntimeError):
    """Raised when a check fails while evaluating a resource."""


class ResourceCheck(ABC):
    """Abstract base class describing the check contract."""

    check: Check

    def applies_to(self, resource: ManifestResource) -> bool:
        target = self.check.target_type
        return target in ("*", "") or target == resource.kind

    @abstractmethod
    def evaluate(self, resource: ManifestResource) -> Iterable[CheckOutcome]:
        """Inspect ``resource`` and return zero or more outcomes."""


class FunctionCheck(ResourceCheck):
    """Adapter turning a plain callable into a :class:`ResourceCheck`."""

    def __init__(
        self,
        check: Check,
        func: Callable[[ManifestResource], Iterable[CheckOutcome] | CheckOutcome | None],
    ) -> None:
        self.check = check
        self._func = func

    def __repr__(self) -> str:
        return f"FunctionCheck({self.check.id!r})"

    def evaluate(self, resource: ManifestResource) -> Iterable[CheckOutcome]:
        result = self._func(resource)
        if result is None:
            return []
        if isinstance(result, CheckOutcome):
            return [result]
        return list(result)


class CheckRunner:
    """Run checks against resources and record outcomes on a :class:`Scorecard`."""

    def __init__(
        self,
        checks: Sequence[ResourceCheck],
        *,
        ignored_checks: Iterable[str] | None = None,
        enabled_optional: Iterable[str] | None = None,
        max_workers: int = 1,
    ) -> None:
        self.ignored_checks = {
            check_id.strip() for check_id in ignored_checks or [] if check_id.strip()
        }
        self.enabled_optional = {
            check_id.strip() for check_id in enabled_optional or [] if check_id.strip()
        }
        self.max_workers = max(1, max_workers)
        self.checks = [check for check in checks if self._is_enabled(check.check)]

    # ------------------------------------------------------------------
    def run(self, resources: Sequence[ManifestResource], scorecard: Scorecard) -> Scorecard:
        """Register ``resources`` and record the outcome of every enabled check."""

        pending: List[tuple[ManifestResource, ResourceRecord]] = []
        seen: set[ResourceIdentity] = set()
        for resource in resources:
            record = scorecard.register(resource.identity, resource.metadata)
            if resource.identity in seen:
                logger.debug(
                    "Skipping duplicate %s from %s",
                    resource.identity.key,
                    resource.source_path or "<unknown>",
                )
                continue
            seen.add(resource.identity)
            pending.append((resource, record))

        if self.max_workers == 1 or len(pending) < 2:
            for resource, record in pending:
                self._evaluate(resource, record)
        else:
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                futures = [
                    executor.submit(self._evaluate, resource, record)
                    for resource, record in pending
                ]
                for future in futures:
                    future.result()

        return scorecard

    # ------------------------------------------------------------------
    def _evaluate(self, resource: ManifestResource, record: ResourceRecord) -> None:
        for resource_check in self.checks:
            if not resource_check.applies_to(resource):
                continue

            check = resource_check.check
            try:
                outcomes = list(resource_check.evaluate(resource))
            except Exception as exc:
                raise CheckExecutionError(
                    f"Check '{check.id}' failed on {record.human_friendly_ref()}: {exc}"
                ) from exc

            for outcome in outcomes:
                record.add(outcome, check)

    def _is_enabled(self, check: Check) -> bool:
        if check.id in self.ignored_checks:
            return False
        if check.optional:
            return check.id in self.enabled_optional
        return True


__all__ = ["CheckExecutionError", "CheckRunner", "FunctionCheck", "ResourceCheck"]
