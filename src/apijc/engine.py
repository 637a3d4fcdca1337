# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Comparison engine: expand each target, fetch both domains, diff the bodies."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass

from .compare import compare_bodies
from .errors import (
    JSON_MISMATCH,
    ApijcError,
    DomainsIdenticalError,
    NoTargetsDefinedError,
    PatternError,
    PrefixWithoutSuffixError,
    RequestError,
    SuffixWithoutPrefixError,
)
from .executor import RequestExecutor
from .models import RunResult, Side, Target, TargetSet
from .pattern import PatternOptions, expand_path
from .ratelimit import RateLimiter

logger = logging.getLogger(__name__)

Comparator = Callable[[bytes, bytes], str]
Expander = Callable[[str, PatternOptions], list[str]]


@dataclass(frozen=True)
class TargetOutcome:
    checked_paths: int
    total_paths: int
    failed: bool


def pattern_options_for(target: Target) -> PatternOptions:
    """Use the target's own prefix/suffix pair, or ``{``/``}`` when neither is set."""
    if target.pattern_prefix is not None and target.pattern_suffix is None:
        raise PrefixWithoutSuffixError(target.relative_path)
    if target.pattern_prefix is None and target.pattern_suffix is not None:
        raise SuffixWithoutPrefixError(target.relative_path)
    if target.pattern_prefix is not None and target.pattern_suffix is not None:
        return PatternOptions(prefix=target.pattern_prefix, suffix=target.pattern_suffix)
    return PatternOptions()


class ComparisonEngine:
    """
    Drives one comparison run between a base and a new deployment.

    Targets are processed one at a time: independent targets first, then each
    sequential group in listed order. For every expanded path a rate-limiter
    token is taken, the base domain is fetched, then the new domain, then the
    bodies are compared. A failed request is recorded as a finding and skips
    the rest of that target's paths; configuration problems and cancellation
    abort the run with the partial result attached to the raised error.
    """

    def __init__(
        self,
        base_domain: str,
        new_domain: str,
        *,
        executor: RequestExecutor,
        limiter: RateLimiter,
        comparator: Comparator = compare_bodies,
        expander: Expander = expand_path,
    ):
        self.base_domain = base_domain
        self.new_domain = new_domain
        self.executor = executor
        self.limiter = limiter
        self.comparator = comparator
        self.expander = expander

    def validate(self, target_set: TargetSet) -> None:
        if target_set.is_empty:
            raise NoTargetsDefinedError()
        if self.base_domain == self.new_domain:
            raise DomainsIdenticalError(self.base_domain)

    def run(self, target_set: TargetSet, *, cancel_event: threading.Event | None = None) -> RunResult:
        """Run every target and return the collected findings.

        Findings never make the run fail; only run-fatal errors are raised.
        """
        self.validate(target_set)
        result = RunResult()

        try:
            for target in target_set.targets:
                self._process_target(target, result, cancel_event)

            for name, group in target_set.sequential_targets.items():
                logger.info("Checking sequential group: %s", name)
                for target in group:
                    self._process_target(target, result, cancel_event)
        except ApijcError as exc:
            logger.debug("Run aborted: %s", exc)
            exc.result = result
            raise

        logger.info("Done. Checked %d of %d paths", result.checked_paths, result.total_paths)
        return result

    def _process_target(
        self,
        target: Target,
        result: RunResult,
        cancel_event: threading.Event | None,
    ) -> TargetOutcome:
        logger.info("Checking %s %s", target.http_method, target.relative_path)
        outcome = self.check_target(target, result, cancel_event=cancel_event)
        logger.info(
            "%s: %s %s (checked %d of %d paths)",
            "ERROR" if outcome.failed else "Success",
            target.http_method,
            target.relative_path,
            outcome.checked_paths,
            outcome.total_paths,
        )
        return outcome

    def check_target(
        self,
        target: Target,
        result: RunResult,
        *,
        cancel_event: threading.Event | None = None,
    ) -> TargetOutcome:
        """Probe every expanded path of ``target``, appending findings to ``result``."""
        options = pattern_options_for(target)
        try:
            paths = self.expander(target.relative_path, options)
        except PatternError as exc:
            result.add_finding(target.relative_path, str(exc))
            raise

        result.total_paths += len(paths)
        findings_before = len(result.findings)
        checked = 0

        for path in paths:
            self.limiter.acquire(cancel_event)

            base_url = self.base_domain + path
            new_url = self.new_domain + path
            try:
                base_body = self.executor.execute(target, base_url, Side.BASE, cancel_event=cancel_event)
                new_body = self.executor.execute(target, new_url, Side.NEW, cancel_event=cancel_event)
            except RequestError as exc:
                logger.warning("%s: %s", exc.url, exc)
                result.add_finding(exc.url, str(exc))
                # Fail fast for this target only; the run moves on to the next one.
                break

            diff = self.comparator(base_body, new_body)
            if diff:
                result.add_finding(path, JSON_MISMATCH, diff)
            checked += 1
            result.checked_paths += 1

        return TargetOutcome(
            checked_paths=checked,
            total_paths=len(paths),
            failed=len(result.findings) != findings_before,
        )


__all__ = ["ComparisonEngine", "TargetOutcome", "pattern_options_for"]
