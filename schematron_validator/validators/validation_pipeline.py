"""
validation_pipeline.py

Runs every validation unit (synthetic schema) against the instance document
and yields one PatternOutcome per unit, in unit order.

Execution:
1. Sequential, in-process - the default (jobs=1, no timeout)
2. Worker processes - when jobs > 1 or a per-pattern timeout is set.
   Each unit runs in its own process, at most `jobs` at a time. A unit
   still running when its timeout (counted from its start) expires is
   terminated and fails; the units after it are unaffected.

A synthetic schema that lxml rejects fails only its own unit. Engine faults
during evaluation propagate.
"""

import multiprocessing
import time
from collections import deque
from multiprocessing.connection import wait
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Sequence

from ..core.errors import (
    SchemaConstructionError,
    SchematronValidatorError,
    ValidationEngineError,
)
from ..core.schema_builder import ValidationUnit
from ..core.settings import DEFAULT_JOBS
from .schematron_driver import RuleResult, validate_schema_text


class PatternOutcome:
    """Holds validation results for a single validation unit."""

    def __init__(
        self,
        name: str,
        results: Optional[List[RuleResult]] = None,
        error: Optional[str] = None,
        pattern_names: Sequence[str] = (),
    ):
        self.name = name
        self.results = list(results or [])
        self.error = error
        self.pattern_names = tuple(pattern_names) or (name,)

    def is_valid(self) -> bool:
        """Returns True if the unit compiled and every rule result is valid."""
        return self.error is None and all(r.valid for r in self.results)

    def failures(self) -> List[RuleResult]:
        return [r for r in self.results if not r.valid]

    def __repr__(self):
        status = "valid" if self.is_valid() else "invalid"
        return f"PatternOutcome({self.name!r}, {status}, {len(self.results)} results)"


def validate_unit(
    unit: ValidationUnit, instance_content: bytes, reports_as_errors: bool = False
) -> PatternOutcome:
    """
    Validate the instance against one unit.

    Module-level so it can run in a worker process.
    """
    try:
        results = validate_schema_text(
            unit.schema_text, instance_content, reports_as_errors
        )
    except SchemaConstructionError as e:
        return PatternOutcome(unit.name, error=str(e), pattern_names=unit.pattern_names)
    return PatternOutcome(unit.name, results, pattern_names=unit.pattern_names)


def _run_unit(conn, runner, unit, instance_content, reports_as_errors):
    """Worker process body: send the unit's outcome, or its engine error, back."""
    try:
        conn.send(runner(unit, instance_content, reports_as_errors))
    except SchematronValidatorError as e:
        conn.send(e)
    finally:
        conn.close()


class _WorkerRun:
    """One validation unit running in its own worker process."""

    def __init__(
        self,
        index: int,
        unit: ValidationUnit,
        runner: Callable[..., PatternOutcome],
        instance_content: bytes,
        reports_as_errors: bool,
        timeout: Optional[float],
    ):
        self.index = index
        self.unit = unit
        self.conn, sender = multiprocessing.Pipe(duplex=False)
        self.process = multiprocessing.Process(
            target=_run_unit,
            args=(sender, runner, unit, instance_content, reports_as_errors),
            daemon=True,
        )
        self.process.start()
        sender.close()
        # Deadline counts from the moment this unit starts
        self.deadline = None if timeout is None else time.monotonic() + timeout

    def expired(self, now: float) -> bool:
        return self.deadline is not None and now >= self.deadline

    def receive(self) -> PatternOutcome:
        """
        Read the worker's outcome.

        Raises:
            ValidationEngineError: If the worker failed or died without a result
        """
        try:
            result = self.conn.recv()
        except EOFError:
            self.process.join()
            raise ValidationEngineError(
                f"Worker for {self.unit.name} exited with code {self.process.exitcode}"
            ) from None
        if isinstance(result, BaseException):
            raise result
        return result

    def stop(self) -> None:
        if self.process.is_alive():
            self.process.terminate()
        self.process.join()
        self.conn.close()


class ValidationPipeline:
    """Evaluates validation units, in-process or in worker processes."""

    def __init__(
        self,
        jobs: int = DEFAULT_JOBS,
        timeout: Optional[float] = None,
        reports_as_errors: bool = False,
        runner: Callable[..., PatternOutcome] = validate_unit,
    ):
        """
        Initialize validation pipeline.

        Args:
            jobs: Number of worker processes (1 runs in-process)
            timeout: Seconds allowed per unit, None for no limit
            reports_as_errors: Treat svrl:successful-report as a failure
            runner: Module-level function validating one unit
        """
        if jobs < 1:
            raise ValueError("jobs must be at least 1")
        if timeout is not None and timeout <= 0:
            raise ValueError("timeout must be positive")
        self.jobs = jobs
        self.timeout = timeout
        self.reports_as_errors = reports_as_errors
        self.runner = runner

    @property
    def uses_workers(self) -> bool:
        return self.jobs > 1 or self.timeout is not None

    def iter_outcomes(
        self, units: Iterable[ValidationUnit], instance_content: bytes
    ) -> Iterator[PatternOutcome]:
        """
        Validate the instance against every unit.

        Args:
            units: Validation units in report order
            instance_content: Raw instance document

        Yields:
            PatternOutcome per unit, as soon as it and every earlier unit are done
        """
        units = list(units)
        if not units:
            return
        if self.uses_workers:
            yield from self._iter_workers(units, instance_content)
        else:
            for unit in units:
                yield self.runner(unit, instance_content, self.reports_as_errors)

    def _iter_workers(
        self, units: List[ValidationUnit], instance_content: bytes
    ) -> Iterator[PatternOutcome]:
        waiting = deque(enumerate(units))
        running: List[_WorkerRun] = []
        finished: Dict[int, PatternOutcome] = {}
        next_index = 0
        try:
            while next_index < len(units):
                while waiting and len(running) < self.jobs:
                    index, unit = waiting.popleft()
                    running.append(_WorkerRun(
                        index, unit, self.runner, instance_content,
                        self.reports_as_errors, self.timeout,
                    ))

                ready = wait([run.conn for run in running], self._wait_time(running))
                now = time.monotonic()
                for run in list(running):
                    if run.conn in ready:
                        finished[run.index] = run.receive()
                    elif run.expired(now):
                        finished[run.index] = self._timed_out(run.unit)
                    else:
                        continue
                    run.stop()
                    running.remove(run)

                while next_index in finished:
                    yield finished.pop(next_index)
                    next_index += 1
        finally:
            for run in running:
                run.stop()

    def _wait_time(self, running: List[_WorkerRun]) -> Optional[float]:
        deadlines = [run.deadline for run in running if run.deadline is not None]
        if not deadlines:
            return None
        return max(0.0, min(deadlines) - time.monotonic())

    def _timed_out(self, unit: ValidationUnit) -> PatternOutcome:
        return PatternOutcome(
            unit.name,
            error=f"Schematron validation timed out after {self.timeout:g}s",
            pattern_names=unit.pattern_names,
        )
