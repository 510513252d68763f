"""Reader for the consuming side of the diagnostics stream.

A supervising process reads the producer's stderr line by line and
aggregates what it finds. Each line is parsed independently.
"""

import logging
from collections import Counter
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from diagwire.core.encoding.ndjson import decode_line
from diagwire.core.models import EXCEPTION_KEY, LogRecord

logger = logging.getLogger(__name__)


def iter_records(lines: Iterable[str], strict: bool = False) -> Iterator[LogRecord]:
    """Decode protocol lines, one record per non-blank line.

    Args:
        lines: Lines of producer output, e.g. an open text stream.
        strict: If True, a malformed line raises. Otherwise it is skipped
            and logged at WARNING.

    Yields:
        LogRecord for each well-formed line.

    Raises:
        ValueError: On a malformed line when ``strict`` is True.
    """
    for lineno, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        try:
            record = decode_line(line)
        except ValueError as exc:
            if strict:
                raise
            logger.warning("Skipping malformed diagnostics line %d: %s", lineno, exc)
            continue
        yield record


@dataclass
class DiagnosticsReport:
    """Aggregate of the records read from one diagnostics stream.

    Attributes:
        infos: logInfo records, in stream order.
        errors: logError records, in stream order.
        exception_counts: Number of errors per exception type name.
        measure_totals: Sum of each measure across all records.
    """

    infos: list[LogRecord] = field(default_factory=list)
    errors: list[LogRecord] = field(default_factory=list)
    exception_counts: Counter[str] = field(default_factory=Counter)
    measure_totals: dict[str, float] = field(default_factory=dict)

    def add(self, record: LogRecord) -> None:
        """Fold one record into the report."""
        if record.is_error:
            self.errors.append(record)
            exception = record.parameters.get(EXCEPTION_KEY)
            if exception is not None:
                self.exception_counts[exception] += 1
        else:
            self.infos.append(record)

        for key, value in (record.measures or {}).items():
            self.measure_totals[key] = self.measure_totals.get(key, 0.0) + value

    @property
    def total(self) -> int:
        """Number of records folded in."""
        return len(self.infos) + len(self.errors)


def collect(lines: Iterable[str], strict: bool = False) -> DiagnosticsReport:
    """Read a whole diagnostics stream into a report.

    Args:
        lines: Lines of producer output.
        strict: Passed to iter_records.

    Returns:
        DiagnosticsReport over every well-formed line.
    """
    report = DiagnosticsReport()
    for record in iter_records(lines, strict=strict):
        report.add(record)
    return report
