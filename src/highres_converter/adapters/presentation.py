"""Host-neutral confirmation, report and progress adapters."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from highres_converter.application.ports import ConfirmationRequest
from highres_converter.application.results import BatchReport, ConversionRecord

logger = logging.getLogger(__name__)


@dataclass
class FixedAnswerGate:
    """Answer every confirmation request with the same decision."""

    answer: bool
    requests: list[ConfirmationRequest] = field(default_factory=list)

    def confirm(self, request: ConfirmationRequest) -> bool:
        self.requests.append(request)
        return self.answer


@dataclass
class CollectingReportSink:
    """Keep published reports in memory."""

    published: list[tuple[str, list[str]]] = field(default_factory=list)

    def publish(self, title: str, lines: Sequence[str]) -> None:
        self.published.append((title, list(lines)))

    @property
    def last_lines(self) -> list[str]:
        return self.published[-1][1] if self.published else []


class LoggingProgressObserver:
    """Report batch progress through the logging system.

    The counter counts attempts, failed ones included.
    """

    def started(self, total: int) -> None:
        logger.info("Converting structures to high resolution... 0/%d", total)

    def advanced(self, record: ConversionRecord, completed: int, total: int) -> None:
        logger.info("%d/%d %s", completed, total, record.line)

    def finished(self, report: BatchReport) -> None:
        logger.info("%s", report.summary_line)
