"""Statistics tracking for conversion batches."""

import logging
import time
from typing import Optional

from webpconv.data_models import ConversionOutcome, OutcomeStatus, StatsSummary


class StatsTracker:
    """Tracks conversion statistics and generates summary reports."""

    def __init__(self):
        """Initialize StatsTracker with zero counters."""
        self._files_found = 0
        self._converted = 0
        self._skipped = 0
        self._failed = 0
        self._delete_failures = 0
        self._expansion_failures = 0
        self._total_source_bytes = 0
        self._total_output_bytes = 0
        self._start_time: Optional[float] = None
        logging.debug("StatsTracker initialized")

    def start_timer(self):
        """Start the overall timer."""
        self._start_time = time.time()

    def add_files_found(self, count: int) -> None:
        self._files_found += count

    def record_expansion_failure(self) -> None:
        """Record a supplied path that could not be scanned."""
        self._expansion_failures += 1
        logging.debug(f"Recorded path expansion failure (total: {self._expansion_failures})")

    def record_outcome(self, outcome: ConversionOutcome) -> None:
        """
        Count a file outcome and accumulate its sizes.

        Args:
            outcome: Terminal outcome of one file
        """
        if outcome.status is OutcomeStatus.CONVERTED:
            self._converted += 1
            self._total_source_bytes += outcome.source_bytes
            self._total_output_bytes += outcome.output_bytes
            if outcome.delete_error:
                self._delete_failures += 1
        elif outcome.status is OutcomeStatus.SKIPPED:
            self._skipped += 1
        else:
            self._failed += 1
        logging.debug(f"Recorded {outcome.status.value} outcome for {outcome.input_path}")

    @property
    def has_failures(self) -> bool:
        return self._failed > 0

    def get_summary(self) -> StatsSummary:
        """
        Return StatsSummary with MB conversions.

        Returns:
            StatsSummary dataclass with sizes in megabytes
        """
        bytes_per_mb = 1024 * 1024
        return StatsSummary(
            files_found=self._files_found,
            converted=self._converted,
            skipped=self._skipped,
            failed=self._failed,
            delete_failures=self._delete_failures,
            expansion_failures=self._expansion_failures,
            total_source_mb=self._total_source_bytes / bytes_per_mb,
            total_output_mb=self._total_output_bytes / bytes_per_mb,
        )

    def print_summary(self) -> None:
        """Display formatted statistics report."""
        summary = self.get_summary()

        total_runtime = 0.0
        if self._start_time is not None:
            total_runtime = time.time() - self._start_time

        print("=" * 60)
        print("CONVERSION SUMMARY")
        print("=" * 60)
        print(f"Total Runtime:            {self._format_time(total_runtime)}")
        print(f"Files Found:              {summary.files_found}")
        print(f"Converted:                {summary.converted}")
        print(f"Skipped:                  {summary.skipped}")
        print(f"Failed:                   {summary.failed}")
        if summary.delete_failures > 0:
            print(f"Delete Failures:          {summary.delete_failures}")
        if summary.expansion_failures > 0:
            print(f"Unreadable Paths:         {summary.expansion_failures}")
        print(f"Converted Source Size:    {summary.total_source_mb:.2f} MB")
        print(f"Output Size:              {summary.total_output_mb:.2f} MB")
        print("=" * 60)

        logging.info(
            f"Statistics: {summary.converted} converted, "
            f"{summary.skipped} skipped, "
            f"{summary.failed} failed, "
            f"runtime: {self._format_time(total_runtime)}"
        )

    def _format_time(self, seconds: float) -> str:
        """
        Format seconds into human-readable time string.

        Args:
            seconds: Time in seconds

        Returns:
            Formatted time string (e.g., "1h 23m 45s" or "5m 30s" or "0.42s")
        """
        if seconds < 10:
            return f"{seconds:.2f}s"
        elif seconds < 60:
            return f"{seconds:.0f}s"
        elif seconds < 3600:
            minutes = int(seconds // 60)
            secs = int(seconds % 60)
            return f"{minutes}m {secs}s"
        else:
            hours = int(seconds // 3600)
            minutes = int((seconds % 3600) // 60)
            secs = int(seconds % 60)
            return f"{hours}h {minutes}m {secs}s"
