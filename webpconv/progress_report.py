"""Console report lines for a conversion batch."""

from pathlib import Path
from typing import Optional, TextIO

from webpconv.data_models import ConversionOutcome, OutcomeStatus


class ProgressReport:
    """Prints one block of report lines per converted file."""

    def __init__(self, total_files: int, stream: Optional[TextIO] = None):
        """
        Initialize the report for a batch.

        Args:
            total_files: Number of files in the batch
            stream: Output stream (default: sys.stdout at print time)
        """
        self.total_files = total_files
        self.stream = stream

    def _print(self, text: str = "") -> None:
        print(text, file=self.stream, flush=True)

    def expansion_failed(self, path: Path, reason: str) -> None:
        self._print(f"[FAILED] Unable to get .webp files from {path}: {reason}")

    def start(self, index: int, input_path: Path) -> None:
        """Announce the file about to be converted (1-indexed)."""
        self._print(f"[{index}/{self.total_files}] Input: {input_path}")

    def finish(self, outcome: ConversionOutcome) -> None:
        """Print how a file ended, followed by a blank separator line."""
        if outcome.status is OutcomeStatus.CONVERTED:
            self._print(f"[OK] Output: {outcome.output_path}")
            if outcome.deleted:
                self._print(f"Deleted: {outcome.input_path}")
            elif outcome.delete_error:
                self._print(f"[FAILED] Delete: {outcome.delete_error}")
        elif outcome.status is OutcomeStatus.SKIPPED:
            self._print(f"[SKIPPED] {outcome.reason}")
        else:
            self._print(f"[FAILED] {outcome.reason}")
        self._print()
