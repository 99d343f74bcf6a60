"""Batch pipeline: path expansion followed by sequential per-file conversion."""

import logging
from pathlib import Path
from typing import List, Optional, TextIO

from webpconv.data_models import Configuration, ConversionOutcome, OutcomeStatus
from webpconv.file_processor import FileProcessor, PathExpansionError
from webpconv.image_converter import ImageConverter
from webpconv.progress_report import ProgressReport
from webpconv.stats_tracker import StatsTracker


class ConversionPipeline:
    """Expands the configured paths and converts every file found, one at a time."""

    def __init__(
        self,
        config: Configuration,
        converter: Optional[ImageConverter] = None,
        stats: Optional[StatsTracker] = None,
        stream: Optional[TextIO] = None,
    ):
        """
        Initialize the pipeline.

        Args:
            config: Parsed command line configuration
            converter: Per-file converter (default: built from config)
            stats: Statistics tracker (default: a fresh StatsTracker)
            stream: Report output stream (default: stdout)
        """
        self.config = config
        self.file_processor = FileProcessor(config.output_format, config.recursive)
        self.converter = converter or ImageConverter(config, self.file_processor)
        self.stats = stats or StatsTracker()
        self.stream = stream

    def expand_paths(self) -> List[Path]:
        """
        Collect input files from every configured path, in the order given.

        A path that cannot be scanned is reported and contributes no files.
        """
        report = ProgressReport(0, self.stream)
        files: List[Path] = []
        for path in self.config.paths:
            try:
                found = self.file_processor.find_webp_files(path)
            except PathExpansionError as e:
                logging.error(f"Unable to get .webp files from {path}: {e}")
                report.expansion_failed(path, str(e))
                self.stats.record_expansion_failure()
                continue
            files.extend(found)

        self.stats.add_files_found(len(files))
        logging.info(f"Found {len(files)} .webp files in {len(self.config.paths)} paths")
        return files

    def run(self) -> List[ConversionOutcome]:
        """
        Convert every discovered file and report each outcome.

        Returns:
            One outcome per discovered file, in processing order
        """
        self.stats.start_timer()
        files = self.expand_paths()
        report = ProgressReport(len(files), self.stream)

        outcomes: List[ConversionOutcome] = []
        for idx, input_path in enumerate(files, 1):
            report.start(idx, input_path)
            task = self.file_processor.create_task(input_path)

            try:
                outcome = self.converter.convert(task)
            except Exception as e:
                logging.error(f"Unexpected error processing {input_path}: {e}", exc_info=True)
                outcome = ConversionOutcome(
                    input_path=input_path,
                    status=OutcomeStatus.FAILED,
                    reason=f"Unexpected error: {e}",
                )

            report.finish(outcome)
            self.stats.record_outcome(outcome)
            outcomes.append(outcome)

        return outcomes


def run(config: Configuration) -> List[ConversionOutcome]:
    """Run a conversion batch with default collaborators."""
    return ConversionPipeline(config).run()
