"""Conversion of a single WebP file to JPEG or PNG."""

import logging
from pathlib import Path
from typing import Optional

from webpconv.data_models import Configuration, ConversionOutcome, FileTask, OutcomeStatus
from webpconv.file_processor import FileProcessor
from webpconv.webp_codec import (
    MAX_QUALITY,
    DecodeError,
    EncodeError,
    ImageEncoder,
    WebPDecoder,
)


class ImageConverter:
    """Runs the read, decode, encode, write and delete steps for one file."""

    def __init__(
        self,
        config: Configuration,
        file_processor: Optional[FileProcessor] = None,
        decoder: Optional[WebPDecoder] = None,
        encoder: Optional[ImageEncoder] = None,
    ):
        """
        Initialize ImageConverter.

        Args:
            config: Parsed command line configuration
            file_processor: File system helper (default: built from config)
            decoder: WebP decoding capability (default: WebPDecoder)
            encoder: JPEG/PNG encoding capability (default: ImageEncoder)
        """
        self.config = config
        self.file_processor = file_processor or FileProcessor(config.output_format, config.recursive)
        self.decoder = decoder or WebPDecoder()
        self.encoder = encoder or ImageEncoder()

    def convert(self, task: FileTask) -> ConversionOutcome:
        """
        Convert one file and describe how it ended.

        Every failure is returned as an outcome rather than raised, so the
        caller can continue with the next file.

        Args:
            task: Input file and its derived output path

        Returns:
            ConversionOutcome with status CONVERTED, SKIPPED or FAILED
        """
        input_path = task.input_path
        output_path = task.output_path

        try:
            data = input_path.read_bytes()
        except OSError as e:
            return self._failed(task, f"Unable to read file: {e}")

        source_bytes = len(data)

        try:
            image = self.decoder.decode(data)
        except DecodeError as e:
            return self._failed(task, str(e), source_bytes)

        if self._is_same_file(input_path, output_path):
            return self._failed(task, "Output path is the same as the input path", source_bytes)

        if output_path.exists() and not self.config.overwrite:
            reason = f"Output file {output_path} already exists"
            logging.info(f"Skipping {input_path}: {reason}")
            return ConversionOutcome(
                input_path=input_path,
                status=OutcomeStatus.SKIPPED,
                output_path=output_path,
                reason=reason,
                source_bytes=source_bytes,
            )

        try:
            encoded = self.encoder.encode(image, self.config.output_format, MAX_QUALITY)
        except EncodeError as e:
            return self._failed(task, str(e), source_bytes)

        try:
            output_path.write_bytes(encoded)
        except OSError as e:
            return self._failed(task, f"Write failed: {e}", source_bytes)

        logging.info(f"Wrote {output_path} ({image.width}x{image.height})")

        deleted = False
        delete_error = None
        if self.config.delete_after_convert:
            try:
                self.file_processor.delete_source_file(input_path)
                deleted = True
            except OSError as e:
                delete_error = str(e)
                logging.error(f"Error deleting {input_path}: {e}")

        return ConversionOutcome(
            input_path=input_path,
            status=OutcomeStatus.CONVERTED,
            output_path=output_path,
            deleted=deleted,
            delete_error=delete_error,
            source_bytes=source_bytes,
            output_bytes=len(encoded),
        )

    def _is_same_file(self, input_path: Path, output_path: Path) -> bool:
        if input_path == output_path:
            return True
        try:
            return output_path.exists() and output_path.samefile(input_path)
        except OSError:
            return False

    def _failed(self, task: FileTask, reason: str, source_bytes: int = 0) -> ConversionOutcome:
        logging.error(f"Conversion failed for {task.input_path}: {reason}")
        return ConversionOutcome(
            input_path=task.input_path,
            status=OutcomeStatus.FAILED,
            reason=reason,
            source_bytes=source_bytes,
        )
