"""File system operations for the WebP conversion workflow."""

import logging
import os
from pathlib import Path
from typing import List

from webpconv.data_models import FileTask, OutputFormat


class PathExpansionError(Exception):
    """Exception raised when a supplied path cannot be scanned."""
    pass


class FileProcessor:
    """Manages file system operations for the WebP conversion workflow."""

    PATTERN = "*.webp"

    def __init__(self, output_format: OutputFormat, recursive: bool = False):
        """
        Initialize FileProcessor with the scan and output settings.

        Args:
            output_format: Format whose extension replaces the input extension
            recursive: Whether directory scans descend into subdirectories
        """
        self.output_format = output_format
        self.recursive = recursive

    def find_webp_files(self, path: Path) -> List[Path]:
        """
        Expand a supplied path into the WebP files it contains.

        A directory yields its *.webp files (recursively when enabled), a
        file path yields itself.

        Args:
            path: Directory or file path supplied by the user

        Returns:
            List of file paths in sorted order

        Raises:
            PathExpansionError: If the path is missing or cannot be scanned
        """
        if path.is_file():
            return [path]

        if not path.is_dir():
            raise PathExpansionError(f"Path does not exist: {path}")

        if not os.access(path, os.R_OK | os.X_OK):
            raise PathExpansionError(f"Permission denied: {path}")

        try:
            if self.recursive:
                candidates = path.rglob(self.PATTERN)
            else:
                candidates = path.glob(self.PATTERN)
            files = sorted(item for item in candidates if item.is_file())
        except OSError as e:
            raise PathExpansionError(f"Error scanning {path}: {e}") from e

        logging.debug(f"Found {len(files)} .webp files in {path}")
        return files

    def get_output_path(self, input_path: Path) -> Path:
        """Replace the input extension with the output format's extension."""
        return input_path.with_suffix(self.output_format.extension)

    def create_task(self, input_path: Path) -> FileTask:
        return FileTask(input_path=input_path, output_path=self.get_output_path(input_path))

    def delete_source_file(self, path: Path) -> None:
        """
        Remove a source file after it has been converted.

        Raises:
            OSError: If the file cannot be removed
        """
        path.unlink()
        logging.debug(f"Deleted source file: {path}")
