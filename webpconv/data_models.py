"""Data models and dataclasses for the WebP converter."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional, Tuple


class OutputFormat(Enum):
    """Target image formats, keyed by their command line name."""
    JPEG = "jpeg"
    PNG = "png"

    @property
    def extension(self) -> str:
        """File extension written for this format."""
        return f".{self.value}"

    @property
    def pil_format(self) -> str:
        """Format name understood by Pillow's Image.save."""
        return self.name


@dataclass(frozen=True)
class Configuration:
    """Validated command line options for one invocation."""
    paths: Tuple[Path, ...]
    recursive: bool = False
    output_format: OutputFormat = OutputFormat.JPEG
    overwrite: bool = False
    delete_after_convert: bool = False
    verbose: bool = False


@dataclass(frozen=True)
class FileTask:
    """One discovered input file and where its conversion is written."""
    input_path: Path
    output_path: Path


@dataclass(frozen=True)
class DecodedImage:
    """Raw decoded picture, row-major RGB or RGBA bytes."""
    width: int
    height: int
    has_alpha: bool
    pixels: bytes

    @property
    def mode(self) -> str:
        return "RGBA" if self.has_alpha else "RGB"


class OutcomeStatus(Enum):
    CONVERTED = "converted"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class ConversionOutcome:
    """Terminal result of converting a single file."""
    input_path: Path
    status: OutcomeStatus
    output_path: Optional[Path] = None
    reason: Optional[str] = None
    deleted: bool = False
    delete_error: Optional[str] = None
    source_bytes: int = 0
    output_bytes: int = 0

    @property
    def succeeded(self) -> bool:
        return self.status is OutcomeStatus.CONVERTED


@dataclass
class StatsSummary:
    """Summary statistics for a conversion batch."""
    files_found: int
    converted: int
    skipped: int
    failed: int
    delete_failures: int
    expansion_failures: int
    total_source_mb: float
    total_output_mb: float
