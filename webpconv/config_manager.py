"""Command line parsing for the WebP converter."""

import argparse
import logging
import os
from pathlib import Path
from typing import Sequence

from webpconv.data_models import Configuration, OutputFormat


VERSION = "0.3.0"
HELP_TOKENS = ("-h", "--help")


class ParseError(Exception):
    """Exception raised for malformed or missing command line arguments."""
    pass


class HelpRequested(Exception):
    """Raised when the usage text was asked for instead of a conversion run."""
    pass


class _RaisingArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises ParseError instead of exiting the process."""

    def error(self, message):
        raise ParseError(message)


def _input_path(token: str) -> Path:
    """Accept an existing, readable directory or file."""
    path = Path(token)
    if not (path.is_dir() or path.is_file()) or not os.access(path, os.R_OK):
        raise argparse.ArgumentTypeError(f"Invalid path: {token}")
    return path


def _output_format(token: str) -> OutputFormat:
    try:
        return OutputFormat(token.lower())
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"Invalid value for output format: {token} (choose from jpeg, png)"
        )


class ConfigManager:
    """Builds an immutable Configuration from command line tokens."""

    DESCRIPTION = (
        f"WebP Converter v{VERSION}\n"
        "Converts WebP files to either Jpeg or Png."
    )
    EPILOG = (
        "You can add as many paths as you want, either folder or file path.\n"
        "The converted files will be created in the same folder as the original."
    )

    def __init__(self, prog: str = "webpconv"):
        """
        Initialize ConfigManager and its argument parser.

        Args:
            prog: Program name shown in the usage text (default: "webpconv")
        """
        self.parser = self._build_parser(prog)

    def _build_parser(self, prog: str) -> argparse.ArgumentParser:
        parser = _RaisingArgumentParser(
            prog=prog,
            usage="%(prog)s <path> [<path> ...] [options]",
            description=self.DESCRIPTION,
            epilog=self.EPILOG,
            formatter_class=argparse.RawDescriptionHelpFormatter,
            add_help=False,
            allow_abbrev=False,
        )
        parser.add_argument(
            "paths",
            nargs="*",
            type=_input_path,
            metavar="path",
            help="Folder to read .webp files from, or a single .webp file",
        )
        parser.add_argument(
            "-d", "--delete",
            action="store_true",
            dest="delete_after_convert",
            help="Delete the .webp file if it was successfully converted",
        )
        parser.add_argument(
            "-f", "--format",
            type=_output_format,
            default=OutputFormat.JPEG,
            dest="output_format",
            metavar="<format>",
            help="Set output format. Can be either jpeg or png. Defaults to jpeg",
        )
        parser.add_argument(
            "-o", "--overwrite",
            action="store_true",
            help="Overwrite the output file if it already exists",
        )
        parser.add_argument(
            "-r", "--recursive",
            action="store_true",
            help="Get files recursively for each provided folder",
        )
        parser.add_argument(
            "-v", "--verbose",
            action="store_true",
            help="Enable debug logging",
        )
        parser.add_argument(
            "-h", "--help",
            action="store_true",
            help="Show this help text and exit",
        )
        self.option_strings = frozenset(
            option for action in parser._actions for option in action.option_strings
        )
        return parser

    def parse(self, tokens: Sequence[str]) -> Configuration:
        """
        Parse command line tokens into a Configuration.

        Args:
            tokens: Command line arguments, without the program name

        Returns:
            Configuration with every recognized option applied

        Raises:
            HelpRequested: If no tokens were given or -h/--help appears anywhere
            ParseError: If an option, its value or a path is invalid, or no
                path was supplied
        """
        tokens = list(tokens)
        if not tokens or any(token in HELP_TOKENS for token in tokens):
            logging.debug("Help requested")
            raise HelpRequested()

        logging.debug(f"Parsing command line: {tokens}")

        # Only exact option spellings, no "-rd" clusters or "--format=png"
        for token in tokens:
            if token.startswith("-") and token not in self.option_strings:
                raise ParseError(f"Unknown option: {token}")

        args = self.parser.parse_intermixed_args(tokens)

        # Same path given twice is scanned once
        paths = tuple(dict.fromkeys(args.paths or []))
        if not paths:
            raise ParseError(
                "no input paths supplied: specify at least one path to read .webp files from"
            )

        config = Configuration(
            paths=paths,
            recursive=args.recursive,
            output_format=args.output_format,
            overwrite=args.overwrite,
            delete_after_convert=args.delete_after_convert,
            verbose=args.verbose,
        )
        logging.debug(f"Parsed configuration: {config}")
        return config

    def format_usage(self) -> str:
        """Return the full usage and options text."""
        return self.parser.format_help()


def parse(tokens: Sequence[str]) -> Configuration:
    """Parse tokens with a default ConfigManager."""
    return ConfigManager().parse(tokens)
