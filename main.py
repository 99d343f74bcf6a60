#!/usr/bin/env python3
"""
WebP to JPEG/PNG Converter
Main entry point for the batch conversion tool.
"""

import logging
import sys

from webpconv.config_manager import ConfigManager, HelpRequested, ParseError
from webpconv.pipeline import ConversionPipeline
from webpconv.stats_tracker import StatsTracker
from webpconv.webp_codec import check_webp_support


def main(argv=None):
    """Main entry point for the WebP converter."""
    if argv is None:
        argv = sys.argv[1:]

    config_manager = ConfigManager()

    try:
        config = config_manager.parse(argv)
    except HelpRequested:
        print(config_manager.format_usage())
        return 0
    except ParseError as e:
        print(f"Error! {e}", file=sys.stderr)
        print(f"Run '{config_manager.parser.prog} --help' for usage.", file=sys.stderr)
        return 2

    # Initialize logging configuration
    logging.basicConfig(
        level=logging.DEBUG if config.verbose else logging.WARNING,
        format='[%(asctime)s] [%(levelname)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    logger = logging.getLogger(__name__)

    logger.info("WebP Converter - Starting")
    logger.info(f"  - Paths: {', '.join(str(path) for path in config.paths)}")
    logger.info(f"  - Output format: {config.output_format.value}")
    logger.info(f"  - Recursive: {'enabled' if config.recursive else 'disabled'}")
    logger.info(f"  - Overwrite: {'enabled' if config.overwrite else 'disabled'}")
    logger.info(f"  - Source deletion: {'enabled' if config.delete_after_convert else 'disabled'}")

    if not check_webp_support():
        logger.error("The installed Pillow build has no WebP support")
        print("Error! WebP decoding is not available in this Pillow installation.", file=sys.stderr)
        return 1

    try:
        stats = StatsTracker()
        pipeline = ConversionPipeline(config, stats=stats)
        pipeline.run()
        stats.print_summary()
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        return 1

    logger.info("WebP Converter - Completed")
    return 1 if stats.has_failures else 0


if __name__ == "__main__":
    sys.exit(main())
