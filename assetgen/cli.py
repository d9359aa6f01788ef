"""
Command Line Interface for incremental asset generation.
"""

import argparse
import logging
import sys
from typing import List, Optional

from .config import ProjectConfig
from .errors import AssetGenError
from .generation_progress import GenerationProgress
from .pipeline import Pipeline
from .reporter import Reporter
from .scan_progress import ScanProgress

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_GENERATION_NEEDED = 2
EXIT_INTERRUPTED = 130


def setup_logging(verbose: bool) -> logging.Logger:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO

    logging.basicConfig(
        level=level,
        format='%(asctime)s [%(levelname)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    logging.getLogger('PIL').setLevel(logging.WARNING)

    return logging.getLogger('assetgen')


def get_config(args: argparse.Namespace) -> ProjectConfig:
    """Get project configuration from environment and CLI overrides."""
    config = ProjectConfig.from_env(project_dir=getattr(args, 'project_dir', None))

    if getattr(args, 'platform', None):
        config.platform = args.platform
    if getattr(args, 'app_resources', None):
        config.app_resources_dir = args.app_resources
    if getattr(args, 'platforms_dir', None):
        config.platforms_dir = args.platforms_dir
    if getattr(args, 'project_name', None):
        config.project_name = args.project_name
    if getattr(args, 'workers', None):
        config.workers = args.workers

    return config


def load_config(args: argparse.Namespace, logger: logging.Logger) -> Optional[ProjectConfig]:
    """Build and validate configuration, logging every problem found."""
    config = get_config(args)
    errors = config.validate()
    if errors:
        for error in errors:
            logger.error(error)
        return None
    return config


def add_project_arguments(parser: argparse.ArgumentParser) -> None:
    """Add project location arguments to a parser."""
    group = parser.add_argument_group('Project')
    group.add_argument('-p', '--platform', help='Target platform: ios or android (ASSETGEN_PLATFORM)')
    group.add_argument('--project-dir', metavar='PATH',
                       help='Project root (default: current directory)')
    group.add_argument('--app-resources', metavar='PATH',
                       help='App resources directory (default: <project>/App_Resources)')
    group.add_argument('--platforms-dir', metavar='PATH',
                       help='Platforms build directory (default: <project>/platforms)')
    group.add_argument('--project-name', help='Native project name (default: project folder name)')
    group.add_argument('-w', '--workers', type=int, metavar='N',
                       help='Worker threads for hashing and resizing (default: 4)')


def cmd_check(args: argparse.Namespace) -> int:
    """Execute check command: is the asset phase needed?"""
    logger = setup_logging(args.verbose)

    config = load_config(args, logger)
    if config is None:
        return EXIT_ERROR

    try:
        needed = Pipeline(config, logger=logger).should_generate()
    except AssetGenError as e:
        logger.error(str(e))
        return EXIT_ERROR
    except Exception as e:
        logger.exception(f"Check failed: {e}")
        return EXIT_ERROR

    if not args.quiet:
        print("Generation needed" if needed else "Up to date")

    return EXIT_GENERATION_NEEDED if needed else EXIT_OK


def cmd_generate(args: argparse.Namespace) -> int:
    """Execute generate command: run the asset phase."""
    logger = setup_logging(args.verbose)

    config = load_config(args, logger)
    if config is None:
        return EXIT_ERROR

    logger.info(f"Platform: {config.platform}")
    logger.info(f"Images: {config.images_dir}")
    if config.is_supported:
        logger.info(f"Output: {config.resources_root}")

    if args.show_files:
        logger.info("Show-files mode: will print each image")

    scan_progress = None
    progress = None
    if not args.quiet:
        scan_progress = ScanProgress(show_files=args.show_files, logger=logger)
        progress = GenerationProgress(show_files=args.show_files, logger=logger)

    try:
        pipeline = Pipeline(config, dry_run=args.dry_run, logger=logger)
        stats = pipeline.run(scan_progress=scan_progress, progress=progress)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return EXIT_INTERRUPTED
    except AssetGenError as e:
        logger.error(f"Generation failed: {e}")
        return EXIT_ERROR
    except Exception as e:
        logger.exception(f"Generation failed: {e}")
        return EXIT_ERROR

    if stats is not None and not args.quiet:
        print()
        print(f"Created: {stats.created}")
        print(f"Removed: {stats.removed}")
        print(f"Unchanged: {stats.unchanged}")
        print(f"Time: {stats.elapsed_seconds:.1f}s")

    return EXIT_OK


def cmd_report(args: argparse.Namespace) -> int:
    """Execute report command."""
    logger = setup_logging(args.verbose)

    config = load_config(args, logger)
    if config is None:
        return EXIT_ERROR

    if not config.is_supported:
        logger.error(f"Platform {config.platform!r} not supported")
        return EXIT_ERROR

    try:
        images, cache, plan = Pipeline(config, logger=logger).describe()
    except AssetGenError as e:
        logger.error(str(e))
        return EXIT_ERROR

    reporter = Reporter()
    if args.type == 'summary':
        reporter.report_summary(images, cache, config.canonical_platform)
    elif args.type == 'plan':
        reporter.report_plan(plan)

    return EXIT_OK


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog='assetgen',
        description='Incremental iOS/Android image asset generation',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Build hooks:
  1. Before build: assetgen check --platform ios      (exit 2 = generation needed)
  2. Build step:   assetgen generate --platform ios

Source images are read from <app-resources>/images/*.png. A name suffix
such as logo@3x.png marks a high-density master.
"""
    )

    parser.add_argument('-v', '--verbose', action='store_true', help='Enable verbose logging')

    subparsers = parser.add_subparsers(dest='command', help='Command to run')

    check_parser = subparsers.add_parser('check', help='Check whether generation is needed')
    check_parser.add_argument('-q', '--quiet', action='store_true', help='Only report through the exit code')
    check_parser.add_argument('-v', '--verbose', action='store_true', help='Enable verbose logging')
    add_project_arguments(check_parser)

    gen_parser = subparsers.add_parser('generate', help='Generate platform images')
    gen_parser.add_argument('-n', '--dry-run', action='store_true', help='Show what would be done')
    gen_parser.add_argument('-q', '--quiet', action='store_true', help='Suppress progress output')
    gen_parser.add_argument('--show-files', action='store_true',
                            help='Print each image as processed')
    gen_parser.add_argument('-v', '--verbose', action='store_true', help='Enable verbose logging')
    add_project_arguments(gen_parser)

    report_parser = subparsers.add_parser('report', help='Report cache state or pending work')
    report_parser.add_argument('-t', '--type', choices=['summary', 'plan'],
                               default='summary', help='Report type')
    report_parser.add_argument('-v', '--verbose', action='store_true', help='Enable verbose logging')
    add_project_arguments(report_parser)

    return parser


def main(args: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    if not parsed_args.command:
        parser.print_help()
        return EXIT_ERROR

    if parsed_args.command == 'check':
        return cmd_check(parsed_args)
    elif parsed_args.command == 'generate':
        return cmd_generate(parsed_args)
    elif parsed_args.command == 'report':
        return cmd_report(parsed_args)

    return EXIT_ERROR


if __name__ == '__main__':
    sys.exit(main())
