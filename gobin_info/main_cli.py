"""
CLI entry point

Scans a file or directory (or one of the well-known Go binary directories)
for Go binaries and prints each binary's version and source repository URL
"""

import argparse
import json
import sys

from gobin_info.analysis.scanner import ScanPathError, get_scan_path, scan_dir
from gobin_info.common.defaults import apply_config_overrides
from gobin_info.common.utils import Logger
from gobin_info.reporting import print_result


def build_parser():
    """
    Build the argument parser

    Exactly one of the path or the location flags has to be given
    """
    parser = argparse.ArgumentParser(
        prog="gobin-info",
        description="Show the version and source repository of installed Go binaries",
    )
    location = parser.add_mutually_exclusive_group(required=True)
    location.add_argument("path", nargs="?", help="Path to a Go binary or a directory containing Go binaries")
    location.add_argument("--wd", "-wd", action="store_true", help="Scan current working directory")
    location.add_argument("--gobin", "-gobin", action="store_true", help='Scan "$GOBIN" directory')
    location.add_argument("--gopath", "-gopath", action="store_true", help='Scan "$GOPATH/bin" directory')
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose debug logging")
    parser.add_argument("-c", "--config", help="JSON string with configuration overrides")
    return parser


def main(argv=None):
    """
    Main entry point for the gobin-info CLI application

    Exits with status 1 on errors (invalid configuration, unusable scan path,
    or unexpected exceptions)
    """
    args = build_parser().parse_args(argv)
    logger = Logger(verbose=args.verbose)

    if args.config:
        try:
            config_overrides = json.loads(args.config)
        except json.JSONDecodeError as e:
            logger.error(f"Error parsing configuration overrides: {e}")
            logger.error(
                "Configuration must be a valid JSON object, e.g., '{\"REQUEST_TIMEOUT\": 5}' . "
                "See gobin_info/common/defaults.py for overrideable parameter names"
            )
            sys.exit(1)
        if not isinstance(config_overrides, dict):
            logger.error("Configuration overrides must be a JSON object")
            sys.exit(1)
        logger.info(f"Applying {len(config_overrides)} configuration overrides")
        apply_config_overrides(config_overrides, logger)

    try:
        path = get_scan_path(args.path, wd=args.wd, gobin=args.gobin, gopath=args.gopath, logger=logger)
        logger.info(f"Scanning {path}")
        bin_infos = scan_dir(path, logger=logger)
    except ScanPathError as e:
        logger.error(f"Couldn't get path: {e}")
        sys.exit(1)
    except OSError as e:
        logger.error(f"Error scanning dir: {e}", exception=e)
        sys.exit(1)
    except Exception as e:
        logger.error(f"Unexpected error: {e}", exception=e)
        sys.exit(1)

    print_result(bin_infos)


if __name__ == "__main__":
    main()
