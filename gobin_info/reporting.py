"""
Plain-text table of scanned binaries
"""

import sys


def format_result(bin_infos):
    """
    Format binaries as aligned 'filename version repo_url' lines

    Args:
        bin_infos (list[BinInfo]): Scanned binaries

    Returns:
        list[str]: One line per binary, filename and version padded to the widest value
    """
    max_filename_len = max((len(b.filename) for b in bin_infos), default=0)
    max_version_len = max((len(b.module_version) for b in bin_infos), default=0)
    return [
        f"{b.filename.ljust(max_filename_len)} {b.module_version.ljust(max_version_len)} {b.repo_url}"
        for b in bin_infos
    ]


def print_result(bin_infos, stream=None):
    """Write the formatted table to stream (stdout by default)"""
    stream = stream or sys.stdout
    for line in format_result(bin_infos):
        print(line, file=stream)
