"""
Scanning for Go binaries and reading their build metadata
"""

from gobin_info.analysis.buildinfo import BuildInfoError, parse_modinfo, read_build_info
from gobin_info.analysis.models import BinInfo, BuildInfo
from gobin_info.analysis.scanner import ScanPathError, get_scan_path, is_exe, scan_dir, scan_file

__all__ = [
    "BinInfo",
    "BuildInfo",
    "BuildInfoError",
    "ScanPathError",
    "get_scan_path",
    "is_exe",
    "parse_modinfo",
    "read_build_info",
    "scan_dir",
    "scan_file",
]
