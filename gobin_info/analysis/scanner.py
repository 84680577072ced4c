"""
Finding Go binaries in a directory and collecting their repository info
"""

import os
import stat
import sys

from gobin_info.analysis.buildinfo import BuildInfoError, read_build_info
from gobin_info.analysis.models import BinInfo
from gobin_info.common.defaults import ScanConfig
from gobin_info.common.input_validation import InputValidator, ValidationError
from gobin_info.package_metadata.url_resolver import MalformedPathError, resolve_bin_info


class ScanPathError(Exception):
    """
    Raised when the location to scan can't be determined or used
    """

    pass


def get_scan_path(path=None, wd=False, gobin=False, gopath=False, logger=None):
    """
    Determine the file or directory to scan

    Args:
        path (str): Explicit file or directory path, used when no flag is set
        wd (bool): Scan the current working directory
        gobin (bool): Scan "$GOBIN"
        gopath (bool): Scan "$GOPATH/bin"
        logger (Logger): Optional logger instance

    Returns:
        str: Path to scan

    Raises:
        ScanPathError: If the path can't be determined
    """
    if wd:
        try:
            return os.getcwd()
        except OSError as e:
            raise ScanPathError(f"couldn't get current working directory: {e}") from e

    if gobin:
        env = os.environ.get("GOBIN", "")
        if not env:
            raise ScanPathError("GOBIN environment variable is empty or not set")
        return env

    if gopath:
        env = os.environ.get("GOPATH", "")
        if not env:
            # When the env var is not set, Go's own behavior is to use $HOME/go
            logger and logger.info("GOPATH is not set, falling back to $HOME/go like Go does")
            home = os.path.expanduser("~")
            if home == "~":
                raise ScanPathError("couldn't get user home directory")
            env = os.path.join(home, "go")
        # GOPATH can list multiple directories; $GOPATH/bin is always in the first one
        env = env.split(os.pathsep)[0]
        return os.path.join(env, "bin")

    if not path:
        raise ScanPathError("no path given")
    return path


def is_exe(file_path, mode):
    """
    Report whether a file should be considered executable

    Args:
        file_path (str): Path to the file
        mode (int): st_mode of the (symlink-resolved) file

    Returns:
        bool
    """
    if sys.platform == "win32":
        return str(file_path).lower().endswith(".exe")
    return stat.S_ISREG(mode) and mode & 0o111 != 0


def scan_file(file_path, registry=None, logger=None):
    """
    Collect build and repository info for one file

    Args:
        file_path (str): Path to the file
        registry (ProviderRegistry): Optional provider registry for URL resolution
        logger (Logger): Optional logger instance

    Returns:
        BinInfo, or None if the file is not an executable Go binary

    Raises:
        OSError: If the file can't be inspected
    """
    st = os.lstat(file_path)
    if stat.S_ISLNK(st.st_mode):
        if not ScanConfig.FOLLOW_SYMLINKS:
            return None
        # Accept file symlinks only
        try:
            st = os.stat(file_path)
        except OSError as e:
            logger and logger.debug(f"Skipping broken symlink {file_path}: {e}")
            return None
        if not stat.S_ISREG(st.st_mode):
            return None

    if not is_exe(file_path, st.st_mode):
        return None

    try:
        build_info = read_build_info(file_path, logger)
    except BuildInfoError as e:
        logger and logger.debug(f"Skipping {file_path}: {e}")
        return None

    bin_info = BinInfo.from_build_info(os.path.basename(file_path), build_info)
    if not bin_info.module_path:
        # Built outside module mode (e.g. tools shipped with Go itself)
        logger and logger.debug(f"{file_path} has no module path, can't determine repository")
        return bin_info

    try:
        return resolve_bin_info(bin_info, registry=registry, logger=logger)
    except MalformedPathError as e:
        logger and logger.error(f"Couldn't resolve repository URL of {file_path}: {e}")
        return bin_info


def scan_dir(path, registry=None, logger=None):
    """
    Scan a directory (recursively) or a single file for Go binaries

    Args:
        path (str): Directory or file to scan
        registry (ProviderRegistry): Optional provider registry for URL resolution
        logger (Logger): Optional logger instance

    Returns:
        list[BinInfo]: Found binaries in lexical walk order

    Raises:
        ScanPathError: If the path is invalid or doesn't exist
        OSError: If a file can't be inspected
    """
    try:
        root = InputValidator.validate_file_path(path, must_exist=True)
    except ValidationError as e:
        raise ScanPathError(str(e)) from e

    if not root.is_dir():
        bin_info = scan_file(str(root), registry=registry, logger=logger)
        return [bin_info] if bin_info else []

    bin_infos = []
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames.sort()
        for filename in sorted(filenames):
            bin_info = scan_file(os.path.join(dirpath, filename), registry=registry, logger=logger)
            if bin_info is not None:
                bin_infos.append(bin_info)
    return bin_infos
