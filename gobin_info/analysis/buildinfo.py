"""
Extraction of the build information Go embeds in its binaries

Go 1.18+ stores the Go version and module information inline after a 32-byte
header that starts with the build info magic. Older binaries store pointers
instead, which need the executable format's address mapping to follow; for
those we ask the Go toolchain (`go version -m`) if it is installed
"""

import mmap
import os
import shutil

from gobin_info.analysis.models import BuildInfo
from gobin_info.common.defaults import ScanConfig
from gobin_info.common.subprocess import SecureSubprocess, SubprocessSecurityError

BUILDINFO_MAGIC = b"\xff Go buildinf:"
BUILDINFO_HEADER_SIZE = 32
BUILDINFO_ALIGN = 16
FLAGS_VERSION_INLINE = 0x2

# Module info is framed by two 16-byte sentinels
_SENTINEL_SIZE = 16


class BuildInfoError(Exception):
    """
    Raised when a file isn't a Go binary or its build info can't be read
    """

    pass


def _read_uvarint(buf, pos):
    """
    Decode an unsigned varint (Go encoding/binary format)

    Args:
        buf: Bytes-like object supporting indexing
        pos (int): Offset of the first byte

    Returns:
        tuple: (value, offset after the varint)
    """
    value = 0
    shift = 0
    while True:
        if pos >= len(buf) or shift > 63:
            raise BuildInfoError("truncated or overlong varint in build info")
        byte = buf[pos]
        pos += 1
        value |= (byte & 0x7F) << shift
        if byte < 0x80:
            return value, pos
        shift += 7


def _read_varint_string(buf, pos):
    length, pos = _read_uvarint(buf, pos)
    end = pos + length
    if end > len(buf):
        raise BuildInfoError("build info string runs past end of file")
    return bytes(buf[pos:end]), end


def _strip_sentinels(mod):
    if len(mod) >= 2 * _SENTINEL_SIZE + 1 and mod[-(_SENTINEL_SIZE + 1)] == ord("\n"):
        return mod[_SENTINEL_SIZE:-_SENTINEL_SIZE]
    return mod


def _unquote(value):
    if len(value) >= 2 and value[0] == value[-1] == '"':
        return value[1:-1]
    return value


def parse_modinfo(text, go_version=""):
    """
    Parse the tab-separated module info text

    Lines look like 'path\\t<pkg>', 'mod\\t<path>\\t<version>\\t<sum>',
    'dep\\t...' and 'build\\t<key>=<value>'. The `go version -m` output uses
    the same lines indented by one tab

    Args:
        text (str): Module info text
        go_version (str): Go version to record in the result

    Returns:
        BuildInfo
    """
    path = ""
    main_path = ""
    main_version = ""
    settings = {}

    for line in text.splitlines():
        if line.startswith("\t"):
            line = line[1:]
        fields = line.split("\t")
        kind = fields[0]
        if kind == "path" and len(fields) >= 2:
            path = fields[1]
        elif kind == "mod" and len(fields) >= 2:
            main_path = fields[1]
            main_version = fields[2] if len(fields) >= 3 else ""
        elif kind == "build" and len(fields) >= 2:
            key, sep, value = fields[1].partition("=")
            if sep:
                settings[_unquote(key)] = _unquote(value)

    return BuildInfo(
        go_version=go_version,
        path=path,
        main_path=main_path,
        main_version=main_version,
        settings=settings,
    )


def _find_buildinfo_header(buf):
    """
    Return the offset of the build info header, or -1

    The linker places the header on a 16-byte boundary. Binaries that import
    debug/buildinfo also contain the magic as a string constant, which is
    skipped by only accepting aligned hits
    """
    offset = buf.find(BUILDINFO_MAGIC)
    while offset >= 0 and offset % BUILDINFO_ALIGN:
        offset = buf.find(BUILDINFO_MAGIC, offset + 1)
    return offset


def _parse_inline(buf, offset):
    """Read version and module info stored inline after the header at offset"""
    pos = offset + BUILDINFO_HEADER_SIZE
    version, pos = _read_varint_string(buf, pos)
    mod, _ = _read_varint_string(buf, pos)
    mod = _strip_sentinels(mod)
    return parse_modinfo(
        mod.decode("utf-8", errors="replace"),
        go_version=version.decode("utf-8", errors="replace"),
    )


def _read_with_go_tool(file_path, logger=None):
    """
    Read build info by running `go version -m`

    Raises:
        BuildInfoError: If Go isn't installed or the command fails
    """
    go_exe = shutil.which("go")
    if not go_exe:
        raise BuildInfoError(f"{file_path} uses an old build info format and no Go toolchain was found to read it")

    logger and logger.debug(f"Reading build info of {file_path} with {go_exe}")
    runner = SecureSubprocess(
        allowed_root=os.path.dirname(os.path.abspath(file_path)),
        timeout=ScanConfig.GO_VERSION_TIMEOUT,
        extra_path_dirs=[os.path.dirname(go_exe)],
    )
    try:
        result = runner.run([go_exe, "version", "-m", str(file_path)], env=dict(os.environ), check=True)
    except SubprocessSecurityError as e:
        raise BuildInfoError(f"go version -m failed for {file_path}: {e}") from e

    lines = result.stdout.splitlines()
    if not lines:
        raise BuildInfoError(f"go version -m printed nothing for {file_path}")

    # First line: '<file>: go1.x.y'
    _, _, go_version = lines[0].rpartition(": ")
    return parse_modinfo("\n".join(lines[1:]), go_version=go_version.strip())


def read_build_info(file_path, logger=None):
    """
    Read the build information embedded in a Go binary

    Args:
        file_path (str or pathlib.Path): Path to the binary
        logger (Logger): Optional logger instance

    Returns:
        BuildInfo

    Raises:
        BuildInfoError: If the file isn't a Go binary or the build info is unreadable
    """
    try:
        with open(file_path, "rb") as f:
            if os.fstat(f.fileno()).st_size == 0:
                raise BuildInfoError(f"{file_path} is empty")
            with mmap.mmap(f.fileno(), 0, access=mmap.ACCESS_READ) as buf:
                offset = _find_buildinfo_header(buf)
                if offset < 0:
                    raise BuildInfoError(f"{file_path} is not a Go binary (no build info found)")
                if offset + BUILDINFO_HEADER_SIZE > len(buf):
                    raise BuildInfoError(f"{file_path} has a truncated build info header")

                flags = buf[offset + 15]
                if flags & FLAGS_VERSION_INLINE:
                    return _parse_inline(buf, offset)
    except OSError as e:
        raise BuildInfoError(f"Couldn't read {file_path}: {e}") from e

    return _read_with_go_tool(file_path, logger)
