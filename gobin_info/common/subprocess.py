"""
Sandboxed subprocess execution for calling the Go toolchain
"""

import os
import shlex
import subprocess
from pathlib import Path


class SubprocessSecurityError(Exception):
    """Raised when subprocess security constraints are violated"""

    pass


class SecureSubprocess:
    """
    Provides subprocess execution with a minimal environment and bounded runtime
    """

    DEFAULT_TIMEOUT = 30
    DEFAULT_PATH_ENTRIES = ("/usr/local/bin", "/usr/bin", "/bin")
    ALLOWED_ENV_VARS = {
        "HOME",
        "GOROOT",
        "GOPATH",
        "GOCACHE",
    }
    MAX_LOGGED_OUTPUT_CHARS = 4000

    def __init__(self, allowed_root, timeout=DEFAULT_TIMEOUT, *, extra_path_dirs=None):
        """
        Args:
            allowed_root (str or pathlib.Path): Root directory for subprocess operations
            timeout (int): Maximum execution time in seconds
            extra_path_dirs (Iterable[str] | None): Extra directories appended to safe PATH, e.g. the
                directory holding the `go` executable
        """
        self.allowed_root = Path(allowed_root).resolve()
        self.timeout = timeout

        self.extra_path_dirs = []
        if extra_path_dirs:
            for path_entry in extra_path_dirs:
                if not path_entry:
                    continue
                try:
                    resolved_entry = Path(path_entry).resolve()
                except (OSError, TypeError):
                    continue
                if resolved_entry.is_dir():
                    self.extra_path_dirs.append(str(resolved_entry))

        if not self.allowed_root.exists():
            raise ValueError(f"Allowed root does not exist: {allowed_root}")

    def validate_command(self, command):
        """
        Validate a command before execution

        Args:
            command (list): Command as a list of arguments

        Returns:
            Command as list of arguments

        Raises:
            SubprocessSecurityError: If command validation fails
        """
        if isinstance(command, str):
            raise SubprocessSecurityError("Command must be a list of arguments, not a string")

        command_list = list(command)

        if not command_list:
            raise SubprocessSecurityError("Command cannot be empty")

        for part in command_list:
            if not isinstance(part, str):
                raise SubprocessSecurityError(f"Command part must be string, got {type(part)}")

            for char in ("\0", "\n", "\r"):
                if char in part:
                    raise SubprocessSecurityError(f"Command contains dangerous character: {char!r}")

        return command_list

    def create_safe_env(self, env=None):
        """
        Create a safe environment for subprocess execution

        Args:
            env (dict): Optional environment variables to include

        Returns:
            Safe environment dictionary
        """
        path_entries = list(self.DEFAULT_PATH_ENTRIES)
        for entry in self.extra_path_dirs:
            if entry not in path_entries:
                path_entries.append(entry)

        safe_env = {
            "PATH": os.pathsep.join(path_entries),
            "LC_ALL": "C.UTF-8",
            "LANG": "C.UTF-8",
        }

        if env:
            for key, value in env.items():
                if key in self.ALLOWED_ENV_VARS and isinstance(value, str):
                    if "\0" not in value and len(value) < 1024:
                        safe_env[key] = value

        return safe_env

    def run(self, command, env=None, check=False):
        """
        Run a subprocess inside the allowed root with security constraints

        Args:
            command (list): Command to execute
            env (dict): Environment variables
            check (bool): Whether to raise exception on non-zero exit

        Returns:
            CompletedProcess instance with text stdout/stderr

        Raises:
            SubprocessSecurityError: If constraints are violated, the process times out,
                or check=True and the exit code is non-zero
        """
        command_list = self.validate_command(command)
        safe_env = self.create_safe_env(env)

        try:
            result = subprocess.run(
                command_list,
                cwd=str(self.allowed_root),
                env=safe_env,
                timeout=self.timeout,
                capture_output=True,
                text=True,
                check=check,
            )
        except subprocess.TimeoutExpired as exc:
            raise SubprocessSecurityError(f"Process exceeded timeout of {self.timeout}s") from exc
        except subprocess.CalledProcessError as exc:
            safe_cmd = " ".join(shlex.quote(arg) for arg in command_list[:5])
            if len(command_list) > 5:
                safe_cmd += " ..."
            message_parts = [f"Command exited with {exc.returncode}: {safe_cmd}"]
            stdout_snippet = (exc.stdout or "").strip()
            stderr_snippet = (exc.stderr or "").strip()
            if stdout_snippet:
                message_parts.append("stdout:\n" + stdout_snippet[: self.MAX_LOGGED_OUTPUT_CHARS])
            if stderr_snippet:
                message_parts.append("stderr:\n" + stderr_snippet[: self.MAX_LOGGED_OUTPUT_CHARS])
            raise SubprocessSecurityError("\n".join(message_parts)) from exc
        except OSError as exc:
            safe_cmd = " ".join(shlex.quote(arg) for arg in command_list[:5])
            raise SubprocessSecurityError(f"Subprocess failed for command: {safe_cmd}") from exc

        return result
