"""
Validation functions for scan paths and URLs taken from untrusted documents
"""

from pathlib import Path
from urllib.parse import urlparse

from gobin_info.common.defaults import ResourceLimits


class ValidationError(Exception):
    """Raised when input validation fails"""

    pass


class InputValidator:
    """
    Provides input validation methods for security
    """

    ALLOWED_URL_SCHEMES = {"https", "http"}

    @classmethod
    def validate_file_path(cls, path, must_exist=False):
        """
        Validate a path given on the command line or derived from the environment

        Args:
            path (str or pathlib.Path): Path to validate
            must_exist (bool): Whether the path must exist

        Returns:
            Validated Path object

        Raises:
            ValidationError: If validation fails
        """
        if not path:
            raise ValidationError("Path cannot be empty")

        path_str = str(path)

        if len(path_str) > ResourceLimits.MAX_PATH_LENGTH:
            raise ValidationError(f"Path too long: {len(path_str)} > {ResourceLimits.MAX_PATH_LENGTH}")

        if "\0" in path_str:
            raise ValidationError("Path contains null bytes")

        path_obj = Path(path_str)
        if must_exist and not path_obj.exists():
            raise ValidationError(f"Path does not exist: {path}")

        return path_obj

    @classmethod
    def validate_url(cls, url, allowed_schemes=None):
        """
        Validate a URL for structural and security issues

        Args:
            url (str): URL to validate
            allowed_schemes (set): Optional set of allowed URL schemes

        Returns:
            Validated URL string

        Raises:
            ValidationError: If validation fails
        """
        if not url:
            raise ValidationError("URL cannot be empty")

        if len(url) > ResourceLimits.MAX_URL_LENGTH:
            raise ValidationError(f"URL too long: {len(url)} > {ResourceLimits.MAX_URL_LENGTH}")

        if any(char in url for char in (" ", "\t", "\n", "\r", "\0")):
            raise ValidationError("URL contains whitespace or control characters")

        try:
            parsed = urlparse(url)
            # Accessing the port validates it (raises for non-numeric ports)
            parsed.port
        except ValueError as e:
            raise ValidationError(f"Invalid URL format: {e}")

        schemes = allowed_schemes or cls.ALLOWED_URL_SCHEMES
        if parsed.scheme not in schemes:
            raise ValidationError(f"URL scheme '{parsed.scheme}' not allowed. " f"Allowed schemes: {schemes}")

        if not parsed.hostname:
            raise ValidationError(f"URL has no host: {url}")

        if ".." in parsed.path:
            raise ValidationError("URL contains parent directory traversal")

        return url
