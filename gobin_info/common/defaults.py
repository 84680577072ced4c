"""
Default parameter values used in scanning, build info extraction, and URL resolution
"""


class ResolverConfig:
    """
    Parameters for repository URL resolution

    These control the single vanity lookup performed for module paths that are
    not hosted on a known Git provider, and the shape of best-guess URLs
    """

    # Vanity lookups are attempted once, never retried
    REQUEST_TIMEOUT = 10.0  # seconds, per connect/read
    USER_AGENT = "gobin-info/0.1"

    # Hard bounds on reading a vanity page; the go-import tag sits in the head
    MAX_RESPONSE_BYTES = 256 * 1024
    RESPONSE_DEADLINE = 30.0  # seconds, whole body read

    # Best-guess URLs are wrapped in this marker on both sides
    UNCERTAIN_MARKER = "❓"
    FALLBACK_SEGMENTS = 3  # host + owner + repo


class ScanConfig:
    """
    Parameters for walking the scan directory and reading build info
    """

    # Symlinks are only followed when they point at regular files
    FOLLOW_SYMLINKS = True

    # Used for `go version -m` on binaries with pre-1.18 build info
    GO_VERSION_TIMEOUT = 30


class ResourceLimits:
    """
    Resource limits for robustness and edge case handling
    """

    # Path and string limits (should not need retuning)
    MAX_PATH_LENGTH = 4096  # Maximum file path length
    MAX_URL_LENGTH = 2048  # Maximum URL length


_CONFIG_CLASSES = {
    "ResolverConfig": ResolverConfig,
    "ScanConfig": ScanConfig,
    "ResourceLimits": ResourceLimits,
}


def apply_config_overrides(overrides, logger=None):
    """
    Apply configuration overrides from an external source

    Searches through all configuration classes to find matching parameters
    and applies type-safe value overrides with validation

    Args:
        overrides (dict): Dictionary mapping parameter names to override values
        logger (Logger): Optional logger for reporting applied overrides

    Example:
        apply_config_overrides({
            'REQUEST_TIMEOUT': 3,
            'FOLLOW_SYMLINKS': False
        })
    """
    if not overrides:
        return

    for key, value in overrides.items():
        applied = False
        for class_name, config_class in _CONFIG_CLASSES.items():
            if hasattr(config_class, key):
                try:
                    # Get the original value and its type for casting
                    old_value = getattr(config_class, key)
                    value_type = type(old_value)

                    setattr(config_class, key, value_type(value))

                    if logger:
                        logger.debug(f"Config override: {class_name}.{key} = {value} (was {old_value})")
                    applied = True
                    break
                except (ValueError, TypeError) as e:
                    if logger:
                        logger.warning(f"Could not apply override for {key}={value}: {e}")
                    applied = True  # Mark as applied to avoid 'Unknown parameter' warning
                    break

        if not applied and logger:
            logger.warning(f"Config override ignored: Unknown parameter {key}")


class ConfigOverride:
    """
    Context manager to temporarily override configuration values

    Supports ResolverConfig, ScanConfig, and ResourceLimits. Ensures overrides
    are reverted when the context exits, preventing test bleed-through

    Args:
        overrides (dict): Mapping of attribute name to new value
        logger (Logger): Optional logger for debug messages
    """

    def __init__(self, overrides=None, logger=None):
        self.overrides = overrides or {}
        self.logger = logger
        self._originals = []  # list of (cls, key, old_value)

    def __enter__(self):
        if not self.overrides:
            return self
        for key, value in self.overrides.items():
            applied = False
            for class_name, cls in _CONFIG_CLASSES.items():
                if hasattr(cls, key):
                    old_value = getattr(cls, key)
                    try:
                        casted = type(old_value)(value)
                    except (ValueError, TypeError):
                        casted = value
                    self._originals.append((cls, key, old_value))
                    setattr(cls, key, casted)
                    if self.logger:
                        self.logger.debug(f"ConfigOverride: {class_name}.{key} = {casted} (was {old_value})")
                    applied = True
                    break
            if not applied and self.logger:
                self.logger.warning(f"ConfigOverride ignored unknown parameter: {key}")
        return self

    def __exit__(self, exc_type, exc, tb):
        # Restore in reverse order
        for cls, key, old_value in reversed(self._originals):
            setattr(cls, key, old_value)
            if self.logger:
                self.logger.debug(f"ConfigOverride: restored {cls.__name__}.{key} -> {old_value}")
        self._originals.clear()
        return False
