"""
Common module exports
"""

from gobin_info.common.defaults import ConfigOverride, ResolverConfig, ResourceLimits, ScanConfig, apply_config_overrides
from gobin_info.common.input_validation import InputValidator, ValidationError
from gobin_info.common.subprocess import SecureSubprocess, SubprocessSecurityError
from gobin_info.common.utils import Logger

__all__ = [
    "Logger",
    "ResolverConfig",
    "ScanConfig",
    "ResourceLimits",
    "apply_config_overrides",
    "ConfigOverride",
    "InputValidator",
    "ValidationError",
    "SecureSubprocess",
    "SubprocessSecurityError",
]
