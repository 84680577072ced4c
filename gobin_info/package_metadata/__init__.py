"""
Repository URL resolution: known providers, vanity URLs, and best-guess fallback
"""

from gobin_info.package_metadata.providers import (
    DEFAULT_REGISTRY,
    KNOWN_GIT_PROVIDERS,
    GitProvider,
    MalformedPathError,
    ProviderRegistry,
    default_owner_repo_pair,
    lookup_provider,
)
from gobin_info.package_metadata.url_resolver import fallback_url, is_best_guess, resolve_bin_info, resolve_repo_url
from gobin_info.package_metadata.vanity import resolve_vanity_url

__all__ = [
    "DEFAULT_REGISTRY",
    "KNOWN_GIT_PROVIDERS",
    "GitProvider",
    "MalformedPathError",
    "ProviderRegistry",
    "default_owner_repo_pair",
    "fallback_url",
    "is_best_guess",
    "lookup_provider",
    "resolve_bin_info",
    "resolve_repo_url",
    "resolve_vanity_url",
]
