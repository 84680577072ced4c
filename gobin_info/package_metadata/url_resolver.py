"""
Repository URL resolution for Go binaries

Decides between a direct lookup on a known Git provider, following a vanity
URL redirect, and a marked best-guess URL
"""

from gobin_info.common.defaults import ResolverConfig
from gobin_info.package_metadata.providers import DEFAULT_REGISTRY, MalformedPathError
from gobin_info.package_metadata.vanity import resolve_vanity_url

__all__ = ["MalformedPathError", "fallback_url", "is_best_guess", "resolve_bin_info", "resolve_repo_url"]


def _domain_of(path):
    """Return the first segment of a slash-separated path"""
    return path.split("/")[0]


def fallback_url(module_path):
    """
    Guess the repository URL of a module on an unknown host

    Assumes the host/owner/repo layout of the known providers and wraps the
    result in the uncertain marker, since it might be wrong

    Args:
        module_path (str): Module path or redirect target without protocol

    Returns:
        str: e.g. '❓https://git.example.org/owner/repo❓'
    """
    marker = ResolverConfig.UNCERTAIN_MARKER
    subs = module_path.split("/")
    if len(subs) < ResolverConfig.FALLBACK_SEGMENTS:
        return f"{marker}https://{module_path}{marker}"
    return f"{marker}https://{'/'.join(subs[:ResolverConfig.FALLBACK_SEGMENTS])}{marker}"


def is_best_guess(repo_url):
    """Whether repo_url is a marked best-guess URL"""
    marker = ResolverConfig.UNCERTAIN_MARKER
    return len(repo_url) > 2 * len(marker) and repo_url.startswith(marker) and repo_url.endswith(marker)


def _provider_url(provider, path):
    owner, repo = provider.get_owner_repo_pair(path)
    return provider.get_repo_url(owner, repo)


def resolve_repo_url(bin_info, registry=None, logger=None):
    """
    Derive the browsable repository URL for a binary's build metadata

    Args:
        bin_info (BinInfo): Record with package_path and module_path set
        registry (ProviderRegistry): Optional provider registry, defaults to the known providers
        logger (Logger): Optional logger instance

    Returns:
        str: Canonical repository URL, or a best-guess URL wrapped in the
        uncertain marker when the host isn't a known provider

    Raises:
        MalformedPathError: If the module path (or redirect target) is on a known
            provider but lacks an owner or repo segment
    """
    if registry is None:
        registry = DEFAULT_REGISTRY
    module_path = bin_info.module_path

    domain = _domain_of(module_path)
    provider = registry.lookup(domain)
    if provider is not None:
        return _provider_url(provider, module_path)

    # Provider not known; assume it's a vanity URL
    redirect_target = resolve_vanity_url(bin_info.package_path, domain, logger)
    if not redirect_target:
        # It wasn't a vanity URL. Probably an unknown Git provider
        guess = fallback_url(module_path)
        logger and logger.debug(f"Unknown Git provider {domain}, guessing {guess}")
        return guess

    # The redirect might point at a known or an unknown Git provider
    redirect_domain = _domain_of(redirect_target)
    provider = registry.lookup(redirect_domain)
    if provider is None:
        guess = fallback_url(redirect_target)
        logger and logger.debug(f"Vanity URL target {redirect_target} is on unknown Git provider, guessing {guess}")
        return guess

    return _provider_url(provider, redirect_target)


def resolve_bin_info(bin_info, registry=None, logger=None):
    """
    Return a copy of bin_info with its repo_url resolved

    Raises:
        MalformedPathError: See resolve_repo_url
    """
    return bin_info.with_repo_url(resolve_repo_url(bin_info, registry=registry, logger=logger))
