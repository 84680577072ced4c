"""
Registry of known Git hosting providers

For module paths on these hosts the repository URL can be derived from the path
itself, so no vanity URL lookup is needed
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Optional, Tuple


class MalformedPathError(ValueError):
    """
    Raised when a path on a known provider has too few segments to contain
    an owner and a repository name
    """

    pass


def default_owner_repo_pair(module_path):
    """
    Split '<host>/<owner>/<repo>[/...]' into its owner and repo segments

    Args:
        module_path (str): Module path or redirect target without protocol

    Returns:
        tuple: (owner, repo)

    Raises:
        MalformedPathError: If the path has fewer than three segments
    """
    subs = module_path.split("/")
    if len(subs) < 3:
        raise MalformedPathError(f"couldn't determine owner and repo name in module path '{module_path}'")
    return subs[1], subs[2]


@dataclass(frozen=True)
class GitProvider:
    """Path convention and URL format of one Git hosting provider"""

    # Hosting domain, i.e. the first segment of module paths on this provider
    domain: str

    # Takes a module path, returns (owner, repo)
    get_owner_repo_pair: Callable[[str], Tuple[str, str]] = default_owner_repo_pair

    url_format: str = "https://{domain}/{owner}/{repo}"

    description: str = ""

    def get_repo_url(self, owner, repo):
        """
        Build the browsable repository URL for an owner/repo pair

        Args:
            owner (str): Repository owner (user, group, or organization)
            repo (str): Repository name

        Returns:
            str: Canonical repository URL
        """
        return self.url_format.format(domain=self.domain, owner=owner, repo=repo)


# For known Git providers we don't need to check vanity URL redirects
KNOWN_GIT_PROVIDERS = MappingProxyType(
    {
        provider.domain: provider
        for provider in (
            GitProvider("github.com", description="GitHub"),
            GitProvider("gitlab.com", description="GitLab"),
            GitProvider("bitbucket.org", description="Bitbucket"),
            GitProvider("sr.ht", description="SourceHut"),
            GitProvider("cs.opensource.google", description="Google Open Source code search"),
            GitProvider("gitee.com", description="Gitee"),
            GitProvider("codeberg.org", description="Codeberg"),
        )
    }
)


class ProviderRegistry:
    """
    Read-only lookup of Git providers by hosting domain

    Custom providers (e.g. with a different path convention) are passed at
    construction time; the registry cannot be changed afterwards, so one
    instance can be shared between threads
    """

    def __init__(self, providers=None, include_defaults=True):
        """
        Args:
            providers (Iterable[GitProvider]): Optional extra providers. Entries override
                defaults registered for the same domain
            include_defaults (bool): Whether to start from KNOWN_GIT_PROVIDERS
        """
        entries = dict(KNOWN_GIT_PROVIDERS) if include_defaults else {}
        for provider in providers or ():
            entries[provider.domain] = provider
        self._providers = MappingProxyType(entries)

    @property
    def providers(self):
        """Read-only mapping of domain -> GitProvider"""
        return self._providers

    def lookup(self, domain) -> Optional[GitProvider]:
        """
        Look up the provider for a hosting domain

        Args:
            domain (str): First segment of a module path, e.g. 'github.com'

        Returns:
            GitProvider or None if the domain isn't a known provider
        """
        return self._providers.get(domain)

    def __contains__(self, domain):
        return domain in self._providers

    def __len__(self):
        return len(self._providers)


DEFAULT_REGISTRY = ProviderRegistry()


def lookup_provider(domain):
    """Look up a domain in the default registry"""
    return DEFAULT_REGISTRY.lookup(domain)
