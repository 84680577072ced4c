"""
Simple property-based tests without external dependencies
"""

import random
import string

import pytest

from gobin_info.analysis.models import BinInfo
from gobin_info.common.input_validation import InputValidator, ValidationError
from gobin_info.package_metadata.providers import KNOWN_GIT_PROVIDERS, MalformedPathError
from gobin_info.package_metadata.url_resolver import fallback_url, is_best_guess, resolve_repo_url


class TestSimpleProperties:
    """Property-based tests using random generation"""

    def generate_random_string(self, min_len=1, max_len=20, charset=None):
        """Generate random string for testing"""
        if charset is None:
            charset = string.ascii_lowercase + string.digits + "._-"
        length = random.randint(min_len, max_len)
        return "".join(random.choice(charset) for _ in range(length))

    def random_module_path(self, domain, min_segments=0, max_segments=5):
        segments = [self.generate_random_string() for _ in range(random.randint(min_segments, max_segments))]
        return "/".join([domain] + segments)

    def test_known_provider_paths(self):
        """Known-provider paths resolve to the provider URL or fail as malformed, without network"""
        domains = sorted(KNOWN_GIT_PROVIDERS)
        for _ in range(200):
            domain = random.choice(domains)
            path = self.random_module_path(domain)
            info = BinInfo(filename="bin", package_path=path, module_path=path)
            subs = path.split("/")
            if len(subs) < 3:
                with pytest.raises(MalformedPathError):
                    resolve_repo_url(info)
                continue
            url = resolve_repo_url(info)
            assert not is_best_guess(url)
            assert url == KNOWN_GIT_PROVIDERS[domain].get_repo_url(subs[1], subs[2])

    def test_unknown_domains_give_marked_guess(self, offline_mode):
        """Paths on unknown hosts that aren't vanity URLs resolve to a marked guess"""
        with offline_mode.set_responses({}):
            for _ in range(100):
                domain = self.generate_random_string(charset=string.ascii_lowercase) + ".invalid"
                path = self.random_module_path(domain, min_segments=1)
                info = BinInfo(filename="bin", package_path=path, module_path=path)
                url = resolve_repo_url(info)
                assert is_best_guess(url)
                assert url == fallback_url(path)
                assert len(url.strip("❓")[len("https://") :].split("/")) <= 3
        assert len(offline_mode.requested) == 100

    def test_fallback_url_is_prefix_of_path(self):
        for _ in range(100):
            path = self.random_module_path("git." + self.generate_random_string() + ".org")
            inner = fallback_url(path).strip("❓")
            assert inner.startswith("https://")
            assert path.startswith(inner[len("https://") :])

    def test_url_validation_random(self):
        """Random strings are either accepted as http(s) URLs or rejected with ValidationError"""
        charset = string.ascii_letters + string.digits + ":/?#[]@!$&'()*+,;=.-_~% \t\n"
        for _ in range(200):
            candidate = random.choice(["", "https://", "http://", "ftp://"]) + self.generate_random_string(0, 60, charset)
            try:
                result = InputValidator.validate_url(candidate)
            except ValidationError:
                continue
            assert result == candidate
            assert result.lower().startswith(("https:", "http:"))
