import pytest

from gobin_info.analysis.models import BinInfo
from gobin_info.common.defaults import ConfigOverride
from gobin_info.package_metadata.providers import GitProvider, ProviderRegistry
from gobin_info.package_metadata.url_resolver import (
    MalformedPathError,
    fallback_url,
    is_best_guess,
    resolve_bin_info,
    resolve_repo_url,
)


def _bin(module_path, package_path=None, filename="tool"):
    return BinInfo(filename=filename, package_path=package_path or module_path, module_path=module_path)


FYNE_HTML = (
    "<html><head>\n"
    '<meta name="go-import" content="fyne.io/fyne git https://github.com/fyne-io/fyne">\n'
    "</head><body></body></html>\n"
)


@pytest.mark.unit
def test_known_provider_resolves_without_network(offline_mode):
    bin_info = _bin("github.com/mholt/archiver/v3", "github.com/mholt/archiver/v3/cmd/arc", "arc")
    with offline_mode.set_responses({}):
        assert resolve_repo_url(bin_info) == "https://github.com/mholt/archiver"
    assert offline_mode.requested == []


@pytest.mark.unit
def test_known_provider_malformed_path_is_fatal(offline_mode):
    with offline_mode.set_responses({}):
        with pytest.raises(MalformedPathError):
            resolve_repo_url(_bin("github.com/mholt"))
    assert offline_mode.requested == []


@pytest.mark.unit
def test_vanity_redirect_to_known_provider(offline_mode):
    bin_info = _bin("fyne.io/fyne/v2", "fyne.io/fyne/v2/cmd/fyne", "fyne")
    with offline_mode.set_responses({"https://fyne.io/fyne/v2/cmd/fyne": FYNE_HTML}):
        assert resolve_repo_url(bin_info) == "https://github.com/fyne-io/fyne"


@pytest.mark.unit
def test_vanity_lookup_failure_falls_back_to_marked_guess(offline_mode):
    # No response configured: behaves like a refused connection
    bin_info = _bin("git.example.org/team/tool/v2", "git.example.org/team/tool/v2/cmd/tool")
    with offline_mode.set_responses({}):
        url = resolve_repo_url(bin_info)
    assert url == "❓https://git.example.org/team/tool❓"
    assert is_best_guess(url)
    assert offline_mode.requested == ["https://git.example.org/team/tool/v2/cmd/tool"]


@pytest.mark.unit
def test_invalid_redirect_falls_back_to_module_path(offline_mode):
    html = '<head><meta name="go-import" content="example.org/a/b git https://[::1"></head>'
    bin_info = _bin("example.org/a/b/c", "example.org/a/b/c/cmd/x")
    with offline_mode.set_responses({"https://example.org/a/b/c/cmd/x": html}):
        assert resolve_repo_url(bin_info) == "❓https://example.org/a/b❓"


@pytest.mark.unit
def test_vanity_redirect_to_unknown_provider_guesses_from_target(offline_mode):
    html = '<head><meta name="go-import" content="go.example.org/tool git https://git.example.org/team/tool.git"></head>'
    bin_info = _bin("go.example.org/tool", "go.example.org/tool/cmd/tool")
    with offline_mode.set_responses({"https://go.example.org/tool/cmd/tool": html}):
        assert resolve_repo_url(bin_info) == "❓https://git.example.org/team/tool❓"


@pytest.mark.unit
def test_vanity_redirect_to_known_provider_with_short_path_is_fatal(offline_mode):
    html = '<head><meta name="go-import" content="go.example.org/tool git https://github.com/onlyowner"></head>'
    bin_info = _bin("go.example.org/tool")
    with offline_mode.set_responses({"https://go.example.org/tool": html}):
        with pytest.raises(MalformedPathError):
            resolve_repo_url(bin_info)


@pytest.mark.unit
def test_redirect_target_not_module_path_is_used_for_extraction(offline_mode):
    # The module path has more segments than the target; owner/repo must come from the target
    html = '<head><meta name="go-import" content="k8s.io/kubectl git https://github.com/kubernetes/kubectl"></head>'
    bin_info = _bin("k8s.io/kubectl", "k8s.io/kubectl/cmd/kubectl")
    with offline_mode.set_responses({"https://k8s.io/kubectl/cmd/kubectl": html}):
        assert resolve_repo_url(bin_info) == "https://github.com/kubernetes/kubectl"


@pytest.mark.unit
def test_custom_registry_is_consulted_before_vanity_lookup(offline_mode):
    registry = ProviderRegistry(providers=[GitProvider("git.example.org")])
    with offline_mode.set_responses({}):
        assert resolve_repo_url(_bin("git.example.org/team/tool"), registry=registry) == (
            "https://git.example.org/team/tool"
        )
    assert offline_mode.requested == []


@pytest.mark.unit
def test_empty_registry_is_not_replaced_by_defaults(offline_mode):
    registry = ProviderRegistry(include_defaults=False)
    assert len(registry) == 0
    with offline_mode.set_responses({}):
        assert resolve_repo_url(_bin("github.com/a/b"), registry=registry) == "❓https://github.com/a/b❓"
    assert offline_mode.requested == ["https://github.com/a/b"]


@pytest.mark.unit
def test_resolve_bin_info_returns_augmented_copy(offline_mode):
    bin_info = BinInfo(
        filename="arc",
        package_path="github.com/mholt/archiver/v3/cmd/arc",
        module_path="github.com/mholt/archiver/v3",
        module_version="v3.5.1",
        vcs_revision="cc194d2e4af2dc09a812aa0ff61adc4813ea6c69",
    )
    with offline_mode.set_responses({}):
        resolved = resolve_bin_info(bin_info)
    assert resolved.repo_url == "https://github.com/mholt/archiver"
    assert resolved.module_version == "v3.5.1"
    assert resolved.vcs_revision == "cc194d2e4af2dc09a812aa0ff61adc4813ea6c69"
    # Input record is untouched
    assert bin_info.repo_url == "?"


@pytest.mark.unit
@pytest.mark.parametrize(
    "module_path,expected",
    [
        ("example.org/a/b/c/d", "❓https://example.org/a/b❓"),
        ("example.org/a/b", "❓https://example.org/a/b❓"),
        ("example.org/a", "❓https://example.org/a❓"),
        ("example.org", "❓https://example.org❓"),
    ],
)
def test_fallback_url(module_path, expected):
    assert fallback_url(module_path) == expected


@pytest.mark.unit
def test_fallback_marker_is_configurable():
    with ConfigOverride({"UNCERTAIN_MARKER": "?"}):
        assert fallback_url("example.org/a/b") == "?https://example.org/a/b?"
    assert fallback_url("example.org/a/b") == "❓https://example.org/a/b❓"


@pytest.mark.unit
def test_is_best_guess():
    assert is_best_guess("❓https://example.org/a/b❓")
    assert not is_best_guess("https://github.com/a/b")
    assert not is_best_guess("❓")
