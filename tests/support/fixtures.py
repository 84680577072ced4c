"""
Reusable pytest fixtures for deterministic, offline testing
"""

import contextlib

import pytest

from gobin_info.package_metadata import vanity
from tests.support.go_binaries import write_go_binary


@pytest.fixture
def offline_mode():
    """
    Patch the vanity resolver to avoid real network calls. Tests can set a response map:

        responses = { 'https://fyne.io/fyne/v2': '<html><head>...</head></html>' }
        with offline_mode.set_responses(responses):
            ...

    URLs missing from the map behave like a refused connection. Requested URLs
    are recorded in offline_mode.requested
    """

    class Offline:
        def __init__(self):
            self._responses = {}
            self.requested = []

        @contextlib.contextmanager
        def set_responses(self, mapping):
            self._responses = dict(mapping or {})

            def _hook(url):
                self.requested.append(url)
                return self._responses.get(url)

            vanity.set_request_fn(_hook)
            try:
                yield
            finally:
                vanity.set_request_fn(None)

    return Offline()


@pytest.fixture
def go_binary(tmp_path):
    """
    Return a callable that writes a fake Go 1.18+ binary and returns its path

    Usage:
        path = go_binary('arc', path='github.com/mholt/archiver/v3/cmd/arc',
                         mod='github.com/mholt/archiver/v3', version='v3.5.1')
    """

    def _write(name, **kwargs):
        return write_go_binary(tmp_path / name, **kwargs)

    return _write
