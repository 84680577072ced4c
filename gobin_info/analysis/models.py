"""
Records describing scanned Go binaries
"""

from dataclasses import dataclass, field, replace
from typing import Dict

UNKNOWN = "?"


@dataclass(frozen=True)
class BuildInfo:
    """Build metadata as embedded in a Go binary"""

    # e.g. 'go1.21.5'
    go_version: str = ""

    # Main package path, e.g. 'github.com/mholt/archiver/v3/cmd/arc'
    path: str = ""

    # Main module path and version, e.g. 'github.com/mholt/archiver/v3' and 'v3.5.1'
    main_path: str = ""
    main_version: str = ""

    # 'build' settings such as 'vcs.revision'
    settings: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class BinInfo:
    """
    One installed binary with the metadata needed to find its repository

    The package and module paths drive URL resolution; filename, version and
    revision are only carried through for reporting
    """

    # Without directory, e.g. 'arc' or 'arc.exe'
    filename: str

    package_path: str
    module_path: str

    # Just the tag, e.g. 'v3.5.1'. Binaries built outside module mode report '(devel)'
    module_version: str = ""

    # e.g. 'cc194d2e4af2dc09a812aa0ff61adc4813ea6c69'
    vcs_revision: str = UNKNOWN

    # URL that can be visited in a browser, after vanity URL resolving
    repo_url: str = UNKNOWN

    @classmethod
    def from_build_info(cls, filename, build_info):
        """
        Create a BinInfo from extracted build metadata

        Args:
            filename (str): Base name of the binary
            build_info (BuildInfo): Extracted metadata

        Returns:
            BinInfo with repo_url still unresolved
        """
        return cls(
            filename=filename,
            package_path=build_info.path,
            module_path=build_info.main_path,
            module_version=build_info.main_version,
            vcs_revision=build_info.settings.get("vcs.revision") or UNKNOWN,
        )

    def with_repo_url(self, repo_url):
        """Return a copy of this record with repo_url set"""
        return replace(self, repo_url=repo_url)
