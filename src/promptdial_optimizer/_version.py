"""Utilities for retrieving and validating the package version."""

import os


def _version_from_sources() -> str:
    """Return the version parsed from repository sources.

    This is a fallback mechanism for development environments where the
    distribution metadata has not been generated yet.
    """

    from pathlib import Path
    import re

    candidates = []
    resolved = Path(__file__).resolve()
    parents = resolved.parents
    if len(parents) >= 2:
        candidates.append(parents[1] / "CHANGELOG.md")
    if len(parents) >= 3:
        candidates.append(parents[2] / "CHANGELOG.md")

    for changelog in candidates:
        if not changelog.is_file():
            continue
        for line in changelog.read_text(encoding="utf-8").splitlines():
            match = re.match(r"^## v(?P<version>\d+\.\d+\.\d+)\b", line)
            if match:
                return match.group("version")

    raise RuntimeError(
        "Unable to determine the 'promptdial-optimizer' version from package "
        "metadata or repository sources."
    )


from importlib import metadata

from packaging.version import InvalidVersion, Version

_RELEASE_OVERRIDE_ENV = "PYTHON_SEMANTIC_RELEASE_VERSION"


def _load_version() -> str:
    """Return the validated package version.

    A release pipeline may pin the version through
    ``PYTHON_SEMANTIC_RELEASE_VERSION``; otherwise the version is loaded from
    the installed distribution metadata. It must follow ``MAJOR.MINOR.PATCH``.
    """

    package_name = "promptdial-optimizer"

    raw_version = os.environ.get(_RELEASE_OVERRIDE_ENV)
    if not raw_version:
        try:
            raw_version = metadata.version(package_name)
        except metadata.PackageNotFoundError:
            raw_version = _version_from_sources()

    try:
        parsed = Version(raw_version)
    except InvalidVersion as exc:
        raise RuntimeError(
            "Invalid version string for 'promptdial-optimizer': "
            f"{raw_version!r}. Expected a semantic version."
        ) from exc

    if len(parsed.release) != 3:
        raise RuntimeError(
            "The 'promptdial-optimizer' version must follow the MAJOR.MINOR.PATCH "
            f"format. Found: {raw_version!r}."
        )

    return raw_version


__version__ = _load_version()

__all__ = ["__version__"]
