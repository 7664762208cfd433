"""Package dependencies and the extra repositories used to satisfy them."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

DEFAULT_REPO_ENVS = ("build", "install", "test")
"""The stages an extra repository is available in when none are given."""

KEY_PERMISSIONS = 0o644
"""Permissions given to fetched repository keys; apt only imports keys with these."""


def _fill_source_defaults(source: Any) -> None:
    """Apply a source's own defaults, if it defines any."""
    fill = getattr(source, "fill_defaults", None)
    if callable(fill):
        fill()


@dataclass
class PackageConstraints:
    """Version and architecture constraints for one package dependency.

    The format of the version strings depends on the target's package manager,
    e.g. ``[">=1.0.0", "<2.0.0"]``.
    """

    version: list[str] = field(default_factory=list)
    arch: list[str] = field(default_factory=list)


@dataclass
class PackageRepositoryConfig:
    """An extra package repository made available during some build stages.

    ``keys`` and ``config`` map file names to sources, ``data`` lists source
    mounts the repository needs, and ``envs`` names the stages
    (``build``, ``test``, ``install``) in which the repository is added.
    """

    keys: dict[str, Any] = field(default_factory=dict)
    config: dict[str, Any] = field(default_factory=dict)
    data: list[Any] = field(default_factory=list)
    envs: list[str] = field(default_factory=list)

    def fill_defaults(self) -> None:
        """Default the stages to all of them and fill in source defaults."""
        if not self.envs:
            self.envs = list(DEFAULT_REPO_ENVS)

        for source in self.config.values():
            _fill_source_defaults(source)

        for source in self.keys.values():
            _fill_source_defaults(source)
            http = getattr(source, "http", None)
            if http is not None:
                http.permissions = KEY_PERMISSIONS

        for mount in self.data:
            _fill_source_defaults(mount)


@dataclass
class PackageDependencies:
    """Build, runtime, recommended and test dependencies of a package."""

    build: dict[str, PackageConstraints] = field(default_factory=dict)
    runtime: dict[str, PackageConstraints] = field(default_factory=dict)
    recommends: dict[str, PackageConstraints] = field(default_factory=dict)
    test: list[str] = field(default_factory=list)
    extra_repos: list[PackageRepositoryConfig] = field(default_factory=list)

    def fill_defaults(self) -> None:
        """Fill in defaults for every extra repository."""
        for repo in self.extra_repos:
            repo.fill_defaults()

    def get_extra_repos(self, env: str) -> list[PackageRepositoryConfig]:
        """Return the extra repositories that are available in stage ``env``."""
        return get_extra_repos(self.extra_repos, env)


def get_extra_repos(
    repos: list[PackageRepositoryConfig] | None, env: str
) -> list[PackageRepositoryConfig]:
    """Return the repositories in ``repos`` whose stages include ``env``."""
    return [repo for repo in repos or () if env in repo.envs]


def merge_dependencies(
    base: PackageDependencies | None, target: PackageDependencies | None
) -> PackageDependencies | None:
    """Merge target-specific dependencies over the base ones.

    Each kind of dependency set in ``target`` replaces the one in ``base``;
    kinds left empty in ``target`` come from ``base``. When either side is
    ``None`` the other is returned unchanged.
    """
    if base is None:
        return target
    if target is None:
        return base

    return PackageDependencies(
        build=target.build or base.build,
        runtime=target.runtime or base.runtime,
        recommends=target.recommends or base.recommends,
        test=target.test or base.test,
        extra_repos=target.extra_repos or base.extra_repos,
    )