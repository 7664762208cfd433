"""Descriptions of the artifacts a package installs."""

from __future__ import annotations

from dataclasses import dataclass, field


def _base_name(path: str) -> str:
    """Return the last element of ``path``, ignoring trailing slashes."""
    if not path:
        return "."
    stripped = path.rstrip("/")
    if not stripped:
        return "/"
    return stripped.rsplit("/", 1)[-1]


@dataclass
class ArtifactConfig:
    """Where an artifact is placed when installed.

    ``subpath`` nests the artifact beneath the type's install directory;
    ``name`` overrides the file or directory name of the produced artifact.
    """

    subpath: str = ""
    name: str = ""

    def resolve_name(self, path: str) -> str:
        """Return the configured name, or the base name of ``path``."""
        if self.name:
            return self.name
        return _base_name(path)


@dataclass
class ArtifactSymlinkConfig:
    """A symlink shipped in the package: ``dest`` points at ``source``."""

    source: str = ""
    dest: str = ""


@dataclass
class ArtifactDirConfig:
    """A directory to create on install, with its octal permission bits."""

    mode: int = 0


@dataclass
class CreateArtifactDirectories:
    """Directories to create under the config (/etc) and state (/var/lib) roots."""

    config: dict[str, ArtifactDirConfig] = field(default_factory=dict)
    state: dict[str, ArtifactDirConfig] = field(default_factory=dict)

    def get_config(self) -> dict[str, ArtifactDirConfig]:
        """Return a copy of the config directories."""
        return dict(self.config)

    def get_state(self) -> dict[str, ArtifactDirConfig]:
        """Return a copy of the state directories."""
        return dict(self.state)


@dataclass
class AddUserConfig:
    """A user to add to the system on install."""

    name: str


@dataclass
class AddGroupConfig:
    """A group to add to the system on install."""

    name: str


@dataclass
class SystemdConfiguration:
    """Systemd units and drop-in files shipped with the package."""

    units: dict[str, ArtifactConfig] = field(default_factory=dict)
    dropins: dict[str, ArtifactConfig] = field(default_factory=dict)


@dataclass
class Artifacts:
    """All the artifacts to include in a package, grouped by kind."""

    binaries: dict[str, ArtifactConfig] = field(default_factory=dict)
    libexec: dict[str, ArtifactConfig] = field(default_factory=dict)
    manpages: dict[str, ArtifactConfig] = field(default_factory=dict)
    data_dirs: dict[str, ArtifactConfig] = field(default_factory=dict)
    directories: CreateArtifactDirectories | None = None
    config_files: dict[str, ArtifactConfig] = field(default_factory=dict)
    docs: dict[str, ArtifactConfig] = field(default_factory=dict)
    licenses: dict[str, ArtifactConfig] = field(default_factory=dict)
    systemd: SystemdConfiguration | None = None
    libs: dict[str, ArtifactConfig] = field(default_factory=dict)
    links: list[ArtifactSymlinkConfig] = field(default_factory=list)
    headers: dict[str, ArtifactConfig] = field(default_factory=dict)
    users: list[AddUserConfig] = field(default_factory=list)
    groups: list[AddGroupConfig] = field(default_factory=list)

    def is_empty(self) -> bool:
        """Return True when there is nothing to include in the package.

        Libexec entries, users and groups alone do not make a package non-empty.
        """
        if self.directories is not None and (
            self.directories.config or self.directories.state
        ):
            return False
        if self.systemd is not None and (self.systemd.units or self.systemd.dropins):
            return False
        return not any(
            (
                self.binaries,
                self.manpages,
                self.data_dirs,
                self.config_files,
                self.docs,
                self.licenses,
                self.libs,
                self.links,
                self.headers,
            )
        )