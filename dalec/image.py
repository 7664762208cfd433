"""Configuration of the container image produced by a build."""

from __future__ import annotations

import copy
import shlex
from dataclasses import dataclass, field


class ImageConfigError(ValueError):
    """Raised when an image configuration is invalid or cannot be applied.

    ``errors`` holds every problem found; the message joins them by line.
    """

    def __init__(self, *errors: str) -> None:
        self.errors = list(errors)
        super().__init__("\n".join(self.errors))


@dataclass
class SymlinkTarget:
    """The paths at which a symlink to one old path is created.

    ``path`` is a single path kept for compatibility; normalisation moves it
    into ``paths``.
    """

    path: str = ""
    paths: list[str] = field(default_factory=list)


@dataclass
class PostInstall:
    """Changes made to the container rootfs after the packages are installed."""

    symlinks: dict[str, SymlinkTarget] = field(default_factory=dict)

    def normalize_symlinks(self) -> None:
        """Move every single ``path`` into the ``paths`` list."""
        for target in self.symlinks.values():
            if not target.path:
                continue
            target.paths.append(target.path)
            target.path = ""


@dataclass
class BaseImage:
    """A base image for the output; ``ref`` is the image reference.

    A base whose rootfs is not an image has no ``ref``.
    """

    ref: str | None = None

    def validate(self) -> None:
        """Raise ImageConfigError unless the rootfs is an image."""
        if self.ref is None:
            raise ImageConfigError("rootfs currently only supports image source types")


@dataclass
class DockerImageConfig:
    """The runtime configuration stored in a container image."""

    entrypoint: list[str] = field(default_factory=list)
    cmd: list[str] = field(default_factory=list)
    env: list[str] = field(default_factory=list)
    working_dir: str = ""
    stop_signal: str = ""
    user: str = ""
    volumes: set[str] = field(default_factory=set)
    labels: dict[str, str] = field(default_factory=dict)


@dataclass
class ImageConfig:
    """How the output image is configured when the target is a container.

    ``entrypoint`` and ``cmd`` are shell-style command lines. ``base`` is
    deprecated in favour of ``bases``; ``bases`` of ``None`` means unset,
    while an empty list deliberately overrides inherited bases.
    """

    entrypoint: str = ""
    cmd: str = ""
    env: list[str] = field(default_factory=list)
    labels: dict[str, str] = field(default_factory=dict)
    volumes: set[str] = field(default_factory=set)
    working_dir: str = ""
    stop_signal: str = ""
    base: str = ""
    bases: list[BaseImage] | None = None
    post: PostInstall | None = None
    user: str = ""

    def validate(self) -> None:
        """Raise ImageConfigError listing every problem with the config."""
        errors: list[str] = []
        if self.base and self.bases:
            errors.append("cannot specify both image.base and image.bases")
        for index, base in enumerate(self.bases or ()):
            try:
                base.validate()
            except ImageConfigError as exc:
                errors.extend(f"bases[{index}]: {msg}" for msg in exc.errors)
        if errors:
            raise ImageConfigError(*errors)

    def fill_defaults(self) -> None:
        """Migrate ``base`` into ``bases`` and normalise post-install symlinks."""
        if self.base:
            if self.bases is None:
                self.bases = []
            self.bases.append(BaseImage(ref=self.base))
            self.base = ""
        if self.post is not None:
            self.post.normalize_symlinks()


def _split(command: str, what: str) -> list[str]:
    try:
        return shlex.split(command)
    except ValueError as exc:
        raise ImageConfigError(f"error splitting {what} into args: {exc}") from exc


def merge_image_config(
    dst: DockerImageConfig, src: ImageConfig | None
) -> DockerImageConfig:
    """Return a copy of ``dst`` with the fields set in ``src`` applied.

    Setting an entrypoint clears the command. Environment entries are
    appended unless the identical entry is already present.
    """
    out = copy.deepcopy(dst)
    if src is None:
        return out

    if src.entrypoint:
        out.entrypoint = _split(src.entrypoint, "entrypoint")
        out.cmd = []
    if src.cmd:
        out.cmd = _split(src.cmd, "cmd")

    existing = set(out.env)
    out.env.extend(entry for entry in src.env if entry not in existing)

    if src.working_dir:
        out.working_dir = src.working_dir
    if src.stop_signal:
        out.stop_signal = src.stop_signal
    if src.user:
        out.user = src.user

    out.volumes.update(src.volumes)
    out.labels.update(src.labels)
    return out


def merge_spec_image(
    base: ImageConfig | None, target: ImageConfig | None
) -> ImageConfig:
    """Overlay a target's image config on the spec-wide one."""
    cfg = copy.deepcopy(base) if base is not None else ImageConfig()
    if target is None:
        return cfg

    if target.entrypoint:
        cfg.entrypoint = target.entrypoint
    if target.cmd:
        cfg.cmd = target.cmd
    cfg.env = [*cfg.env, *target.env]
    cfg.volumes.update(target.volumes)
    cfg.labels.update(target.labels)
    if target.working_dir:
        cfg.working_dir = target.working_dir
    if target.stop_signal:
        cfg.stop_signal = target.stop_signal
    if target.base:
        cfg.base = target.base
    return cfg


def build_image_config(
    dst: DockerImageConfig, base: ImageConfig | None, target: ImageConfig | None
) -> DockerImageConfig:
    """Return ``dst`` with the merged spec and target image configs applied."""
    return merge_image_config(dst, merge_spec_image(base, target))


def get_image_bases(
    base: ImageConfig | None, target: ImageConfig | None
) -> list[BaseImage] | None:
    """Return the target's bases if set (even empty), else the spec's."""
    if target is not None and target.bases is not None:
        return target.bases
    if base is None:
        return None
    return base.bases


def get_single_base(
    base: ImageConfig | None, target: ImageConfig | None
) -> BaseImage | None:
    """Return the only base image, ``None`` if there is none.

    Raises ImageConfigError when more than one base is configured.
    """
    bases = get_image_bases(base, target) or []
    if len(bases) > 1:
        raise ImageConfigError("multiple image bases, expected only one")
    return bases[0] if bases else None


def get_image_post(
    base: ImageConfig | None, target: ImageConfig | None
) -> PostInstall | None:
    """Return the target's post-install config, falling back to the spec's."""
    if target is not None and target.post is not None:
        return target.post
    if base is not None:
        return base.post
    return None