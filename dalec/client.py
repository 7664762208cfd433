"""Build clients and the option rewriting used when routing build requests."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

KEY_TARGET = "target"
"""Build option holding the requested build target."""

KEY_TOP_LEVEL_TARGET = "dalec.target"
"""Build option holding the key of the spec target a request is routed to."""

BUILD_ARG_PREFIX = "build-arg:"
"""Prefix that marks a build option as a build argument."""

DALEC_TARGET_ARG = "DALEC_TARGET"
"""Build argument that carries the spec target key to the spec."""


@dataclass
class Client:
    """A build client: its build options and the extra inputs it was sent."""

    opts: dict[str, str] = field(default_factory=dict)
    inputs: dict[str, Any] = field(default_factory=dict)

    def build_opts(self) -> dict[str, str]:
        """Return a copy of the client's build options."""
        return dict(self.opts)


class ClientWithCustomOpts:
    """A client whose build options are replaced by a fixed set.

    Everything other than the build options is taken from the wrapped client.
    """

    def __init__(self, client: Any, opts: Mapping[str, str]) -> None:
        self.client = client
        self.opts = dict(opts)

    def build_opts(self) -> dict[str, str]:
        """Return a copy of the overriding build options."""
        return dict(self.opts)

    def __getattr__(self, name: str) -> Any:
        if name in ("client", "opts"):
            raise AttributeError(name)
        return getattr(self.client, name)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(client={self.client!r}, opts={self.opts!r})"


def get_target_key(client: Any) -> str:
    """Return the key selecting the spec target for this request, or ""."""
    return client.build_opts().get(KEY_TOP_LEVEL_TARGET, "")


def get_build_arg(client: Any, key: str) -> str | None:
    """Return the value of build argument ``key``, or None if it is not set."""
    return client.build_opts().get(BUILD_ARG_PREFIX + key)


def trim_target_opt(client: Any, prefix: str) -> ClientWithCustomOpts:
    """Return a client whose target has ``prefix`` and one following "/" removed."""
    opts = client.build_opts()
    target = opts.get(KEY_TARGET, "")
    if target.startswith(prefix):
        target = target[len(prefix):]
    if target.startswith("/"):
        target = target[1:]
    opts[KEY_TARGET] = target
    return ClientWithCustomOpts(client, opts)


def set_client_opts(client: Any, extra_opts: Mapping[str, str]) -> ClientWithCustomOpts:
    """Return a client whose build options have ``extra_opts`` set over them."""
    opts = client.build_opts()
    opts.update(extra_opts)
    return ClientWithCustomOpts(client, opts)


def maybe_set_dalec_target_key(client: Any, key: str) -> Any:
    """Record ``key`` as the spec target unless one is already recorded.

    The target key is set both as a build option and as a build argument.
    When a key is already present the client is returned unchanged.
    """
    opts = client.build_opts()
    if opts.get(KEY_TOP_LEVEL_TARGET):
        return client

    if not isinstance(client, ClientWithCustomOpts):
        # Pin the current options so later lookups do not go back to the source.
        client = ClientWithCustomOpts(client, opts)

    return set_client_opts(
        client,
        {KEY_TOP_LEVEL_TARGET: key, BUILD_ARG_PREFIX + DALEC_TARGET_ARG: key},
    )