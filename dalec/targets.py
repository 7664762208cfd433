"""Build target listings and the results that carry them."""

from __future__ import annotations

import json
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

TARGETS_SUBREQUEST = "frontend.targets"
"""Request id of the subrequest that lists the supported build targets."""

TARGETS_VERSION = "1.0.0"
"""Version of the target listing format."""

RESULT_JSON = "result.json"
RESULT_TXT = "result.txt"
VERSION_KEY = "version"


def quote(text: str) -> str:
    """Return ``text`` as a double-quoted, escaped string."""
    return json.dumps(text, ensure_ascii=False)


@dataclass
class Result:
    """The outcome of a build request: metadata blobs and an optional reference."""

    metadata: dict[str, bytes] = field(default_factory=dict)
    ref: Any = None

    def add_meta(self, key: str, value: bytes) -> None:
        """Set metadata entry ``key`` to ``value``."""
        self.metadata[key] = bytes(value)


@dataclass
class Target:
    """A build target a frontend supports."""

    name: str = ""
    default: bool = False
    description: str = ""
    location: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON form of the target, leaving out empty fields."""
        out: dict[str, Any] = {}
        if self.name:
            out["name"] = self.name
        if self.default:
            out["default"] = True
        if self.description:
            out["description"] = self.description
        if self.location:
            out["location"] = self.location
        return out

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Target:
        """Build a target from its JSON form."""
        return cls(
            name=data.get("name", ""),
            default=bool(data.get("default", False)),
            description=data.get("description", ""),
            location=data.get("location"),
        )


@dataclass
class TargetList:
    """A list of build targets, as returned by the target listing subrequest."""

    targets: list[Target] = field(default_factory=list)
    sources: list[str] = field(default_factory=list)

    def to_json(self) -> bytes:
        """Return the indented JSON encoding of the list."""
        data = {
            "targets": [target.to_dict() for target in self.targets],
            "sources": list(self.sources) if self.sources else None,
        }
        return json.dumps(data, indent=2).encode()

    def to_text(self) -> str:
        """Return a human readable table of the targets."""
        rows = [("TARGET", "DESCRIPTION")]
        for target in self.targets:
            name = f"{target.name} (default)" if target.default else target.name
            rows.append((name, target.description))
        return _table(rows)

    def to_result(self) -> Result:
        """Return a result holding the list as JSON, as text and its version."""
        result = Result()
        result.add_meta(RESULT_JSON, self.to_json())
        result.add_meta(RESULT_TXT, self.to_text().encode())
        result.add_meta(VERSION_KEY, TARGETS_VERSION.encode())
        return result

    @classmethod
    def from_result(cls, result: Result) -> TargetList:
        """Decode the list stored in ``result``'s JSON metadata.

        Raises ValueError when the result carries no JSON metadata.
        """
        if result is None or RESULT_JSON not in result.metadata:
            raise ValueError("no result.json metadata in response")
        data = json.loads(result.metadata[RESULT_JSON])
        return cls(
            targets=[Target.from_dict(item) for item in data.get("targets") or ()],
            sources=list(data.get("sources") or ()),
        )


def _table(rows: Iterable[tuple[str, ...]]) -> str:
    rows = list(rows)
    widths = [max(len(row[col]) for row in rows) for col in range(len(rows[0]))]
    lines = []
    for row in rows:
        cells = [cell.ljust(width) for cell, width in zip(row[:-1], widths)]
        lines.append("  ".join([*cells, row[-1]]).rstrip())
    return "\n".join(lines) + "\n"


class NoSuchHandlerError(LookupError):
    """Raised when no registered handler matches a requested build target."""

    def __init__(self, target: str, available: Iterable[str]) -> None:
        self.target = target
        self.available = list(available)
        super().__init__(target, self.available)

    def __str__(self) -> str:
        return (
            f"no such handler for target {quote(self.target)}: "
            f"available targets: {', '.join(self.available)}"
        )