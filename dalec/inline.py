"""Inline sources: file and directory contents written directly in a spec."""

from __future__ import annotations

import os
import posixpath
from dataclasses import dataclass, field
from typing import TextIO

from .maputil import sort_map_keys
from .targets import quote

DEFAULT_DOC_PERMS = 0o644
"""Mode shown in generated docs when no permissions are set."""

PATH_SEPARATOR_ERROR = "source name must not contain a path separator"


class InlineValidationError(ValueError):
    """Raised when an inline source is invalid.

    ``errors`` holds every problem found; the message joins them by line.
    """

    def __init__(self, *errors: str) -> None:
        self.errors = list(errors)
        super().__init__("\n".join(self.errors))


def _owner_errors(uid: int, gid: int) -> list[str]:
    errors = []
    if uid < 0:
        errors.append(f"uid {uid} must be non-negative")
    if gid < 0:
        errors.append(f"gid {gid} must be non-negative")
    return errors


def _write_owner(out: TextIO, uid: int, gid: int, name: str) -> None:
    if uid != 0:
        out.write(f"\tchown {uid} {name}\n")
    if gid != 0:
        out.write(f"\tchgrp {gid} {name}\n")


def _doc_perms(permissions: int) -> int:
    return (permissions & 0o777) or DEFAULT_DOC_PERMS


def _join(name: str, child: str) -> str:
    return posixpath.normpath(posixpath.join(name, child))


@dataclass
class SourceInlineFile:
    """A file whose contents are given inline."""

    contents: str = ""
    permissions: int = 0
    uid: int = 0
    gid: int = 0

    def validate(self) -> None:
        """Raise InlineValidationError if the owner ids are negative."""
        errors = _owner_errors(self.uid, self.gid)
        if errors:
            raise InlineValidationError(*errors)

    def doc(self, out: TextIO, name: str) -> None:
        """Write shell commands that recreate the file as ``name``."""
        out.write(f"\tcat << EOF > {name}\n{self.contents}\n\tEOF\n")
        _write_owner(out, self.uid, self.gid, name)
        out.write(f"\tchmod {_doc_perms(self.permissions):o} {name}\n")


@dataclass
class SourceInlineDir:
    """A directory of inline files, keyed by file name."""

    files: dict[str, SourceInlineFile] = field(default_factory=dict)
    permissions: int = 0
    uid: int = 0
    gid: int = 0

    def validate(self) -> None:
        """Raise InlineValidationError listing every problem with the directory."""
        errors = _owner_errors(self.uid, self.gid)
        for key in sort_map_keys(self.files):
            if os.sep in key:
                errors.append(f"file {quote(key)}: {PATH_SEPARATOR_ERROR}")
            try:
                self.files[key].validate()
            except InlineValidationError as exc:
                errors.extend(f"file {quote(key)}: {msg}" for msg in exc.errors)
        if errors:
            raise InlineValidationError(*errors)

    def doc(self, out: TextIO, name: str) -> None:
        """Write shell commands that recreate the directory as ``name``."""
        out.write(f"\tmkdir -p {name}\n")
        _write_owner(out, self.uid, self.gid, name)
        for key in sort_map_keys(self.files):
            self.files[key].doc(out, _join(name, key))
        out.write(f"\tchmod {_doc_perms(self.permissions):o} {name}\n")


@dataclass
class SourceInline:
    """An inline source: exactly one of a file or a directory."""

    file: SourceInlineFile | None = None
    dir: SourceInlineDir | None = None

    def validate(self, subpath: str = "") -> None:
        """Raise InlineValidationError listing every problem with the source."""
        errors: list[str] = []
        if self.file is None and self.dir is None:
            errors.append("inline source is missing contents to inline")
        if self.file is not None and self.dir is not None:
            errors.append("inline source variant cannot have both a file and dir set")
        if self.dir is not None:
            try:
                self.dir.validate()
            except InlineValidationError as exc:
                errors.extend(exc.errors)
        if self.file is not None:
            if subpath:
                errors.append("inline file source cannot have a path set")
            try:
                self.file.validate()
            except InlineValidationError as exc:
                errors.extend(exc.errors)
        if errors:
            raise InlineValidationError(*errors)

    def doc(self, out: TextIO, name: str) -> None:
        """Write shell commands that recreate the source as ``name``."""
        if self.file is not None:
            self.file.doc(out, name)
        if self.dir is not None:
            self.dir.doc(out, name)