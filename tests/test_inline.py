import io

import pytest

from dalec.inline import (
    InlineValidationError,
    SourceInline,
    SourceInlineDir,
    SourceInlineFile,
)


def _doc(source, name):
    out = io.StringIO()
    source.doc(out, name)
    return out.getvalue()


def test_file_negative_ids_report_both_errors():
    with pytest.raises(InlineValidationError) as info:
        SourceInlineFile(uid=-1, gid=-2).validate()
    assert len(info.value.errors) == 2
    assert all("must be non-negative" in msg for msg in info.value.errors)


def test_dir_rejects_path_separator_in_file_name():
    source = SourceInlineDir(files={"a/b": SourceInlineFile(contents="x")})
    with pytest.raises(InlineValidationError) as info:
        source.validate()
    assert len(info.value.errors) == 1
    assert info.value.errors[0].startswith('file "a/b"')


def test_dir_wraps_nested_file_errors():
    source = SourceInlineDir(files={"f": SourceInlineFile(uid=-3)})
    with pytest.raises(InlineValidationError) as info:
        source.validate()
    assert info.value.errors[0].startswith('file "f": ')
    assert "-3" in info.value.errors[0]


def test_inline_missing_contents():
    with pytest.raises(InlineValidationError) as info:
        SourceInline().validate("")
    assert info.value.errors == ["inline source is missing contents to inline"]


def test_inline_file_and_dir_both_set():
    source = SourceInline(file=SourceInlineFile(), dir=SourceInlineDir())
    with pytest.raises(InlineValidationError) as info:
        source.validate("")
    assert "inline source variant cannot have both a file and dir set" in info.value.errors


def test_inline_file_with_subpath_is_rejected():
    source = SourceInline(file=SourceInlineFile(contents="x"))
    with pytest.raises(InlineValidationError) as info:
        source.validate("sub")
    assert info.value.errors == ["inline file source cannot have a path set"]


def test_file_doc_default_permissions():
    text = _doc(SourceInlineFile(contents="hello"), "f")
    assert text == "\tcat << EOF > f\nhello\n\tEOF\n\tchmod 644 f\n"


def test_file_doc_includes_owner_lines_only_when_set():
    with_owner = _doc(SourceInlineFile(contents="x", uid=5, gid=7), "name")
    assert f"\tchown {5} name\n" in with_owner
    assert f"\tchgrp {7} name\n" in with_owner
    assert "chown" not in _doc(SourceInlineFile(contents="x"), "name")


def test_dir_doc_orders_files_and_chmods_last():
    source = SourceInlineDir(
        files={"y": SourceInlineFile(contents="Y"), "x": SourceInlineFile(contents="X")},
        permissions=0o750,
    )
    lines = _doc(source, "d").splitlines()
    assert lines[0] == "\tmkdir -p d"
    cats = [line for line in lines if line.startswith("\tcat << EOF > ")]
    assert cats == ["\tcat << EOF > d/x", "\tcat << EOF > d/y"]
    assert lines[-1] == "\tchmod 750 d"


def test_inline_doc_delegates_to_file():
    file = SourceInlineFile(contents="abc")
    assert _doc(SourceInline(file=file), "n") == _doc(file, "n")