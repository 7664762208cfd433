"""Adjustments applied to the generated JSON schema of a spec."""

from __future__ import annotations

from typing import Any

REF_PREFIX = "#/$defs/"


def _types(schema: dict[str, Any]) -> list[str]:
    value = schema.get("type")
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    return list(value)


def _append_type(schema: dict[str, Any], name: str) -> None:
    schema["type"] = [*_types(schema), name]


def set_object_allow_null(schema: dict[str, Any] | None) -> None:
    """Let every optional object or string in ``schema`` also be null.

    Recurses into additional properties and into every property that is not
    required. Raises ValueError for a missing schema.
    """
    if schema is None:
        raise ValueError("nil type")

    extra = schema.get("additionalProperties")
    if isinstance(extra, dict):
        set_object_allow_null(extra)

    required = schema.get("required") or []
    for key, prop in (schema.get("properties") or {}).items():
        if key in required:
            continue
        set_object_allow_null(prop)

    types = _types(schema)
    if "null" in types or not any(t in ("object", "string") for t in types):
        return
    schema["type"] = [*types, "null"]


def _definitions(schema: dict[str, Any]) -> dict[str, Any]:
    defs = schema.get("$defs", schema.get("definitions"))
    if not isinstance(defs, dict):
        raise KeyError("schema has no definitions")
    return defs


def fixup_spec_schema(schema: dict[str, Any]) -> dict[str, Any]:
    """Adjust a reflected spec schema in place and return it.

    Allows ``x-`` extension keys at the top level, integer values for build
    args and build env, and null for every optional object or string.
    """
    pattern = schema.get("patternProperties")
    if pattern is None:
        pattern = schema["patternProperties"] = {}
    pattern["^x-"] = {}

    defs = _definitions(schema)
    spec = defs["Spec"]
    _append_type(spec["properties"]["args"]["additionalProperties"], "integer")

    build_ref = spec["properties"]["build"].get("$ref", "")
    build = defs[build_ref.removeprefix(REF_PREFIX)]
    _append_type(build["properties"]["env"], "integer")

    for definition in defs.values():
        set_object_allow_null(definition)
    return schema