# dalec

`dalec` models declarative package build specs and the pieces around them.
It is a library: it has no commands of its own.

## What is in it

- **`dalec.artifacts`**: what a package installs (binaries, libexec, man
  pages, data dirs, config files, docs, licences, libraries, headers,
  symlinks, systemd units, users and groups). `Artifacts.is_empty()` tells
  whether there is anything to ship; libexec entries, users and groups alone
  do not count. `ArtifactConfig.resolve_name(path)` returns the configured
  name or the base name of `path`.
- **`dalec.deps`**: build, runtime, recommended and test dependencies plus
  extra package repositories. `merge_dependencies(base, target)` combines the
  spec-wide set with a target-specific one: each non-empty field in the
  target wins, anything else falls back to the base, and if either side is
  `None` the other is returned. `get_extra_repos(repos, env)` selects the
  repositories enabled for `"build"`, `"test"` or `"install"`.
  `PackageRepositoryConfig.fill_defaults()` enables a repository for all three
  stages when none are given and sets key permissions to `0o644`.
- **`dalec.image`**: `ImageConfig` for output container images.
  `merge_spec_image(base, target)` layers a target's image settings over the
  spec's; `merge_image_config(dst, src)` and `build_image_config(dst, base,
  target)` return a copy of a `DockerImageConfig` with them applied
  (entrypoint and command are split shell-style, a new entrypoint clears the
  command, environment entries are appended unless already present).
  `get_image_bases`, `get_single_base` and `get_image_post` pick the target's
  settings before the spec's. Problems raise `ImageConfigError`.
- **`dalec.inline`**: `SourceInline`, `SourceInlineFile` and
  `SourceInlineDir`, with `validate()` raising `InlineValidationError` that
  lists every problem, and `doc(out, name)` writing a shell snippet that
  recreates the content.
- **`dalec.client`**: `Client` and `ClientWithCustomOpts` hold build options.
  `trim_target_opt` strips a matched prefix from the requested target,
  `set_client_opts` overlays options, `maybe_set_dalec_target_key` records the
  spec target key once, and `get_target_key` / `get_build_arg` read them back.
- **`dalec.targets`**: `Target` and `TargetList` describe supported build
  targets; `TargetList.to_result()` stores them as JSON, a text table and a
  version in a `Result`, and `TargetList.from_result()` reads them back.
  `NoSuchHandlerError` reports an unknown target and the available ones.
- **`dalec.schema`**: `fixup_spec_schema` and `set_object_allow_null` adjust a
  generated spec JSON schema so optional object and string properties also
  accept `null`, build args and build env accept integers, and `x-` keys are
  allowed at the top level.
- **`dalec.gha.markdown`**: small helpers (`md_bold`, `md_details`,
  `md_summary`, `md_preformat`, `md_log`) for Markdown job summaries.
- **`dalec.maputil`**: `sort_map_keys`, `sorted_map_values` and
  `duplicate_map`.

## What it does not do

The package does not route build requests to handlers by target name, and it
does not read test event streams or produce CI reports from them; the
Markdown helpers are only the building blocks for such summaries. It does not
talk to a build daemon or build anything itself.

## Installation

```
pip install .
```

For running the test suite:

```
pip install ".[test]"
pytest
```

## Example

```python
from dalec.deps import PackageConstraints, PackageDependencies, merge_dependencies

base = PackageDependencies(
    build={"pkg1": PackageConstraints()},
    runtime={"pkg2": PackageConstraints()},
)
target = PackageDependencies(build={"pkg3": PackageConstraints()}, test=["test1"])

merged = merge_dependencies(base, target)
# build and test come from the target, runtime from the base
```