from __future__ import annotations

from dataclasses import dataclass, field

import pytest

from dalec.deps import (
    PackageConstraints,
    PackageDependencies,
    PackageRepositoryConfig,
    get_extra_repos,
    merge_dependencies,
)


@dataclass
class FakeHTTP:
    url: str
    permissions: int = 0


@dataclass
class FakeSource:
    http: FakeHTTP | None = None
    defaults_filled: int = 0

    def fill_defaults(self) -> None:
        self.defaults_filled += 1


@dataclass
class FakeMount:
    dest: str
    defaults_filled: int = 0

    def fill_defaults(self) -> None:
        self.defaults_filled += 1


def _custom_repo() -> PackageRepositoryConfig:
    return PackageRepositoryConfig(
        config={"custom.repo": FakeSource(http=FakeHTTP(url="my.repo.com/custom.repo"))}
    )


@pytest.mark.parametrize(
    ("base", "target", "expected"),
    [
        pytest.param(None, None, None, id="both nil"),
        pytest.param(
            None,
            PackageDependencies(build={"pkg1": PackageConstraints()}),
            PackageDependencies(build={"pkg1": PackageConstraints()}),
            id="base nil",
        ),
        pytest.param(
            PackageDependencies(runtime={"pkg2": PackageConstraints()}),
            None,
            PackageDependencies(runtime={"pkg2": PackageConstraints()}),
            id="target nil",
        ),
        pytest.param(
            PackageDependencies(
                build={"pkg1": PackageConstraints()},
                runtime={"pkg2": PackageConstraints()},
            ),
            PackageDependencies(build={"pkg3": PackageConstraints()}, test=["test1"]),
            PackageDependencies(
                build={"pkg3": PackageConstraints()},
                runtime={"pkg2": PackageConstraints()},
                test=["test1"],
            ),
            id="merge dependencies",
        ),
        pytest.param(
            PackageDependencies(
                build={"pkg1": PackageConstraints()},
                runtime={"pkg2": PackageConstraints()},
            ),
            PackageDependencies(extra_repos=[_custom_repo()]),
            PackageDependencies(
                build={"pkg1": PackageConstraints()},
                runtime={"pkg2": PackageConstraints()},
                extra_repos=[_custom_repo()],
            ),
            id="custom repo in target",
        ),
    ],
)
def test_merge_dependencies(base, target, expected):
    assert merge_dependencies(base, target) == expected


def test_merge_dependencies_returns_target_object_when_base_missing():
    target = PackageDependencies(test=["a"])
    assert merge_dependencies(None, target) is target


def test_merge_dependencies_recommends_falls_back_to_base():
    base = PackageDependencies(recommends={"r": PackageConstraints(version=[">=1"])})
    target = PackageDependencies(build={"b": PackageConstraints()})
    merged = merge_dependencies(base, target)
    assert merged.recommends == {"r": PackageConstraints(version=[">=1"])}
    assert merged.build == {"b": PackageConstraints()}


def test_repo_fill_defaults_sets_all_envs():
    repo = PackageRepositoryConfig()
    repo.fill_defaults()
    assert repo.envs == ["build", "install", "test"]


def test_repo_fill_defaults_keeps_explicit_envs():
    repo = PackageRepositoryConfig(envs=["test"])
    repo.fill_defaults()
    assert repo.envs == ["test"]


def test_repo_fill_defaults_key_permissions_and_sources():
    key = FakeSource(http=FakeHTTP(url="example.com/key.gpg", permissions=0o600))
    plain_key = FakeSource()
    config = FakeSource(http=FakeHTTP(url="example.com/repo.list", permissions=0o600))
    mount = FakeMount(dest="/opt/repo")
    repo = PackageRepositoryConfig(
        keys={"key.gpg": key, "plain": plain_key},
        config={"repo.list": config},
        data=[mount],
    )

    repo.fill_defaults()

    assert key.http.permissions == 0o644
    assert plain_key.http is None
    assert config.http.permissions == 0o600
    assert key.defaults_filled == 1
    assert config.defaults_filled == 1
    assert mount.defaults_filled == 1


def test_dependencies_fill_defaults_applies_to_every_repo():
    deps = PackageDependencies(
        extra_repos=[PackageRepositoryConfig(), PackageRepositoryConfig(envs=["build"])]
    )
    deps.fill_defaults()
    assert [repo.envs for repo in deps.extra_repos] == [
        ["build", "install", "test"],
        ["build"],
    ]


def test_get_extra_repos_filters_by_env():
    build_only = PackageRepositoryConfig(envs=["build"])
    install_test = PackageRepositoryConfig(envs=["install", "test"])
    repos = [build_only, install_test]

    assert get_extra_repos(repos, "build") == [build_only]
    assert get_extra_repos(repos, "test") == [install_test]
    assert get_extra_repos(repos, "other") == []
    assert get_extra_repos(None, "build") == []


def test_dependencies_get_extra_repos_uses_own_repos():
    first = PackageRepositoryConfig(envs=["install"], config={"a": FakeSource()})
    second = PackageRepositoryConfig(envs=["install", "build"], config={"b": FakeSource()})
    deps = PackageDependencies(extra_repos=[first, second])
    assert deps.get_extra_repos("install") == [first, second]
    assert deps.get_extra_repos("build") == [second]