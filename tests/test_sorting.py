import functools
from types import SimpleNamespace

import pytest

from rokit.artifact_format import ArtifactFormat
from rokit.sorting import (
    compare_preferred_artifact,
    compare_preferred_formats,
    count_non_tool_mentions,
)


def make_artifact(name, tool_name):
    return SimpleNamespace(
        name=name,
        format=ArtifactFormat.from_path_or_url(name),
        tool_spec=SimpleNamespace(name=tool_name),
    )


@pytest.mark.parametrize(
    "name, tool_name",
    [
        ("tool", "tool"),
        ("tool-linux", "tool"),
        ("tool-v1.0.0", "tool"),
        ("tool-1.0.0-x86_64-linux", "tool"),
        ("tool-x86_64-linux", "tool"),
        ("tool-x86_64-linux-v1.0.0", "tool"),
        ("super-tool", "super-tool"),
        ("super-tool-linux", "super-tool"),
        ("super-tool-v1.0.0", "super-tool"),
        ("super-tool-1.0.0-x86_64-linux", "super-tool"),
        ("super-mega-tool", "super-mega-tool"),
        ("super-mega-tool-linux", "super-mega-tool"),
        ("super-mega-tool-v1.0.0", "super-mega-tool"),
        ("super-mega-tool-1.0.0-x86_64-linux", "super-mega-tool"),
    ],
)
def test_name_mention_check_tool_valid(name, tool_name):
    assert count_non_tool_mentions(name, tool_name) == 0


@pytest.mark.parametrize(
    "name",
    [
        "tooling",
        "tooling-linux",
        "tooling-v1.0.0",
        "tooling-1.0.0-x86_64-linux",
        "tooling-x86_64-linux",
        "tooling-x86_64-linux-v1.0.0",
        "super-tool",
        "super-tool-linux",
        "super-tool-v1.0.0",
        "super-tool-1.0.0-x86_64-linux",
        "super-mega-tool",
        "super-mega-tool-linux",
        "super-mega-tool-v1.0.0",
        "super-mega-tool-1.0.0-x86_64-linux",
    ],
)
def test_name_mention_check_tool_invalid(name):
    assert count_non_tool_mentions(name, "tool") > 0


@pytest.mark.parametrize(
    "name", ["Tool-x86_64-linux", "tOOl-x86_64-linux", "TOOL-x86_64-linux"]
)
def test_name_mention_case_insensitive_valid(name):
    assert count_non_tool_mentions(name, "tool") == 0


@pytest.mark.parametrize(
    "name", ["Tooling-x86_64-linux", "tOOling-x86_64-linux", "TOOLING-x86_64-linux"]
)
def test_name_mention_case_insensitive_invalid(name):
    assert count_non_tool_mentions(name, "tool") > 0


@pytest.mark.parametrize(
    "name, tool_name",
    [
        ("wally-v0.3.2-linux.zip", "wally"),
        ("lune-0.8.6-macos-aarch64.zip", "lune"),
        ("selene-0.27.1-linux.zip", "selene"),
        ("sentry-cli-linux-i686-2.32.1", "sentry-cli"),
        ("selene-light-0.27.1-linux.zip", "selene-light"),
    ],
)
def test_name_mention_real_tools_valid(name, tool_name):
    assert count_non_tool_mentions(name, tool_name) == 0


def test_name_mention_real_tools_invalid():
    assert count_non_tool_mentions("selene-light-0.27.1-linux.zip", "selene") > 0


def test_blank_name_has_no_mentions():
    assert count_non_tool_mentions("   ", "tool") == 0


def test_prefers_known_format():
    artifact_names = [
        "tool-v1.0.0-x86_64-linux",
        "tool-v1.0.0-x86_64-linux.elf",
        "tool-v1.0.0-x86_64-linux.zip",
        "tool-v1.0.0-x86_64-linux.tar",
        "tool-v1.0.0-x86_64-linux.tar.gz",
        "tool-v1.0.0-x86_64-linux.gz",
    ]
    artifacts = [make_artifact(name, name) for name in artifact_names]
    artifacts.sort(key=functools.cmp_to_key(compare_preferred_formats))
    assert [artifact.name for artifact in artifacts] == [
        "tool-v1.0.0-x86_64-linux.tar.gz",
        "tool-v1.0.0-x86_64-linux.tar",
        "tool-v1.0.0-x86_64-linux.zip",
        "tool-v1.0.0-x86_64-linux.gz",
        "tool-v1.0.0-x86_64-linux",
        "tool-v1.0.0-x86_64-linux.elf",
    ]


def test_prefers_precise_tool_name():
    precise = make_artifact("tool-v1.0.0-x86_64-linux", "tool")
    extras = make_artifact("tool-with-extras-in-name-v1.0.0-x86_64-linux", "tool")
    assert compare_preferred_artifact(precise, extras) < 0
    assert compare_preferred_artifact(extras, precise) > 0
    assert compare_preferred_artifact(precise, precise) == 0


def test_tool_name_may_be_a_method():
    artifact = SimpleNamespace(
        name="tool-linux",
        format=None,
        tool_spec=SimpleNamespace(name=lambda: "tool"),
    )
    other = make_artifact("tooling-linux", "tool")
    assert compare_preferred_artifact(artifact, other) < 0