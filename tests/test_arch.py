import platform

import pytest

from rokit.arch import Arch


def test_current_arch_matches_machine():
    assert Arch.current_system() is Arch.detect(platform.machine())


@pytest.mark.parametrize(
    "machine, expected",
    [
        ("x86_64", Arch.X64),
        ("AMD64", Arch.X64),
        ("aarch64", Arch.ARM64),
        ("arm64", Arch.ARM64),
        ("i686", Arch.X86),
        ("armv7l", Arch.ARM32),
    ],
)
def test_current_system_from_machine(monkeypatch, machine, expected):
    monkeypatch.setattr(platform, "machine", lambda: machine)
    assert Arch.current_system() is expected


def test_current_system_unsupported(monkeypatch):
    monkeypatch.setattr(platform, "machine", lambda: "riscv64")
    with pytest.raises(RuntimeError):
        Arch.current_system()


@pytest.mark.parametrize(
    "text, expected",
    [
        ("APP-x86-64-VER", Arch.X64),
        ("APP-x86_64-VER", Arch.X64),
        ("APP-x64-VER", Arch.X64),
        ("APP-amd64-VER", Arch.X64),
        ("APP-x86-VER", Arch.X86),
        ("APP-i686-VER", Arch.X86),
        ("APP-arm64-VER", Arch.ARM64),
        ("APP-arm-VER", Arch.ARM32),
    ],
)
def test_detect_arch_valid(text, expected):
    assert Arch.detect(text) is expected


@pytest.mark.parametrize(
    "text",
    [
        "APP-x84-48-VER",
        "APP-x87-65-VER",
        "APP-x62-VER",
        "APP-nvidia4-VER",
        "APP-intel999-VER",
    ],
)
def test_detect_arch_invalid(text):
    assert Arch.detect(text) is None


def test_detect_arch_universal():
    assert Arch.detect("APP-macos-universal-VER") is Arch.X64


def test_universal_without_macos_is_not_detected():
    assert Arch.detect("APP-linux-universal-VER") is None


@pytest.mark.parametrize(
    "tool, expected",
    [
        ("stylua-linux-x86_64-musl", Arch.X64),
        ("remodel-0.11.0-linux-x86_64", Arch.X64),
        ("rojo-0.6.0-alpha.1-win64", Arch.X64),
        ("lune-0.6.7-windows-aarch64", Arch.ARM64),
        ("darklua-linux-aarch64", Arch.ARM64),
        ("tarmac-0.7.5-macos", None),
        ("sentry-cli-Darwin-universal", Arch.X64),
        ("sentry-cli-linux-i686-2.32.1", Arch.X86),
        ("just-1.28.0-armv7-unknown-linux-musleabihf", Arch.ARM32),
        ("just-1.28.0-arm-unknown-linux-musleabihf", Arch.ARM32),
    ],
)
def test_real_tool_specs(tool, expected):
    assert Arch.detect(tool) is expected


def test_detect_is_case_insensitive():
    assert Arch.detect("APP-X86_64-VER") is Arch.X64
    assert Arch.detect("APP-ARM-VER") is Arch.ARM32


@pytest.mark.parametrize(
    "text, expected",
    [
        ("APP-arm64-VER", "arm64"),
        ("APP-x64-VER", "x64"),
        ("APP-arm-VER", "arm32"),
        ("APP-x86-VER", "x86"),
    ],
)
def test_as_str_of_detected(text, expected):
    assert Arch.detect(text).as_str() == expected


def test_arm64_sorts_before_x64():
    detected = [
        Arch.detect("APP-x86-VER"),
        Arch.detect("APP-x64-VER"),
        Arch.detect("APP-arm-VER"),
        Arch.detect("APP-arm64-VER"),
    ]
    assert sorted(detected) == [
        Arch.ARM64,
        Arch.X64,
        Arch.ARM32,
        Arch.X86,
    ]