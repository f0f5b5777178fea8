import pytest

from rokit.errors import (
    ExtractError,
    FileMissingError,
    GenericExtractError,
    HomeNotFoundError,
    ManifestNotFoundError,
    OSMismatchError,
    RokitError,
    UnknownFormatError,
)
from rokit.opsys import OS


def test_home_not_found_message():
    assert str(HomeNotFoundError()) == "home directory not found"


def test_home_not_found_is_rokit_error():
    err = HomeNotFoundError()
    assert isinstance(err, RokitError)
    assert str(err) == "home directory not found"


def test_manifest_not_found_keeps_path():
    err = ManifestNotFoundError("some/dir/auth.toml")
    assert err.path == "some/dir/auth.toml"
    assert str(err).startswith("file not found: ")
    assert str(err).endswith("some/dir/auth.toml")


def test_unknown_format_message_and_hierarchy():
    err = UnknownFormatError()
    assert str(err) == "unknown format"
    assert isinstance(err, ExtractError)
    assert isinstance(err, RokitError)


def test_file_missing_message():
    err = FileMissingError("zip", "tool", "tool-linux.zip")
    assert err.file_name == "tool"
    assert err.archive_name == "tool-linux.zip"
    assert "missing binary 'tool'" in str(err)
    assert "zip file 'tool-linux.zip'" in str(err)


def test_os_mismatch_message_uses_os_names():
    err = OSMismatchError(OS.WINDOWS, OS.LINUX, "tool", "archive.zip")
    assert err.current_os is OS.WINDOWS
    assert err.file_os is OS.LINUX
    lines = str(err).split("\n")
    assert lines[0] == "mismatch in OS for binary 'tool' in archive 'archive.zip'"
    assert "windows" in lines[1]
    assert "linux" in lines[1]


def test_generic_extract_error_includes_source_and_body():
    source = ValueError("bad data")
    err = GenericExtractError(source, "body text")
    assert err.source is source
    assert err.body == "body text"
    lines = str(err).split("\n")
    assert lines[0] == "bad data"
    assert lines[-1] == "body text"


def test_extract_errors_catchable_as_base():
    err = FileMissingError("tar", "a", "b")
    assert isinstance(err, ExtractError)
    assert err.format == "tar"
    assert "missing binary 'a'" in str(err)
    with pytest.raises(ExtractError, match="missing binary 'a'"):
        raise err