# rokit

This is a library of core pieces for a toolchain manager for Roblox projects.
Given a list of release assets, it works out which one suits the machine it
runs on. It unpacks the tool binary from that asset, writes version metadata
onto link executables, and keeps provider tokens in a TOML auth manifest.

## Installation

Install it with pip from the project directory. The `test` extra also
installs pytest, which the test suite needs.

## What it provides

- **System descriptors**
  - `rokit.opsys.OS`, `rokit.arch.Arch` and `rokit.toolchain.Toolchain` each
    have `detect(search_string)`, which reads keywords from names such as
    `"lune-0.6.7-windows-aarch64"`. Each also has `current_system()` and
    `as_str()`.
  - `rokit.descriptor.Descriptor` joins the three.
    - `Descriptor.detect` returns `None` when no OS is found.
    - `Descriptor.parse` raises `DescriptionParseError` when no OS is found.
    - `is_compatible_with` allows three cross-architecture cases: 64-bit
      Windows and Linux run x86 binaries, and arm64 macOS runs x64 binaries.
    - `sort_by_preferred_compat` compares two descriptors and returns a
      negative, zero or positive number.
- **Executable inspection** (`rokit.executable`)
  - `parse_executable`, `os_from_executable` and `arch_from_executable` read
    ELF, Mach-O (thin or single-architecture fat) and PE headers.
- **Artifacts**
  - `rokit.artifact_format.ArtifactFormat` covers `tar.gz`, `tar`, `zip` and
    `gz`. Their declaration order is the order of preference.
  - `split_filename_and_extensions` splits a file name into its base name and
    its archive extensions.
  - `rokit.provider.ArtifactProvider` currently has `GITHUB` only.
  - `rokit.artifact.Artifact`:
    - `sort_by_system_compatibility` returns the artifacts compatible with the
      current system, best first.
    - `find_partially_compatible_fallback` returns the best artifact for the
      current OS, even if its architecture does not match.
    - `extract_contents` unpacks the tool binary. It raises `rokit.errors`
      exceptions: `UnknownFormatError`, `FileMissingError`,
      `GenericExtractError` and `OSMismatchError`.
  - An artifact's `tool_spec` can be any object whose `name` is a string or a
    method that returns one.
  - `rokit.artifact.Release` holds a release's artifacts and an optional
    changelog.
- **Extraction helpers**
  - `rokit.extraction.extract_zip_file` and `extract_tar_file` choose the
    best matching entry with `find_best_candidate`.
  - `rokit.decompression.decompress_gzip` raises `gzip.BadGzipFile` on bad
    input.
- **Ranking heuristics** (`rokit.sorting`)
  - `count_non_tool_mentions`, `compare_preferred_artifact` and
    `compare_preferred_formats` rank assets.
- **Link metadata** (`rokit.metadata.LinkMetadata`)
  - `append_to` adds a versioned trailer ending in `ROKIT_LINK` to a binary.
  - `parse_from` reads the trailer back.
  - `is_current` checks it against the running version.
- **Auth manifest** (`rokit.auth.AuthManifest`)
  - Loads, edits and saves `auth.toml`, and keeps its comments and formatting.
  - Methods: `load`, `load_or_create`, `save`, `parse`, `has_token`,
    `get_token`, `get_all_tokens`, `set_token`, `unset_token` and `dumps`.
  - `load` raises `ManifestNotFoundError` when the file is missing.

All of the package's own exceptions derive from `rokit.errors.RokitError`.

## Example

```python
from rokit.arch import Arch
from rokit.auth import AuthManifest
from rokit.descriptor import Descriptor
from rokit.opsys import OS
from rokit.provider import ArtifactProvider

desc = Descriptor.detect("stylua-linux-x86_64-musl")
assert desc.os is OS.LINUX
assert desc.arch is Arch.X64

manifest = AuthManifest.load_or_create("/path/to/home")
manifest.set_token(ArtifactProvider.GITHUB, "token")
manifest.save("/path/to/home")
```

## What it does not do

This package is a library and has no command-line program. It does not do
any of the following:

- talk to GitHub or any other network service; it neither fetches releases
  nor downloads assets,
- manage a home directory of installed tools, trust lists or tool links,
- read or write a tools manifest (`rokit.toml`, or any other tool manifest),
- look for manifests in parent or home directories.

You supply the artifact bytes and tool specifications.