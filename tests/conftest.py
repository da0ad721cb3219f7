"""Shared fixtures for flactagger tests."""

import pathlib

import pytest


INFO_TEXT = """\
Grateful Dead
Winterland Arena
San Francisco, CA
1977-06-07

Set 1
01. Bertha
02. Good Lovin'
03. Looks Like Rain
"""


@pytest.fixture
def info_file(tmp_path: pathlib.Path) -> pathlib.Path:
    """Write a mode 'a' info file with three titles."""
    p = tmp_path / "info.txt"
    p.write_text(INFO_TEXT)
    return p


@pytest.fixture
def flac_files(tmp_path: pathlib.Path) -> list[pathlib.Path]:
    """Create three placeholder files named like a live recording."""
    names = [
        "gd1977-06-07d1t01.flac",
        "gd1977-06-07d1t02.flac",
        "gd1977-06-07d1t03.flac",
    ]
    paths = []
    for name in names:
        p = tmp_path / name
        p.write_bytes(b"fLaC")
        paths.append(p)
    return paths
