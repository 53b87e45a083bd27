"""Tests for C/C++ file and directory filtering rules."""

import pytest

from driver_outline_mcp.parser import (
    IGNORED_DIRECTORIES,
    is_ignored_directory,
    is_source_file,
    language_for_file,
)


@pytest.mark.parametrize("name", [
    "main.c", "driver.h", "impl.cpp", "api.hpp", "x.cc", "y.cxx",
    "z.c++", "w.h++", "inline.inl", "tmpl.txx", "UPPER.C", "Mixed.Hpp",
])
def test_source_extensions(name):
    """Test that every C/C++-family extension is accepted, any case."""
    assert is_source_file(name) is True


@pytest.mark.parametrize("name", [
    "README.md", "Makefile", "script.py", "main.c.orig", "notes.cpp.txt", "c", "archive.hh",
])
def test_non_source_files(name):
    assert is_source_file(name) is False


def test_ignored_directories():
    """Test the deny-list and the hidden-directory rule."""
    for name in IGNORED_DIRECTORIES:
        assert is_ignored_directory(name) is True

    assert is_ignored_directory(".idea") is True
    assert is_ignored_directory(".") is True
    assert is_ignored_directory("src") is False
    assert is_ignored_directory("builds") is False


def test_ignored_directories_case_sensitive():
    """Test that deny-list matching is exact."""
    assert is_ignored_directory("Build") is False
    assert is_ignored_directory("DIST") is False
    assert is_ignored_directory("Node_Modules") is False


def test_language_for_file():
    assert language_for_file("main.c") == "c"
    assert language_for_file("/abs/path/driver.h") == "cpp"
    assert language_for_file("impl.cpp") == "cpp"
    assert language_for_file("legacy.C") == "cpp"
