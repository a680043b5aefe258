"""Pytest configuration and shared fixtures for loadsplit tests.

This module provides an auto-use fixture that keeps LOADSPLIT_* environment
variables from the developer's shell out of the tests, plus helpers for
building directories of sized files.
"""

import os

import pytest


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch):
    """Auto-use fixture that clears loadsplit configuration from the environment."""
    for key in list(os.environ):
        if key.startswith('LOADSPLIT_'):
            monkeypatch.delenv(key)
    yield


@pytest.fixture
def make_files(tmp_path):
    """Factory creating files of given sizes in a temporary directory.

    Usage:
        directory = make_files({'a.dat': 100, 'b.dat': 10})

    Returns:
        Callable returning the directory path as a string
    """

    def _make(sizes: dict[str, int], directory=None) -> str:
        target = directory or tmp_path
        for name, size in sizes.items():
            filepath = target / name
            filepath.parent.mkdir(parents=True, exist_ok=True)
            filepath.write_bytes(b'x' * size)
        return str(target)

    return _make
