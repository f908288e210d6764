"""promptgrid loader - test case loading from inline data and files."""

from promptgrid.loader.tests import read_tests

__all__ = ["read_tests"]
