"""Plugin loader for user-supplied Python objects.

Resolves plugin references used by custom providers and prompt
filters. A reference is either a filesystem path to a Python file
(relative to the current working directory) or a dotted import path,
optionally followed by ':attribute':

    providers/echo.py              -> attribute given by `default_attr`
    providers/echo.py:EchoProvider
    my_pkg.providers.EchoProvider
    my_pkg.providers:EchoProvider

File modules are executed fresh on every load and are not registered
in sys.modules, so two loads never share module state. Loading errors
propagate unchanged.
"""

from __future__ import annotations

import importlib
import importlib.util
import os
from pathlib import Path
from types import ModuleType
from typing import Any


def is_file_reference(target: str) -> bool:
    """Return True if a plugin target names a file rather than a module."""
    if target.endswith(".py") or "/" in target or os.sep in target:
        return True
    return (Path.cwd() / target).is_file()


def split_reference(ref: str) -> tuple[str, str | None]:
    """Split "target:attr" into (target, attr); paths after a colon are not attrs."""
    target, sep, attr = ref.rpartition(":")
    if not sep or not attr or "/" in attr or "\\" in attr:
        return ref, None
    return target, attr


def load_module_from_path(path: str | Path) -> ModuleType:
    """Execute a Python file as a new, unregistered module.

    Args:
        path: File path, resolved against the current working directory.

    Returns:
        The executed module object.

    Raises:
        FileNotFoundError: If the file does not exist.
        ImportError: If no import spec can be built for the file.
        Exception: Whatever the module raises while executing.
    """
    resolved = Path.cwd() / path
    if not resolved.is_file():
        raise FileNotFoundError(f"Plugin file not found: {resolved}")

    spec = importlib.util.spec_from_file_location(resolved.stem, resolved)
    if spec is None or spec.loader is None:
        raise ImportError(f"Cannot load plugin module from {resolved}")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def load_object(ref: str, default_attr: str | None = None) -> Any:
    """Resolve a plugin reference to the object it names.

    Args:
        ref: Plugin reference (see module docstring for accepted forms).
        default_attr: Attribute to use for file references without an
            explicit ':attr' suffix.

    Returns:
        The referenced attribute.

    Raises:
        ValueError: If no attribute can be determined from the reference.
        ImportError / FileNotFoundError / AttributeError: From loading.
    """
    target, attr = split_reference(ref)

    if is_file_reference(target):
        module = load_module_from_path(target)
        name = attr or default_attr
        if name is None:
            raise ValueError(
                f"Plugin reference '{ref}' must name an attribute "
                f"(e.g. '{target}:name')."
            )
        return getattr(module, name)

    if attr is None:
        module_path, _, attr = target.rpartition(".")
        if not module_path or not attr:
            raise ValueError(
                f"Invalid plugin path '{ref}'. "
                f"Expected format: 'module.path.Name' or 'path/to/file.py'."
            )
    else:
        module_path = target

    module = importlib.import_module(module_path)
    return getattr(module, attr)
