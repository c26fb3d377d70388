"""
Class File Loader

Loads "class files" - Python files that define factories - as modules.

Design principles:
- A class file is a plain Python module with @factory functions in it
- Modules are cached by absolute path; reload=True bypasses the cache
- Load failures are wrapped with the file's path for context
"""

import importlib.util
import sys
import traceback
from pathlib import Path
from types import ModuleType
from typing import Dict

from ..core.errors import ClassFileLoadError, ClassFileNotFoundError
from ..core.factory import Factory


# Class file cache
_module_cache: Dict[str, ModuleType] = {}
_cache_stats = {'hits': 0, 'misses': 0}


def load_class_file(path: str | Path, reload: bool = False) -> ModuleType:
    """
    Load a class file as a module.

    Args:
        path: Path to the .py file
        reload: If True, bypass cache and reload the module

    Returns:
        The loaded module object

    Raises:
        ClassFileNotFoundError: If file doesn't exist
        ClassFileLoadError: If file can't be loaded (syntax error, etc.)
    """
    path = Path(path)
    path_str = str(path.absolute())

    if not reload and path_str in _module_cache:
        _cache_stats['hits'] += 1
        return _module_cache[path_str]

    _cache_stats['misses'] += 1

    if not path.exists():
        raise ClassFileNotFoundError(f"Class file not found: {path}")

    if not path.is_file():
        raise ClassFileNotFoundError(f"Path is not a file: {path}")

    module_name = f"closure_objects_class_{path.stem}_{abs(hash(path_str))}"

    try:
        spec = importlib.util.spec_from_file_location(module_name, path)

        if spec is None or spec.loader is None:
            raise ClassFileLoadError(f"Could not create module spec for: {path}")

        module = importlib.util.module_from_spec(spec)
        sys.modules[module_name] = module
        spec.loader.exec_module(module)

    except ClassFileLoadError:
        sys.modules.pop(module_name, None)
        raise
    except SyntaxError as e:
        sys.modules.pop(module_name, None)
        raise ClassFileLoadError(f"Syntax error in class file {path}: {e}") from e
    except Exception as e:
        sys.modules.pop(module_name, None)
        raise ClassFileLoadError(
            f"Failed to load class file {path}: {e}\n{traceback.format_exc()}"
        ) from e

    _module_cache[path_str] = module
    return module


def get_factories(module: ModuleType) -> Dict[str, Factory]:
    """
    Get the factories a class file defines.

    Returns:
        Factory name -> Factory, in definition order
    """
    return {
        value.name: value
        for value in vars(module).values()
        if isinstance(value, Factory)
    }


def clear_cache() -> None:
    """Clear the class file cache"""
    _module_cache.clear()
    _cache_stats['hits'] = 0
    _cache_stats['misses'] = 0


def get_cache_stats() -> Dict[str, int]:
    """
    Get cache statistics.

    Returns:
        Dict with 'hits', 'misses', 'size'
    """
    return {
        'hits': _cache_stats['hits'],
        'misses': _cache_stats['misses'],
        'size': len(_module_cache),
    }
