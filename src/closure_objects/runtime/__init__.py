"""
Runtime layer: class files and logged root objects.
"""

from .class_loader import clear_cache, get_cache_stats, get_factories, load_class_file
from .object_runtime import ObjectRuntime

__all__ = [
    "ObjectRuntime",
    "load_class_file",
    "get_factories",
    "clear_cache",
    "get_cache_stats",
]
