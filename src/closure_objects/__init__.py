"""
closure_objects: objects built from closures and dispatch tables.

An object is its dispatcher - a callable that takes a method name:

    >>> from closure_objects import factory
    >>>
    >>> @factory
    ... def counter(this):
    ...     count = this.expose('value', 0)
    ...
    ...     @this.method
    ...     def inc():
    ...         count.set(count.get() + 1)
    ...         return count.get()
    >>>
    >>> c = counter()
    >>> c('inc')
    1
    >>> c('value')
    1

Names can be qualified: 'a::inc' calls the parent registered as 'a',
'SUPER::inc' calls the first parent that has 'inc'. A root object with an
AUTOLOAD method gets unknown bare names passed to it as the first argument.
"""

from typing import Any, MutableMapping
from types import ModuleType

from .core.dispatcher import Dispatcher, create_object
from .core.cells import StateCell
from .core.factory import Factory, ObjectContext, factory
from .core.errors import (
    ClassFileError,
    ClassFileLoadError,
    ClassFileNotFoundError,
    ConfigError,
    FactoryError,
    MethodNotFound,
    MethodNotFoundError,
    ObjectError,
    UnknownPath,
    UnknownPathError,
)
from .core.self_logger import SelfLogger
from .config import RuntimeConfig, default_config
from .runtime import ObjectRuntime

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "create_object",
    "install",
    "Dispatcher",
    "StateCell",
    "factory",
    "Factory",
    "ObjectContext",
    "SelfLogger",
    "RuntimeConfig",
    "default_config",
    "ObjectRuntime",
    "ObjectError",
    "MethodNotFoundError",
    "MethodNotFound",
    "UnknownPathError",
    "UnknownPath",
    "FactoryError",
    "ClassFileError",
    "ClassFileNotFoundError",
    "ClassFileLoadError",
    "ConfigError",
]


def install(namespace: MutableMapping[str, Any] | ModuleType, alias: str = "create_object"):
    """
    Bind create_object into a namespace under a chosen name.

        install(globals(), 'new_object')
        obj = new_object(methods, parents, True)

    Args:
        namespace: A module or a dict such as globals()
        alias: Name to bind

    Returns:
        create_object
    """
    if not alias.isidentifier():
        raise ValueError(f"Not a valid name: {alias!r}")

    if isinstance(namespace, ModuleType):
        setattr(namespace, alias, create_object)
    else:
        namespace[alias] = create_object

    return create_object
