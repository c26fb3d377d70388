"""
Dispatcher

An object is its dispatcher: a callable that takes a method name and routes
the call. Resolution order for a name:

- Bare name 'm':
    1. own methods table (callable -> call it, StateCell -> its value)
    2. parents, in registration order, depth-first (inheritance)
    3. the fallback method (AUTOLOAD), only on a root object
- 'p::rest': delegate 'rest' to the parent registered as 'p'
- 'SUPER::rest': try 'rest' on each of this object's own parents

Names are resolved completely before anything runs, so an error raised by
a behavior is never read as "not found" and never triggers a retry.
"""

from functools import partial
from typing import Any, Callable, MutableMapping, Optional, Tuple

from ..config import RuntimeConfig, default_config
from .cells import StateCell
from .errors import MethodNotFoundError, UnknownPathError
from .self_logger import SelfLogger


Target = Callable[..., Any]


class Dispatcher:
    """
    The invocable value representing one object.

    The method and parent tables are captured by reference: the factory
    that built the dispatcher keeps filling them after construction.
    """

    def __init__(
        self,
        methods: MutableMapping[str, Any],
        parents: MutableMapping[str, 'Dispatcher'],
        is_root: bool = True,
        name: Optional[str] = None,
        config: Optional[RuntimeConfig] = None,
        logger: Optional[SelfLogger] = None,
    ):
        self._methods = methods
        self._parents = parents
        self._is_root = bool(is_root)
        self._name = name or 'object'
        self._config = config or default_config()
        self.logger = logger

        # Read once; an object's syntax doesn't change under it
        self._separator = self._config.separator
        self._super_token = self._config.super_token
        self._fallback_name = self._config.fallback_name

        # Dispatches of this object currently running
        self._depth = 0

    @property
    def name(self) -> str:
        return self._name

    @property
    def separator(self) -> str:
        return self._separator

    @property
    def super_token(self) -> str:
        return self._super_token

    @property
    def is_root(self) -> bool:
        return self._is_root

    @property
    def config(self) -> RuntimeConfig:
        return self._config

    def __call__(self, qualified_name: str, *args, **kwargs) -> Any:
        return self.invoke(qualified_name, *args, **kwargs)

    def invoke(self, qualified_name: str, *args, **kwargs) -> Any:
        """
        Invoke a method by (possibly qualified) name.

        Args:
            qualified_name: 'm', 'p1::p2::m' or 'SUPER::m'
            *args, **kwargs: passed to the behavior unchanged
                             (ignored for state cells)

        Returns:
            Whatever the resolved behavior returns

        Raises:
            MethodNotFoundError: nothing resolved and no fallback applies
            UnknownPathError: a path segment names no parent
        """
        # A failure is logged once, by the outermost dispatch on this object
        outermost = self._depth == 0

        try:
            target, route = self._resolve(qualified_name)
        except (MethodNotFoundError, UnknownPathError) as e:
            if outermost:
                self._log_failure(qualified_name, e)
            raise

        if self.logger:
            self.logger.debug(
                f'Dispatching {qualified_name}',
                method=qualified_name,
                route=route,
            )

        self._depth += 1
        try:
            return target(*args, **kwargs)
        except Exception as e:
            if outermost:
                self._log_failure(qualified_name, e)
            raise
        finally:
            self._depth -= 1

    def _resolve(self, qualified_name: str, delegated: bool = False) -> Tuple[Target, str]:
        """
        Resolve a name to a target without running it.

        Args:
            qualified_name: Name as passed to invoke()
            delegated: True for a SUPER search; it never uses the
                       fallback, even on a root parent

        Returns:
            (target, route) where route says how the name was found
        """
        head, sep, rest = qualified_name.partition(self._separator)

        if not sep:
            found = self._find_bare(qualified_name)
            if found is not None:
                return found

            if self._is_root and not delegated:
                fallback = self._find_bare(self._fallback_name)
                if fallback is not None:
                    # Requested name goes in as the reserved first argument
                    return partial(fallback[0], qualified_name), 'fallback'

            raise MethodNotFoundError(qualified_name, self._name)

        if head == self._super_token:
            return self._resolve_super(qualified_name, rest), 'super'

        if head not in self._parents:
            raise UnknownPathError(head, qualified_name, self._name)

        # Same as calling the parent directly: its own root flag decides
        # whether its fallback applies
        target, _ = self._parents[head]._resolve(rest)
        return target, 'parent'

    def _resolve_super(self, qualified_name: str, rest: str) -> Target:
        """Resolve 'rest' against this object's own parents, in order"""
        for parent in self._parents.values():
            try:
                target, _ = parent._resolve(rest, delegated=True)
            except (MethodNotFoundError, UnknownPathError):
                continue
            return target

        raise MethodNotFoundError(qualified_name, self._name)

    def _find_bare(self, name: str) -> Optional[Tuple[Target, str]]:
        """Find a bare name locally, then in parents (depth-first)"""
        if name in self._methods:
            entry = self._methods[name]
            if isinstance(entry, StateCell):
                return partial(_read_cell, entry), 'cell'
            return entry, 'local'

        for parent in self._parents.values():
            found = parent._find_bare(name)
            if found is not None:
                return found[0], 'inherited'

        return None

    def _log_failure(self, qualified_name: str, error: Exception) -> None:
        if not self.logger:
            return
        try:
            self.logger.error(
                f'{qualified_name} failed: {error}',
                method=qualified_name,
                status='error',
                error=str(error),
            )
        except OSError:
            # The caller gets the call's own error, not the log file's
            pass

    def __repr__(self) -> str:
        kind = 'root' if self._is_root else 'delegate'
        return f'<Dispatcher {self._name} ({kind})>'


def _read_cell(cell: StateCell, *args, **kwargs) -> Any:
    # Arguments are ignored: outside callers can only read
    return cell.get()


def create_object(
    methods: MutableMapping[str, Any],
    parents: MutableMapping[str, Dispatcher],
    is_root: bool = True,
    name: Optional[str] = None,
    config: Optional[RuntimeConfig] = None,
    logger: Optional[SelfLogger] = None,
) -> Dispatcher:
    """
    Create an object from a method table and a parent table.

    Args:
        methods: name -> callable or StateCell (not copied)
        parents: parent name -> Dispatcher (not copied; order matters
                 for inherited and SUPER lookups)
        is_root: False when built as a delegate of another object
        name: Label used in errors and logs
        config: Runtime settings (default: process-wide config)
        logger: Optional per-object dispatch log

    Returns:
        The object's dispatcher
    """
    return Dispatcher(
        methods,
        parents,
        is_root=is_root,
        name=name,
        config=config,
        logger=logger,
    )
