"""
Factories

A factory is the "class body" of an object: a function that fills a method
table and a parent table and hands back the object's dispatcher.

Construction convention:
- counter()              -> root object (its own dispatcher is the base)
- counter(base, ...)     -> delegate object, built as a parent of 'base'

The leading Dispatcher argument is exactly what marks an object as a
delegate. Delegates never run their fallback; only the root does.

Example:
    @factory
    def counter(this, start=0):
        count = this.expose('value', start)

        @this.method
        def inc():
            count.set(count.get() + 1)
            return count.get()

    c = counter()
    c('inc'); c('inc')
    c('value')   # 2
"""

from typing import Any, Callable, Dict, MutableMapping, Optional

from ..config import RuntimeConfig
from .cells import StateCell
from .dispatcher import Dispatcher, create_object
from .errors import FactoryError
from .self_logger import SelfLogger


class ObjectContext:
    """
    Private, per-instance view a factory body works through.

    Behaviors close over it. Calls made through invoke() are anchored
    here: qualified names (SUPER::m, p::m) resolve against this object's
    own parents, bare names go to the base (the outermost object of the
    delegation chain) so overrides in derived objects win.
    """

    def __init__(
        self,
        dispatcher: Dispatcher,
        methods: MutableMapping[str, Any],
        parents: MutableMapping[str, Dispatcher],
        base: Dispatcher,
    ):
        self.dispatcher = dispatcher
        self.methods = methods
        self.parents = parents
        self.base = base

    @property
    def is_root(self) -> bool:
        return self.dispatcher.is_root

    @property
    def config(self) -> RuntimeConfig:
        return self.dispatcher.config

    def define(self, name: str, behavior: Callable[..., Any]) -> Callable[..., Any]:
        """Register a behavior (replaces any earlier binding of the name)"""
        self.methods[name] = behavior
        return behavior

    def method(self, name_or_behavior: Any = None):
        """
        Decorator form of define().

            @this.method
            def inc(): ...

            @this.method('value-of')
            def value_of(): ...
        """
        if callable(name_or_behavior):
            return self.define(name_or_behavior.__name__, name_or_behavior)

        def register(behavior):
            return self.define(name_or_behavior or behavior.__name__, behavior)

        return register

    def __setitem__(self, name: str, value: Any) -> None:
        self.methods[name] = value

    def expose(self, name: str, initial: Any = None) -> StateCell:
        """Create a state cell, expose it read-only under 'name', return it"""
        cell = StateCell(initial)
        self.methods[name] = cell
        return cell

    def inherit(self, name: str, parent_factory: Callable[..., Dispatcher], *args, **kwargs) -> Dispatcher:
        """
        Build a parent from another factory and register it as 'name'.

        The parent gets this object's base, so it is a delegate and its
        own virtual calls land on the outermost object.
        """
        parent = parent_factory(self.base, *args, **kwargs)
        if not isinstance(parent, Dispatcher):
            raise FactoryError(
                f"Parent factory for '{name}' returned {type(parent).__name__}, "
                f"not a Dispatcher"
            )
        self.parents[name] = parent
        return parent

    def invoke(self, qualified_name: str, *args, **kwargs) -> Any:
        """Call a method the way behaviors should: paths here, bare names on base"""
        if self.dispatcher.separator in qualified_name:
            return self.dispatcher.invoke(qualified_name, *args, **kwargs)
        return self.base.invoke(qualified_name, *args, **kwargs)

    __call__ = invoke

    def super(self, qualified_name: str, *args, **kwargs) -> Any:
        """Shorthand for invoke('SUPER::<name>', ...)"""
        dispatcher = self.dispatcher
        return dispatcher.invoke(
            f'{dispatcher.super_token}{dispatcher.separator}{qualified_name}',
            *args,
            **kwargs,
        )


class Factory:
    """
    Callable produced by @factory.

    Calling it builds a fresh object: new tables, new dispatcher, new
    context, then the body runs to populate them.
    """

    def __init__(self, body: Callable[..., Any], name: Optional[str] = None):
        self.body = body
        self.name = name or body.__name__
        self.__name__ = self.name
        self.__doc__ = body.__doc__
        self.__wrapped__ = body

    def __call__(self, *args, **kwargs) -> Dispatcher:
        return self.construct(args, kwargs)

    def construct(
        self,
        args: tuple = (),
        kwargs: Optional[Dict[str, Any]] = None,
        config: Optional[RuntimeConfig] = None,
        logger: Optional[SelfLogger] = None,
    ) -> Dispatcher:
        """
        Build an object.

        Args:
            args: Factory arguments; a leading Dispatcher is the base
            kwargs: Factory keyword arguments
            config: Settings for a root object (delegates use their base's)
            logger: Dispatch log for a root object

        Returns:
            The new object's dispatcher
        """
        kwargs = kwargs or {}

        if args and isinstance(args[0], Dispatcher):
            base, args = args[0], args[1:]
            if logger is not None:
                raise FactoryError(f"Delegate '{self.name}' can't take a logger")
            config = base.config
        else:
            base = None

        methods: Dict[str, Any] = {}
        parents: Dict[str, Dispatcher] = {}

        dispatcher = create_object(
            methods,
            parents,
            is_root=base is None,
            name=self.name,
            config=config,
            logger=logger,
        )

        this = ObjectContext(dispatcher, methods, parents, base or dispatcher)

        result = self.body(this, *args, **kwargs)
        if result is not None and result is not dispatcher:
            raise FactoryError(
                f"Factory '{self.name}' body must not return a value "
                f"(got {type(result).__name__})"
            )

        return dispatcher

    def __repr__(self) -> str:
        return f'<Factory {self.name}>'


def factory(body: Optional[Callable[..., Any]] = None, *, name: Optional[str] = None):
    """
    Turn a body function into a factory.

        @factory
        def point(this, x, y): ...

        @factory(name='Point')
        def point(this, x, y): ...
    """
    if body is None:
        return lambda fn: Factory(fn, name=name)
    return Factory(body, name=name)
