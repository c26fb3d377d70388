"""
Object Runtime

Ties class files, configuration and self-logging together.

The runtime:
- Loads class files and registers the factories they define
- Injects itself into each class file (as _runtime) so factories can
  build other registered objects
- Builds root objects by factory name
- Gives each root object its own dispatch log when log_dir is configured
"""

from pathlib import Path
from types import ModuleType
from typing import Dict, List, Optional

from ..config import RuntimeConfig, default_config
from ..core.dispatcher import Dispatcher
from ..core.errors import FactoryError
from ..core.factory import Factory
from ..core.self_logger import SelfLogger
from .class_loader import get_factories, load_class_file


class ObjectRuntime:
    """
    Runtime for closure objects.

    Provides a registry of factories and builds logged root objects.
    """

    def __init__(
        self,
        base_dir: Optional[Path | str] = None,
        config: Optional[RuntimeConfig] = None,
    ):
        """
        Initialize runtime.

        Args:
            base_dir: Base directory for logs (default: config's log_dir;
                      no logging when neither is set)
            config: Runtime settings (default: process-wide config)
        """
        self.config = config or default_config()

        log_dir = base_dir if base_dir is not None else self.config.log_dir
        self.base_dir = Path(log_dir) if log_dir is not None else None
        if self.base_dir is not None:
            self.base_dir.mkdir(parents=True, exist_ok=True)

        self._factories: Dict[str, Factory] = {}
        self._counts: Dict[str, int] = {}

    def load(self, path: str | Path, reload: bool = False) -> ModuleType:
        """
        Load a class file and register its factories.

        Args:
            path: Path to class file (.py)
            reload: Re-execute the file even if cached

        Returns:
            The class file's module
        """
        module = load_class_file(path, reload=reload)

        # Enable object composition from inside class files
        module._runtime = self

        for name, found in get_factories(module).items():
            self.register(found, name=name)

        return module

    def register(self, factory: Factory, name: Optional[str] = None) -> None:
        """Register a factory (last registration of a name wins)"""
        if not isinstance(factory, Factory):
            raise FactoryError(f'Not a factory: {factory!r}')
        self._factories[name or factory.name] = factory

    def factories(self) -> List[str]:
        """Registered factory names"""
        return list(self._factories)

    def new(self, factory_name: str, *args, **kwargs) -> Dispatcher:
        """
        Build a root object from a registered factory.

        Args:
            factory_name: Name the factory was registered under
            *args, **kwargs: Factory arguments

        Returns:
            The object's dispatcher
        """
        if factory_name not in self._factories:
            raise FactoryError(
                f"Unknown factory: '{factory_name}'. "
                f"Registered: {', '.join(self._factories) or 'none'}"
            )

        if args and isinstance(args[0], Dispatcher):
            raise FactoryError('ObjectRuntime.new() only builds root objects')

        count = self._counts.get(factory_name, 0) + 1
        self._counts[factory_name] = count
        object_id = f'{factory_name}-{count}'

        logger = None
        if self.base_dir is not None:
            logger = SelfLogger(
                object_id=object_id,
                base_dir=self.base_dir,
                max_log_size=self.config.max_log_size,
                min_level=self.config.log_level,
            )

        obj = self._factories[factory_name].construct(
            args,
            kwargs,
            config=self.config,
            logger=logger,
        )

        if logger:
            logger.info(
                f'Created {factory_name}',
                object_id=object_id,
                factory=factory_name,
            )

        return obj

    def get_logs(self, object_id: str, **filters) -> List[Dict[str, str]]:
        """Get an object's dispatch log by object id"""
        if self.base_dir is None:
            return []
        log_dir = self.base_dir / 'logs' / object_id
        if not log_dir.exists():
            return []
        return SelfLogger(object_id=object_id, base_dir=self.base_dir).get_logs(**filters)
