# arbor_ioc/__init__.py
__version__ = "0.1.0"

from .api import bootstrap, reset
from .arguments import ArgumentBag
from .assembly import assemble, combine_reducers
from .config import ContextConfig, InjectorSettings, configuration, load_settings
from .config_sources import DictSource, EnvSource, FlatDictSource, JsonTreeSource, YamlTreeSource
from .container import Container
from .decorators import module, module_factory
from .exceptions import (
    CircularDependencyError,
    ConfigurationError,
    DependencyNotFoundError,
    DIError,
    InvalidProviderError,
    ProviderResolutionError,
    SpreadError,
)
from .injector import Injector
from .metadata import ProviderMeta, use_class, use_existing, use_factory, use_value
from .pending import PendingRecord
from .providers import (
    ClassKind,
    ClassProvider,
    Dependency,
    ExistingProvider,
    FactoryProvider,
    Provider,
    ValueProvider,
    dep,
)

__all__ = [
    "__version__",
    "Injector",
    "Container",
    "PendingRecord",
    "ArgumentBag",
    "bootstrap",
    "reset",
    "module",
    "module_factory",
    "dep",
    "Dependency",
    "ProviderMeta",
    "use_value",
    "use_class",
    "use_existing",
    "use_factory",
    "Provider",
    "ValueProvider",
    "ClassProvider",
    "FactoryProvider",
    "ExistingProvider",
    "ClassKind",
    "assemble",
    "combine_reducers",
    "InjectorSettings",
    "ContextConfig",
    "configuration",
    "load_settings",
    "EnvSource",
    "FlatDictSource",
    "DictSource",
    "JsonTreeSource",
    "YamlTreeSource",
    "DIError",
    "DependencyNotFoundError",
    "ProviderResolutionError",
    "SpreadError",
    "InvalidProviderError",
    "CircularDependencyError",
    "ConfigurationError",
]
