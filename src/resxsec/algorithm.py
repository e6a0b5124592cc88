"""Configurable algorithms and the factory that resolves them by name.

Every physics component (cross section, resonance data set, Breit-Wigner weighter,
helicity amplitude model) is an `Algorithm`. An algorithm has a unique
:attr:`~Algorithm.name` and is configured from a `.Registry`, either one that is passed
in directly or one that is looked up by parameter set name in the `.ConfigPool` of an
`AlgorithmFactory`.

An algorithm that depends on other algorithms resolves them through its factory with
:meth:`~Algorithm.sub_algorithm`. The factory creates each :code:`(name, param_set)`
instance only once, so that sub-algorithms are shared, read-only collaborators.
"""

from __future__ import annotations

import logging
from functools import cache
from typing import TYPE_CHECKING, Callable, ClassVar, Protocol, TypeVar

from resxsec.config import ConfigPool, Registry

if TYPE_CHECKING:
    from collections.abc import Iterator

_LOGGER = logging.getLogger(__name__)

DEFAULT_PARAM_SET = "Default"

_ALGORITHM_CLASSES: dict[str, type[Algorithm]] = {}

AlgorithmType = TypeVar("AlgorithmType", bound="Algorithm")
_T = TypeVar("_T")


class ConfigurationError(RuntimeError):
    """An algorithm could not be configured and is therefore unusable."""


class SubModelResolver(Protocol):
    """Interface through which an `Algorithm` resolves its collaborators.

    `AlgorithmFactory` is the implementation that comes with the package, but any
    object with these members can be injected, for instance in tests.
    """

    @property
    def config_pool(self) -> ConfigPool: ...

    def get_algorithm(
        self,
        name: str,
        param_set: str = ...,
        kind: type[AlgorithmType] = ...,
    ) -> AlgorithmType: ...


class Algorithm:
    """Base class for all configurable components.

    Sub-classes define a class attribute :attr:`name` and override
    :meth:`_load_config`, which is called each time the algorithm is configured.
    """

    name: ClassVar[str] = "resxsec::Algorithm"

    def __init__(
        self,
        param_set: str = DEFAULT_PARAM_SET,
        factory: SubModelResolver | None = None,
    ) -> None:
        self.__param_set = param_set
        self.__factory = factory
        self.__config: Registry | None = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name}/{self.param_set})"

    @property
    def param_set(self) -> str:
        return self.__param_set

    @property
    def factory(self) -> SubModelResolver:
        if self.__factory is None:
            self.__factory = default_factory()
        return self.__factory

    @property
    def config(self) -> Registry:
        if self.__config is None:
            msg = f"{self!r} has not been configured"
            raise ConfigurationError(msg)
        return self.__config

    @property
    def is_configured(self) -> bool:
        return self.__config is not None

    def configure(self, config: Registry | str) -> None:
        """Configure with a `.Registry` or with the name of a parameter set.

        A parameter set name is looked up in the `.ConfigPool` of the
        :attr:`factory`. Both ways result in a call to :meth:`_load_config`.
        """
        if isinstance(config, str):
            try:
                registry = self.factory.config_pool.find_registry(self.name, config)
            except KeyError as exc:
                raise ConfigurationError(str(exc)) from exc
            param_set = config
        elif isinstance(config, Registry):
            registry = config
            param_set = self.__param_set
        else:
            msg = f"Cannot configure {self!r} with a {type(config).__name__}"
            raise TypeError(msg)
        self.__config = registry
        try:
            self._load_config()
        except Exception:
            self.__config = None
            raise
        self.__param_set = param_set

    def _load_config(self) -> None:
        """Load configuration values and sub-algorithms."""

    def _global(self) -> Registry:
        return self.factory.config_pool.global_parameter_list

    def _get_float(self, key: str, global_key: str | None = None) -> float:
        """Get a local value, falling back to :code:`global_key` in the global list."""
        return self.__get(key, global_key, Registry.get_float)

    def _get_str(self, key: str, global_key: str | None = None) -> str:
        return self.__get(key, global_key, Registry.get_str)

    def _get_bool_def(self, key: str, default: bool) -> bool:
        try:
            return self.config.get_bool_def(key, default)
        except TypeError as exc:
            raise ConfigurationError(str(exc)) from exc

    def _get_float_def(self, key: str, default: float) -> float:
        try:
            return self.config.get_float_def(key, default)
        except TypeError as exc:
            raise ConfigurationError(str(exc)) from exc

    def __get(
        self,
        key: str,
        global_key: str | None,
        getter: Callable[[Registry, str], _T],
    ) -> _T:
        try:
            if key in self.config:
                return getter(self.config, key)
            if global_key is not None and global_key in self._global():
                return getter(self._global(), global_key)
        except TypeError as exc:
            raise ConfigurationError(str(exc)) from exc
        msg = f'{self!r}: no value for "{key}"'
        if global_key is not None:
            msg += f' and no global default "{global_key}"'
        raise ConfigurationError(msg)

    def sub_algorithm(
        self,
        name_key: str,
        param_set_key: str,
        kind: type[AlgorithmType],
    ) -> AlgorithmType:
        """Resolve a sub-algorithm whose name and parameter set are configured."""
        name = self._get_str(name_key)
        param_set = self._get_str(param_set_key)
        return self.factory.get_algorithm(name, param_set, kind)


def register_algorithm(cls: type[AlgorithmType]) -> type[AlgorithmType]:
    """Class decorator that makes an `Algorithm` available to `AlgorithmFactory`."""
    if cls.name in _ALGORITHM_CLASSES and _ALGORITHM_CLASSES[cls.name] is not cls:
        msg = f'Algorithm name "{cls.name}" is already taken'
        raise ValueError(msg)
    _ALGORITHM_CLASSES[cls.name] = cls
    return cls


def registered_algorithms() -> Iterator[str]:
    return iter(sorted(_ALGORITHM_CLASSES))


class AlgorithmFactory:
    """Create, configure, and cache algorithm instances.

    Instances are created once per :code:`(name, param_set)` and then shared. Use
    :meth:`adopt` to insert an instance that has been created elsewhere, for instance a
    stub in a test.
    """

    def __init__(self, config_pool: ConfigPool | None = None) -> None:
        if config_pool is None:
            config_pool = ConfigPool.default()
        self.__config_pool = config_pool
        self.__instances: dict[tuple[str, str], Algorithm] = {}

    @property
    def config_pool(self) -> ConfigPool:
        return self.__config_pool

    def get_algorithm(
        self,
        name: str,
        param_set: str = DEFAULT_PARAM_SET,
        kind: type[AlgorithmType] = Algorithm,  # type: ignore[assignment]
    ) -> AlgorithmType:
        key = (name, param_set)
        instance = self.__instances.get(key)
        if instance is None:
            instance = self.__create(name, param_set)
            self.__instances[key] = instance
        if not isinstance(instance, kind):
            msg = (
                f"Algorithm {name}/{param_set} is a {type(instance).__name__}, not a"
                f" {kind.__name__}"
            )
            raise ConfigurationError(msg)
        return instance

    def adopt(self, instance: Algorithm, param_set: str | None = None) -> None:
        if param_set is None:
            param_set = instance.param_set
        self.__instances[(instance.name, param_set)] = instance

    def __create(self, name: str, param_set: str) -> Algorithm:
        algorithm_class = _ALGORITHM_CLASSES.get(name)
        if algorithm_class is None:
            msg = f'No algorithm with name "{name}"'
            raise ConfigurationError(msg)
        _LOGGER.debug(f"Creating algorithm {name}/{param_set}")
        instance = algorithm_class(param_set, factory=self)
        instance.configure(param_set)
        return instance


@cache
def default_factory() -> AlgorithmFactory:
    """Factory on top of the configuration that comes with the package."""
    return AlgorithmFactory(ConfigPool.default())
