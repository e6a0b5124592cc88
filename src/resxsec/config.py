"""Configuration registries and the pool of named parameter sets.

A `Registry` is an immutable mapping of configuration keys to values with typed
accessors. A `ConfigPool` collects the registries of all algorithms, keyed by algorithm
name and parameter set name, as well as one global parameter list that algorithms fall
back to when a key is not configured locally. Pools are read from YAML files that are
validated with a JSON schema (see :file:`schemas/config.json`).
"""

from __future__ import annotations

import json
import logging
from collections import abc
from functools import cache
from os.path import dirname, join, realpath
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

import jsonschema
import yaml
from attrs import field, frozen
from attrs.validators import instance_of

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

_LOGGER = logging.getLogger(__name__)

_PACKAGE_PATH = dirname(realpath(__file__))
DEFAULT_CONFIG_FILE = join(_PACKAGE_PATH, "data", "default_config.yml")
GLOBAL_PARAMETER_LIST = "GlobalParameterList"

with open(join(_PACKAGE_PATH, "schemas", "config.json")) as stream:
    _SCHEMA_CONFIG = json.load(stream)


def _to_entries(mapping: Mapping[str, Any]) -> Mapping[str, Any]:
    return MappingProxyType(dict(mapping))


@frozen
class Registry(abc.Mapping):
    """Named, read-only set of configuration values.

    >>> reg = Registry("demo", {"Zeta": 0.76, "weight-with-breit-wigner": False})
    >>> reg.get_float("Zeta")
    0.76
    >>> reg.get_bool_def("use-dis-res-joining-scheme", False)
    False
    """

    name: str = field(validator=instance_of(str))
    entries: Mapping[str, Any] = field(
        factory=dict, converter=_to_entries, eq=dict, hash=False, repr=False
    )

    def __getitem__(self, key: str) -> Any:
        try:
            return self.entries[key]
        except KeyError:
            msg = f'Registry "{self.name}" has no key "{key}"'
            raise KeyError(msg) from None

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def get_float(self, key: str) -> float:
        value = self[key]
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            msg = f'Key "{key}" of registry "{self.name}" is not a number: {value!r}'
            raise TypeError(msg)
        return float(value)

    def get_int(self, key: str) -> int:
        value = self[key]
        if isinstance(value, bool) or not isinstance(value, int):
            msg = f'Key "{key}" of registry "{self.name}" is not an integer: {value!r}'
            raise TypeError(msg)
        return value

    def get_bool(self, key: str) -> bool:
        value = self[key]
        if not isinstance(value, bool):
            msg = f'Key "{key}" of registry "{self.name}" is not a boolean: {value!r}'
            raise TypeError(msg)
        return value

    def get_str(self, key: str) -> str:
        value = self[key]
        if not isinstance(value, str):
            msg = f'Key "{key}" of registry "{self.name}" is not a string: {value!r}'
            raise TypeError(msg)
        return value

    def get_float_def(self, key: str, default: float) -> float:
        if key not in self:
            return default
        return self.get_float(key)

    def get_bool_def(self, key: str, default: bool) -> bool:
        if key not in self:
            return default
        return self.get_bool(key)

    def get_str_def(self, key: str, default: str) -> str:
        if key not in self:
            return default
        return self.get_str(key)

    def updated(self, **values: Any) -> Registry:
        """Create a copy of this `Registry` with some values overwritten."""
        return Registry(self.name, {**self.entries, **values})


@frozen
class ConfigPool:
    """Collection of configuration registries for all algorithms.

    Use :meth:`find_registry` to get the parameter set of a specific algorithm and
    `global_parameter_list` for the values that are shared by all algorithms.
    """

    global_parameter_list: Registry = field(validator=instance_of(Registry))
    registries: Mapping[tuple[str, str], Registry] = field(
        factory=dict, converter=_to_entries, eq=dict, hash=False, repr=False
    )

    @staticmethod
    def default() -> ConfigPool:
        """Pool as defined by the configuration file that comes with the package."""
        return _load_default_pool()

    def find_registry(self, algorithm: str, param_set: str) -> Registry:
        registry = self.registries.get((algorithm, param_set))
        if registry is None:
            msg = f'No parameter set "{param_set}" for algorithm "{algorithm}"'
            raise KeyError(msg)
        return registry

    def __contains__(self, key: object) -> bool:
        return key in self.registries


def load_config_pool(filename: str) -> ConfigPool:
    with open(filename) as yaml_file:
        definition = yaml.load(yaml_file, Loader=yaml.SafeLoader)
    return build_config_pool(definition)


def build_config_pool(definition: dict) -> ConfigPool:
    validate_config(definition)
    global_list = Registry(GLOBAL_PARAMETER_LIST, definition[GLOBAL_PARAMETER_LIST])
    registries: dict[tuple[str, str], Registry] = {}
    for algorithm, param_sets in definition.get("Algorithms", {}).items():
        for param_set, values in param_sets.items():
            name = f"{algorithm}/{param_set}"
            registries[(algorithm, param_set)] = Registry(name, values or {})
    _LOGGER.debug(f"Loaded {len(registries)} algorithm parameter sets")
    return ConfigPool(global_list, registries)


def validate_config(instance: dict) -> None:
    jsonschema.validate(instance=instance, schema=_SCHEMA_CONFIG)


@cache
def _load_default_pool() -> ConfigPool:
    return load_config_pool(DEFAULT_CONFIG_FILE)
