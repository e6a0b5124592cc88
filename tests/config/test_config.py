from __future__ import annotations

from typing import TYPE_CHECKING

import jsonschema
import pytest

from resxsec.config import (
    GLOBAL_PARAMETER_LIST,
    ConfigPool,
    Registry,
    build_config_pool,
    load_config_pool,
)

if TYPE_CHECKING:
    from pathlib import Path


class TestRegistry:
    @pytest.fixture(scope="class")
    def registry(self) -> Registry:
        return Registry(
            "test/Default",
            {"Zeta": 0.76, "N": 3, "flag": True, "alg": "resxsec::Dummy"},
        )

    def test_mapping(self, registry: Registry):
        assert len(registry) == 4
        assert "Zeta" in registry
        assert set(registry) == {"Zeta", "N", "flag", "alg"}

    def test_typed_accessors(self, registry: Registry):
        assert registry.get_float("Zeta") == 0.76
        assert registry.get_float("N") == 3.0
        assert registry.get_int("N") == 3
        assert registry.get_bool("flag") is True
        assert registry.get_str("alg") == "resxsec::Dummy"

    @pytest.mark.parametrize(
        ("getter", "key"),
        [
            ("get_float", "flag"),
            ("get_float", "alg"),
            ("get_int", "Zeta"),
            ("get_bool", "N"),
            ("get_str", "Zeta"),
        ],
    )
    def test_wrong_type(self, registry: Registry, getter: str, key: str):
        with pytest.raises(TypeError, match=key):
            getattr(registry, getter)(key)

    def test_missing_key(self, registry: Registry):
        with pytest.raises(KeyError, match="Omega"):
            registry.get_float("Omega")
        assert registry.get_float_def("Omega", 1.05) == 1.05
        assert registry.get_bool_def("other-flag", False) is False
        assert registry.get_str_def("other", "x") == "x"
        assert registry.get_bool_def("flag", False) is True

    def test_updated(self, registry: Registry):
        new = registry.updated(Zeta=0.5)
        assert new.get_float("Zeta") == 0.5
        assert registry.get_float("Zeta") == 0.76
        assert new.name == registry.name

    def test_immutable(self, registry: Registry):
        with pytest.raises(AttributeError):
            registry.name = "other"  # type: ignore[misc]
        with pytest.raises(TypeError):
            registry["Zeta"] = 1.0  # type: ignore[index]
        with pytest.raises(TypeError):
            registry.entries["Zeta"] = 1.0  # type: ignore[index]
        assert registry.get_float("Zeta") == 0.76

    def test_input_is_copied(self):
        values = {"Zeta": 0.76}
        registry = Registry("copy", values)
        values["Zeta"] = 1.0
        assert registry.get_float("Zeta") == 0.76

    def test_hash_and_equality(self, registry: Registry):
        same = Registry(registry.name, dict(registry.entries))
        assert same == registry
        assert hash(same) == hash(registry)
        assert registry.updated(Zeta=0.5) != registry
        assert len({registry, same}) == 1


class TestConfigPool:
    def test_default(self, config_pool: ConfigPool):
        assert config_pool is ConfigPool.default()
        global_list = config_pool.global_parameter_list
        assert global_list.name == GLOBAL_PARAMETER_LIST
        assert global_list.get_float("RS-Zeta") == 0.762
        assert global_list.get_float("RS-Omega") == 1.05
        assert global_list.get_float("RES-Ma") == 1.12
        assert global_list.get_float("RES-Mv") == 0.84
        assert global_list.get_float("Wcut") == 1.7

    def test_find_registry(self, config_pool: ConfigPool):
        registry = config_pool.find_registry("resxsec::ReinSehgalRESPXSec", "Default")
        assert registry.name == "resxsec::ReinSehgalRESPXSec/Default"
        assert registry.get_bool("weight-with-breit-wigner") is True
        empty = config_pool.find_registry("resxsec::HelicityAmplitudeModelCC", "Default")
        assert len(empty) == 0
        assert ("resxsec::BreitWignerRes", "Default") in config_pool

    def test_find_registry_missing(self, config_pool: ConfigPool):
        with pytest.raises(KeyError, match="Unknown"):
            config_pool.find_registry("resxsec::ReinSehgalRESPXSec", "Unknown")

    def test_read_only(self, config_pool: ConfigPool):
        key = ("resxsec::ReinSehgalRESPXSec", "Default")
        registry = config_pool.find_registry(*key)
        with pytest.raises(TypeError):
            config_pool.registries[key] = Registry("other")  # type: ignore[index]
        with pytest.raises(TypeError):
            registry.entries["Zeta"] = 0.5  # type: ignore[index]
        assert "Zeta" not in config_pool.find_registry(*key)
        assert hash(config_pool) == hash(ConfigPool.default())

    def test_invalid_definition(self):
        with pytest.raises(jsonschema.ValidationError):
            build_config_pool({"Algorithms": {}})
        with pytest.raises(jsonschema.ValidationError):
            build_config_pool({
                GLOBAL_PARAMETER_LIST: {"RS-Zeta": [0.762]},
            })

    def test_load_from_file(self, tmp_path: Path):
        filename = tmp_path / "config.yml"
        filename.write_text(
            "GlobalParameterList:\n"
            "  RS-Zeta: 0.7\n"
            "Algorithms:\n"
            "  resxsec::Dummy:\n"
            "    Default:\n"
            "    Other:\n"
            "      key: value\n"
        )
        pool = load_config_pool(str(filename))
        assert pool.global_parameter_list.get_float("RS-Zeta") == 0.7
        assert len(pool.find_registry("resxsec::Dummy", "Default")) == 0
        assert pool.find_registry("resxsec::Dummy", "Other").get_str("key") == "value"
