from __future__ import annotations

import pytest

from resxsec.algorithm import (
    Algorithm,
    AlgorithmFactory,
    ConfigurationError,
    default_factory,
    register_algorithm,
    registered_algorithms,
)
from resxsec.amplitude import HelicityAmplitudeModel, HelicityAmplitudeModelCC
from resxsec.config import ConfigPool, Registry, build_config_pool
from resxsec.resonance import BaryonResonanceDataPDG
from resxsec.xsec import ReinSehgalRESPXSec


@register_algorithm
class _FallbackDemo(Algorithm):
    name = "resxsec::test::FallbackDemo"

    def _load_config(self) -> None:
        self.zeta = self._get_float("Zeta", "RS-Zeta")


@pytest.fixture
def demo_factory() -> AlgorithmFactory:
    pool = build_config_pool({
        "GlobalParameterList": {"RS-Zeta": 0.762},
        "Algorithms": {
            _FallbackDemo.name: {
                "Default": None,
                "Local": {"Zeta": 0.5},
                "WrongType": {"Zeta": "high"},
            },
        },
    })
    return AlgorithmFactory(pool)


def test_registered_algorithms():
    names = set(registered_algorithms())
    assert {
        "resxsec::BaryonResonanceDataPDG",
        "resxsec::BreitWignerLRes",
        "resxsec::BreitWignerRes",
        "resxsec::HelicityAmplitudeModelCC",
        "resxsec::HelicityAmplitudeModelNCn",
        "resxsec::HelicityAmplitudeModelNCp",
        "resxsec::ReinSehgalRESPXSec",
    } <= names


def test_register_name_clash():
    class Clash(Algorithm):
        name = ReinSehgalRESPXSec.name

    with pytest.raises(ValueError, match="already taken"):
        register_algorithm(Clash)


def test_default_factory():
    factory = default_factory()
    assert factory is default_factory()
    assert factory.config_pool is ConfigPool.default()


class TestAlgorithmFactory:
    def test_instances_are_cached(self, factory: AlgorithmFactory):
        data_set = factory.get_algorithm(BaryonResonanceDataPDG.name)
        assert isinstance(data_set, BaryonResonanceDataPDG)
        assert data_set.is_configured
        assert data_set.param_set == "Default"
        assert factory.get_algorithm(BaryonResonanceDataPDG.name) is data_set
        assert AlgorithmFactory(factory.config_pool).get_algorithm(
            BaryonResonanceDataPDG.name
        ) is not data_set

    def test_sub_algorithms_are_shared(self, factory: AlgorithmFactory):
        xsec1 = factory.get_algorithm(ReinSehgalRESPXSec.name, "Default")
        xsec2 = factory.get_algorithm(ReinSehgalRESPXSec.name, "NoBreitWigner")
        assert xsec1 is not xsec2
        assert factory.get_algorithm(BaryonResonanceDataPDG.name, "Default") is (
            factory.get_algorithm(BaryonResonanceDataPDG.name, "Default")
        )

    def test_unknown_name(self, factory: AlgorithmFactory):
        with pytest.raises(ConfigurationError, match="No algorithm"):
            factory.get_algorithm("resxsec::DoesNotExist")

    def test_unknown_param_set(self, factory: AlgorithmFactory):
        with pytest.raises(ConfigurationError, match="Unknown"):
            factory.get_algorithm(BaryonResonanceDataPDG.name, "Unknown")

    def test_wrong_kind(self, factory: AlgorithmFactory):
        with pytest.raises(ConfigurationError, match="not a HelicityAmplitudeModel"):
            factory.get_algorithm(
                BaryonResonanceDataPDG.name, "Default", HelicityAmplitudeModel
            )

    def test_adopt(self, factory: AlgorithmFactory):
        stub = HelicityAmplitudeModelCC("Default", factory=factory)
        factory.adopt(stub)
        assert factory.get_algorithm(HelicityAmplitudeModelCC.name) is stub


class TestAlgorithm:
    def test_global_fallback(self, demo_factory: AlgorithmFactory):
        demo = demo_factory.get_algorithm(_FallbackDemo.name, "Default")
        assert demo.zeta == 0.762  # type: ignore[attr-defined]

    def test_local_override(self, demo_factory: AlgorithmFactory):
        demo = demo_factory.get_algorithm(_FallbackDemo.name, "Local")
        assert demo.zeta == 0.5  # type: ignore[attr-defined]

    def test_configure_with_registry_or_name(self, demo_factory: AlgorithmFactory):
        demo = _FallbackDemo(factory=demo_factory)
        assert not demo.is_configured
        demo.configure(Registry("inline", {"Zeta": 0.25}))
        assert demo.zeta == 0.25
        demo.configure("Local")
        assert demo.zeta == 0.5
        assert demo.param_set == "Local"
        demo.configure("Local")
        assert demo.zeta == 0.5

    def test_wrong_value_type(self, demo_factory: AlgorithmFactory):
        demo = _FallbackDemo(factory=demo_factory)
        with pytest.raises(ConfigurationError, match="not a number"):
            demo.configure("WrongType")
        assert not demo.is_configured

    def test_failed_configure_keeps_param_set(self, demo_factory: AlgorithmFactory):
        demo = _FallbackDemo("Local", factory=demo_factory)
        demo.configure("Local")
        with pytest.raises(ConfigurationError):
            demo.configure("WrongType")
        assert demo.param_set == "Local"
        assert "WrongType" not in repr(demo)
        with pytest.raises(ConfigurationError):
            demo.configure("Unknown")
        assert demo.param_set == "Local"

    def test_missing_key(self):
        pool = build_config_pool({"GlobalParameterList": {}})
        demo = _FallbackDemo(factory=AlgorithmFactory(pool))
        with pytest.raises(ConfigurationError, match='no global default "RS-Zeta"'):
            demo.configure(Registry("empty"))
        assert not demo.is_configured
        with pytest.raises(ConfigurationError, match="has not been configured"):
            _ = demo.config

    def test_configure_with_wrong_type(self, demo_factory: AlgorithmFactory):
        demo = _FallbackDemo(factory=demo_factory)
        with pytest.raises(TypeError):
            demo.configure(0.5)  # type: ignore[arg-type]
