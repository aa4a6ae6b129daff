import pytest

from app.core.config import Settings
from media.adapters.outbound.providers import RapidApiProvider, TikwmProvider
from media.services.provider_registry import ProviderRegistry, build_default_registry


def test_should_keep_default_order_most_reliable_first():
    registry = build_default_registry(Settings(rapidapi_key=None))
    assert registry.names == ["tikwm", "tikdown", "snaptik", "tikdown-api", "ssstik"]


def test_should_add_keyed_provider_only_when_configured():
    registry = build_default_registry(Settings(rapidapi_key="secret", rapidapi_host="api.example.com"))
    assert registry.names[-1] == "rapidapi"
    provider = registry.get("rapidapi")
    assert isinstance(provider, RapidApiProvider)
    req = provider.build_request("https://www.tiktok.com/@u/video/1")
    assert req.headers["X-RapidAPI-Key"] == "secret"
    assert req.headers["X-RapidAPI-Host"] == "api.example.com"


def test_should_apply_configured_timeout_to_every_provider():
    registry = build_default_registry(Settings(rapidapi_key=None, provider_timeout_seconds=11))
    assert {p.timeout for p in registry} == {11}


def test_should_reject_duplicate_names():
    with pytest.raises(ValueError):
        ProviderRegistry([TikwmProvider(), TikwmProvider()])


def test_should_reject_empty_registry():
    with pytest.raises(ValueError):
        ProviderRegistry([])


def test_should_be_read_only():
    providers = [TikwmProvider()]
    registry = ProviderRegistry(providers)
    providers.append(RapidApiProvider("k", "h"))
    assert len(registry) == 1


def test_rapidapi_provider_requires_a_key():
    with pytest.raises(ValueError):
        RapidApiProvider("", "api.example.com")
