from typing import Iterator, List, Sequence, Tuple

from app.core.config import Settings
from media.adapters.outbound.providers import (
    RapidApiProvider,
    SnaptikProvider,
    SsstikProvider,
    TikdownApiProvider,
    TikdownProvider,
    TikwmProvider,
)
from media.ports.outbound.media_provider_port import MediaProviderPort


class ProviderRegistry:
    """Immutable, ordered provider list. Order is resolution order (most reliable first)."""

    def __init__(self, providers: Sequence[MediaProviderPort]):
        if not providers:
            raise ValueError("ProviderRegistry needs at least one provider")
        names = [p.name for p in providers]
        dupes = sorted({n for n in names if names.count(n) > 1})
        if dupes:
            raise ValueError(f"duplicate provider names: {', '.join(dupes)}")
        self._providers: Tuple[MediaProviderPort, ...] = tuple(providers)

    def __iter__(self) -> Iterator[MediaProviderPort]:
        return iter(self._providers)

    def __len__(self) -> int:
        return len(self._providers)

    @property
    def names(self) -> List[str]:
        return [p.name for p in self._providers]

    def get(self, name: str) -> MediaProviderPort:
        for p in self._providers:
            if p.name == name:
                return p
        raise KeyError(name)


def build_default_registry(settings: Settings) -> ProviderRegistry:
    timeout = settings.provider_timeout_seconds
    providers: List[MediaProviderPort] = [
        TikwmProvider(timeout=timeout),
        TikdownProvider(timeout=timeout),
        SnaptikProvider(timeout=timeout),
        TikdownApiProvider(timeout=timeout),
        SsstikProvider(timeout=timeout),
    ]
    if settings.rapidapi_key:
        providers.append(RapidApiProvider(settings.rapidapi_key, settings.rapidapi_host, timeout=timeout))
    return ProviderRegistry(providers)
