"""Provider registry.

The registry is an ordinary object: build one at startup, register the
providers the application uses, and pass it to whatever needs lookups.
"""

from collections.abc import Iterable, Iterator

from contentbridge.exceptions import ProviderNotFoundError
from contentbridge.models.provider import ProviderInfo
from contentbridge.provider import ContentProvider


class ProviderRegistry:
    """Lookup of providers by ID, preserving registration order.

    Usage::

        registry = ProviderRegistry([lessons, planning_center])
        provider = registry.require("lessonschurch")
    """

    def __init__(self, providers: Iterable[ContentProvider] = ()) -> None:
        self._providers: dict[str, ContentProvider] = {}
        for provider in providers:
            self.register(provider)

    def register(self, provider: ContentProvider, *, replace: bool = False) -> None:
        """Add a provider.

        Args:
            provider: Provider to register.
            replace: Allow overwriting a provider with the same ID.

        Raises:
            ValueError: If the ID is already registered and replace is False.
        """
        if provider.id in self._providers and not replace:
            raise ValueError(f"Provider already registered: {provider.id}")
        self._providers[provider.id] = provider

    def unregister(self, provider_id: str) -> ContentProvider | None:
        """Remove a provider, returning it if it was registered."""
        return self._providers.pop(provider_id, None)

    def get(self, provider_id: str) -> ContentProvider | None:
        """Look up a provider, or None if it is not registered."""
        return self._providers.get(provider_id)

    def require(self, provider_id: str) -> ContentProvider:
        """Look up a provider that must exist.

        Raises:
            ProviderNotFoundError: If no provider has this ID.
        """
        provider = self._providers.get(provider_id)
        if provider is None:
            raise ProviderNotFoundError(f"Unknown provider: {provider_id}")
        return provider

    def providers(self) -> list[ContentProvider]:
        """All providers in registration order."""
        return list(self._providers.values())

    def available(self) -> list[ProviderInfo]:
        """Listing information for all providers."""
        return [provider.info for provider in self._providers.values()]

    def __contains__(self, provider_id: object) -> bool:
        return provider_id in self._providers

    def __len__(self) -> int:
        return len(self._providers)

    def __iter__(self) -> Iterator[ContentProvider]:
        return iter(self._providers.values())
