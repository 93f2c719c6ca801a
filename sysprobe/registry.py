"""Registration of the host and process providers for the running platform."""

from __future__ import annotations

from typing import Any, Optional


class ProviderAlreadyRegisteredError(RuntimeError):
    """Raised when a second provider of the same kind is registered."""


def _is_host_provider(provider: Any) -> bool:
    return callable(getattr(provider, "host", None))


def _is_process_provider(provider: Any) -> bool:
    return all(
        callable(getattr(provider, name, None))
        for name in ("processes", "process", "self")
    )


class Registry:
    """Holds at most one host provider and one process provider."""

    def __init__(self) -> None:
        self._host_provider: Optional[Any] = None
        self._process_provider: Optional[Any] = None

    def register(self, provider: Any) -> None:
        """Register provider for every provider role it fulfils."""
        if _is_host_provider(provider):
            if self._host_provider is not None:
                raise ProviderAlreadyRegisteredError(
                    f"HostProvider already registered: {self._host_provider!r}"
                )
            self._host_provider = provider

        if _is_process_provider(provider):
            if self._process_provider is not None:
                raise ProviderAlreadyRegisteredError(
                    f"ProcessProvider already registered: {self._process_provider!r}"
                )
            self._process_provider = provider

    def host_provider(self) -> Optional[Any]:
        """Return the registered host provider, or None."""
        return self._host_provider

    def process_provider(self) -> Optional[Any]:
        """Return the registered process provider, or None."""
        return self._process_provider


_registry = Registry()


def register(provider: Any) -> None:
    """Register provider with the process-wide registry."""
    _registry.register(provider)


def get_host_provider() -> Optional[Any]:
    """Return the process-wide host provider, or None."""
    return _registry.host_provider()


def get_process_provider() -> Optional[Any]:
    """Return the process-wide process provider, or None."""
    return _registry.process_provider()