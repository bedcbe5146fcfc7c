"""Bind free-standing augmentation functions to a dependency-injected service.

A `RegistryCell` is initialized once at bootstrap from a provider (anything
with `get_service(token)`, a container exposing `resolve(token)`, or a
mapping). Augmentation functions built with `augmentation` read the cell on
every call and forward to the bound service.

Exports:
- `RegistryCell`: process-wide slot holding the bound service (or provider).
- `Resolution`: eager or deferred resolution policy of a cell.
- `augmentation`: builds a free function delegating to the bound service.
- `BindingError`: the provider cannot produce the service, or rebinding is refused.
- `UninitializedBindingError`: an augmentation ran before initialization.
- `Provider`, `ServiceCollection`, `ServiceProvider`, `Lifetime`, `as_provider`:
  the minimal bootstrap side used to build providers.
"""

from ._binding import augmentation
from ._cell import BindingError, RegistryCell, Resolution, UninitializedBindingError
from ._provider import Lifetime, Provider, ServiceCollection, ServiceProvider, as_provider


__all__ = [
    "BindingError",
    "Lifetime",
    "Provider",
    "RegistryCell",
    "Resolution",
    "ServiceCollection",
    "ServiceProvider",
    "UninitializedBindingError",
    "as_provider",
    "augmentation",
]
