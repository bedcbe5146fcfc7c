from __future__ import annotations

import inspect
import logging
import threading
import typing
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import (
    TYPE_CHECKING,
    Any,
    Protocol,
    TypeVar,
    cast,
    overload,
    runtime_checkable,
)


logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from collections.abc import Callable

    T = TypeVar("T")

    Token = type[T] | str


@runtime_checkable
class Provider(Protocol):
    """Anything able to produce a service for a token, or `None` when absent."""

    def get_service(self, token: Any) -> object | None: ...


class Lifetime(Enum):
    SINGLETON = "singleton"
    TRANSIENT = "transient"


@dataclass
class Registration:
    factory: Callable[..., object] | None
    impl: type | None
    lifetime: Lifetime
    cached_instance: object | None = None  # cached singleton


class ServiceCollection:
    """Registration side of the bootstrap step.

    Example:
      services = ServiceCollection()
      services.add_singleton(WidgetService, DefaultWidgetService)
      provider = services.build_provider()

    """

    def __init__(self) -> None:
        self._registrations: dict[Any, Registration] = {}

    @overload
    def add_singleton(self, token: type[T], impl: type[T], *, factory: None = ...) -> ServiceCollection: ...

    @overload
    def add_singleton(
        self, token: Token[T], impl: None = ..., *, factory: Callable[[ServiceProvider], Any]
    ) -> ServiceCollection: ...

    def add_singleton(
        self,
        token: Token[T],
        impl: type | None = None,
        *,
        factory: Callable[[ServiceProvider], Any] | None = None,
    ) -> ServiceCollection:
        return self._add(token, impl, factory, Lifetime.SINGLETON)

    def add_transient(
        self,
        token: Token[T],
        impl: type | None = None,
        *,
        factory: Callable[[ServiceProvider], Any] | None = None,
    ) -> ServiceCollection:
        return self._add(token, impl, factory, Lifetime.TRANSIENT)

    def add_instance(self, token: Token[T], instance: object) -> ServiceCollection:
        """Register a pre-built instance (always singleton)."""
        if instance is None:
            msg = f"Cannot register None for token {token!r}."
            raise ValueError(msg)

        if inspect.isclass(token):
            _validate_impl(token, type(instance))

        self._registrations[token] = Registration(
            factory=None,
            impl=None,
            lifetime=Lifetime.SINGLETON,
            cached_instance=instance,
        )
        return self

    def _add(
        self,
        token: Token[T],
        impl: type | None,
        factory: Callable[..., Any] | None,
        lifetime: Lifetime,
    ) -> ServiceCollection:
        if impl is not None and factory is not None:
            msg = "Provide either `impl` or `factory`, not both."
            raise ValueError(msg)

        if impl is None and factory is None:
            msg = "Either `impl` or `factory` must be provided."
            raise ValueError(msg)

        if impl is not None and inspect.isclass(token):
            _validate_impl(token, impl)

        self._registrations[token] = Registration(factory=factory, impl=impl, lifetime=lifetime)
        return self

    def build_provider(self) -> ServiceProvider:
        # Copies registrations; later additions to the collection are not seen.
        return ServiceProvider(
            {token: Registration(r.factory, r.impl, r.lifetime, r.cached_instance) for token, r in self._registrations.items()}
        )


class ServiceProvider:
    """Resolves registered tokens; unregistered tokens yield `None`."""

    def __init__(self, registrations: dict[Any, Registration]) -> None:
        self._registrations = registrations
        self._lock = threading.RLock()

    def get_service(self, token: Token[T]) -> object | None:
        with self._lock:
            reg = self._registrations.get(token)
            if reg is None:
                logger.debug("No registration found for token: %r", token)
                return None

            if reg.lifetime == Lifetime.SINGLETON and reg.cached_instance is not None:
                return reg.cached_instance

            if reg.factory:
                instance = reg.factory(self)
                if inspect.isclass(token):
                    _check_instance(token, instance)
            else:
                instance = cast("type", reg.impl)()

            if reg.lifetime == Lifetime.SINGLETON:
                reg.cached_instance = instance

            return instance


class _ResolverAdapter:
    """Adapts container-style objects exposing `resolve(token)`."""

    def __init__(self, resolver: Any) -> None:
        self._resolver = resolver

    def get_service(self, token: Any) -> object | None:
        try:
            return self._resolver.resolve(token)
        except LookupError:
            return None


class _MappingAdapter:
    def __init__(self, services: Mapping[Any, object]) -> None:
        self._services = services

    def get_service(self, token: Any) -> object | None:
        return self._services.get(token)


def as_provider(obj: object) -> Provider:
    """Return `obj` as a `Provider`, wrapping containers and mappings."""
    if isinstance(obj, Provider):
        return obj

    if callable(getattr(obj, "resolve", None)):
        return _ResolverAdapter(obj)

    if isinstance(obj, Mapping):
        return _MappingAdapter(obj)

    msg = f"{type(obj).__name__} cannot provide services: expected get_service(), resolve() or a mapping."
    raise TypeError(msg)


def _validate_impl(cls: type, impl: type) -> None:
    """Validate that 'impl' implements 'cls'.

    - For normal classes/ABCs: require issubclass(impl, cls).
    - For Protocols: nominal via MRO, otherwise every public protocol method
      must exist and be callable on impl.
    """
    if not _is_protocol(cls):
        if not issubclass(impl, cls):
            msg = f"Implementation {impl.__name__} must be a subclass of {cls.__name__}"
            raise TypeError(msg)
        return

    if cls in getattr(impl, "__mro__", ()):
        return

    missing = [
        name
        for name, attr in cls.__dict__.items()
        if not name.startswith("_") and inspect.isfunction(attr) and not callable(getattr(impl, name, None))
    ]
    if missing:
        msg = (
            f"Implementation {impl.__name__} does not structurally conform to protocol "
            f"{cls.__name__}: missing members: {', '.join(missing)}"
        )
        raise TypeError(msg)


def _check_instance(token: type, instance: object) -> None:
    try:
        _validate_impl(token, type(instance))
    except TypeError as e:
        msg = f"Resolved instance {type(instance).__name__} does not conform to {token.__name__}"
        raise TypeError(msg) from e


if hasattr(typing, "is_protocol"):
    # https://docs.python.org/3/library/typing.html#typing.is_protocol
    def _is_protocol(tp: type) -> bool:
        return inspect.isclass(tp) and typing.is_protocol(tp)

else:

    def _is_protocol(tp: type) -> bool:
        return inspect.isclass(tp) and tp is not Protocol and bool(tp.__dict__.get("_is_protocol", False))
