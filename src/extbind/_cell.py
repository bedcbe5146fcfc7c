from __future__ import annotations

import logging
import threading
from enum import Enum
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from ._provider import as_provider


logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from ._provider import Provider

T = TypeVar("T")


class Resolution(Enum):
    EAGER = "eager"
    DEFERRED = "deferred"


class BindingError(RuntimeError):
    pass


class UninitializedBindingError(RuntimeError):
    pass


_EMPTY: Any = object()


class RegistryCell(Generic[T]):
    """Process-wide slot binding augmentation functions to one service.

    - EAGER: the service is resolved inside `initialize` and stored.
    - DEFERRED: the provider is stored and asked again on every `get`,
      so registrations made after `initialize` become visible.

    A second `initialize` replaces the binding unless `allow_rebind=False`.
    """

    def __init__(
        self,
        token: type[T] | str,
        *,
        resolution: Resolution = Resolution.EAGER,
        allow_rebind: bool = True,
    ) -> None:
        self._token = token
        self._resolution = resolution
        self._allow_rebind = allow_rebind
        self._service: T = _EMPTY
        self._provider: Provider | None = None
        self._lock = threading.RLock()

    @property
    def token(self) -> type[T] | str:
        return self._token

    @property
    def resolution(self) -> Resolution:
        return self._resolution

    @property
    def is_initialized(self) -> bool:
        with self._lock:
            return self._service is not _EMPTY or self._provider is not None

    def initialize(self, provider: object) -> None:
        """Bind the cell to the service `provider` produces for the cell token.

        Raises `BindingError` when `provider` cannot produce the service (eager
        policy), is not a provider at all, or when the cell is already bound
        and rebinding is disabled. A failed call leaves the previous binding
        untouched. Resolution runs outside the cell lock; only the result is
        published under it.
        """
        try:
            adapted = as_provider(provider)
        except TypeError as e:
            msg = f"{self._token_name}: capability not registered, {e}"
            raise BindingError(msg) from e

        self._check_rebind()

        service: T = _EMPTY
        if self._resolution is Resolution.EAGER:
            service = self._resolve(adapted)

        with self._lock:
            self._check_rebind()

            rebinding = self.is_initialized
            if self._resolution is Resolution.DEFERRED:
                self._provider = adapted
                self._service = _EMPTY
            else:
                self._service = service
                self._provider = None

            logger.debug(
                "%s %s (%s resolution)",
                "Rebound" if rebinding else "Bound",
                self._token_name,
                self._resolution.value,
            )

    def get(self) -> T:
        """Return the bound service.

        Checked on every call: an empty cell raises `UninitializedBindingError`.
        """
        with self._lock:
            service = self._service
            provider = self._provider

        if service is not _EMPTY:
            return service

        if provider is None:
            msg = f"{self._token_name}: augmentation called before initialization."
            raise UninitializedBindingError(msg)

        return self._resolve(provider)

    def _check_rebind(self) -> None:
        with self._lock:
            if not self._allow_rebind and self.is_initialized:
                logger.warning("Refusing to rebind %s", self._token_name)
                msg = f"Binding for {self._token_name} already initialized; rebinding is disabled."
                raise BindingError(msg)

    def _resolve(self, provider: Provider) -> T:
        try:
            service = provider.get_service(self._token)
        except (LookupError, TypeError, RuntimeError) as e:
            # containers that auto-wire report a missing registration this way
            msg = f"{self._token_name}: capability not registered with {type(provider).__name__} ({e})."
            raise BindingError(msg) from e

        if service is None:
            msg = f"{self._token_name}: capability not registered with {type(provider).__name__}."
            raise BindingError(msg)
        return service

    @property
    def _token_name(self) -> str:
        return getattr(self._token, "__name__", repr(self._token))

    def __repr__(self) -> str:
        state = "bound" if self.is_initialized else "empty"
        return f"RegistryCell({self._token_name}, {self._resolution.value}, {state})"
