from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any


logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from collections.abc import Callable

    from ._cell import RegistryCell


def augmentation(
    cell: RegistryCell[Any],
    operation: str,
    *,
    name: str | None = None,
    doc: str | None = None,
) -> Callable[..., Any]:
    """Build a free function forwarding its arguments to `operation` of the bound service.

    The returned function reads `cell` on every call, so it fails with
    `UninitializedBindingError` until the cell is initialized. The service
    result is returned as is; for async services that is the coroutine.

    Example:
      enhance_with_di = augmentation(cell, "enhance")
      enhanced = enhance_with_di(widget)

    """

    def forward(value: Any, /, *args: Any, **kwargs: Any) -> Any:
        service = cell.get()
        return getattr(service, operation)(value, *args, **kwargs)

    forward.__name__ = forward.__qualname__ = name or operation
    forward.__doc__ = doc or f"Forward to `{operation}` of the bound service."
    logger.debug("Created augmentation %s -> %s", forward.__name__, operation)
    return forward
