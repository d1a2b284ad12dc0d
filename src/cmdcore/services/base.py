"""BaseService — shared foundation for interpreter services.

Every service receives a :class:`CommandRegistry` at construction time
instead of reaching for global state, so tests and embedding hosts can
run isolated registries side by side.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cmdcore.services.registry import CommandRegistry


class BaseService:
    """Base for service-layer classes.

    Usage::

        class Dispatcher(BaseService):
            def run(self, line: str) -> ServiceResult:
                command = self._registry.get(keyword)
                ...
    """

    def __init__(self, registry: CommandRegistry, *, warn_trailing: bool = True) -> None:
        self._registry = registry
        self._warn_trailing = warn_trailing

    @property
    def registry(self) -> CommandRegistry:
        return self._registry
