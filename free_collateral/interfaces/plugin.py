"""Notification plugin protocol — lifecycle hooks called by the host platform."""
from typing import Any, ClassVar, Protocol


class NotificationPlugin(Protocol):
    """Hooks invoked by the host: init, subscription form, and per-block scan."""

    display_name: ClassVar[str]
    description: ClassVar[str]

    async def on_init(self, args: dict[str, Any]) -> None: ...

    async def on_subscribe_form(self, args: dict[str, Any]) -> list[dict[str, Any]]: ...

    async def on_blocks(
        self, args: dict[str, Any]
    ) -> dict[str, str] | list[dict[str, str]]: ...
