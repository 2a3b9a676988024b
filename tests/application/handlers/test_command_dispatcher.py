"""Tests for CommandDispatcher."""

from unittest.mock import AsyncMock

import pytest

from gptbridge.application.handlers.command_dispatcher import (
    CommandDispatcher,
    command_handler,
)
from gptbridge.domain.entities import CommandInvocation
from gptbridge.domain.exceptions import DispatchError


def invocation(name: str) -> CommandInvocation:
    return CommandInvocation(name=name, text="", user_id="U1", channel_id="C1")


class TestCommandHandler:
    """Tests for @command_handler decorator."""

    def test_decorator_sets_command_name(self) -> None:
        @command_handler("image")
        async def handle_image(invocation, responder) -> None:
            pass

        assert handle_image._command_name == "image"  # type: ignore[attr-defined]
        assert handle_image.__name__ == "handle_image"


class TestCommandDispatcher:
    """Tests for CommandDispatcher."""

    @pytest.fixture
    def dispatcher(self) -> CommandDispatcher:
        return CommandDispatcher()

    async def test_register_and_dispatch(self, dispatcher: CommandDispatcher) -> None:
        """Test that a command reaches its handler."""
        received: list[CommandInvocation] = []
        responder = AsyncMock()

        async def handler(invocation, responder) -> None:
            received.append(invocation)

        dispatcher.register("gpt", handler)
        await dispatcher.dispatch(invocation("gpt"), responder)

        assert received == [invocation("gpt")]

    async def test_register_decorated_handler(
        self, dispatcher: CommandDispatcher
    ) -> None:
        received: list[str] = []

        @command_handler("image")
        async def handle_image(invocation, responder) -> None:
            received.append(invocation.name)

        dispatcher.register_handler(handle_image)
        await dispatcher.dispatch(invocation("image"), AsyncMock())

        assert received == ["image"]
        assert dispatcher.command_names == ["image"]

    async def test_routes_by_name(self, dispatcher: CommandDispatcher) -> None:
        gpt = AsyncMock()
        image = AsyncMock()
        dispatcher.register("gpt", gpt)
        dispatcher.register("image", image)

        await dispatcher.dispatch(invocation("image"), AsyncMock())

        image.assert_awaited_once()
        gpt.assert_not_awaited()

    async def test_unknown_command_raises_dispatch_error(
        self, dispatcher: CommandDispatcher
    ) -> None:
        """Test that unknown commands are reported, not dropped."""
        with pytest.raises(DispatchError) as exc_info:
            await dispatcher.dispatch(invocation("weather"), AsyncMock())

        assert exc_info.value.command_name == "weather"

    def test_register_handler_without_decorator_raises(
        self, dispatcher: CommandDispatcher
    ) -> None:
        async def plain(invocation, responder) -> None:
            pass

        with pytest.raises(ValueError):
            dispatcher.register_handler(plain)

    def test_duplicate_registration_raises(self, dispatcher: CommandDispatcher) -> None:
        dispatcher.register("gpt", AsyncMock())

        with pytest.raises(ValueError):
            dispatcher.register("gpt", AsyncMock())

    async def test_handler_errors_propagate(self, dispatcher: CommandDispatcher) -> None:
        dispatcher.register("gpt", AsyncMock(side_effect=RuntimeError("boom")))

        with pytest.raises(RuntimeError):
            await dispatcher.dispatch(invocation("gpt"), AsyncMock())
