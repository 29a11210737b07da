"""Unit tests for SessionRegistry."""

import asyncio
from unittest.mock import patch

import pytest

import quirra.conversation.registry as registry_module
from quirra.agent.config import AgentConfig
from quirra.conversation.registry import SessionRegistry


class TestSessionRegistry:
    def test_create_returns_independent_sessions(self, registry: SessionRegistry) -> None:
        first_id, first = registry.create()
        second_id, second = registry.create()

        assert first_id != second_id
        assert first is not second
        assert registry.get(first_id) is first
        assert len(registry) == 2

    def test_get_unknown_session_raises(self, registry: SessionRegistry) -> None:
        with pytest.raises(KeyError):
            registry.get("missing")

    def test_get_or_create_reuses_existing(self, registry: SessionRegistry) -> None:
        session_id, controller = registry.create()

        assert registry.get_or_create(session_id) == (session_id, controller)

    def test_get_or_create_with_new_id(self, registry: SessionRegistry) -> None:
        session_id, _ = registry.get_or_create("client-chosen")

        assert session_id == "client-chosen"
        assert "client-chosen" in registry

    async def test_sessions_do_not_share_state(self, registry: SessionRegistry) -> None:
        _, first = registry.create()
        _, second = registry.create()
        first.documents.set_context("only in first")

        await first.send("hello")

        assert second.messages == ()
        assert second.documents.get_context() is None

    async def test_close_cancels_turns_and_forgets_session(
        self, registry: SessionRegistry, fake_client
    ) -> None:
        fake_client.gate = asyncio.Event()
        session_id, controller = registry.create()
        task = controller.submit("hello")

        await registry.close(session_id)

        assert task is not None and task.cancelled()
        assert session_id not in registry

    async def test_aclose_closes_client(self, registry: SessionRegistry, fake_client) -> None:
        registry.create()

        await registry.aclose()

        assert len(registry) == 0
        assert fake_client.closed is True

    async def test_config_limits_are_applied(self, fake_client) -> None:
        config = AgentConfig(
            api_key="k", history_window=1, max_document_chars=5, request_timeout=None
        )
        registry = SessionRegistry(fake_client, config)
        _, controller = registry.create()

        await controller.send("first")
        await controller.send("second")

        assert [t.text for t in fake_client.requests[1].turns] == [
            "echo: first",
            "second",
        ]


class TestGetSessionRegistry:
    def test_singleton_returns_same_instance(self) -> None:
        registry_module._registry = None

        with (
            patch.object(registry_module, "get_agent_config") as mock_config,
            patch.object(registry_module, "GeminiClient") as mock_client,
        ):
            mock_config.return_value.history_window = None
            mock_config.return_value.history_max_chars = None
            mock_config.return_value.max_document_chars = None

            first = registry_module.get_session_registry()
            second = registry_module.get_session_registry()

        assert first is second
        mock_client.assert_called_once()
        registry_module._registry = None
