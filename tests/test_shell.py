"""Tests for the interactive shell."""

import asyncio
from unittest.mock import MagicMock, patch

import pytest

import main
from bazar.session import ClientSession
from bazar.shell import InteractiveShell, console
from tests.conftest import CATALOG_1, ORDER_2, FakeReplicas

BOOK_1 = {"id": 1, "title": "RPCs for Noobs.", "topic": "distributed systems", "price": 24.9, "quantity": 12}


def _feed(*answers: str):
    """Patch console.input to return answers in order, then raise EOFError."""
    remaining = list(answers)

    def fake_input(prompt: str = "") -> str:
        if not remaining:
            raise EOFError
        return remaining.pop(0)

    return patch.object(console, "input", side_effect=fake_input)


class TestInteractiveShell:
    """Tests for InteractiveShell."""

    @pytest.mark.asyncio
    async def test_search_then_exit(
        self, replicas: FakeReplicas, session: ClientSession
    ) -> None:
        replicas.add("GET", CATALOG_1, "/search/distributed systems", json=[BOOK_1])

        with _feed("1", "distributed systems", "4"):
            await InteractiveShell(session).run()

        assert "search:distributed systems" in session.cache
        await session.close()

    @pytest.mark.asyncio
    async def test_purchase_flow(
        self, replicas: FakeReplicas, session: ClientSession
    ) -> None:
        replicas.add("GET", CATALOG_1, "/info/1", json=BOOK_1)
        replicas.add("POST", ORDER_2, "/purchase/1", json={"ok": True, "item_id": 1})

        with _feed("2", "1", "3", "1", "4"):
            await InteractiveShell(session).run()

        assert "info:1" not in session.cache
        assert replicas.calls_to(ORDER_2) == [("POST", "/purchase/1")]
        await session.close()

    @pytest.mark.asyncio
    async def test_errors_do_not_end_the_session(
        self, replicas: FakeReplicas, session: ClientSession
    ) -> None:
        """Unknown items, bad input and bad options all return to the menu."""
        with _feed("2", "999", "2", "abc", "9", "4"):
            await InteractiveShell(session).run()

        # Only the lookup for 999 reached the network, once per catalog replica
        assert len(replicas.calls) == 3
        await session.close()

    @pytest.mark.asyncio
    async def test_eof_exits(self, session: ClientSession) -> None:
        shell = InteractiveShell(session)

        with _feed():
            await shell.run()

        assert session.transport._http_client is None

    @pytest.mark.asyncio
    async def test_ctrl_c_at_prompt_exits(self, session: ClientSession) -> None:
        """KeyboardInterrupt from the prompt ends the loop without propagating."""
        with patch.object(console, "input", side_effect=KeyboardInterrupt):
            await InteractiveShell(session).run()

        await session.close()

    @pytest.mark.asyncio
    async def test_cancelled_command_exits(self, session: ClientSession) -> None:
        """A command cancelled mid-flight ends the session instead of crashing it."""
        shell = InteractiveShell(session)

        async def cancelled() -> None:
            raise asyncio.CancelledError

        shell.commands["1"] = cancelled
        with _feed("1", "4") as fake_input:
            await shell.run()

        assert fake_input.call_count == 1
        await session.close()

    @pytest.mark.asyncio
    async def test_malformed_answer_returns_to_menu(
        self, replicas: FakeReplicas, session: ClientSession
    ) -> None:
        replicas.add("GET", CATALOG_1, "/info/7", json={"title": "X"})
        replicas.add("GET", CATALOG_1, "/search/fiction", json=[])

        with _feed("2", "7", "1", "fiction", "4"):
            await InteractiveShell(session).run()

        assert "info:7" not in session.cache
        assert "search:fiction" in session.cache
        await session.close()


class TestRun:
    """Tests for the console entry point."""

    def test_keyboard_interrupt_is_swallowed(self) -> None:
        with patch.object(main, "main", MagicMock()), patch.object(
            main.asyncio, "run", side_effect=KeyboardInterrupt
        ) as fake_run:
            main.run()

        fake_run.assert_called_once()
