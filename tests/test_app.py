"""Tests for clitree.app: sessions against a virtual terminal."""

from __future__ import annotations

import asyncio
import io
import os
from typing import Callable

import pytest

from clitree.app import TreeApp, run_tree, screen_rows
from clitree.config import TreeConfig
from clitree.node import Tree
from clitree.terminal import ProcessTerminal

from .virtual_terminal import VirtualTerminal

PLAIN = TreeConfig(color=False)
DOWN = "\x1b[B"
RIGHT = "\x1b[C"
LEFT = "\x1b[D"


def leaf_states(tree: Tree) -> list[bool]:
    return [node.value.selected for node in tree.leaves()]


class BrokenTerminal(VirtualTerminal):
    """Raises right after taking over the terminal."""

    def start(
        self,
        on_input: Callable[[str], None],
        on_end: Callable[[], object] | None = None,
    ) -> None:
        super().start(on_input, on_end)
        raise OSError("not a terminal")


# ---------------------------------------------------------------------------
# Synchronous lifecycle
# ---------------------------------------------------------------------------


class TestTreeAppLifecycle:
    def test_start_draws_first_frame(self, tree: Tree) -> None:
        term = VirtualTerminal()
        app = TreeApp(tree, term, PLAIN)
        app.start()
        assert term.started
        assert not app.stopped
        lines = app.view.render(term.columns)
        assert term.writes == ["\r\x1b[0J" + "\r\n".join(lines)]
        assert lines[0] == "Select items: 0 "

    def test_move_redraws_in_place(self, tree: Tree) -> None:
        term = VirtualTerminal()
        app = TreeApp(tree, term, PLAIN)
        app.start()
        term.clear_output()
        term.send_input(DOWN)
        output = term.get_output()
        assert output.startswith("\x1b[9A\r\x1b[0J")
        assert "Select items: 1 \r\n" in output

    def test_unbound_key_does_not_redraw(self, tree: Tree) -> None:
        term = VirtualTerminal()
        app = TreeApp(tree, term, PLAIN)
        app.start()
        term.clear_output()
        term.send_input("z")
        term.send_input("\x1b[A")
        assert term.get_output() == ""

    def test_toggle_redraws_label(self, tree: Tree) -> None:
        term = VirtualTerminal()
        app = TreeApp(tree, term, PLAIN, cursor="000")
        app.start()
        term.clear_output()
        term.send_input(" ")
        assert "value1 (x)" in term.get_output()

    def test_quit_restores_terminal(self, tree: Tree) -> None:
        term = VirtualTerminal()
        app = TreeApp(tree, term, PLAIN)
        app.start()
        term.clear_output()
        term.send_input("q")
        assert app.stopped
        assert app.controller.done
        assert not term.started
        assert term.writes == ["\r\n"]

    def test_stop_is_idempotent(self, tree: Tree) -> None:
        term = VirtualTerminal()
        app = TreeApp(tree, term, PLAIN)
        app.start()
        app.stop()
        app.stop()
        assert term.stop_count == 1

    def test_input_after_stop_is_ignored(self, tree: Tree) -> None:
        term = VirtualTerminal()
        app = TreeApp(tree, term, PLAIN)
        app.start()
        app.stop()
        app.handle_input(DOWN)
        assert app.controller.cursor == "0"

    def test_bad_cursor_glyph(self, tree: Tree) -> None:
        with pytest.raises(ValueError, match="one column wide"):
            TreeApp(tree, VirtualTerminal(), TreeConfig(cursor=">>"))

    def test_end_of_input_quits(self, tree: Tree) -> None:
        term = VirtualTerminal()
        app = TreeApp(tree, term, PLAIN)
        app.start()
        term.send_input(RIGHT)
        term.send_eof()
        assert app.stopped
        assert app.controller.done
        assert app.controller.cursor == "00"
        assert term.stop_count == 1

    def test_redraw_climbs_wrapped_rows(self, tree: Tree) -> None:
        term = VirtualTerminal(columns=10)
        app = TreeApp(tree, term, PLAIN)
        app.start()
        term.clear_output()
        term.send_input(DOWN)
        # 16, 0, 31, 31, 0, 0, 0, 12, 0 and 33 columns wide at 10 per row
        assert term.get_output().startswith("\x1b[20A\r\x1b[0J")


class TestScreenRows:
    @pytest.mark.parametrize(
        "line,columns,rows",
        [
            ("", 10, 1),
            ("x" * 10, 10, 1),
            ("x" * 11, 10, 2),
            ("\x1b[1mab\x1b[0m", 1, 2),
            ("日本", 3, 2),
            ("abc", 0, 1),
        ],
    )
    def test_rows(self, line: str, columns: int, rows: int) -> None:
        assert screen_rows(line, columns) == rows


# ---------------------------------------------------------------------------
# Async run
# ---------------------------------------------------------------------------


class TestTreeAppRun:
    @pytest.mark.asyncio
    async def test_run_until_quit(self, tree: Tree) -> None:
        term = VirtualTerminal(script=[RIGHT, RIGHT, RIGHT, "q"])
        app = TreeApp(tree, term, PLAIN)
        await asyncio.wait_for(app.run(), timeout=1)
        assert app.stopped
        assert leaf_states(tree) == [True, False, False, False]

    @pytest.mark.asyncio
    async def test_cancel_releases_terminal(self, tree: Tree) -> None:
        term = VirtualTerminal()
        app = TreeApp(tree, term, PLAIN)
        task = asyncio.create_task(app.run())
        await asyncio.sleep(0)
        assert term.started
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task
        assert app.stopped
        assert not term.started
        assert term.stop_count == 1


class TestRunTree:
    def test_selects_first_two_values(self, namespaces) -> None:
        term = VirtualTerminal(
            script=[RIGHT, RIGHT, RIGHT, DOWN, RIGHT, LEFT, LEFT, DOWN, "q"]
        )
        tree = run_tree(namespaces, PLAIN, terminal=term)
        assert leaf_states(tree) == [True, True, False, False]
        assert [v.name for v in tree.selected_leaves()] == ["value1", "value2"]
        assert namespaces[0].items[0].items[1].selected is True

    def test_enter_activates(self, namespaces) -> None:
        config = TreeConfig(enter_activates=True, color=False)
        term = VirtualTerminal(script=["\r", "\r", "\r", "q"])
        tree = run_tree(namespaces, config, terminal=term)
        assert leaf_states(tree) == [True, False, False, False]

    def test_enter_quits_by_default(self, namespaces) -> None:
        term = VirtualTerminal(script=[RIGHT, "\r", RIGHT])
        tree = run_tree(namespaces, PLAIN, terminal=term)
        assert leaf_states(tree) == [False, False, False, False]
        assert "Select items: 00 " in term.get_output()

    def test_empty_input(self) -> None:
        with pytest.raises(ValueError, match="empty tree"):
            run_tree([], terminal=VirtualTerminal())

    def test_failed_start_releases_terminal(self, namespaces) -> None:
        term = BrokenTerminal()
        with pytest.raises(OSError, match="not a terminal"):
            run_tree(namespaces, PLAIN, terminal=term)
        assert not term.started
        assert term.stop_count == 1

    def test_keys_from_a_pipe_until_end_of_input(self, namespaces) -> None:
        read_fd, write_fd = os.pipe()
        os.write(write_fd, (RIGHT * 3).encode())
        os.close(write_fd)
        out = io.StringIO()
        with os.fdopen(read_fd) as stdin:
            tree = run_tree(
                namespaces, PLAIN, terminal=ProcessTerminal(stdin=stdin, stdout=out)
            )
        assert leaf_states(tree) == [True, False, False, False]
        assert out.getvalue().startswith("\x1b[?25l")
        assert out.getvalue().endswith("\r\n\x1b[?25h")
