"""Interactive menu for issuing search / insert / delete commands."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, Callable, Dict, Optional, TextIO

from bplus_index.logging_config import get_logger

if TYPE_CHECKING:
    from bplus_index.bplus_tree_base import BPlusTreeBase

logger = get_logger(__name__)

EXIT_WORDS = ("exit", "quit")


class Shell:
    """
    Line-oriented menu over one tree.

    Every command reads one key, runs one tree operation and prints the
    outcome, then the menu is shown again. Exiting discards nothing and
    saves nothing: the tree lives only in memory.

    Usage:
        shell = Shell(tree)
        shell.run()
    """

    TITLE = "📘 B+ Tree Dictionary Menu"
    PROMPT = "Choose an option (1-4): "

    def __init__(
        self,
        tree: BPlusTreeBase,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
    ):
        self.tree = tree
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout
        self._running = False
        self._commands: Dict[str, Callable[[], None]] = {
            "1": self.do_search,
            "2": self.do_insert,
            "3": self.do_delete,
            "4": self.do_exit,
        }

    @property
    def running(self) -> bool:
        return self._running

    def _print(self, text: str = "") -> None:
        print(text, file=self.stdout)

    def _read(self, prompt: str) -> Optional[str]:
        """Prompt and read one line; None on end of input."""
        self.stdout.write(prompt)
        self.stdout.flush()
        line = self.stdin.readline()
        if not line:
            return None
        return line.rstrip("\r\n")

    def _read_key(self, prompt: str) -> Optional[str]:
        raw = self._read(prompt)
        if raw is None:
            self._print()
            self.do_exit()
            return None
        key = raw.strip()
        if not key:
            self._print("⚠️ Please enter a non-empty key.")
            return None
        return key

    def show_menu(self) -> None:
        self._print()
        self._print(self.TITLE)
        self._print("1. Search word")
        self._print("2. Insert word")
        self._print("3. Delete word")
        self._print("4. Exit")

    def run(self) -> None:
        """Main menu loop; returns after exit, quit or end of input."""
        self._running = True
        while self._running:
            self.show_menu()
            choice = self._read(self.PROMPT)
            if choice is None:
                self._print()
                self.do_exit()
                break
            self.handle(choice)

    def handle(self, choice: str) -> None:
        """Dispatch one menu choice."""
        choice = choice.strip()
        logger.debug(f"Menu choice {choice!r}")
        if choice.lower() in EXIT_WORDS:
            self.do_exit()
            return
        command = self._commands.get(choice)
        if command is None:
            self._print("⚠️ Invalid option. Try again.")
            return
        command()

    def do_search(self) -> None:
        key = self._read_key("🔍 Enter word to search: ")
        if key is None:
            return
        if self.tree.search(key):
            self._print(f'✅ Word "{key}" found.')
        else:
            self._print(f'❌ Sorry, "{key}" was not found.')

    def do_insert(self) -> None:
        key = self._read_key("➕ Enter word to insert: ")
        if key is None:
            return
        if self.tree.search(key):
            self._print(f'⚠️ Word "{key}" already exists.')
            return
        self.tree.insert(key)
        self._print(f'✅ Inserted "{key}" into the tree.')

    def do_delete(self) -> None:
        key = self._read_key("🗑️ Enter word to delete: ")
        if key is None:
            return
        if self.tree.delete(key):
            self._print(f'🗑️ Deleted "{key}" from the tree.')
        else:
            self._print(f'⚠️ Cannot delete "{key}": not found.')

    def do_exit(self) -> None:
        self._print("👋 Exiting. Goodbye!")
        self._running = False
