# src/treetodo/cli/commands.py

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass

from ..core.state import AppState

logger = logging.getLogger(__name__)

_ID_RE = re.compile(r"[0-9]+")


@dataclass(frozen=True, slots=True)
class CommandResult:
    """
    Outcome of one command.

    error=True   -> output goes to stderr, exit code 1, nothing is saved
    changed=True -> the store was mutated and must be persisted
    """

    output: str
    error: bool = False
    changed: bool = False


CommandHandler = Callable[[AppState, list[str]], CommandResult]


def _fail(message: str, usage: str | None = None) -> CommandResult:
    lines = [f"Error: {message}"]
    if usage:
        lines.append(f"Usage: todo {usage}")
    return CommandResult("\n".join(lines), error=True)


def _parse_id(raw: str) -> int | None:
    """Positive base-10 integer or None."""
    if not _ID_RE.fullmatch(raw):
        return None
    value = int(raw)
    return value if value > 0 else None


class CommandRegistry:
    """Verb registry for the `todo` CLI (add, sub, done, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._entries: list[tuple[str, str]] = []
        self.default_command: str | None = None

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
        usage: str | None = None,
    ) -> None:
        aliases = aliases or []
        self._handlers[name] = handler
        for alias in aliases:
            self._handlers[alias] = handler
        signature = ", ".join([name, *aliases])
        if usage:
            signature = f"{signature} {usage}"
        self._entries.append((signature, help_text))

    def handle(self, state: AppState, argv: list[str]) -> CommandResult:
        """
        Dispatch argv (without the program name).
        Empty argv runs the default command.
        """
        if not argv:
            if self.default_command is None:
                return _fail("No command given")
            argv = [self.default_command]

        verb, args = argv[0], argv[1:]
        handler = self._handlers.get(verb)
        if handler is None:
            logger.debug("Unknown verb %r", verb)
            return CommandResult(
                f"Error: Unknown command '{verb}'\nUse 'todo help' to see available commands",
                error=True,
            )
        return handler(state, args)

    def build_help(self) -> str:
        width = max((len(sig) for sig, _ in self._entries), default=0) + 2
        lines = [
            "Todo CLI - Simple command-line hierarchical todo manager",
            "",
            "USAGE:",
            "  todo [COMMAND] [ARGS]",
            "",
            "COMMANDS:",
        ]
        for signature, help_text in self._entries:
            lines.append(f"  {signature.ljust(width)}{help_text}")
        lines += [
            "",
            "EXAMPLES:",
            '  todo add "Buy groceries"',
            '  todo sub 1 "Buy milk"',
            "  todo done 2",
            "  todo delete 1",
        ]
        return "\n".join(lines)


registry = CommandRegistry()


def cmd_list(state: AppState, args: list[str]) -> CommandResult:
    return CommandResult(state.store.render())


def cmd_add(state: AppState, args: list[str]) -> CommandResult:
    """
    add <text...>                 -> root todo
    add <text...> --parent <id>   -> sub-todo (also -p; may appear anywhere)
    """
    usage = "add <text> [--parent <id>]"
    words: list[str] = []
    parent_id: int | None = None

    i = 0
    while i < len(args):
        tok = args[i]
        if tok in ("--parent", "-p"):
            parsed = _parse_id(args[i + 1]) if i + 1 < len(args) else None
            if parsed is None:
                return _fail("--parent requires a valid ID", usage)
            parent_id = parsed
            i += 2
            continue
        words.append(tok)
        i += 1

    text = " ".join(words)
    if not text.strip():
        return _fail("Please provide text for the todo", usage)

    if parent_id is not None and not state.store.has_item(parent_id):
        return _fail(f"Parent todo with ID {parent_id} not found")

    item_id = state.store.add_item(text, parent_id)
    if parent_id is None:
        return CommandResult(f"Added todo [{item_id}]: {text}", changed=True)
    return CommandResult(f"Added sub-todo [{item_id}] under [{parent_id}]: {text}", changed=True)


def cmd_sub(state: AppState, args: list[str]) -> CommandResult:
    usage = "sub <parent_id> <text>"
    if len(args) < 2:
        return _fail("Please provide parent ID and text for the sub-todo", usage)

    parent_id = _parse_id(args[0])
    if parent_id is None:
        return _fail("Invalid parent ID")
    if not state.store.has_item(parent_id):
        return _fail(f"Parent todo with ID {parent_id} not found")

    text = " ".join(args[1:])
    if not text.strip():
        return _fail("Please provide parent ID and text for the sub-todo", usage)

    item_id = state.store.add_item(text, parent_id)
    return CommandResult(f"Added sub-todo [{item_id}] under [{parent_id}]: {text}", changed=True)


def _id_command(
    args: list[str],
    *,
    missing: str,
    usage: str,
    action: Callable[[int], bool],
    success: str,
) -> CommandResult:
    if not args:
        return _fail(missing, usage)
    item_id = _parse_id(args[0])
    if item_id is None:
        return _fail("Invalid todo ID")
    if not action(item_id):
        return _fail(f"Todo with ID {item_id} not found")
    return CommandResult(success.format(id=item_id), changed=True)


def cmd_done(state: AppState, args: list[str]) -> CommandResult:
    return _id_command(
        args,
        missing="Please provide the ID of the todo to mark as done",
        usage="done <id>",
        action=state.store.complete_item,
        success="Marked todo [{id}] as completed",
    )


def cmd_undone(state: AppState, args: list[str]) -> CommandResult:
    return _id_command(
        args,
        missing="Please provide the ID of the todo to mark as not done",
        usage="undone <id>",
        action=state.store.uncomplete_item,
        success="Marked todo [{id}] as not completed",
    )


def cmd_delete(state: AppState, args: list[str]) -> CommandResult:
    return _id_command(
        args,
        missing="Please provide the ID of the todo to delete",
        usage="delete <id>",
        action=state.store.delete_item,
        success="Deleted todo [{id}] and all its sub-todos",
    )


def cmd_help(state: AppState, args: list[str]) -> CommandResult:
    return CommandResult(registry.build_help())


registry.register("list", cmd_list, help_text="List all todos", aliases=["ls"])
registry.register("add", cmd_add, help_text="Add a new todo", usage="<text> [--parent <id>]")
registry.register(
    "sub", cmd_sub, help_text="Add a sub-todo to an existing todo", usage="<parent_id> <text>"
)
registry.register(
    "done", cmd_done, help_text="Mark a todo as completed", aliases=["complete"], usage="<id>"
)
registry.register(
    "undone",
    cmd_undone,
    help_text="Mark a todo as not completed",
    aliases=["uncomplete"],
    usage="<id>",
)
registry.register(
    "delete",
    cmd_delete,
    help_text="Delete a todo (and all its sub-todos)",
    aliases=["rm"],
    usage="<id>",
)
registry.register("help", cmd_help, help_text="Show this help message", aliases=["--help", "-h"])
registry.default_command = "list"
