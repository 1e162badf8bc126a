"""
    CommandProcessor — parses raw CLI strings and dispatches commands.

    Design Patterns
    ───────────────
    • Interpreter   – parses the CLI text into structured ``Command`` objects.
    • Facade        – single ``process(text, workspace)`` entry-point hides
                      all parsing.

    Parse problems never raise; they come back as an unsuccessful
    ``CommandResult``.
"""
from __future__ import annotations

import logging
import math
import shlex
from typing import List

from explorer_api.types import EdgeType

from ..workspace import Workspace
from .commands import (
    Command,
    CommandResult,
    SelectNodeCommand,
    SelectEdgeCommand,
    ClearSelectionCommand,
    HoverCommand,
    ToggleTypeCommand,
    ConfidenceCommand,
    CausalOnlyCommand,
    ToggleClustersCommand,
    SearchCommand,
    FocusCommand,
    ZoomCommand,
    ResetCommand,
    SaveViewCommand,
    LoadViewCommand,
    DeleteViewCommand,
    ViewsCommand,
    InfoCommand,
    ListCommand,
    HelpCommand,
)

logger = logging.getLogger(__name__)

_NO_ARG_COMMANDS = {
    "help": HelpCommand,
    "reset": ResetCommand,
    "clear": ClearSelectionCommand,
    "causal": CausalOnlyCommand,
    "clusters": ToggleClustersCommand,
    "views": ViewsCommand,
}


class CommandProcessor:
    """
    Parses raw CLI input, creates ``Command`` objects and executes them
    on a workspace.

    Usage:
        processor = CommandProcessor()
        result = processor.process("select node n2", workspace)
    """

    # ── Public API ───────────────────────────────────────────────

    def process(self, text: str, workspace: Workspace) -> CommandResult:
        """
        Parse and execute a single CLI command.

        Args:
            text:      Raw command string from the user.
            workspace: Workspace the command drives.

        Returns:
            ``CommandResult`` with success status, message and the
            resulting session state.
        """
        text = self._strip_comments(text).strip()
        if not text:
            return CommandResult(False, "Empty command. Type 'help' for usage.", workspace.state)

        try:
            command = self._parse(text)
        except ValueError as e:
            logger.debug("Parse error for %r: %s", text, e)
            return CommandResult(False, f"Parse error: {e}", workspace.state)

        return command.execute(workspace)

    # ── Comment handling ────────────────────────────────────────

    @staticmethod
    def _strip_comments(text: str) -> str:
        """
        Strip inline comments, i.e. everything after an unquoted ``#``.

        Example:
            >>> CommandProcessor._strip_comments("select node n2   # KRAS")
            'select node n2'
        """
        in_single = False
        in_double = False
        for i, ch in enumerate(text):
            if ch == "'" and not in_double:
                in_single = not in_single
            elif ch == '"' and not in_single:
                in_double = not in_double
            elif ch == '#' and not in_single and not in_double:
                return text[:i].rstrip()
        return text

    # ── Parser ───────────────────────────────────────────────────

    def _parse(self, text: str) -> Command:
        """
        Parse raw CLI text into a ``Command`` object.

        Raises:
            ValueError: If the text cannot be parsed.
        """
        try:
            tokens = shlex.split(text)
        except ValueError:
            # Malformed quotes: fall back to a plain split
            tokens = text.split()

        if not tokens:
            raise ValueError("Empty command.")

        verb = tokens[0].lower()
        args = tokens[1:]

        if verb in _NO_ARG_COMMANDS:
            return _NO_ARG_COMMANDS[verb]()

        if verb == "select":
            if len(args) != 2 or args[0].lower() not in ("node", "edge"):
                raise ValueError("Usage: select node|edge <id>")
            if args[0].lower() == "node":
                return SelectNodeCommand(args[1])
            return SelectEdgeCommand(args[1])

        if verb == "hover":
            node_id = self._single_arg(verb, args, "<id>|none")
            return HoverCommand(None if node_id.lower() == "none" else node_id)

        if verb == "toggle":
            return ToggleTypeCommand(self._parse_edge_type(self._single_arg(verb, args, "<TYPE>")))

        if verb == "confidence":
            raw = self._single_arg(verb, args, "<value>")
            try:
                value = float(raw)
            except ValueError:
                raise ValueError(f"Not a number: '{raw}'.") from None
            if not math.isfinite(value):
                raise ValueError(f"Not a number: '{raw}'.")
            return ConfidenceCommand(value)

        if verb == "search":
            return SearchCommand(self._extract_query(args))

        if verb == "focus":
            return FocusCommand(self._single_arg(verb, args, "<id>"))
        if verb == "zoom":
            return ZoomCommand(self._single_arg(verb, args, "<id>"))

        if verb == "save":
            return SaveViewCommand(self._extract_query(args) if args else None)
        if verb == "load":
            return LoadViewCommand(self._single_arg(verb, args, "<view_id>"))
        if verb == "delete":
            return DeleteViewCommand(self._single_arg(verb, args, "<view_id>"))

        if verb == "list":
            target = args[0].lower() if args else None
            if target not in (None, "nodes", "edges", "clusters"):
                raise ValueError(
                    f"Unknown list target: '{target}'. Use 'nodes', 'edges' or 'clusters'.")
            return ListCommand(target)

        if verb == "info":
            if not args:
                return InfoCommand()
            target_type = args[0].lower()
            if target_type not in ("node", "edge"):
                raise ValueError("Usage: info [node|edge <id>]")
            if len(args) < 2:
                raise ValueError(f"Usage: info {target_type} <id>")
            return InfoCommand(target_type, args[1])

        raise ValueError(f"Unknown command: '{verb}'. Type 'help' for usage.")

    # ── Token parsers ────────────────────────────────────────────

    @staticmethod
    def _single_arg(verb: str, args: List[str], usage: str) -> str:
        if len(args) != 1:
            raise ValueError(f"Usage: {verb} {usage}")
        return args[0]

    @staticmethod
    def _parse_edge_type(raw: str) -> EdgeType:
        try:
            return EdgeType(raw.upper())
        except ValueError:
            names = ", ".join(t.value for t in EdgeType)
            raise ValueError(f"Unknown edge type: '{raw}'. Use one of {names}.") from None

    @staticmethod
    def _extract_query(tokens: List[str]) -> str:
        """Join remaining tokens into a query string, stripping quotes."""
        raw = " ".join(tokens)
        if len(raw) >= 2 and raw[0] in ("'", '"') and raw[-1] == raw[0]:
            raw = raw[1:-1]
        return raw.strip()
