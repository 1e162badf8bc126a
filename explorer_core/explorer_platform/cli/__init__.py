"""
CLI package — Command-Line Interface for driving an explorer session.

Design Patterns
───────────────
• Command       – each CLI operation is a ``Command`` object with ``execute()``.
• Interpreter   – parsing the CLI syntax into structured command objects.
"""
from .command_processor import CommandProcessor
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

__all__ = [
    'CommandProcessor',
    'Command',
    'CommandResult',
    'SelectNodeCommand',
    'SelectEdgeCommand',
    'ClearSelectionCommand',
    'HoverCommand',
    'ToggleTypeCommand',
    'ConfidenceCommand',
    'CausalOnlyCommand',
    'ToggleClustersCommand',
    'SearchCommand',
    'FocusCommand',
    'ZoomCommand',
    'ResetCommand',
    'SaveViewCommand',
    'LoadViewCommand',
    'DeleteViewCommand',
    'ViewsCommand',
    'InfoCommand',
    'ListCommand',
    'HelpCommand',
]
