"""Askers: one per answering medium, all building awaitable Questions."""

from formterm.asker.auto import AutoAsker, default_answer
from formterm.asker.base import Asker
from formterm.asker.callback import CallbackAsker
from formterm.asker.group_fill import fill_group
from formterm.asker.prompts import ClickPrompts, Prompts
from formterm.asker.recording import QAPair, RecordingAsker
from formterm.asker.scripted import ScriptedAsker
from formterm.asker.terminal import TerminalAsker

__all__ = [
    "Asker",
    "TerminalAsker",
    "ScriptedAsker",
    "CallbackAsker",
    "AutoAsker",
    "RecordingAsker",
    "QAPair",
    "Prompts",
    "ClickPrompts",
    "default_answer",
    "fill_group",
]
