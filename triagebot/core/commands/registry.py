"""Central registry of supported comment commands.

The order of ``COMMAND_SPECS`` is the order in which the dispatcher tries the
grammars. New grammars go at the end so existing ones keep seeing the same
inputs first.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Sequence, Tuple

from ..models import Command
from . import note, relabel, second
from .tokenizer import Tokenizer

GrammarFn = Callable[[Tokenizer], Optional[Tuple[Command, Tokenizer]]]


@dataclass(frozen=True)
class CommandSpec:
    """A named command grammar."""

    name: str
    parse: GrammarFn


def _build_specs() -> Tuple[CommandSpec, ...]:
    return (
        CommandSpec(name="label", parse=relabel.parse),
        CommandSpec(name="second", parse=second.parse),
        CommandSpec(name="note", parse=note.parse),
    )


COMMAND_SPECS: Tuple[CommandSpec, ...] = _build_specs()


def iter_command_specs() -> Sequence[CommandSpec]:
    """Return the immutable list of command specs in dispatch order."""
    return COMMAND_SPECS
