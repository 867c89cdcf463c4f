"""Command dispatch over the registered grammars."""

from __future__ import annotations

from typing import Optional, Sequence, Tuple

from ..models import Command
from .registry import CommandSpec, iter_command_specs
from .tokenizer import Tokenizer


class CommandDispatcher:
    """Tries each grammar, in registry order, against the same cursor."""

    def __init__(self, specs: Optional[Sequence[CommandSpec]] = None) -> None:
        if specs is None:
            specs = iter_command_specs()
        self._specs: Sequence[CommandSpec] = tuple(specs)

    @property
    def specs(self) -> Sequence[CommandSpec]:
        return self._specs

    def parse(self, toks: Tokenizer) -> Optional[Tuple[Command, Tokenizer]]:
        """Return the first grammar's result, or None if every grammar declines.

        A ``ParseError`` raised by a grammar that recognized its keyword
        propagates immediately; later grammars are not tried.
        """
        for spec in self._specs:
            # Cursors are immutable, so each grammar starts from the same spot.
            result = spec.parse(toks)
            if result is not None:
                return result
        return None

    def parse_command(self, text: str) -> Optional[Command]:
        result = self.parse(Tokenizer(text))
        if result is None:
            return None
        command, _ = result
        return command


_DEFAULT_DISPATCHER = CommandDispatcher()


def parse_command(text: str) -> Optional[Command]:
    """Parse ``text`` as a single command using the default grammars.

    Returns None when the text holds no recognized command. Raises
    ``ParseError`` when a keyword was recognized but the rest is malformed.
    """
    return _DEFAULT_DISPATCHER.parse_command(text)
