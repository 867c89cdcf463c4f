"""Comment command parsing: tokenizer, grammars and dispatch."""

from .dispatcher import CommandDispatcher, parse_command
from .input import CommandInput
from .registry import CommandSpec, iter_command_specs
from .tokenizer import Quote, Token, Tokenizer, Word

__all__ = [
    "CommandDispatcher",
    "CommandInput",
    "CommandSpec",
    "Quote",
    "Token",
    "Tokenizer",
    "Word",
    "iter_command_specs",
    "parse_command",
]
