"""Grammar for the `second` command used on major change proposals."""

from __future__ import annotations

from typing import Optional, Tuple

from ..models import Command, Second
from .tokenizer import Tokenizer, Word

KEYWORDS = ("second", "seconded")


def parse(toks: Tokenizer) -> Optional[Tuple[Command, Tokenizer]]:
    token, toks = toks.next_token()
    if isinstance(token, Word) and token.value in KEYWORDS:
        return Second(), toks
    return None
