"""Grammar for the `note` command.

    note [remove] <title>

The first bare ``remove`` is always read as the flag, never as the title; a
note literally titled "remove" has to be quoted (``note remove "remove"``).
"""

from __future__ import annotations

from typing import Optional, Tuple

from ..errors import MissingTitle
from ..models import Command, NoteRemove, NoteSummary
from .tokenizer import Quote, Tokenizer, Word

KEYWORD = "note"


def parse(toks: Tokenizer) -> Optional[Tuple[Command, Tokenizer]]:
    token, toks = toks.next_token()
    if not (isinstance(token, Word) and token.value == KEYWORD):
        return None

    remove = False
    while True:
        token, after = toks.next_token()
        if isinstance(token, Word) and token.value == "remove":
            remove = True
            toks = after
            continue
        if isinstance(token, (Quote, Word)):
            command = NoteRemove(title=token.value) if remove else NoteSummary(title=token.value)
            return command, after
        raise after.error(MissingTitle)
