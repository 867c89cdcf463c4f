"""Grammar for the `label` command.

    label [:] <delta> [[,|and] <delta>]... [.|;]
    modify labels [:|to] <delta>...

A delta is ``+name`` (add), ``-name`` (remove) or a bare ``name`` (add).
Names containing spaces can be quoted, with the sign either inside the quotes
or directly before them (``+"needs review"``). The list runs to the end of
the input, or up to a delta ending in ``.`` or ``;``.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from ..errors import EmptyLabel, NoLabel
from ..models import Command, DeltaKind, Label, LabelDelta, Relabel
from .tokenizer import Quote, Token, Tokenizer, Word

SIGNS = {"+": DeltaKind.ADD, "-": DeltaKind.REMOVE}
TERMINATORS = (".", ";")
SEPARATOR = ","


def _is_word(token: Optional[Token], *values: str) -> bool:
    return isinstance(token, Word) and token.value in values


def _skip_keyword(toks: Tokenizer) -> Optional[Tokenizer]:
    token, toks = toks.next_token()
    if _is_word(token, "label:"):
        return toks
    if _is_word(token, "label"):
        pass
    elif _is_word(token, "modify"):
        token, toks = toks.next_token()
        if _is_word(token, "labels:"):
            return toks
        if not _is_word(token, "labels"):
            return None
    else:
        return None

    token, after = toks.next_token()
    if _is_word(token, ":", "to"):
        return after
    return toks


def _make_delta(text: str, raw: str, start: int, kind: Optional[DeltaKind] = None) -> LabelDelta:
    if kind is None:
        kind = SIGNS.get(raw[:1])
        if kind is not None:
            raw = raw[1:]
        else:
            kind = DeltaKind.ADD
    if not raw:
        raise EmptyLabel(text, start)
    return LabelDelta(kind, Label(raw))


def parse(toks: Tokenizer) -> Optional[Tuple[Command, Tokenizer]]:
    after_keyword = _skip_keyword(toks)
    if after_keyword is None:
        return None
    toks = after_keyword

    text = toks.text
    deltas: List[LabelDelta] = []
    while True:
        token, after = toks.next_token()
        if token is None:
            toks = after
            break

        if isinstance(token, Quote):
            deltas.append(_make_delta(text, token.value, token.start))
            toks = after
            continue

        if token.value == "and" and deltas:
            toks = after
            continue

        if token.value in SIGNS:
            following, after_quote = after.next_token()
            if isinstance(following, Quote):
                deltas.append(_make_delta(text, following.value, token.start, SIGNS[token.value]))
                toks = after_quote
                continue
            raise EmptyLabel(text, token.start)

        raw = token.value
        terminate = raw.endswith(TERMINATORS)
        if terminate or raw.endswith(SEPARATOR):
            raw = raw[:-1]
        toks = after
        if raw:
            deltas.append(_make_delta(text, raw, token.start))
        elif not terminate and not deltas:
            # A lone separator before any delta.
            raise EmptyLabel(text, token.start)
        if terminate:
            break

    if not deltas:
        raise toks.error(NoLabel)
    return Relabel(deltas=tuple(deltas)), toks
