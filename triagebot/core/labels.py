"""Reduction of label directives into the changes to apply."""

from __future__ import annotations

from typing import List, Sequence, Set, Tuple

from .models import DeltaKind, Label, LabelDelta


def compute_label_deltas(deltas: Sequence[LabelDelta]) -> Tuple[List[Label], List[Label]]:
    """Collapse ordered add/remove directives into ``(to_add, to_remove)``.

    An add cancels a pending remove of the same label (and vice versa) instead
    of replacing it, so ``+A -A`` leaves the label untouched while ``+A -A +A``
    adds it. Repeating a directive has no further effect. Both results are
    sorted by label name and never share a label.
    """
    add: Set[Label] = set()
    remove: Set[Label] = set()

    for delta in deltas:
        if delta.kind == DeltaKind.ADD:
            pending, opposite = add, remove
        else:
            pending, opposite = remove, add
        if delta.label in opposite:
            opposite.discard(delta.label)
        else:
            pending.add(delta.label)

    return sorted(add), sorted(remove)
