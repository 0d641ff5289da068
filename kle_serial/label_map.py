# SPDX-FileCopyrightText: 2025 adamws <adamws@users.noreply.github.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence, Tuple

KEY_MAX_LABELS = 12
DEFAULT_ALIGNMENT = 4

# Map from serialized label position to normalized position,
# depending on the alignment flags.
# fmt: off
LABEL_MAP: List[List[int]] = [
    # 0  1  2  3  4  5  6  7  8  9 10 11   # align flags
    [ 0, 6, 2, 8, 9,11, 3, 5, 1, 4, 7,10], # 0 = no centering
    [ 1, 7,-1,-1, 9,11, 4,-1,-1,-1,-1,10], # 1 = center x
    [ 3,-1, 5,-1, 9,11,-1,-1, 4,-1,-1,10], # 2 = center y
    [ 4,-1,-1,-1, 9,11,-1,-1,-1,-1,-1,10], # 3 = center x & y
    [ 0, 6, 2, 8,10,-1, 3, 5, 1, 4, 7,-1], # 4 = center front (default)
    [ 1, 7,-1,-1,10,-1, 4,-1,-1,-1,-1,-1], # 5 = center front & x
    [ 3,-1, 5,-1,10,-1,-1,-1, 4,-1,-1,-1], # 6 = center front & y
    [ 4,-1,-1,-1,10,-1,-1,-1,-1,-1,-1,-1], # 7 = center front & x & y
]

REVERSE_LABEL_MAP: List[List[int]] = [
    # 0  1  2  3  4  5  6  7  8  9 10 11   # align flags
    [ 0, 8, 2, 6, 9, 7, 1,10, 3, 4,11, 5], # 0 = no centering
    [-1, 0,-1,-1, 6,-1,-1, 1,-1, 4,11, 5], # 1 = center x
    [-1,-1,-1, 0, 8, 2,-1,-1,-1, 4,11, 5], # 2 = center y
    [-1,-1,-1,-1, 0,-1,-1,-1,-1, 4,11, 5], # 3 = center x & y
    [ 0, 8, 2, 6, 9, 7, 1,10, 3,-1, 4,-1], # 4 = center front (default)
    [-1, 0,-1,-1, 6,-1,-1, 1,-1,-1, 4,-1], # 5 = center front & x
    [-1,-1,-1, 0, 8, 2,-1,-1,-1,-1, 4,-1], # 6 = center front & y
    [-1,-1,-1,-1, 0,-1,-1,-1,-1,-1, 4,-1], # 7 = center front & x & y
]
# fmt: on

ALIGNMENTS = range(0, len(LABEL_MAP))


def reorder_labels_in(items: Sequence[Any], align: int, default: Any) -> List[Any]:
    """Reorder items from serialized (KLE) order to normalized order.

    Falsy items are skipped and keep the `default` value, same as items
    which are not representable with given alignment.
    """
    ret: List[Any] = KEY_MAX_LABELS * [default]
    for i, item in enumerate(items[0:KEY_MAX_LABELS]):
        if item:
            index = LABEL_MAP[align][i]
            if index != -1:
                ret[index] = item
    return ret


def reorder_labels_kle(
    items: Sequence[Any], align: int, default: Any
) -> Optional[List[Any]]:
    """Reorder items from normalized order to serialized (KLE) order.

    Returns None if any non-empty item can't be represented with given
    alignment. Trailing values equal to `default` are removed.
    """
    ret: List[Any] = KEY_MAX_LABELS * [default]
    for i, item in enumerate(items[0:KEY_MAX_LABELS]):
        if item:
            index = REVERSE_LABEL_MAP[align][i]
            if index == -1:
                return None
            ret[index] = item
    while ret and ret[-1] == default:
        ret.pop()
    return ret


def find_best_label_alignment(
    labels: Sequence[str],
) -> Tuple[int, List[str]]:
    """Find alignment which gives the shortest serialized labels list.

    When more than one alignment gives a result of the same length,
    the highest alignment wins. Keys without labels use alignment 0.
    """
    if not any(labels):
        return 0, []

    results: Dict[int, List[str]] = {}
    for align in reversed(ALIGNMENTS):
        ret = reorder_labels_kle(labels, align, "")
        if ret is not None:
            results[align] = ret

    best = min(results.items(), key=lambda x: (len(x[1]), -x[0]))
    return best[0], best[1]


def remove_trailing_falsy(values: Sequence[Any]) -> List[Any]:
    ret = list(values)
    while ret and not ret[-1]:
        ret.pop()
    return ret


def find_most_common_color(colors: Sequence[str]) -> str:
    counts: Dict[str, int] = {}
    max_count = 0
    most_common = ""
    for color in colors:
        if color and color.strip():
            counts[color] = counts.get(color, 0) + 1
            # strict comparison, on equal count the color which
            # got there first wins
            if counts[color] > max_count:
                max_count = counts[color]
                most_common = color
    return most_common or "#000000"
