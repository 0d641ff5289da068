# SPDX-FileCopyrightText: 2025 adamws <adamws@users.noreply.github.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later

from __future__ import annotations

import copy
import logging
from typing import Any, Dict, List, Optional

from .format_error import FormatError
from .keyboard import Key, Keyboard
from .label_map import (
    ALIGNMENTS,
    DEFAULT_ALIGNMENT,
    KEY_MAX_LABELS,
    find_most_common_color,
    reorder_labels_in,
)

logger = logging.getLogger(__name__)

ROTATION_PROPERTIES = ("r", "rx", "ry")


def _alignment(value: Any, current: int) -> int:
    if (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and int(value) == value
        and int(value) in ALIGNMENTS
    ):
        return int(value)
    logger.warning(f"Illegal label alignment '{value}', ignoring")
    return current


def _make_key(current: Key, item: str, align: int) -> Key:
    new_key = copy.deepcopy(current)
    # Calculate some generated values
    new_key.width2 = current.width if current.width2 == 0 else current.width2
    new_key.height2 = current.height if current.height2 == 0 else current.height2

    items = item.split("\n")
    if len(items) > KEY_MAX_LABELS:
        msg = (
            f"Illegal key labels: '{repr(item)}'. "
            f"Labels string can contain {KEY_MAX_LABELS} '\\n' "
            "separated items, ignoring redundant values."
        )
        logger.warning(msg)
        items = items[0:KEY_MAX_LABELS]
    new_key.labels = reorder_labels_in(items, align, "")

    # text color and size are meaningful only for existing labels
    for i, label in enumerate(new_key.labels):
        if not label or new_key.textColor[i] == new_key.default.textColor:
            new_key.textColor[i] = ""
        if not label or new_key.textSize[i] == new_key.default.textSize:
            new_key.textSize[i] = 0
    return new_key


def _next_key(current: Key) -> None:
    current.x = round(current.x + current.width, 6)
    current.width = 1
    current.height = 1
    current.x2 = 0
    current.y2 = 0
    current.width2 = 0
    current.height2 = 0
    current.nub = False
    current.stepped = False
    current.decal = False


def _clear_defaults(values: List[Any], default: Any, empty: Any) -> List[Any]:
    return [empty if v == default else v for v in values]


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _number(item: Dict[str, Any], name: str) -> Optional[float]:
    """Returns numeric property or None when missing or not a number"""
    value = item.get(name)
    if value is None or _is_number(value):
        return value
    logger.warning(f"Illegal '{name}' property value '{value}', ignoring")
    return None


def _string(item: Dict[str, Any], name: str) -> Optional[str]:
    """Returns string property or None when missing or not a string"""
    value = item.get(name)
    if value is None or isinstance(value, str):
        return value
    logger.warning(f"Illegal '{name}' property value '{value}', ignoring")
    return None


def _text_sizes(item: Dict[str, Any]) -> Optional[List[Any]]:
    if item.get("fa") is None:
        return None
    if not isinstance(item["fa"], list):
        logger.warning(f"Illegal 'fa' property value '{item['fa']}', ignoring")
        return None
    # empty values (including null) keep the default size
    return [v if _is_number(v) else 0 for v in item["fa"]]


def _apply_properties(
    current: Key, cluster: Dict[str, float], item: Dict[str, Any], align: int
) -> int:
    """Updates `current` key template with properties of serialized `item`
    and returns label alignment which should be used for following keys.
    """
    if (r := _number(item, "r")) is not None:
        current.rotation_angle = r
    if (rx := _number(item, "rx")) is not None:
        cluster["x"] = rx
        current.rotation_x = rx
        current.x = cluster["x"]
        current.y = cluster["y"]
    if (ry := _number(item, "ry")) is not None:
        cluster["y"] = ry
        current.rotation_y = ry
        current.x = cluster["x"]
        current.y = cluster["y"]
    if item.get("a") is not None:
        align = _alignment(item["a"], align)

    f = _number(item, "f")
    f2 = _number(item, "f2")
    fa = _text_sizes(item)
    if f:
        current.default.textSize = f
        current.textSize = KEY_MAX_LABELS * [0]
    if f2:
        # f2 applies to all but first serialized label
        sizes = [current.default.textSize] + (KEY_MAX_LABELS - 1) * [f2]
        current.textSize = reorder_labels_in(sizes, align, 0)
    if fa is not None:
        # empty list resets all per-label sizes
        current.textSize = reorder_labels_in(fa, align, 0)
    if f or f2 or fa is not None:
        current.textSize = _clear_defaults(
            current.textSize, current.default.textSize, 0
        )

    if (p := _string(item, "p")) is not None:
        current.profile = p
    if c := _string(item, "c"):
        current.color = c

    if text_color := _string(item, "t"):
        if "\n" not in text_color:
            current.default.textColor = text_color
        else:
            # legacy format, default color followed by per-label colors
            split = text_color.split("\n")
            if split[0].strip():
                current.default.textColor = find_most_common_color(split)
            current.textColor = _clear_defaults(
                reorder_labels_in(split, align, current.default.textColor),
                current.default.textColor,
                "",
            )
    if text_colors := _string(item, "ta"):
        current.textColor = _clear_defaults(
            reorder_labels_in(text_colors.split("\n"), align, ""),
            current.default.textColor,
            "",
        )

    if x := _number(item, "x"):
        current.x = round(current.x + x, 6)
    if y := _number(item, "y"):
        current.y = round(current.y + y, 6)
    if w := _number(item, "w"):
        current.width = w
        current.width2 = w
    if h := _number(item, "h"):
        current.height = h
        current.height2 = h
    if x2 := _number(item, "x2"):
        current.x2 = x2
    if y2 := _number(item, "y2"):
        current.y2 = y2
    if w2 := _number(item, "w2"):
        current.width2 = w2
    if h2 := _number(item, "h2"):
        current.height2 = h2
    if "n" in item:
        current.nub = bool(item["n"])
    if "l" in item:
        current.stepped = bool(item["l"])
    if "d" in item:
        current.decal = bool(item["d"])
    if item.get("g") is not None:
        current.ghost = bool(item["g"])
    for name in ["sm", "sb", "st"]:
        if (value := _string(item, name)) is not None:
            setattr(current, name, value)

    return align


def deserialize(rows: List[Any]) -> Keyboard:
    """Converts keyboard-layout-editor raw data into Keyboard object"""
    if not isinstance(rows, list):
        msg = "Expected an array of objects"
        raise FormatError(msg, rows)

    keyboard = Keyboard()
    current: Key = Key()
    cluster = {"x": 0, "y": 0}
    align = DEFAULT_ALIGNMENT

    for r, row in enumerate(rows):
        if isinstance(row, list):
            for k, item in enumerate(row):
                if isinstance(item, str):
                    keyboard.keys.append(_make_key(current, item, align))
                    _next_key(current)
                elif isinstance(item, dict):
                    if k != 0 and any(
                        item.get(p) is not None for p in ROTATION_PROPERTIES
                    ):
                        msg = "Rotation can only be specified on the first key in the row"
                        raise FormatError(msg, item)
                    align = _apply_properties(current, cluster, item, align)
                else:
                    msg = "Unexpected item type"
                    raise FormatError(msg, item)

            # end of the row:
            current.y = round(current.y + 1, 6)
            current.x = current.rotation_x
        elif isinstance(row, dict):
            if r != 0:
                msg = "Keyboard metadata must be the first element"
                raise FormatError(msg, row)
            for name, value in row.items():
                if value:
                    keyboard.meta.set(name, value)
        else:
            msg = "Unexpected row type"
            raise FormatError(msg, row)

    logger.debug(f"Deserialized {len(keyboard.keys)} keys")
    return keyboard


parse_kle = deserialize
