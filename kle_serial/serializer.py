# SPDX-FileCopyrightText: 2025 adamws <adamws@users.noreply.github.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later

from __future__ import annotations

import copy
import json
import logging
from typing import Any, Dict, List

from .keyboard import Key, Keyboard, KeyboardMetadata
from .label_map import (
    DEFAULT_ALIGNMENT,
    KEY_MAX_LABELS,
    find_best_label_alignment,
    remove_trailing_falsy,
    reorder_labels_kle,
)

logger = logging.getLogger(__name__)


def _round(v: Any) -> Any:
    return round(v, 6) if isinstance(v, float) else v


def cleanup_key(key: Key) -> None:
    """Removes text colors and sizes defined for missing labels
    and those which are equal to key defaults
    """
    # arrays might have been modified after key creation
    key.__post_init__()
    for i in range(KEY_MAX_LABELS):
        if not key.labels[i]:
            key.labels[i] = ""
            key.textColor[i] = ""
            key.textSize[i] = 0
            continue
        if not key.textColor[i] or key.textColor[i] == key.default.textColor:
            key.textColor[i] = ""
        if not key.textSize[i] or key.textSize[i] == key.default.textSize:
            key.textSize[i] = 0


def _text_size_changed(current: List[Any], new: List[Any]) -> bool:
    current = copy.copy(current)
    new = copy.copy(new)
    for obj in [current, new]:
        if len_difference := KEY_MAX_LABELS - len(obj):
            obj.extend(len_difference * [0])
    return current != new


def _serialize_metadata(meta: KeyboardMetadata) -> Dict[str, Any]:
    default_meta = KeyboardMetadata().to_dict()
    result = {}
    for name, value in meta.to_dict().items():
        # custom properties are always included
        if name not in default_meta or default_meta[name] != value:
            result[name] = value
    return result


def serialize(keyboard: Keyboard) -> List[Any]:
    """Converts Keyboard object into keyboard-layout-editor raw data"""
    row: List[Any] = []
    rows: List[Any] = []

    current: Key = Key()
    # some properties are not part of Key type, store them separately:
    current_alignment = DEFAULT_ALIGNMENT
    current_text_color = ""
    current_text_color_alignment = DEFAULT_ALIGNMENT
    current_text_size: List[int] = []
    current_text_size_alignment = DEFAULT_ALIGNMENT
    # rotation origin:
    cluster: Dict[str, float] = {"r": 0, "rx": 0, "ry": 0}

    new_row = True
    current.y -= 1  # will be incremented on first row

    for k in keyboard.keys:
        props: Dict[str, Any] = {}

        def add_prop(name: str, value: Any, default: Any) -> Any:
            value = _round(value)
            default = _round(default)
            if value != default:
                props[name] = value
            return value

        # never modify keys of serialized keyboard
        key = copy.deepcopy(k)
        cleanup_key(key)

        alignment, labels = find_best_label_alignment(key.labels)

        # detect new row
        new_cluster = (
            key.rotation_angle != cluster["r"]
            or key.rotation_x != cluster["rx"]
            or key.rotation_y != cluster["ry"]
        )
        if rows or row:
            new_row = key.y != current.y
        if row and (new_cluster or new_row):
            # push the old row
            rows.append(row)
            row = []
            new_row = True

        if new_row:
            current.y = round(current.y + 1, 6)
            # 'y' is reset if either 'rx' or 'ry' are changed
            if key.rotation_y != cluster["ry"] or key.rotation_x != cluster["rx"]:
                current.y = key.rotation_y
            # always reset x to rx (which defaults to zero)
            current.x = key.rotation_x

            cluster["r"] = key.rotation_angle
            cluster["rx"] = key.rotation_x
            cluster["ry"] = key.rotation_y

            new_row = False

        current.rotation_angle = add_prop(
            "r", key.rotation_angle, current.rotation_angle
        )
        current.rotation_x = add_prop("rx", key.rotation_x, current.rotation_x)
        current.rotation_y = add_prop("ry", key.rotation_y, current.rotation_y)

        x_offset = add_prop("x", round(key.x - current.x, 6), 0)
        y_offset = add_prop("y", round(key.y - current.y, 6), 0)
        current.x = round(current.x + key.width + x_offset, 6)
        current.y = round(current.y + y_offset, 6)

        current.color = add_prop("c", key.color, current.color)

        text_color = reorder_labels_kle(key.textColor, alignment, "") or []
        if (
            len(labels) == 1
            and len(text_color) == 1
            and text_color[0]
            and not current_text_color
        ):
            # color of the only label can become new default
            current.default.textColor = add_prop(
                "t", text_color[0], current.default.textColor
            )
        else:
            current.default.textColor = add_prop(
                "t", key.default.textColor, current.default.textColor
            )
            if text_color:
                value = "\n".join(text_color).rstrip("\n")
                # per-label colors are applied with alignment active at
                # the time they are read, alignment change requires new value
                if (
                    value != current_text_color
                    or alignment != current_text_color_alignment
                ):
                    props["ta"] = value
                    current_text_color = value
                    current_text_color_alignment = alignment
            elif labels and current_text_color:
                # drop inherited per-label colors, value equal to default
                # is not stored when deserializing
                props["ta"] = current.default.textColor
                current_text_color = ""

        current.ghost = add_prop("g", key.ghost, current.ghost)
        current.profile = add_prop("p", key.profile, current.profile)
        current.sm = add_prop("sm", key.sm, current.sm)
        current.sb = add_prop("sb", key.sb, current.sb)
        current.st = add_prop("st", key.st, current.st)

        current_alignment = add_prop("a", alignment, current_alignment)
        current.default.textSize = add_prop(
            "f", key.default.textSize, current.default.textSize
        )
        if "f" in props:
            current_text_size = []

        text_size = remove_trailing_falsy(
            reorder_labels_kle(key.textSize, alignment, 0) or []
        )
        if _text_size_changed(current_text_size, text_size) or (
            text_size and alignment != current_text_size_alignment
        ):
            if not text_size:
                # 'f' resets all per-label sizes when deserializing
                props["f"] = current.default.textSize
                current_text_size = []
            else:
                props["fa"] = text_size
                current_text_size = text_size
                current_text_size_alignment = alignment

        add_prop("w", key.width, 1)
        add_prop("h", key.height, 1)
        add_prop("w2", key.width2, key.width)
        add_prop("h2", key.height2, key.height)
        add_prop("x2", key.x2, 0)
        add_prop("y2", key.y2, 0)
        add_prop("l", key.stepped, False)
        add_prop("n", key.nub, False)
        add_prop("d", key.decal, False)

        if props:
            row.append(props)

        row.append("\n".join(labels).rstrip("\n"))

    if row:
        rows.append(row)

    if meta := _serialize_metadata(keyboard.meta):
        rows.insert(0, meta)

    logger.debug(f"Serialized {len(keyboard.keys)} keys into {len(rows)} rows")
    return rows


def to_raw_data(rows: List[Any]) -> str:
    """Returns serialized rows in a form accepted by keyboard-layout-editor's
    'Raw data' editor, i.e. JSON without surrounding brackets
    """
    return ",\n".join(json.dumps(row, indent=None) for row in rows)
