# SPDX-FileCopyrightText: 2025 adamws <adamws@users.noreply.github.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later

import json
from pathlib import Path

import pytest

from kle_serial import (
    KEY_MAX_LABELS,
    Background,
    Key,
    Keyboard,
    KeyboardMetadata,
    KeyDefault,
    deserialize,
)


def test_key_defaults() -> None:
    key = Key()
    assert key.labels == KEY_MAX_LABELS * [""]
    assert key.textColor == KEY_MAX_LABELS * [""]
    assert key.textSize == KEY_MAX_LABELS * [0]
    assert key.default == KeyDefault("#000000", 3)
    assert (key.width, key.height, key.width2, key.height2) == (1, 1, 1, 1)
    assert key.color == "#cccccc"


def test_key_arrays_normalized() -> None:
    key = Key(
        labels=["a", None, "b"],
        textColor=["#ff0000"],
        textSize=[None, 4] + 12 * [5],
        default={"textColor": "#111111", "textSize": 4},
    )
    assert key.labels == ["a", "", "b"] + 9 * [""]
    assert key.textColor == ["#ff0000"] + 11 * [""]
    assert key.textSize == [0, 4] + 10 * [5]
    assert key.default == KeyDefault("#111111", 4)


def test_key_float_rounding() -> None:
    key = Key(x=0.1 + 0.2, y=0.9000000000000001, rotation_angle=-15.0000001)
    assert key.x == 0.3
    assert key.y == 0.9
    assert key.rotation_angle == -15.0


def test_get_label() -> None:
    key = Key(labels=["a"])
    assert key.get_label(0) == "a"
    assert key.get_label(11) == ""
    assert key.get_label(KEY_MAX_LABELS) == ""


@pytest.mark.parametrize("index", [-1, KEY_MAX_LABELS])
def test_illegal_key_label_position(index) -> None:
    key = Key()
    with pytest.raises(ValueError, match="Illegal key label index"):
        key.set_label(index, "Enter")


def test_set_label() -> None:
    key = Key()
    key.set_label(11, "Enter")
    assert key.labels[11] == "Enter"


def test_if_produces_valid_json() -> None:
    result = deserialize([["x"]])
    assert json.loads(result.to_json()) == {
        "meta": {
            "author": "",
            "backcolor": "#eeeeee",
            "background": None,
            "name": "",
            "notes": "",
            "radii": "",
            "switchBrand": "",
            "switchMount": "",
            "switchType": "",
        },
        "keys": [
            {
                "color": "#cccccc",
                "labels": ["x"] + 11 * [""],
                "textColor": 12 * [""],
                "textSize": 12 * [0],
                "default": {"textColor": "#000000", "textSize": 3},
                "x": 0,
                "y": 0,
                "width": 1,
                "height": 1,
                "x2": 0,
                "y2": 0,
                "width2": 1,
                "height2": 1,
                "rotation_x": 0,
                "rotation_y": 0,
                "rotation_angle": 0,
                "decal": False,
                "ghost": False,
                "stepped": False,
                "nub": False,
                "profile": "",
                "sm": "",
                "sb": "",
                "st": "",
            }
        ],
    }


def test_json_indent() -> None:
    result = Keyboard().to_json(indent=2)
    assert result.startswith('{\n  "meta": {\n')


def test_internal_format_round_trip() -> None:
    keyboard = deserialize(
        [
            {"name": "test", "background": {"name": "wood", "style": "x"}, "v": 1},
            [{"a": 0, "t": "#111111\n#222222", "fa": [2, 4]}, "A\nB", "C"],
        ]
    )
    result = Keyboard.from_json(json.loads(keyboard.to_json()))
    assert result == keyboard
    assert result.meta.background == Background("wood", "x")
    assert result.meta.custom == {"v": 1}


def test_from_internal_file(data_dir: Path) -> None:
    with open(data_dir / "kle-layouts/2x2.json", "r") as f:
        raw = json.load(f)
    with open(data_dir / "kle-layouts/2x2-internal.json", "r") as f:
        internal = json.load(f)
    assert Keyboard.from_json(internal) == deserialize(raw)


def test_keyboard_from_invalid_type() -> None:
    with pytest.raises(TypeError):
        Keyboard.from_json("{}")  # type: ignore


def test_keyboard_from_invalid_schema() -> None:
    with pytest.raises(KeyError):
        Keyboard.from_json({})  # type: ignore


def test_metadata_dict_conversion() -> None:
    data = {"name": "test", "switchMount": "cherry", "spacing_x": 18, "rows": 2}
    meta = KeyboardMetadata.from_dict(data)
    assert meta.name == "test"
    assert meta.switchMount == "cherry"
    assert meta.custom == {"spacing_x": 18, "rows": 2}
    result = meta.to_dict()
    assert result["spacing_x"] == 18
    assert "custom" not in result
    assert KeyboardMetadata.from_dict(result) == meta


def test_metadata_set() -> None:
    meta = KeyboardMetadata()
    meta.set("author", "adamws")
    meta.set("background", {"name": "wood", "style": "x", "unknown": 1})
    meta.set("css", "* { }")
    assert meta.author == "adamws"
    assert meta.background == Background("wood", "x")
    assert meta.custom == {"css": "* { }"}


def test_single_string_label() -> None:
    key = Key(labels="AB")
    assert key.labels == ["AB"] + 11 * [""]
