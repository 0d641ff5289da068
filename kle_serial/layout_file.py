# SPDX-FileCopyrightText: 2025 adamws <adamws@users.noreply.github.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later

from __future__ import annotations

import json
import logging
import os
import sys
from typing import Any, Union

import yaml
from lzstring import LZString

from .deserializer import deserialize
from .format_error import FormatError
from .keyboard import Keyboard
from .serializer import serialize, to_raw_data

logger = logging.getLogger(__name__)

SHARE_URL_PREFIX = "https://editor.keyboard-tools.xyz/#share="


def _is_yaml(path: str) -> bool:
    return path.endswith(".yaml") or path.endswith(".yml")


def load_layout(layout_path: Union[str, os.PathLike]) -> Any:
    """Loads layout data from JSON or YAML file, '-' reads JSON from stdin"""
    layout_path = str(layout_path)
    try:
        if layout_path == "-":
            return json.load(sys.stdin)
        # Layout downloaded from keyboard-layout-editor is most likely using utf-8.
        # Use it explicitly in case the platform locale sets different encoding.
        with open(layout_path, "r", encoding="utf-8") as f:
            if _is_yaml(layout_path):
                return yaml.safe_load(f)
            return json.load(f)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        msg = f"Could not load '{layout_path}' layout file"
        raise FormatError(msg) from e


def parse_via(layout: Any) -> Keyboard:
    """Parses VIA definition file, keyboard layout is stored in KLE format
    under `layouts.keymap` property
    """
    try:
        rows = layout["layouts"]["keymap"]
    except (KeyError, TypeError) as e:
        msg = "Expected VIA definition with 'layouts.keymap' property"
        raise FormatError(msg) from e
    return deserialize(rows)


def get_keyboard(layout: Any) -> Keyboard:
    try:
        return deserialize(layout)
    except FormatError as e:
        logger.debug(f"Not a KLE raw layout: {e.message}")
    try:
        return parse_via(layout)
    except FormatError as e:
        logger.debug(f"Not a VIA layout: {e.message}")
    try:
        return Keyboard.from_json(layout)
    except (KeyError, TypeError) as e:
        logger.debug(f"Not a KLE internal layout: {e}")
    msg = "Unable to get keyboard layout"
    raise FormatError(msg)


def get_keyboard_from_file(layout_path: Union[str, os.PathLike]) -> Keyboard:
    layout = load_layout(layout_path)
    logger.info(f"User layout: {layout}")
    return get_keyboard(layout)


def keyboard_to_url(keyboard: Keyboard) -> str:
    """Returns keyboard-tools editor link with compressed layout"""
    json_str = "[" + to_raw_data(serialize(keyboard)) + "]"
    lz = LZString()
    encoded = lz.compressToEncodedURIComponent(json_str)
    return SHARE_URL_PREFIX + encoded
