# SPDX-FileCopyrightText: 2025 adamws <adamws@users.noreply.github.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later

import logging
from logging import NullHandler

from .deserializer import deserialize, parse_kle
from .format_error import FormatError
from .keyboard import (
    DEFAULT_KEY_COLOR,
    DEFAULT_TEXT_COLOR,
    DEFAULT_TEXT_SIZE,
    Background,
    Key,
    Keyboard,
    KeyboardMetadata,
    KeyDefault,
)
from .label_map import KEY_MAX_LABELS, LABEL_MAP, REVERSE_LABEL_MAP
from .serializer import serialize, to_raw_data

__version__ = "0.1.0"
__license__ = "GPL-3.0-or-later"

logging.getLogger(__name__).addHandler(NullHandler())
del NullHandler

__all__ = [
    "DEFAULT_KEY_COLOR",
    "DEFAULT_TEXT_COLOR",
    "DEFAULT_TEXT_SIZE",
    "KEY_MAX_LABELS",
    "LABEL_MAP",
    "REVERSE_LABEL_MAP",
    "Background",
    "FormatError",
    "Key",
    "KeyDefault",
    "Keyboard",
    "KeyboardMetadata",
    "deserialize",
    "parse_kle",
    "serialize",
    "to_raw_data",
]
