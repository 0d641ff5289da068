# SPDX-FileCopyrightText: 2025 adamws <adamws@users.noreply.github.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later

from __future__ import annotations

import json
import logging
from typing import Any

logger = logging.getLogger(__name__)


class FormatError(Exception):
    def __init__(self, message: str, data: Any = None) -> None:
        self.message = message
        self.data = data
        text = message
        if data is not None:
            text += ":\n  " + json.dumps(data, default=str)
        logger.debug(text.replace("\n", " "))
        super().__init__(text)
