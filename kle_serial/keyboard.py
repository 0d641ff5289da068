# SPDX-FileCopyrightText: 2025 adamws <adamws@users.noreply.github.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field, fields
from typing import Any, Dict, List, Optional, Type

from .label_map import KEY_MAX_LABELS

DEFAULT_KEY_COLOR = "#cccccc"
DEFAULT_TEXT_COLOR = "#000000"
DEFAULT_TEXT_SIZE = 3


def _slots(values: Optional[List[Any]], empty: Any) -> List[Any]:
    """Returns copy of `values` with exactly KEY_MAX_LABELS items,
    missing values (including None) replaced by `empty`
    """
    if isinstance(values, str):
        # single label, not a sequence of labels
        values = [values]
    ret = [empty if v is None else v for v in (values or [])[0:KEY_MAX_LABELS]]
    ret += (KEY_MAX_LABELS - len(ret)) * [empty]
    return ret


@dataclass
class KeyDefault:
    textColor: str = DEFAULT_TEXT_COLOR  # noqa: N815
    textSize: int = DEFAULT_TEXT_SIZE  # noqa: N815


@dataclass
class Key:
    color: str = DEFAULT_KEY_COLOR
    labels: List[str] = field(default_factory=lambda: KEY_MAX_LABELS * [""])
    textColor: List[str] = field(  # noqa: N815
        default_factory=lambda: KEY_MAX_LABELS * [""]
    )
    textSize: List[int] = field(  # noqa: N815
        default_factory=lambda: KEY_MAX_LABELS * [0]
    )
    default: KeyDefault = field(default_factory=KeyDefault)
    x: float = 0
    y: float = 0
    width: float = 1
    height: float = 1
    x2: float = 0
    y2: float = 0
    width2: float = 1
    height2: float = 1
    rotation_x: float = 0
    rotation_y: float = 0
    rotation_angle: float = 0
    decal: bool = False
    ghost: bool = False
    stepped: bool = False
    nub: bool = False
    profile: str = ""
    sm: str = ""  # switch mount
    sb: str = ""  # switch brand
    st: str = ""  # switch type

    def __post_init__(self: Key) -> None:
        if isinstance(self.default, dict):
            self.default = KeyDefault(**self.default)
        self.labels = _slots(self.labels, "")
        self.textColor = _slots(self.textColor, "")
        self.textSize = _slots(self.textSize, 0)
        for key_field in self.__dataclass_fields__:
            value = getattr(self, key_field)
            if isinstance(value, float):
                new_val = round(value, 6)
                setattr(self, key_field, new_val)

    def get_label(self: Key, index: int) -> str:
        if 0 <= index < KEY_MAX_LABELS:
            return self.labels[index]
        return ""

    def set_label(self: Key, index: int, value: str) -> None:
        if index > KEY_MAX_LABELS - 1 or index < 0:
            msg = "Illegal key label index"
            raise ValueError(msg)
        self.labels[index] = value


@dataclass
class Background:
    name: str = ""
    style: str = ""


@dataclass
class KeyboardMetadata:
    author: str = ""
    backcolor: str = "#eeeeee"
    background: Optional[Background] = None
    name: str = ""
    notes: str = ""
    radii: str = ""
    switchBrand: str = ""  # noqa: N815
    switchMount: str = ""  # noqa: N815
    switchType: str = ""  # noqa: N815
    # properties which are not part of keyboard-layout-editor metadata
    # but should survive serialization
    custom: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self: KeyboardMetadata) -> None:
        if isinstance(self.background, dict):
            background_fields = {f.name for f in fields(Background)}
            self.background = Background(
                **{k: v for k, v in self.background.items() if k in background_fields}
            )

    @staticmethod
    def known_properties() -> List[str]:
        return [f.name for f in fields(KeyboardMetadata) if f.name != "custom"]

    @classmethod
    def from_dict(
        cls: Type[KeyboardMetadata], data: Dict[str, Any]
    ) -> KeyboardMetadata:
        known = KeyboardMetadata.known_properties()
        meta = cls(**{k: v for k, v in data.items() if k in known})
        meta.custom = {k: v for k, v in data.items() if k not in known}
        return meta

    def to_dict(self: KeyboardMetadata) -> Dict[str, Any]:
        result = {k: v for k, v in asdict(self).items() if k != "custom"}
        result.update(self.custom)
        return result

    def set(self: KeyboardMetadata, name: str, value: Any) -> None:
        if name in KeyboardMetadata.known_properties():
            setattr(self, name, value)
            if name == "background":
                self.__post_init__()
        else:
            self.custom[name] = value


@dataclass
class Keyboard:
    meta: KeyboardMetadata = field(default_factory=KeyboardMetadata)
    keys: List[Key] = field(default_factory=list)

    @classmethod
    def from_json(cls: Type[Keyboard], data: dict) -> Keyboard:
        data = {**data}
        if isinstance(data["meta"], dict):
            data["meta"] = KeyboardMetadata.from_dict(data["meta"])
        if isinstance(data["keys"], list):
            keys: List[Key] = [Key(**key) for key in data["keys"]]
            data["keys"] = keys
        return cls(**data)

    def to_json(self: Keyboard, indent: Optional[int] = None) -> str:
        result = {
            "meta": self.meta.to_dict(),
            "keys": [asdict(key) for key in self.keys],
        }
        return json.dumps(result, indent=indent)
