# SPDX-FileCopyrightText: 2025 adamws <adamws@users.noreply.github.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later

import argparse
import json
import logging
import pprint
import sys
from typing import Any

from . import __version__
from .deserializer import deserialize
from .format_error import FormatError
from .keyboard import DEFAULT_KEY_COLOR, Keyboard, KeyDefault
from .label_map import KEY_MAX_LABELS
from .layout_file import get_keyboard, keyboard_to_url, load_layout, parse_via
from .serializer import serialize, to_raw_data

logger = logging.getLogger(__name__)

INPUT_FORMATS = ["AUTO", "KLE_RAW", "KLE_VIA", "KLE_INTERNAL"]
OUTPUT_FORMATS = ["KLE_RAW", "KLE_INTERNAL", "URL"]


def remove_labels(keyboard: Keyboard) -> None:
    for k in keyboard.keys:
        k.labels = KEY_MAX_LABELS * [""]
        k.textColor = KEY_MAX_LABELS * [""]
        k.textSize = KEY_MAX_LABELS * [0]


def reset_colors(keyboard: Keyboard) -> None:
    for k in keyboard.keys:
        k.color = DEFAULT_KEY_COLOR
        k.textColor = KEY_MAX_LABELS * [""]
        k.default = KeyDefault(textSize=k.default.textSize)


def read_keyboard(layout: Any, input_format: str) -> Keyboard:
    if input_format == "KLE_RAW":
        return deserialize(layout)
    elif input_format == "KLE_VIA":
        return parse_via(layout)
    elif input_format == "KLE_INTERNAL":
        try:
            return Keyboard.from_json(layout)
        except (KeyError, TypeError) as e:
            msg = "Expected KLE internal layout"
            raise FormatError(msg) from e
    return get_keyboard(layout)


def convert(keyboard: Keyboard, output_format: str, print_result: bool) -> Any:
    if output_format == "KLE_INTERNAL":
        result = json.loads(keyboard.to_json())
        if print_result:
            pprint.pprint(result)
    elif output_format == "KLE_RAW":
        raw = to_raw_data(serialize(keyboard))
        if print_result:
            print(raw)
        # raw data can be copy pasted to keyboard-layout-editor,
        # to make json out of it we need to wrap it in list
        result = json.loads("[" + raw + "]")
    else:  # URL
        result = keyboard_to_url(keyboard)
        if print_result:
            print(result)
    return result


def app() -> None:
    parser = argparse.ArgumentParser(
        description="keyboard-layout-editor format converter",
        formatter_class=argparse.RawTextHelpFormatter,
    )

    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument(
        "-i", "--in", required=True, help="Layout file or '-' for stdin"
    )
    parser.add_argument(
        "--inform",
        required=False,
        default="AUTO",
        choices=INPUT_FORMATS,
        help="Specifies the input format, default=%(default)s",
    )
    parser.add_argument("-o", "--out", required=False, help="Result file")
    parser.add_argument(
        "--outform",
        required=False,
        default="KLE_INTERNAL",
        choices=OUTPUT_FORMATS,
        help="Specifies the output format, default=%(default)s",
    )
    parser.add_argument(
        "--text", required=False, action="store_true", help="Print result"
    )
    parser.add_argument(
        "--remove-labels", action="store_true", help="Remove all key labels"
    )
    parser.add_argument(
        "--reset-colors",
        action="store_true",
        help="Reset key and label colors to defaults",
    )
    parser.add_argument(
        "--log-level",
        required=False,
        default="WARNING",
        choices=logging._nameToLevel.keys(),
        type=str,
        help="Provide logging level, default=%(default)s",
    )

    args = parser.parse_args()
    input_path = getattr(args, "in")
    input_format = args.inform
    output_path = args.out
    output_format = args.outform
    edit = args.remove_labels or args.reset_colors

    logging.basicConfig(
        level=args.log_level, format="%(asctime)s: %(message)s", datefmt="%H:%M:%S"
    )

    if input_format == output_format and not edit:
        print("Output format equal input format, nothing to do...")
        sys.exit(1)

    try:
        layout = load_layout(input_path)
        keyboard = read_keyboard(layout, input_format)
    except FormatError as e:
        logger.error(f"Unable to load '{input_path}' layout: {e}")
        sys.exit(1)

    if args.remove_labels:
        remove_labels(keyboard)
    if args.reset_colors:
        reset_colors(keyboard)

    # URL is the only output worth showing when there is no result file
    print_result = args.text or (output_format == "URL" and not output_path)
    result = convert(keyboard, output_format, print_result)

    if output_path:
        with open(output_path, "w", encoding="utf-8") as output_file:
            if output_format == "URL":
                output_file.write(result + "\n")
            else:
                json.dump(result, output_file, indent=2)

    logging.shutdown()


if __name__ == "__main__":
    app()
