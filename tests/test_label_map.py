# SPDX-FileCopyrightText: 2025 adamws <adamws@users.noreply.github.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later

import pytest

from kle_serial.label_map import (
    ALIGNMENTS,
    KEY_MAX_LABELS,
    LABEL_MAP,
    REVERSE_LABEL_MAP,
    find_best_label_alignment,
    find_most_common_color,
    remove_trailing_falsy,
    reorder_labels_in,
    reorder_labels_kle,
)


def _labels(*positions: int) -> list:
    labels = KEY_MAX_LABELS * [""]
    for p in positions:
        labels[p] = "x"
    return labels


def test_tables_shape() -> None:
    for table in [LABEL_MAP, REVERSE_LABEL_MAP]:
        assert len(table) == len(ALIGNMENTS) == 8
        assert all(len(row) == KEY_MAX_LABELS for row in table)


@pytest.mark.parametrize("align", ALIGNMENTS)
def test_tables_are_inverse(align) -> None:
    for i, index in enumerate(LABEL_MAP[align]):
        if index != -1:
            assert REVERSE_LABEL_MAP[align][index] == i
    for i, index in enumerate(REVERSE_LABEL_MAP[align]):
        if index != -1:
            assert LABEL_MAP[align][index] == i


def test_reorder_in_default_alignment() -> None:
    result = reorder_labels_in(["a", "b", "c"], 4, "")
    assert result == ["a", "", "c", "", "", "", "b", "", "", "", "", ""]


def test_reorder_in_skips_unrepresentable_slots() -> None:
    # with alignment 3 only first and front labels are valid, the -1 entries
    # must not be treated as an index of the last slot
    result = reorder_labels_in(12 * ["x"], 3, "")
    assert result == ["", "", "", "", "x", "", "", "", "", "x", "x", "x"]


def test_reorder_in_skips_falsy_values() -> None:
    result = reorder_labels_in([3, 0, 5, None, 6], 4, 0)
    assert result == [3, 0, 5, 0, 0, 0, 0, 0, 0, 0, 6, 0]


def test_reorder_in_ignores_redundant_items() -> None:
    result = reorder_labels_in(13 * ["x"], 0, "")
    assert result == 12 * ["x"]


def test_reorder_kle_not_representable() -> None:
    assert reorder_labels_kle(_labels(0), 7, "") is None
    assert reorder_labels_kle(_labels(0), 4, "") == ["x"]


def test_reorder_kle_removes_trailing_defaults() -> None:
    sizes = 12 * [0]
    sizes[6] = 4
    assert reorder_labels_kle(sizes, 4, 0) == [0, 4]
    assert reorder_labels_kle(12 * [0], 4, 0) == []


@pytest.mark.parametrize(
    # fmt: off
    "positions,expected_alignment,expected_labels",
    [
        ([0],           4, ["x"]),
        ([1],           5, ["x"]),
        ([4],           7, ["x"]),
        ([5],           6, ["", "", "x"]),
        ([9],           3, ["", "", "", "", "x"]),
        ([10],          7, ["", "", "", "", "x"]),
        ([11],          3, ["", "", "", "", "", "x"]),
        ([1, 4, 7],     5, ["x", "x", "", "", "", "", "x"]),
        (range(0, 12),  0, 12 * ["x"]),
    ],
    # fmt: on
)
def test_best_label_alignment(positions, expected_alignment, expected_labels) -> None:
    alignment, labels = find_best_label_alignment(_labels(*positions))
    assert alignment == expected_alignment
    assert labels == expected_labels


def test_best_label_alignment_without_labels() -> None:
    assert find_best_label_alignment(_labels()) == (0, [])


@pytest.mark.parametrize(
    # fmt: off
    "colors,expected",
    [
        (["#111111", "#222222", "#222222", "#444444"], "#222222"),
        (["#aaaaaa", "#bbbbbb"],                       "#aaaaaa"),
        (["#aaaaaa", "#bbbbbb", "#bbbbbb", "#aaaaaa"], "#bbbbbb"),
        (["", "#bbbbbb", "", ""],                      "#bbbbbb"),
        (["", " "],                                    "#000000"),
        ([],                                           "#000000"),
    ],
    # fmt: on
)
def test_most_common_color(colors, expected) -> None:
    assert find_most_common_color(colors) == expected


def test_remove_trailing_falsy() -> None:
    assert remove_trailing_falsy([1, 0, 2, 0, 0]) == [1, 0, 2]
    assert remove_trailing_falsy(["", ""]) == []
