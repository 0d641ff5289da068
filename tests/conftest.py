# SPDX-FileCopyrightText: 2025 adamws <adamws@users.noreply.github.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later

import logging
from pathlib import Path

import pytest

logger = logging.getLogger(__name__)


def pytest_addoption(parser) -> None:
    parser.addoption(
        "--seed",
        type=int,
        help="Seed used by randomized round-trip tests",
        default=1234,
    )


@pytest.fixture(scope="session")
def seed(request) -> int:
    value = request.config.getoption("--seed")
    logger.info(f"Using random seed: {value}")
    return value


@pytest.fixture(scope="session")
def data_dir() -> Path:
    return Path(__file__).parent / "data"
