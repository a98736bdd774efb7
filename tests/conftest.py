"""Test configuration utilities and shared fixtures."""

import sys
from pathlib import Path

# Ensure the ``src`` directory is importable when tests are executed without an
# editable install.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

import pytest  # noqa: E402

from polymsg.catalogues import JsonMessageCatalogue  # noqa: E402
from polymsg.localization import Translator  # noqa: E402

DATA_DIR = Path(__file__).resolve().parent / "data"
MESSAGES_DIR = DATA_DIR / "messages"


@pytest.fixture()
def messages_dir() -> Path:
    """Return the directory holding the JSON fixture catalogues."""

    return MESSAGES_DIR


@pytest.fixture()
def translator(messages_dir: Path) -> Translator:
    """Provide a translator with the ``test`` category bound to JSON fixtures."""

    return Translator(
        {"test": JsonMessageCatalogue(messages_dir)},
        source_locale="en-US",
    )
