"""
Shared pytest fixtures: bracket schedules and a helper that writes them to a
temporary JSON config file. No fixture touches the real config.json.
"""

import json
import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from config import TaxBracket

# ---------------------------------------------------------------------------
# Bracket schedules
# ---------------------------------------------------------------------------

@pytest.fixture
def two_brackets():
    """10% up to 1,000 and 20% above."""
    return [TaxBracket(rate=10.0, up_to=1_000.0), TaxBracket(rate=20.0, up_to=None)]


@pytest.fixture
def us_like_brackets():
    return [
        TaxBracket(rate=10.0, up_to=11_925.0),
        TaxBracket(rate=12.0, up_to=48_475.0),
        TaxBracket(rate=22.0, up_to=103_350.0),
        TaxBracket(rate=24.0, up_to=197_300.0),
        TaxBracket(rate=32.0, up_to=250_525.0),
        TaxBracket(rate=35.0, up_to=626_350.0),
        TaxBracket(rate=37.0, up_to=None),
    ]


# ---------------------------------------------------------------------------
# Config files
# ---------------------------------------------------------------------------

@pytest.fixture
def write_config(tmp_path):
    """Return a function that dumps ``document`` (or raw text) to a file and returns its path."""
    def _write(document, name="config.json"):
        path = tmp_path / name
        if isinstance(document, str):
            path.write_text(document, encoding="utf-8")
        else:
            path.write_text(json.dumps(document), encoding="utf-8")
        return str(path)
    return _write
