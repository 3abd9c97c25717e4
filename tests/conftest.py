import os
import sys

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from types import SimpleNamespace

import pytest


@pytest.fixture()
def settings():
    return SimpleNamespace(
        min_match_words=3,
        max_tokens=5000,
        ai_separator="\n\n",
    )
