from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

import gsu


def test_version_is_a_string():
    assert isinstance(gsu.__version__, str)


def test_unknown_attribute_raises():
    with pytest.raises(AttributeError):
        gsu.not_there
