"""Shared pytest setup: project-root imports and sample form values."""
from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Top-level modules (`calc`, `models`, `state`, ...) live in the project root, not in a package.
PROJECT_ROOT = str(Path(__file__).resolve().parent.parent)
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)


@pytest.fixture
def sample_values():
    from models import SAMPLE_FORM_VALUES

    return dict(SAMPLE_FORM_VALUES)
