"""Shared test setup for ApiBlame tests."""

import sys
from pathlib import Path

# Repository root holds the ApiBlame package and main.py
sys.path.insert(0, str(Path(__file__).parent.parent))
