"""Pytest configuration.

This repo follows the `src/` layout. Some environments may invoke a `pytest`
entrypoint from a different Python install than the one used for
`python -m pip install -e ...`, which can cause `import coalesced` to fail.

To keep things robust, we ensure `src/` is on `sys.path` during tests.
"""

from __future__ import annotations

import sys
from pathlib import Path


def pytest_configure() -> None:
    repo_root = Path(__file__).resolve().parents[1]
    src_dir = repo_root / "src"
    sys.path.insert(0, str(src_dir))


# =============================================================================
# Shared Test Helpers
# =============================================================================


def make_bundle(name: str, files: dict[str, dict[str, list[tuple[str, str]]]]):
    """Build a Bundle from `{file: {section: [(key, value), ...]}}` (insertion order kept)."""
    from coalesced.core.model import Bundle, BundleFile, Section

    return Bundle(
        name,
        [
            BundleFile(fname, [Section(sname, pairs) for sname, pairs in sections.items()])
            for fname, sections in files.items()
        ],
    )


def demo_bundle():
    """A small bundle touching every feature the text form supports."""
    return make_bundle(
        "Coalesced_INT.bin",
        {
            "..\\BIOGame\\Config\\BIOEngine.ini": {
                "Core.System": [
                    ("Paths", "..\\BIOGame\\CookedPC"),
                    ("Paths", "..\\Engine\\EngineMaterials"),
                    ("Extensions", "pcc"),
                ],
                "Engine.Engine": [
                    ("bSmoothFrameRate", "TRUE"),
                    ("MaxSmoothedFrameRate", "62"),
                    ("Empty", ""),
                ],
            },
            "..\\BIOGame\\Localization\\INT\\BIOUI.int": {
                "SFXGame.BioSFHandler_PCNewCharacter": [
                    ("srTitle", "Create a new character"),
                    ("Desc", "Line A\r\nLine B\r\n"),
                    ("Note", "a=b; [not a header]"),
                ],
            },
            "Empty.ini": {},
        },
    )
