"""Tabular (pandas) views of a bundle for inspection.

These are read-only projections used by `coalesced inspect`; the codecs never
go through pandas. Row order follows bundle order exactly and duplicate keys
produce duplicate rows.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from coalesced.core.folding import has_line_break
from coalesced.core.model import Bundle

if TYPE_CHECKING:  # pragma: no cover
    import pandas as pd


PAIRS_COLUMNS: list[str] = ["file", "section", "key", "value"]
SUMMARY_COLUMNS: list[str] = ["file", "sections", "pairs", "multiline"]


def bundle_to_frame(bundle: Bundle) -> "pd.DataFrame":
    """One row per pair: `file, section, key, value`."""
    import pandas as pd  # local import to keep module import-light

    rows = [
        (f.name, s.name, key, value)
        for f in bundle.files
        for s in f.sections
        for key, value in s.pairs
    ]
    df = pd.DataFrame(rows, columns=PAIRS_COLUMNS)
    return df.astype("string")


def summarize_bundle(bundle: Bundle) -> "pd.DataFrame":
    """One row per file with section/pair counts and the number of multi-line values."""
    import pandas as pd

    rows = []
    for f in bundle.files:
        multiline = sum(1 for s in f.sections for _, v in s.pairs if has_line_break(v))
        rows.append(
            {
                "file": f.name,
                "sections": len(f.sections),
                "pairs": f.pair_count,
                "multiline": multiline,
            }
        )
    df = pd.DataFrame(rows, columns=SUMMARY_COLUMNS)
    return df.astype({"file": "string", "sections": "int64", "pairs": "int64", "multiline": "int64"})
