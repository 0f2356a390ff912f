from __future__ import annotations

import logging

import pandas as pd

from core.schema import FunnelInputs

logger = logging.getLogger(__name__)


def load_inputs_csv(path: str) -> FunnelInputs:
    """
    Load funnel inputs from CSV.

    Accepts either a one-row wide file (one column per input name) or a
    two-column "field,value" file. Input names may be snake_case or camelCase.
    """
    df = pd.read_csv(path)
    if list(df.columns) == ["field", "value"]:
        mapping = dict(zip(df["field"].astype(str).str.strip(), df["value"]))
    else:
        if len(df) != 1:
            raise ValueError(f"Expected exactly one row of inputs in {path}, found {len(df)}.")
        mapping = {str(c).strip(): v for c, v in df.iloc[0].items()}

    inputs = FunnelInputs.from_mapping(mapping)
    logger.info("Loaded %d funnel inputs from %s", len(mapping), path)
    return inputs
