"""Data loading for the player explorer.

Reads the season stats CSV (one row per player) into :class:`Entity`
records.
"""

from __future__ import annotations

import os

import numpy as np
import pandas as pd
from loguru import logger

from .entities import Entity, EntityStore

NAME_COL = "NAME"
GROUP_COL = "TEAM"
CATEGORY_COL = "POS"
REQUIRED_METRIC = "PPG"


def entities_from_dataframe(df: pd.DataFrame) -> EntityStore:
    """Convert a stats DataFrame into an :class:`EntityStore`.

    Parameters
    ----------
    df : pd.DataFrame
        Must contain ``NAME``, ``TEAM`` and ``POS`` columns; every other
        numeric column becomes a metric.  Rows without ``PPG`` are dropped.

    Returns
    -------
    EntityStore

    Raises
    ------
    ValueError
        If a required column is missing or a name appears twice.
    """
    missing = [c for c in (NAME_COL, GROUP_COL, CATEGORY_COL) if c not in df.columns]
    if missing:
        raise ValueError(f"Stats table is missing columns: {missing}")

    if REQUIRED_METRIC in df.columns:
        df = df[df[REQUIRED_METRIC].notna()]

    metric_cols = [
        c for c in df.columns
        if c not in (NAME_COL, GROUP_COL, CATEGORY_COL)
        and pd.api.types.is_numeric_dtype(df[c])
    ]
    values = df[metric_cols].astype(float).to_numpy()

    entities = []
    for row, name, group, category in zip(
        values,
        df[NAME_COL].astype(str).str.strip(),
        df[GROUP_COL].astype(str).str.strip(),
        df[CATEGORY_COL].astype(str).str.strip(),
    ):
        metrics = {
            col: (None if np.isnan(v) else float(v))
            for col, v in zip(metric_cols, row)
        }
        entities.append(Entity(name=name, category=category, group=group, metrics=metrics))
    return EntityStore(entities)


def load_entities(path: str) -> EntityStore:
    """Load a stats CSV from *path*.

    Quoted values and surrounding whitespace are stripped; empty cells
    become absent values.
    """
    if not os.path.exists(path):
        raise FileNotFoundError(path)
    df = pd.read_csv(path, skipinitialspace=True)
    df.columns = [str(c).strip() for c in df.columns]
    store = entities_from_dataframe(df)
    logger.info("Loaded {} players from {}", len(store), path)
    return store
