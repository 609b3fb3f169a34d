import logging
import os
from typing import Any, Dict, List, Optional

import pandas as pd

from .base import BaseDealSource, DealSourceFactory

logger = logging.getLogger(__name__)

DEFAULT_DEAL_SHEET_PATH = "deals.csv"
DEAL_ID_COLUMN = "deal_id"


class CsvDealSource(BaseDealSource):
    """
    Deals stored one per row in a CSV sheet.

    The ``deal_id`` column identifies the row; every other column is a form
    field (``askingPrice``, ``revenue``, ... or the snake_case field names).
    Cells are read as text so currency formatting such as ``"2,500,000"``
    reaches the inputs builder untouched.
    """

    def __init__(self, path: Optional[str] = None):
        self.path = path or os.getenv("DEAL_SHEET_PATH", DEFAULT_DEAL_SHEET_PATH)
        self._sheet: Optional[pd.DataFrame] = None

    def get_deal(self, deal_id: str) -> Dict[str, Any]:
        sheet = self._load()
        if deal_id not in sheet.index:
            raise ValueError(f"Deal '{deal_id}' not found in {self.path}.")

        row = sheet.loc[deal_id]
        # Blank cells are dropped so the builder reports them as missing.
        return {col: val for col, val in row.items() if pd.notna(val) and str(val).strip() != ""}

    def list_deals(self) -> List[str]:
        return [str(deal_id) for deal_id in self._load().index]

    def _load(self) -> pd.DataFrame:
        if self._sheet is not None:
            return self._sheet

        if not os.path.exists(self.path):
            raise ValueError(f"Deal sheet not found: {self.path}")

        df = pd.read_csv(self.path, dtype=str, skipinitialspace=True)
        if DEAL_ID_COLUMN not in df.columns:
            raise ValueError(f"Deal sheet {self.path} has no '{DEAL_ID_COLUMN}' column.")

        df[DEAL_ID_COLUMN] = df[DEAL_ID_COLUMN].str.strip()
        duplicated = df[DEAL_ID_COLUMN].duplicated()
        if duplicated.any():
            logger.warning(f"Duplicate deal ids in {self.path}; keeping the first of {sorted(set(df.loc[duplicated, DEAL_ID_COLUMN]))}")
            df = df[~duplicated]

        logger.info(f"Loaded {len(df)} deals from {self.path}")
        self._sheet = df.set_index(DEAL_ID_COLUMN)
        return self._sheet


# Register the source
DealSourceFactory.register("csv", CsvDealSource)
