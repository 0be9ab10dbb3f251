"""
Export utilities for tables.
"""
import pandas as pd
from typing import Optional
from datetime import datetime

from src.config import COLUMN_LABELS
from src.metrics.workforce import WorkforceTable, workforce_frame


def export_dataframe_csv(df: pd.DataFrame, filename: Optional[str] = None) -> tuple:
    """
    Export dataframe to CSV bytes.

    Returns: (csv_bytes, filename)
    """
    if filename is None:
        filename = f"export_{datetime.now().strftime('%Y%m%d_%H%M%S')}.csv"

    csv_bytes = df.to_csv(index=False).encode('utf-8')

    return csv_bytes, filename


def export_workforce_csv(table: WorkforceTable, period: str) -> tuple:
    """
    Export the workforce table with display headers.

    Returns: (csv_bytes, filename)
    """
    df = workforce_frame(table).rename(columns=COLUMN_LABELS)
    return export_dataframe_csv(df, filename=f"workforce_utilisation_{period}.csv")
