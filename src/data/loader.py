"""
Data loading utilities with Streamlit caching.
"""
import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

import streamlit as st

from src.config import config
from src.data.schema import SourceRecord, parse_source_records

logger = logging.getLogger(__name__)


def _load_json(filepath: Path) -> Optional[Any]:
    """Load a JSON document, or None if the file does not exist."""
    if not filepath.exists():
        return None
    with filepath.open(encoding="utf-8") as fh:
        return json.load(fh)


def read_source_records(filepath: Path) -> Optional[List[SourceRecord]]:
    """
    Read and parse a source-data JSON file.

    Returns None when the file is missing. Malformed JSON raises
    json.JSONDecodeError; contract-violating records raise
    SchemaValidationError.
    """
    raw = _load_json(filepath)
    if raw is None:
        logger.warning("Source file not found: %s", filepath)
        return None

    records = parse_source_records(raw)
    logger.info("Loaded %d records from %s", len(records), filepath)
    return records


def read_raw_records(filepath: Path) -> Optional[Any]:
    """Unparsed JSON content of the source file (for validation)."""
    return _load_json(filepath)


@st.cache_data(ttl=config.cache_ttl_seconds)
def load_source_records() -> List[SourceRecord]:
    """Load the configured source-data file."""
    records = read_source_records(config.source_path)
    if records is None:
        st.error(f"Could not find {config.source_file} in {config.data_dir}")
        st.stop()
    return records


def get_data_status() -> Dict[str, Any]:
    """Get status of the source data file."""
    path = config.source_path
    status = {
        "path": str(path),
        "exists": path.exists(),
        "size_kb": None,
        "modified_utc": None,
    }

    if status["exists"]:
        stat = path.stat()
        status["size_kb"] = round(stat.st_size / 1024, 1)
        status["modified_utc"] = datetime.fromtimestamp(
            stat.st_mtime, tz=timezone.utc
        ).strftime("%Y-%m-%d %H:%M")

    return status
