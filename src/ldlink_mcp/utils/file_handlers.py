"""
Parsing and writing of LDlink tab-delimited results.
"""

import io
import re
import logging
from pathlib import Path
from typing import List, Union

import pandas as pd

from ..exceptions import RemoteError

logger = logging.getLogger(__name__)

# Substrings LDlink uses to report problems inside an otherwise successful response
IN_BAND_MESSAGE_MARKERS = ("error", "warning")


def sanitize_column_name(name: str) -> str:
    """Replace each run of '.' (or whitespace) in a column name with a single '_'."""
    # Whitespace is folded in too: R's read.delim turns it into '.' before this step
    return re.sub(r'[.\s]+', '_', str(name).strip())


def sanitize_columns(columns) -> List[str]:
    return [sanitize_column_name(col) for col in columns]


def _is_in_band_message(value) -> bool:
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return False
    text = str(value).lower()
    return any(marker in text for marker in IN_BAND_MESSAGE_MARKERS)


def check_response_messages(df: pd.DataFrame) -> None:
    """
    Raise RemoteError if LDlink placed an error or warning in the last row.

    LDlink reports many failures with a 200 status and a message in the
    first column of the final row, so this runs regardless of HTTP status.
    """
    if df.shape[1] == 0:
        return

    if df.empty:
        # Body was a single message line, parsed as the header
        first_column = df.columns[0]
        if _is_in_band_message(first_column):
            raise RemoteError(str(first_column))
        return

    last_value = df.iloc[-1, 0]
    if _is_in_band_message(last_value):
        raise RemoteError(str(last_value))


def read_ldlink_response(text: str) -> pd.DataFrame:
    """
    Parse a tab-delimited LDlink response body.

    Args:
        text: Response body with a header row

    Returns:
        DataFrame with sanitized column names

    Raises:
        RemoteError: If the body is empty or carries an in-band error/warning
    """
    if not text or not text.strip():
        raise RemoteError("LDlink returned an empty response")

    try:
        df = pd.read_csv(io.StringIO(text), sep='\t')
    except pd.errors.ParserError as e:
        raise RemoteError(f"Could not parse LDlink response: {e}")

    # Checked before sanitizing so a message-only body keeps its wording
    check_response_messages(df)
    df.columns = sanitize_columns(df.columns)

    logger.debug(f"Parsed LDlink response: {len(df)} rows, {len(df.columns)} columns")
    return df


def write_results(data: pd.DataFrame, output_path: Union[str, Path]) -> str:
    """
    Write results as tab-delimited text: header row, no quoting, no index.

    Values are written as returned by LDlink, without escaping. Missing
    values are written as empty fields. The confirmation is logged at INFO.

    Args:
        data: Results table
        output_path: Output file path (parent directories are created)

    Returns:
        Path to written file
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    values = data.astype(object).where(data.notna(), "").astype(str)

    lines = ["\t".join(str(col) for col in data.columns)]
    lines.extend("\t".join(row) for row in values.itertuples(index=False, name=None))

    output_path.write_text("\n".join(lines) + "\n", encoding="utf-8")

    logger.info(f"File saved to {output_path}.")
    return str(output_path)
