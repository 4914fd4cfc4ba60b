"""
Tests for parsing and writing LDlink results.
"""

import pytest
import pandas as pd
from pathlib import Path
import sys

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from ldlink_mcp.exceptions import RemoteError
from ldlink_mcp.utils.file_handlers import (
    read_ldlink_response,
    sanitize_column_name,
    write_results,
)


class TestSanitizeColumnName:
    """Tests for column name sanitization."""

    def test_single_dot(self):
        assert sanitize_column_name("R.Squared") == "R_Squared"

    def test_consecutive_dots_collapse(self):
        assert sanitize_column_name("A..B") == "A_B"
        assert sanitize_column_name("A...B.C") == "A_B_C"

    def test_whitespace(self):
        assert sanitize_column_name("RS Number") == "RS_Number"

    def test_unchanged(self):
        assert sanitize_column_name("RS_Number") == "RS_Number"


class TestReadLdlinkResponse:
    """Tests for response parsing."""

    def test_parse_response(self, snpclip_response):
        df = read_ldlink_response(snpclip_response)

        assert list(df.columns) == ["RS_Number", "Position", "Alleles", "Details"]
        assert len(df) == 3
        assert df.iloc[0]["RS_Number"] == "rs3"
        assert df.iloc[1]["Details"].startswith("Variant in LD with rs3")

    def test_columns_sanitized(self):
        df = read_ldlink_response("R.Squared\tA..B\nrs1\t0.5\n")
        assert list(df.columns) == ["R_Squared", "A_B"]

    def test_error_in_last_row(self, snpclip_error_response):
        with pytest.raises(RemoteError) as excinfo:
            read_ldlink_response(snpclip_error_response)

        assert str(excinfo.value) == (
            "Error: Input variant list does not contain any valid RS numbers."
        )

    def test_warning_in_last_row(self):
        body = "RS_Number\tDetails\nrs3\tVariant kept.\nWARNING: rs4 is not in 1000G.\t\n"
        with pytest.raises(RemoteError, match="WARNING: rs4"):
            read_ldlink_response(body)

    def test_only_last_row_checked(self):
        body = "RS_Number\tDetails\nerror_like_rs\tx\nrs3\tVariant kept.\n"
        df = read_ldlink_response(body)
        assert len(df) == 2

    def test_message_only_body(self):
        with pytest.raises(RemoteError, match="Error: invalid token"):
            read_ldlink_response("Error: invalid token\n")

    def test_empty_body(self):
        with pytest.raises(RemoteError):
            read_ldlink_response("")


class TestWriteResults:
    """Tests for writing results to disk."""

    def test_write_tsv(self, temp_dir, snpclip_response):
        df = read_ldlink_response(snpclip_response)
        output_path = temp_dir / "nested" / "snpclip.txt"

        written = write_results(df, output_path)

        assert written == str(output_path)
        lines = output_path.read_text().splitlines()
        assert lines[0] == "RS_Number\tPosition\tAlleles\tDetails"
        assert lines[1] == "rs3\tchr13:32446842\t(C/T)\tVariant kept."
        assert len(lines) == len(df) + 1
        assert '"' not in output_path.read_text()

    def test_values_written_unescaped(self, temp_dir):
        df = pd.DataFrame({
            "RS_Number": ["rs3", "rs4"],
            "Details": ['Allele "A" \\ kept', None],
        })
        output_path = temp_dir / "snpclip.txt"

        write_results(df, output_path)

        assert output_path.read_text() == (
            "RS_Number\tDetails\n"
            'rs3\tAllele "A" \\ kept\n'
            "rs4\t\n"
        )

    def test_round_trip_has_no_index(self, temp_dir, snpclip_response):
        df = read_ldlink_response(snpclip_response)
        output_path = temp_dir / "snpclip.txt"
        write_results(df, output_path)

        reread = pd.read_csv(output_path, sep="\t")
        assert list(reread.columns) == list(df.columns)
        assert len(reread) == len(df)
