"""
Pytest fixtures for LDlink MCP tests.
"""

import pytest
import tempfile
from pathlib import Path


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def token():
    return "test-token-123"


@pytest.fixture
def snpclip_response():
    """A successful SNPclip response body."""
    return (
        "RS_Number\tPosition\tAlleles\tDetails\n"
        "rs3\tchr13:32446842\t(C/T)\tVariant kept.\n"
        "rs4\tchr13:32447222\t(A/G)\tVariant in LD with rs3 (R2=0.9000), variant removed.\n"
        "rs148890987\tchr13:32446999\t(G/A)\tVariant MAF is 0.0, variant removed.\n"
    )


@pytest.fixture
def snpclip_error_response():
    """A SNPclip response reporting an error in the last row."""
    return (
        "RS_Number\tPosition\tAlleles\tDetails\n"
        "rs3\tchr13:32446842\t(C/T)\tVariant kept.\n"
        "Error: Input variant list does not contain any valid RS numbers.\t\t\t\n"
    )
