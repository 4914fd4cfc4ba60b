"""
Input validation utilities for the LDlink client.

Every validator raises InvalidArgument, so callers can fail fast before any
request is sent to LDlink.
"""

import os
import re
import logging
from typing import Optional, List, Sequence, Union

from ..exceptions import InvalidArgument

logger = logging.getLogger(__name__)

MAX_SNPS = 5000

# 1000 Genomes Project populations and super-populations accepted by LDlink
AVAILABLE_POPULATIONS = (
    "YRI", "LWK", "GWD", "MSL", "ESN", "ASW", "ACB",
    "MXL", "PUR", "CLM", "PEL", "CHB", "JPT", "CHS",
    "CDX", "KHV", "CEU", "TSI", "FIN", "GBR", "IBS",
    "GIH", "PJL", "BEB", "STU", "ITU",
    "ALL", "AFR", "AMR", "EAS", "EUR", "SAS",
)

AVAILABLE_GENOME_BUILDS = ("grch37", "grch38", "grch38_high_coverage")

TOKEN_REGISTRATION_URL = "https://ldlink.nci.nih.gov/?tab=apiaccess"

# rs followed by one or more digits
RSID_PATTERN = re.compile(r'^rs\d+$', re.IGNORECASE)

# chr, then 1-2 digits or X/Y, a colon and a 1-9 digit position
CHR_COORD_PATTERN = re.compile(r'^chr(\d{1,2}|X|Y):(\d{1,9})$', re.IGNORECASE)


def _as_list(value) -> List:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    return list(value)


def validate_variant(variant: str) -> str:
    """
    Validate a single variant identifier.

    Args:
        variant: rsID (e.g., 'rs12345') or chromosome coordinate
            (e.g., 'chr7:24966446')

    Returns:
        The variant, unchanged

    Raises:
        InvalidArgument: If the variant matches neither format
    """
    if isinstance(variant, str) and (
        RSID_PATTERN.match(variant) or CHR_COORD_PATTERN.match(variant)
    ):
        return variant

    raise InvalidArgument(f"Invalid query format for variant: {variant}.")


def validate_snp_list(snps: Union[str, Sequence[str]], max_snps: int = MAX_SNPS) -> List[str]:
    """
    Validate a list of variants for submission.

    Args:
        snps: One variant or a sequence of variants
        max_snps: Maximum number of variants per request

    Returns:
        List of validated variants, in input order

    Raises:
        InvalidArgument: If the count is out of range or any variant is malformed
    """
    snps = _as_list(snps)

    if not (1 <= len(snps) <= max_snps):
        raise InvalidArgument(
            f"Input is between 1 to {max_snps} variants. Got {len(snps)}."
        )

    return [validate_variant(snp) for snp in snps]


def validate_populations(pop: Union[str, Sequence[str]]) -> List[str]:
    """
    Validate 1000 Genomes population codes.

    Codes are matched case-insensitively and returned upper-cased.
    """
    codes = _as_list(pop)
    if not codes:
        raise InvalidArgument("Not a valid population code. At least one is required.")

    normalized = []
    for code in codes:
        code_upper = code.strip().upper() if isinstance(code, str) else code
        if code_upper not in AVAILABLE_POPULATIONS:
            raise InvalidArgument(
                f"Not a valid population code: {code}. "
                f"Valid codes: {', '.join(AVAILABLE_POPULATIONS)}"
            )
        normalized.append(code_upper)

    return normalized


def validate_threshold(
    value: Union[float, str],
    name: str,
    min_value: Optional[float] = None,
    max_value: Optional[float] = None
) -> float:
    """
    Validate a numeric threshold parameter.

    Args:
        value: Value to validate, as a number or numeric text
        name: Parameter name (for error messages)
        min_value: Minimum allowed value
        max_value: Maximum allowed value

    Returns:
        Validated value as a float
    """
    if isinstance(value, bool):
        raise InvalidArgument(f"Invalid {name}: {value}. Must be a number.")

    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidArgument(f"Invalid {name}: {value}. Must be a number.")

    if min_value is not None and max_value is not None:
        if not (min_value <= number <= max_value):
            raise InvalidArgument(
                f"{name} must be between {min_value:g} and {max_value:g}: {value}."
            )
    elif min_value is not None and not number >= min_value:
        raise InvalidArgument(f"Invalid {name}: {value}. Must be >= {min_value}.")
    elif max_value is not None and not number <= max_value:
        raise InvalidArgument(f"Invalid {name}: {value}. Must be <= {max_value}.")

    return number


def validate_token(token: Optional[str]) -> str:
    """Ensure an LDlink access token was supplied."""
    if not token or not isinstance(token, str) or not token.strip():
        raise InvalidArgument(
            "Enter valid access token. Please register using the LDlink API "
            f"Access tab: {TOKEN_REGISTRATION_URL}"
        )
    return token.strip()


def validate_file_option(file) -> Optional[str]:
    """
    Validate the output file option.

    Args:
        file: A path (str or os.PathLike), or False/None for no file

    Returns:
        The path as a string, or None when no file is requested
    """
    if file is None or file is False:
        return None

    if isinstance(file, (str, os.PathLike)) and not isinstance(file, bool):
        path = os.fspath(file)
        if path.strip():
            return path

    raise InvalidArgument(f"Invalid input for file option: {file!r}.")


def validate_genome_build(genome_build: Union[str, Sequence[str]]) -> str:
    """
    Validate that exactly one available genome build was chosen.

    Returns:
        The genome build, lower-cased
    """
    builds = _as_list(genome_build)

    if len(builds) != 1:
        raise InvalidArgument(
            "Invalid input. Please choose only one available genome build."
        )

    build = builds[0]
    build_lower = build.strip().lower() if isinstance(build, str) else build
    if build_lower not in AVAILABLE_GENOME_BUILDS:
        raise InvalidArgument(
            f"Not an available genome build: {build}. "
            f"Choose one of: {', '.join(AVAILABLE_GENOME_BUILDS)}"
        )

    return build_lower
