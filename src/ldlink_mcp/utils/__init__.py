"""
LDlink MCP Utilities Package
"""

from .file_handlers import (
    read_ldlink_response,
    sanitize_column_name,
    write_results,
)
from .validators import (
    validate_snp_list,
    validate_variant,
    validate_populations,
    validate_threshold,
    validate_token,
    validate_file_option,
    validate_genome_build,
)

__all__ = [
    "read_ldlink_response",
    "sanitize_column_name",
    "write_results",
    "validate_snp_list",
    "validate_variant",
    "validate_populations",
    "validate_threshold",
    "validate_token",
    "validate_file_option",
    "validate_genome_build",
]
