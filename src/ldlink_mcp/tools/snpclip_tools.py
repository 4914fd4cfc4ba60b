"""
SNPclip Tools for LDlink MCP Server.

Prune a list of variants by linkage disequilibrium using the LDlink SNPclip
web service. All LD computation happens on the LDlink server.
"""

import asyncio
import json
import logging
import os
from typing import Any, Dict, List, Optional, Sequence, Union

import pandas as pd
import requests

from mcp.types import Tool

from ..exceptions import RemoteError
from ..utils.validators import (
    AVAILABLE_GENOME_BUILDS,
    AVAILABLE_POPULATIONS,
    MAX_SNPS,
    validate_file_option,
    validate_genome_build,
    validate_populations,
    validate_snp_list,
    validate_threshold,
    validate_token,
)
from ..utils.file_handlers import read_ldlink_response, write_results

logger = logging.getLogger(__name__)

# API endpoints
SNPCLIP_URL = "https://ldlink.nci.nih.gov/LDlinkRest/snpclip"

SERVER_UNAVAILABLE_MESSAGE = (
    "The LDlink server is down or not accessible. Please try again later."
)


# Define SNPclip tools
SNPCLIP_TOOLS = [
    Tool(
        name="snp_clip",
        description=(
            "Prune a list of variants by linkage disequilibrium (LD) using LDlink SNPclip. "
            "Returns the variants kept after pruning and the reason each other variant was removed."
        ),
        inputSchema={
            "type": "object",
            "properties": {
                "snps": {
                    "type": "array",
                    "items": {"type": "string"},
                    "minItems": 1,
                    "maxItems": MAX_SNPS,
                    "description": "1 to 5000 variants as rsIDs or chromosome coordinates (e.g., ['rs3', 'chr7:24966446'])"
                },
                "pop": {
                    "type": "array",
                    "items": {"type": "string", "enum": list(AVAILABLE_POPULATIONS)},
                    "description": "1000 Genomes population codes (default: ['CEU'])",
                    "default": ["CEU"]
                },
                "r2_threshold": {
                    "type": "number",
                    "minimum": 0,
                    "maximum": 1,
                    "description": "LD r² pruning threshold (default: 0.1)",
                    "default": 0.1
                },
                "maf_threshold": {
                    "type": "number",
                    "minimum": 0,
                    "maximum": 1,
                    "description": "Minor allele frequency threshold (default: 0.01)",
                    "default": 0.01
                },
                "token": {
                    "type": "string",
                    "description": "LDlink API token (default: LDLINK_TOKEN environment variable)"
                },
                "output_path": {
                    "type": "string",
                    "description": "Optional path to save results as a tab-delimited file"
                },
                "genome_build": {
                    "type": "string",
                    "enum": list(AVAILABLE_GENOME_BUILDS),
                    "description": "Genome build (default: grch37)",
                    "default": "grch37"
                }
            },
            "required": ["snps"]
        }
    ),
]


def format_threshold(value: float) -> str:
    """Format a threshold the way LDlink expects it as text (0.1, 1, 1e-05)."""
    return f"{value:.15g}"


def build_snpclip_payload(
    snps: List[str],
    populations: List[str],
    r2_threshold: float,
    maf_threshold: float,
    genome_build: str
) -> Dict[str, str]:
    """Assemble the JSON request body for SNPclip."""
    return {
        "snps": "\n".join(snps),
        "pop": "+".join(populations),
        "r2_threshold": format_threshold(r2_threshold),
        "maf_threshold": format_threshold(maf_threshold),
        "genome_build": genome_build,
    }


def build_request_url(api_url: str, token: str) -> str:
    return f"{api_url}?&token={token}"


def check_server_status(api_url: str = SNPCLIP_URL, timeout: Optional[float] = None) -> bool:
    """
    Check that the LDlink server is up before sending the real request.

    Never raises: an unreachable server or an HTTP error status is logged
    as a warning and reported as False.
    """
    try:
        response = requests.post(api_url, timeout=timeout)
    except requests.RequestException as e:
        logger.warning(f"{SERVER_UNAVAILABLE_MESSAGE} ({type(e).__name__}: {e})")
        return False

    if not response.ok:
        logger.warning(f"{SERVER_UNAVAILABLE_MESSAGE} (HTTP {response.status_code})")
        return False

    logger.info("LDlink server is working...")
    return True


def snp_clip(
    snps: Union[str, Sequence[str]],
    pop: Union[str, Sequence[str]] = "CEU",
    r2_threshold: Union[float, str] = "0.1",
    maf_threshold: Union[float, str] = "0.01",
    token: Optional[str] = None,
    file=False,
    genome_build: Union[str, Sequence[str]] = "grch37",
    api_url: str = SNPCLIP_URL,
    timeout: Optional[float] = None
) -> Optional[pd.DataFrame]:
    """
    Prune a list of variants by linkage disequilibrium.

    Args:
        snps: 1 to 5000 variants, as rsIDs or chromosome coordinates
            (e.g., 'chr7:24966446')
        pop: One or more 1000 Genomes population codes (e.g., 'YRI' or 'CEU')
        r2_threshold: LD r² threshold between 0 and 1
        maf_threshold: Minor allele frequency threshold between 0 and 1
        token: LDlink API token, register at
            https://ldlink.nci.nih.gov/?tab=apiaccess
        file: Optional path for saving results. False or None writes no file.
            When set, the table and a save confirmation are printed to stdout.
        genome_build: One of 'grch37', 'grch38' or 'grch38_high_coverage'
        api_url: SNPclip endpoint
        timeout: Request timeout in seconds (None waits indefinitely)

    Returns:
        DataFrame of SNPclip results, or None if the LDlink server is not
        reachable

    Raises:
        InvalidArgument: If any argument fails validation (no request is sent)
        RemoteError: If LDlink returns an HTTP error or an in-band error/warning
    """
    snps = validate_snp_list(snps)
    populations = validate_populations(pop)
    r2 = validate_threshold(r2_threshold, "R2 threshold", 0, 1)
    maf = validate_threshold(maf_threshold, "MAF threshold", 0, 1)
    token = validate_token(token)
    output_path = validate_file_option(file)
    genome_build = validate_genome_build(genome_build)

    payload = build_snpclip_payload(snps, populations, r2, maf, genome_build)
    url = build_request_url(api_url, token)

    if not check_server_status(api_url, timeout=timeout):
        return None

    logger.info(
        f"Submitting {len(snps)} variants to SNPclip "
        f"(pop={payload['pop']}, r2={payload['r2_threshold']}, "
        f"maf={payload['maf_threshold']}, build={genome_build})"
    )

    try:
        response = requests.post(url, json=payload, timeout=timeout)
    except requests.RequestException as e:
        raise RemoteError(f"SNPclip request failed: {e}")

    if not response.ok:
        raise RemoteError(
            f"SNPclip returned HTTP {response.status_code}: {response.reason}",
            status=response.status_code
        )

    response.encoding = "utf-8"
    df = read_ldlink_response(response.text)

    if output_path is None:
        return df

    print(df)
    saved_path = write_results(df, output_path)
    print(f"\nFile saved to {saved_path}.")
    return df


async def handle_snpclip_tool(name: str, arguments: Dict[str, Any]) -> str:
    """Handle SNPclip tool calls."""

    if name == "snp_clip":
        return await run_snp_clip(
            snps=arguments["snps"],
            pop=arguments.get("pop", ["CEU"]),
            r2_threshold=arguments.get("r2_threshold", 0.1),
            maf_threshold=arguments.get("maf_threshold", 0.01),
            token=arguments.get("token"),
            output_path=arguments.get("output_path"),
            genome_build=arguments.get("genome_build", "grch37")
        )

    raise ValueError(f"Unknown SNPclip tool: {name}")


async def run_snp_clip(
    snps: List[str],
    pop: Union[str, List[str]] = "CEU",
    r2_threshold: float = 0.1,
    maf_threshold: float = 0.01,
    token: Optional[str] = None,
    output_path: Optional[str] = None,
    genome_build: str = "grch37"
) -> str:
    """
    Run SNPclip for an MCP client and return the results as JSON.

    Results are written by this handler rather than by snp_clip, since
    stdout carries the MCP stream.
    """
    output_path = validate_file_option(output_path)
    token = token or os.getenv("LDLINK_TOKEN")

    n_submitted = 1 if isinstance(snps, str) else len(snps)
    logger.info(f"Running SNPclip for {n_submitted} variants")

    # snp_clip blocks on HTTP, so keep it off the event loop
    df = await asyncio.to_thread(
        snp_clip,
        snps,
        pop=pop,
        r2_threshold=r2_threshold,
        maf_threshold=maf_threshold,
        token=token,
        file=False,
        genome_build=genome_build
    )

    if df is None:
        return json.dumps({
            "status": "unavailable",
            "message": SERVER_UNAVAILABLE_MESSAGE
        }, indent=2)

    output = {
        "n_variants_submitted": n_submitted,
        "n_rows": len(df),
        "columns": list(df.columns),
        "results": json.loads(df.to_json(orient="records")),
    }

    if output_path:
        output["output_path"] = await asyncio.to_thread(write_results, df, output_path)

    return json.dumps(output, indent=2)


def register_snpclip_tools():
    """Return SNPclip tools for registration."""
    return SNPCLIP_TOOLS
