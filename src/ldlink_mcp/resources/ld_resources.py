"""
Reference Resources for LDlink MCP Server.

Lists the population codes and genome builds LDlink accepts, so clients can
pick valid SNPclip inputs.
"""

import json
import logging
from urllib.parse import urlparse, unquote

from mcp.types import Resource

from ..utils.validators import AVAILABLE_GENOME_BUILDS, AVAILABLE_POPULATIONS

logger = logging.getLogger(__name__)


# code -> (description, super-population)
POPULATION_DETAILS = {
    "YRI": ("Yoruba in Ibadan, Nigeria", "AFR"),
    "LWK": ("Luhya in Webuye, Kenya", "AFR"),
    "GWD": ("Gambian in Western Division, The Gambia", "AFR"),
    "MSL": ("Mende in Sierra Leone", "AFR"),
    "ESN": ("Esan in Nigeria", "AFR"),
    "ASW": ("Americans of African Ancestry in SW USA", "AFR"),
    "ACB": ("African Caribbeans in Barbados", "AFR"),
    "MXL": ("Mexican Ancestry from Los Angeles, USA", "AMR"),
    "PUR": ("Puerto Ricans from Puerto Rico", "AMR"),
    "CLM": ("Colombians from Medellin, Colombia", "AMR"),
    "PEL": ("Peruvians from Lima, Peru", "AMR"),
    "CHB": ("Han Chinese in Beijing, China", "EAS"),
    "JPT": ("Japanese in Tokyo, Japan", "EAS"),
    "CHS": ("Southern Han Chinese", "EAS"),
    "CDX": ("Chinese Dai in Xishuangbanna, China", "EAS"),
    "KHV": ("Kinh in Ho Chi Minh City, Vietnam", "EAS"),
    "CEU": ("Utah Residents (CEPH) with Northern and Western European Ancestry", "EUR"),
    "TSI": ("Toscani in Italia", "EUR"),
    "FIN": ("Finnish in Finland", "EUR"),
    "GBR": ("British in England and Scotland", "EUR"),
    "IBS": ("Iberian Population in Spain", "EUR"),
    "GIH": ("Gujarati Indian from Houston, Texas", "SAS"),
    "PJL": ("Punjabi from Lahore, Pakistan", "SAS"),
    "BEB": ("Bengali from Bangladesh", "SAS"),
    "STU": ("Sri Lankan Tamil from the UK", "SAS"),
    "ITU": ("Indian Telugu from the UK", "SAS"),
    "ALL": ("All populations", None),
    "AFR": ("African", None),
    "AMR": ("Ad Mixed American", None),
    "EAS": ("East Asian", None),
    "EUR": ("European", None),
    "SAS": ("South Asian", None),
}

GENOME_BUILD_DETAILS = {
    "grch37": "GRCh37 (hg19), 1000 Genomes Project Phase 3",
    "grch38": "GRCh38 (hg38), 1000 Genomes Project Phase 3",
    "grch38_high_coverage": "GRCh38 (hg38), 1000 Genomes Project high coverage",
}


RESOURCES = [
    Resource(
        uri="ldlink://populations",
        name="LDlink Populations",
        description="1000 Genomes population and super-population codes accepted by LDlink",
        mimeType="application/json"
    ),
    Resource(
        uri="ldlink://genome-builds",
        name="LDlink Genome Builds",
        description="Genome builds accepted by LDlink",
        mimeType="application/json"
    ),
]


async def handle_resource(uri: str) -> str:
    """Handle resource read requests."""
    logger.info(f"Reading resource: {uri}")

    parsed = urlparse(str(uri))
    path = unquote(parsed.netloc + parsed.path).strip('/')

    if parsed.scheme != "ldlink":
        raise ValueError(f"Unknown resource scheme: {parsed.scheme}")

    if path == "populations":
        return list_populations()
    elif path == "genome-builds":
        return list_genome_builds()

    raise ValueError(f"Invalid LDlink resource path: {path}")


def list_populations() -> str:
    populations = []
    for code in AVAILABLE_POPULATIONS:
        description, super_population = POPULATION_DETAILS[code]
        populations.append({
            "code": code,
            "description": description,
            "super_population": super_population,
        })

    return json.dumps({
        "source": "1000 Genomes Project",
        "n_populations": len(populations),
        "populations": populations
    }, indent=2)


def list_genome_builds() -> str:
    return json.dumps({
        "default": "grch37",
        "genome_builds": [
            {"genome_build": build, "description": GENOME_BUILD_DETAILS[build]}
            for build in AVAILABLE_GENOME_BUILDS
        ]
    }, indent=2)
