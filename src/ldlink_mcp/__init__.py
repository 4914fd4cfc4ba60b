"""
LDlink MCP - LD pruning of variant lists with the LDlink SNPclip service.
"""

from .exceptions import InvalidArgument, LDlinkError, RemoteError
from .tools.snpclip_tools import snp_clip

__version__ = "0.1.0"

__all__ = [
    "snp_clip",
    "LDlinkError",
    "InvalidArgument",
    "RemoteError",
]
