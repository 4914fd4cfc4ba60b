"""
LDlink MCP Tools Package
"""

from .snpclip_tools import register_snpclip_tools

__all__ = [
    "register_snpclip_tools",
]
