"""Tool-call server exposing the ledger over JSON-RPC."""

from ledgerkit.mcp.server import ToolServer
from ledgerkit.mcp.tools import TOOLS, LedgerTools

__all__ = ["ToolServer", "TOOLS", "LedgerTools"]
