"""JSON-RPC 2.0 tool-call server over line-delimited streams.

Each input line holds one request; each reply is written as one line of JSON.
Diagnostics go to the log (stderr), never to the output stream.
"""

import json
import logging
import sys
from typing import Any, Optional, TextIO

from ledgerkit import __version__
from ledgerkit.database.base import Database
from ledgerkit.domain.chart import reset_ledger
from ledgerkit.mcp.tools import TOOLS, LedgerTools

logger = logging.getLogger(__name__)

PROTOCOL_VERSION = "2024-11-05"
SERVER_NAME = "ledgerkit"

PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603


class RpcError(Exception):
    """Protocol-level failure reported in the ``error`` member of a reply."""

    def __init__(self, code: int, message: str):
        super().__init__(message)
        self.code = code
        self.message = message


def _error(request_id: Any, code: int, message: str) -> dict[str, Any]:
    return {"jsonrpc": "2.0", "id": request_id, "error": {"code": code, "message": message}}


class ToolServer:
    """Dispatches JSON-RPC requests to the ledger tools."""

    def __init__(self, db: Database, enable_test_reset: bool = True):
        self.db = db
        self.tools = LedgerTools(db)
        self.enable_test_reset = enable_test_reset
        self._methods = {
            "initialize": self._initialize,
            "tools/list": self._list_tools,
            "tools/call": self._call_tool,
        }
        if enable_test_reset:
            self._methods["test/reset"] = self._reset

    def _initialize(self, params: dict[str, Any]) -> dict[str, Any]:
        return {
            "protocolVersion": PROTOCOL_VERSION,
            "capabilities": {"tools": {}},
            "serverInfo": {"name": SERVER_NAME, "version": __version__},
        }

    def _list_tools(self, params: dict[str, Any]) -> dict[str, Any]:
        return {"tools": TOOLS}

    def _call_tool(self, params: dict[str, Any]) -> dict[str, Any]:
        name = params.get("name")
        if not isinstance(name, str) or not name:
            raise RpcError(INVALID_PARAMS, "Missing tool name")
        if not self.tools.has_tool(name):
            raise RpcError(METHOD_NOT_FOUND, f"Unknown tool: {name}")

        arguments = params.get("arguments")
        if arguments is None:
            arguments = {}
        if not isinstance(arguments, dict):
            raise RpcError(INVALID_PARAMS, "Tool arguments must be an object")

        logger.debug("Calling tool %s", name)
        return self.tools.call(name, arguments)

    def _reset(self, params: dict[str, Any]) -> dict[str, Any]:
        reset_ledger(self.db)
        return {"success": True, "message": "Database reset to initial state"}

    def handle_request(self, request: Any) -> Optional[dict[str, Any]]:
        """Handle one decoded request.

        Returns:
            The reply object, or None for a notification
        """
        if not isinstance(request, dict):
            return _error(None, INVALID_REQUEST, "Invalid Request")

        request_id = request.get("id")
        is_notification = "id" not in request
        method = request.get("method")

        try:
            if not isinstance(method, str):
                raise RpcError(INVALID_REQUEST, "Invalid Request")
            handler = self._methods.get(method)
            if handler is None:
                raise RpcError(METHOD_NOT_FOUND, f"Method not found: {method}")

            params = request.get("params")
            if params is None:
                params = {}
            if not isinstance(params, dict):
                raise RpcError(INVALID_PARAMS, "Params must be an object")

            result = handler(params)
        except RpcError as e:
            if is_notification:
                logger.debug("Dropped error for notification %s: %s", method, e.message)
                return None
            return _error(request_id, e.code, e.message)
        except Exception as e:
            logger.exception("Unhandled error while processing %s", method)
            if is_notification:
                return None
            return _error(request_id, INTERNAL_ERROR, f"Internal error: {e}")

        if is_notification:
            return None
        return {"jsonrpc": "2.0", "id": request_id, "result": result}

    def handle_line(self, line: str) -> Optional[str]:
        """Handle one raw input line and return the encoded reply, if any."""
        if not line.strip():
            return None
        try:
            request = json.loads(line)
        except json.JSONDecodeError as e:
            logger.warning("Could not parse request: %s", e)
            return json.dumps(_error(None, PARSE_ERROR, "Parse error"))

        response = self.handle_request(request)
        if response is None:
            return None
        return json.dumps(response)

    def serve(self, instream: Optional[TextIO] = None, outstream: Optional[TextIO] = None) -> None:
        """Read requests until end of input, replying in order."""
        instream = instream or sys.stdin
        outstream = outstream or sys.stdout
        logger.info("Tool server ready")

        for line in instream:
            reply = self.handle_line(line)
            if reply is None:
                continue
            outstream.write(reply + "\n")
            outstream.flush()

        logger.info("Input closed, tool server stopping")
