"""
Android Devices Bridge - JSON-RPC stdio Server

Line-delimited JSON-RPC 2.0 tool server (MCP style). One request per line
on stdin, one response per line on stdout. Logs go to stderr.
"""

import argparse
import json
import logging
import sys
from typing import Any, Dict, IO, Iterator, Optional, TextIO

from . import config
from .core.adb import ADBBridge
from .models import GET_ANDROID_DEVICES, GET_ANDROID_SCREEN, tool_list
from .utils.error_handler import BridgeError, error_payload

logger = logging.getLogger(__name__)

PARSE_ERROR = -32700
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603


class MCPServer:
    """Dispatches JSON-RPC requests to the ADB bridge"""

    def __init__(self, adb_bridge: ADBBridge):
        self.adb_bridge = adb_bridge
        self._methods = {
            "initialize": self.handle_initialize,
            "tools/list": self.handle_tools_list,
            "tools/call": self.handle_tools_call,
        }
        self._tools = {
            GET_ANDROID_DEVICES: self.get_devices,
            GET_ANDROID_SCREEN: self.get_screen,
        }

    # === Response helpers ===

    @staticmethod
    def result(request_id: Any, result: Dict[str, Any]) -> Dict[str, Any]:
        return {"jsonrpc": "2.0", "id": request_id, "result": result}

    @staticmethod
    def error(request_id: Any, code: int, message: str, data: Any = None) -> Dict[str, Any]:
        err = {"code": code, "message": message}
        if data is not None:
            err["data"] = data
        return {"jsonrpc": "2.0", "id": request_id, "error": err}

    def internal_error(self, request_id: Any, exc: Exception, prefix: str = "") -> Dict[str, Any]:
        payload = error_payload(exc)
        logger.error(f"[MCP] {prefix}{exc}")
        return self.error(request_id, INTERNAL_ERROR, "Internal error", {
            "error": f"{prefix}{payload['message']}",
            "code": payload["code"],
        })

    # === Dispatch ===

    def handle_line(self, line: str) -> Optional[Dict[str, Any]]:
        """
        Handle one input line.

        Returns:
            Response to write, or None for blank lines and notifications
        """
        line = line.strip()
        if not line:
            return None

        try:
            request = json.loads(line)
        except ValueError:
            return self.error(None, PARSE_ERROR, "Parse error")
        if not isinstance(request, dict):
            return self.error(None, PARSE_ERROR, "Parse error")

        method = request.get("method")
        if not isinstance(method, str):
            return self.error(request.get("id"), PARSE_ERROR, "Parse error")
        if "id" not in request:
            logger.debug(f"[MCP] Notification {method} ignored")
            return None

        request_id = request.get("id")
        handler = self._methods.get(method)
        if handler is None:
            return self.error(request_id, METHOD_NOT_FOUND, "Method not found")
        return handler(request_id, request.get("params"))

    def handle_initialize(self, request_id: Any, params: Any) -> Dict[str, Any]:
        return self.result(request_id, {
            "protocolVersion": config.PROTOCOL_VERSION,
            "capabilities": {"tools": {"listChanged": True}},
            "serverInfo": {"name": config.SERVER_NAME, "version": config.SERVER_VERSION},
        })

    def handle_tools_list(self, request_id: Any, params: Any) -> Dict[str, Any]:
        return self.result(request_id, {"tools": tool_list()})

    def handle_tools_call(self, request_id: Any, params: Any) -> Dict[str, Any]:
        if params is None:
            params = {}
        if not isinstance(params, dict):
            return self.error(request_id, INVALID_PARAMS, "Invalid params")

        name = params.get("name") or ""
        arguments = params.get("arguments")
        if arguments is None:
            arguments = {}
        if not isinstance(name, str) or not isinstance(arguments, dict):
            return self.error(request_id, INVALID_PARAMS, "Invalid params")

        tool = self._tools.get(name)
        if tool is None:
            return self.error(request_id, INVALID_PARAMS, f"Unknown tool: {name}")

        logger.info(f"[MCP] tools/call {name}")
        return tool(request_id, arguments)

    # === Tools ===

    def get_devices(self, request_id: Any, arguments: Dict[str, Any]) -> Dict[str, Any]:
        try:
            devices = self.adb_bridge.list_devices()
        except BridgeError as e:
            return self.internal_error(request_id, e)

        text = json.dumps([device.model_dump() for device in devices])
        return self.result(request_id, {
            "content": [{"type": "text", "text": text}],
            "isError": False,
        })

    def get_screen(self, request_id: Any, arguments: Dict[str, Any]) -> Dict[str, Any]:
        device_id = arguments.get("device")
        if not isinstance(device_id, str):
            device_id = ""

        if not device_id:
            try:
                device_id = self.adb_bridge.resolve_device_id()
            except BridgeError as e:
                prefix = "" if e.code == "DEVICE_NOT_FOUND" else "Failed to get device list: "
                return self.internal_error(request_id, e, prefix)

        try:
            data = self.adb_bridge.capture_screenshot(device_id)
        except BridgeError as e:
            return self.internal_error(request_id, e)

        return self.result(request_id, {
            "content": [{"type": "image", "data": data, "mimeType": "image/png"}],
            "isError": False,
        })

    # === Loop ===

    @staticmethod
    def read_lines(stdin: IO) -> Iterator[str]:
        """Yield input lines, decoding bytes so invalid UTF-8 never ends the loop"""
        source = getattr(stdin, "buffer", stdin)
        for line in source:
            if isinstance(line, bytes):
                line = line.decode("utf-8", errors="replace")
            yield line

    def serve(self, stdin: Optional[IO] = None, stdout: Optional[TextIO] = None) -> None:
        """Read requests until EOF"""
        stdin = stdin if stdin is not None else sys.stdin
        stdout = stdout if stdout is not None else sys.stdout
        logger.info(f"[MCP] {config.SERVER_NAME} {config.SERVER_VERSION} ready on stdio")
        for line in self.read_lines(stdin):
            try:
                response = self.handle_line(line)
            except Exception as e:
                logger.error(f"[MCP] Request failed: {e}", exc_info=True)
                response = self.error(None, INTERNAL_ERROR, "Internal error", {"error": str(e)})
            if response is None:
                continue
            stdout.write(json.dumps(response) + "\n")
            stdout.flush()


def main(argv=None):
    parser = argparse.ArgumentParser(description="Android Devices Bridge - JSON-RPC over stdio")
    parser.add_argument('--adb', default=config.ADB_PATH, help='adb executable (default: %(default)s)')
    parser.add_argument('--log-level', default=config.LOG_LEVEL, help='Logging level (default: %(default)s)')
    args = parser.parse_args(argv)

    config.configure_logging(args.log_level)

    try:
        MCPServer(ADBBridge(adb_path=args.adb)).serve()
    except KeyboardInterrupt:
        sys.exit(130)


if __name__ == "__main__":
    main()
