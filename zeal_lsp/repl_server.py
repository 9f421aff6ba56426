from __future__ import annotations

"""
Simple TCP REPL server for zeal.

Protocol: JSON per line over TCP.
- Request: {"cmd": "eval", "code": "x := 1; print x"}
- Response: {"ok": true, "result": [<formatted values>], "output": "<printed text>"}
            or {"ok": false, "error": <message>}
- Request: {"cmd": "reset"} drops every binding of the session.

The server keeps one Interpreter alive so that declarations persist across
evaluations. A failing request reports its error and leaves the session usable.
"""

import json
import logging
import socket
import threading
from io import StringIO
from typing import Optional, Tuple

from zeal import config
from zeal.builtin.env_builtin import format_value
from zeal.errors import ZealError
from zeal.interpreter import Interpreter

logger = logging.getLogger(__name__)


class ReplServer:
    def __init__(self, host: Optional[str] = None, port: Optional[int] = None):
        default_host, default_port = config.get_repl_address()
        self.host = host or default_host
        self.port = port or default_port
        # Keep a single interpreter to maintain session state
        self.interp = Interpreter()
        self._lock = threading.Lock()

    def handle_request(self, line: bytes) -> dict:
        try:
            req = json.loads(line.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as ex:
            return {"ok": False, "error": f"Invalid request: {ex}"}
        if not isinstance(req, dict):
            return {"ok": False, "error": "Invalid request: expected a JSON object"}

        cmd = req.get("cmd")
        if cmd == "reset":
            with self._lock:
                self.interp.reset()
            return {"ok": True, "result": [], "output": ""}
        if cmd != "eval":
            return {"ok": False, "error": f"Unknown cmd: {cmd}"}

        with self._lock:
            self.interp.output = StringIO()
            try:
                values = self.interp.eval(req.get("code", ""))
            except ZealError as ex:
                return {"ok": False, "error": str(ex), "output": self.interp.output.getvalue()}
            return {
                "ok": True,
                "result": [format_value(v) for v in values],
                "output": self.interp.output.getvalue(),
            }

    def serve_forever(self):
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
            s.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            s.bind((self.host, self.port))
            s.listen(5)
            logger.info("zeal REPL listening on %s:%d", self.host, self.port)
            while True:
                conn, addr = s.accept()
                threading.Thread(target=self._handle_client, args=(conn, addr), daemon=True).start()

    def _handle_client(self, conn: socket.socket, addr: Tuple[str, int]):
        logger.debug("client connected from %s:%d", *addr)
        with conn:
            buf = b""
            while True:
                data = conn.recv(4096)
                if not data:
                    break
                buf += data
                while b"\n" in buf:
                    line, buf = buf.split(b"\n", 1)
                    line = line.strip()
                    if not line:
                        continue
                    resp = self.handle_request(line)
                    conn.sendall((json.dumps(resp) + "\n").encode("utf-8"))


if __name__ == "__main__":
    logging.basicConfig(level=config.get_log_level())
    ReplServer().serve_forever()
