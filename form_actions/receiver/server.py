import json
import threading
import time
from http.server import ThreadingHTTPServer, BaseHTTPRequestHandler
from typing import Self


class _WebhookHandler(BaseHTTPRequestHandler):
    """Accepts form-action webhooks and answers with scripted status codes."""

    def _handle(self):
        content_length = int(self.headers.get("Content-Length", 0))
        body = self.rfile.read(content_length)

        server_config = self.server.config  # type: ignore[attr-defined]

        if server_config["response_delay"] > 0:
            time.sleep(server_config["response_delay"])

        try:
            payload = json.loads(body)
        except (json.JSONDecodeError, ValueError):
            self._reply(400, {"error": "invalid JSON"})
            return

        missing = [f for f in ("formData", "metadata") if f not in payload]
        if missing:
            self._reply(400, {"error": f"missing fields: {missing}"})
            return

        with server_config["lock"]:
            server_config["received"].append({
                "method": self.command,
                "path": self.path,
                "payload": payload,
                "headers": dict(self.headers),
                "received_at": time.monotonic(),
            })
            # Scripted codes are consumed in order, then the default applies.
            if server_config["scripted_codes"]:
                code = server_config["scripted_codes"].pop(0)
            else:
                code = server_config["response_code"]

        self._reply(code, {"status": "ok"} if 200 <= code < 300 else {"error": "rejected"})

    def _reply(self, code: int, body: dict) -> None:
        self.send_response(code)
        self.send_header("Content-Type", "application/json")
        self.end_headers()
        self.wfile.write(json.dumps(body).encode())

    do_POST = _handle
    do_PUT = _handle
    do_PATCH = _handle

    def log_message(self, format, *args):
        """Suppress default request logging."""
        pass


class WebhookReceiverServer:
    """Configurable HTTP server standing in for a webhook endpoint."""

    def __init__(self, host: str = "127.0.0.1", port: int = 0):
        self._host = host
        self._port = port
        self._config = {
            "response_code": 200,
            "response_delay": 0,
            "scripted_codes": [],
            "received": [],
            "lock": threading.Lock(),
        }
        self._server: ThreadingHTTPServer | None = None
        self._thread: threading.Thread | None = None

    def set_response_code(self, code: int) -> Self:
        self._config["response_code"] = code
        return self

    def set_response_codes(self, *codes: int) -> Self:
        """Answer the next requests with these codes, in order."""
        with self._config["lock"]:
            self._config["scripted_codes"] = list(codes)
        return self

    def set_response_delay(self, seconds: float) -> Self:
        self._config["response_delay"] = seconds
        return self

    def start(self) -> None:
        self._server = ThreadingHTTPServer((self._host, self._port), _WebhookHandler)
        self._server.config = self._config  # type: ignore[attr-defined]
        # Get the actual port (useful when port=0)
        self._port = self._server.server_address[1]
        self._thread = threading.Thread(target=self._server.serve_forever, daemon=True)
        self._thread.start()

    def stop(self) -> None:
        if self._server:
            self._server.shutdown()
            self._server.server_close()
            self._server = None
        if self._thread:
            self._thread.join(timeout=5)
            self._thread = None

    @property
    def url(self) -> str:
        return f"http://{self._host}:{self._port}/webhook"

    @property
    def port(self) -> int:
        return self._port

    def get_received(self) -> list[dict]:
        with self._config["lock"]:
            return list(self._config["received"])

    def get_received_count(self) -> int:
        with self._config["lock"]:
            return len(self._config["received"])

    def clear(self) -> None:
        with self._config["lock"]:
            self._config["received"].clear()
            self._config["scripted_codes"].clear()
