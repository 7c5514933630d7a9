import json
import logging
import threading
from http.server import ThreadingHTTPServer, BaseHTTPRequestHandler
from typing import Self

from src import config
from src.models.webhook import order_id_from_reference, order_status_for
from src.verification.verifier import SignatureVerifier

logger = logging.getLogger(__name__)


def _parse_json(body: bytes):
    """Decode a request body, or None when it is not a JSON document."""
    try:
        return json.loads(body)
    except (ValueError, RecursionError):
        # JSONDecodeError and UnicodeDecodeError are ValueErrors
        return None


class _WebhookHandler(BaseHTTPRequestHandler):
    """HTTP request handler for receiving SumUp webhooks."""

    def _respond(self, code: int, body: dict) -> None:
        self.send_response(code)
        self.send_header("Content-Type", "application/json")
        self.end_headers()
        self.wfile.write(json.dumps(body).encode())

    def do_POST(self):
        if self.path != "/webhook":
            self._respond(404, {"error": "not found"})
            return

        content_length = int(self.headers.get("Content-Length", 0))
        body = self.rfile.read(content_length)

        server_config = self.server.config  # type: ignore[attr-defined]

        payload = None
        if server_config["verify_parsed"]:
            # An unparseable body cannot carry a valid signature in this mode
            payload = _parse_json(body)
            if payload is None:
                logger.warning("Webhook body is not JSON, rejecting before verification")
                self._respond(401, {"error": "unauthorized"})
                return

        # Signature verification, fail closed when no secret is configured
        secret = server_config["secret"]
        resolver = server_config["secret_resolver"]
        if secret is None and resolver is not None:
            secret = resolver(self.headers.get("X-Merchant-Code"))
        signature = self.headers.get(server_config["signature_header"])
        if secret is None:
            logger.error("No webhook secret configured, rejecting request")
            self._respond(401, {"error": "unauthorized"})
            return
        verifier = server_config["verifier"]
        signed = payload if server_config["verify_parsed"] else body
        if not verifier.verify(signature, signed, secret):
            self._respond(401, {"error": "unauthorized"})
            return

        if payload is None:
            payload = _parse_json(body)
            if payload is None:
                self._respond(400, {"error": "invalid JSON"})
                return

        if not isinstance(payload, dict):
            self._respond(400, {"error": "invalid payload"})
            return

        order_id = order_id_from_reference(payload.get("checkout_reference"))
        if order_id is None:
            self._respond(400, {"error": "invalid checkout reference"})
            return

        with server_config["lock"]:
            server_config["received_events"].append({
                "event_id": self.headers.get("X-Event-ID", ""),
                "payload": payload,
                "order_id": order_id,
                "order_status": order_status_for(payload.get("event_type")),
                "headers": dict(self.headers),
            })

        self._respond(200, {"status": "ok"})

    def log_message(self, format, *args):
        """Suppress default request logging."""
        pass


class MerchantWebhookServer:
    """HTTP server that receives webhooks and gates them on their signature."""

    def __init__(
        self,
        host: str = "127.0.0.1",
        port: int = 0,
        secret=None,
        secret_resolver=config.get_webhook_secret,
        verifier: SignatureVerifier | None = None,
        signature_header: str = config.SIGNATURE_HEADER,
    ):
        self._host = host
        self._port = port
        self._config = {
            "secret": secret,
            "secret_resolver": secret_resolver,
            "verifier": verifier or SignatureVerifier(encoding=config.SIGNATURE_ENCODING),
            "signature_header": signature_header,
            "verify_parsed": False,
            "received_events": [],
            "lock": threading.Lock(),
        }
        self._server: ThreadingHTTPServer | None = None
        self._thread: threading.Thread | None = None

    def verify_parsed_payload(self) -> Self:
        """Authenticate the re-serialized JSON body instead of the raw bytes."""
        self._config["verify_parsed"] = True
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

    def get_received_events(self) -> list[dict]:
        with self._config["lock"]:
            return list(self._config["received_events"])

    def get_processed_count(self) -> int:
        with self._config["lock"]:
            return len(self._config["received_events"])