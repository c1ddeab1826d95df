"""
Integration tests against a local Dragonchain node simulator.

The simulator rebuilds the DC1 message from what actually arrives on the
wire and rejects anything whose signature does not match.
"""

import json
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest
import requests

from dragonchain_sdk import Credentials, DragonchainClient, DragonchainError, HTTPError
from dragonchain_sdk.signing import get_hmac_message_string, verify_authorization_header

DRAGONCHAIN_ID = "integrationChain"
KEYS = {"client1": Credentials("python-client-demo-secret", "client1")}


class NodeHandler(BaseHTTPRequestHandler):
    """Answers a few Dragonchain routes for correctly signed requests."""

    def log_message(self, format, *args):
        pass

    def _authenticate(self, body):
        authorization = self.headers.get("Authorization", "")
        try:
            scheme, signature = authorization.split(" ", 1)
            key_id = signature.split(":", 1)[0]
            algorithm = scheme[len("DC1-HMAC-"):]
            message = get_hmac_message_string(
                self.command,
                self.path,
                self.headers.get("dragonchain", ""),
                self.headers.get("timestamp", ""),
                self.headers.get("Content-Type", ""),
                body,
                algorithm,
            )
        except (ValueError, DragonchainError):
            return False
        credentials = KEYS.get(key_id)
        return credentials is not None and verify_authorization_header(authorization, message, credentials)

    def _send(self, status, body=None, content_type="application/json"):
        payload = b"" if body is None else (body if isinstance(body, bytes) else json.dumps(body).encode("utf-8"))
        self.send_response(status)
        if payload:
            self.send_header("Content-Type", content_type)
        self.send_header("Content-Length", str(len(payload)))
        self.end_headers()
        self.wfile.write(payload)

    def _handle(self):
        length = int(self.headers.get("Content-Length", 0))
        body = self.rfile.read(length) if length else b""

        if not self._authenticate(body):
            self._send(401, {"error": {"type": "AUTHENTICATION_ERROR"}})
            return

        if self.command == "GET" and self.path == "/status":
            self._send(200, {"id": self.headers["dragonchain"], "level": 1})
        elif self.command == "POST" and self.path == "/transaction":
            request = json.loads(body)
            self._send(201, {"transaction_id": f"txn-{request['txn_type']}"})
        elif self.command == "GET" and self.path.startswith("/transaction?"):
            self._send(200, {"query": self.path, "results": [], "total": 0})
        elif self.command == "GET" and self.path.startswith("/get/"):
            self._send(200, b"raw heap value", "text/plain")
        elif self.command == "DELETE":
            self._send(204)
        else:
            self._send(404, {"error": {"type": "NOT_FOUND"}})

    do_GET = _handle
    do_POST = _handle
    do_PUT = _handle
    do_DELETE = _handle


class TestIntegration:
    """Integration tests with a local node."""
    KEY_ID = "client1"
    SECRET_KEY = "python-client-demo-secret"

    @pytest.fixture(scope="class")
    def server_url(self):
        """Start the node simulator on a free port."""
        server = ThreadingHTTPServer(("127.0.0.1", 0), NodeHandler)
        thread = threading.Thread(target=server.serve_forever, daemon=True)
        thread.start()

        yield f"http://127.0.0.1:{server.server_address[1]}"

        server.shutdown()
        server.server_close()

    @pytest.fixture
    def client(self, server_url):
        """Create authenticated client."""
        with DragonchainClient(DRAGONCHAIN_ID, server_url, self.SECRET_KEY, self.KEY_ID) as client:
            yield client

    @pytest.mark.parametrize("algorithm", ["SHA256", "SHA3-256", "BLAKE2b512"])
    def test_get_status(self, server_url, algorithm):
        client = DragonchainClient(DRAGONCHAIN_ID, server_url, self.SECRET_KEY, self.KEY_ID, algorithm=algorithm)

        response = client.get_status()

        assert response == {"status": 200, "ok": True, "response": {"id": DRAGONCHAIN_ID, "level": 1}}

    def test_create_transaction(self, client):
        response = client.create_transaction("banana", {"hello": "world"}, tag="fruit")

        assert response["status"] == 201
        assert response["response"] == {"transaction_id": "txn-banana"}

    def test_query_string_is_signed(self, client):
        response = client.query_transactions("tag:(bananas OR apples)", sort="timestamp:desc")

        assert response["ok"] is True
        assert response["response"]["query"].startswith("/transaction?q=tag%3A%28bananas+OR+apples%29")

    def test_text_response(self, client):
        response = client.get_smart_contract_object("key", "contractId")
        assert response["response"] == "raw heap value"

    @pytest.mark.parametrize("key", ["my key", "café", "a?b"])
    def test_encoded_path_is_signed(self, client, key):
        """Keys that need percent-encoding still authenticate."""
        response = client.get_smart_contract_object(key, "sc1")

        assert response["status"] == 200
        assert response["response"] == "raw heap value"

    def test_empty_response(self, client):
        response = client.delete_api_key("someKey")
        assert response == {"status": 204, "ok": True, "response": None}

    def test_not_found_is_returned(self, client):
        response = client.get_block("missing")

        assert response["status"] == 404
        assert response["ok"] is False
        assert response["response"]["error"]["type"] == "NOT_FOUND"

    def test_wrong_secret_key(self, server_url):
        """Test that a wrong secret key results in authentication failure."""
        client = DragonchainClient(DRAGONCHAIN_ID, server_url, "wrong-secret-key", self.KEY_ID)

        response = client.get_status()
        assert response["status"] == 401

    def test_override_credentials(self, server_url):
        client = DragonchainClient(DRAGONCHAIN_ID, server_url, "wrong-secret-key", self.KEY_ID)

        client.override_credentials(self.KEY_ID, self.SECRET_KEY)
        assert client.get_status()["status"] == 200

    def test_set_identity(self, client, server_url):
        client.set_identity("otherChain", server_url)

        response = client.get_status()
        assert response["response"]["id"] == "otherChain"

    def test_unsigned_request_rejected(self, server_url):
        response = requests.get(f"{server_url}/status")
        assert response.status_code == 401

    def test_concurrent_requests(self, client):
        """Test concurrent authenticated requests on one client."""
        results = []

        def make_request(i):
            response = client.create_transaction("banana", {"thread": i})
            results.append(response["status"] == 201)

        threads = [threading.Thread(target=make_request, args=(i,)) for i in range(5)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(results) == 5
        assert all(results)

    def test_connection_refused(self):
        client = DragonchainClient(DRAGONCHAIN_ID, "http://127.0.0.1:1", self.SECRET_KEY, self.KEY_ID, timeout=2)

        with pytest.raises(HTTPError):
            client.get_status()
