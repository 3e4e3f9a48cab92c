"""Minimal HTTP server for the EIN chart payload."""

import json
import logging
import socket
import sys
from http.server import HTTPServer, SimpleHTTPRequestHandler

from ein_chart import fetcher
from ein_chart.chart_config import build_payload
from ein_chart.config import GID, SHEET_ID
from ein_chart.csv_parser import ParseError
from ein_chart.sample import SAMPLE_CSV


class Handler(SimpleHTTPRequestHandler):
    def do_GET(self):
        if self.path == "/api/chart":
            text, source = fetcher.fetch_csv(SHEET_ID, GID)
            self._payload_response(text, source)
        elif self.path == "/api/sample":
            self._payload_response(SAMPLE_CSV, fetcher.SAMPLE_SOURCE)
        else:
            self.send_error(404)

    def _payload_response(self, text, source):
        try:
            payload = build_payload(text)
        except ParseError as exc:
            self._json_response({"error": str(exc), "source": source}, status=502)
            return
        payload["source"] = source
        self._json_response(payload)

    def _json_response(self, data, status=200):
        body = json.dumps(data, default=str).encode()
        self.send_response(status)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", len(body))
        self.send_header("Access-Control-Allow-Origin", "*")
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, fmt, *args):
        pass  # silent


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    port = int(sys.argv[1]) if len(sys.argv) > 1 else 8000
    server = HTTPServer(("localhost", port), Handler)
    server.socket.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
    print(f"Open http://localhost:{port}/api/chart")
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        print("\nStopped.")


if __name__ == "__main__":
    main()
