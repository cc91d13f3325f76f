"""Core service: hashes uploaded files and asks the storage service about them."""

import argparse
import hashlib
import logging

import requests
from flask import Flask, Response, request

log = logging.getLogger(__name__)

DEFAULT_STORAGER_URL = "http://file-storager-service:8083"
_UPSTREAM_TIMEOUT = 60


def _error(message: str, status: int) -> Response:
    return Response(message + "\n", status=status, mimetype="text/plain")


def file_hash(content: bytes) -> str:
    """Hex SHA-256 digest of the file content."""
    return hashlib.sha256(content).hexdigest()


def create_app(storager_url: str) -> Flask:
    """Build the core application talking to the storage service at the given URL."""
    app = Flask(__name__)
    files_url = storager_url.rstrip("/") + "/files/"

    @app.post("/files/upload/")
    def upload_file():
        uploaded = request.files.get("file")
        if uploaded is None:
            return _error("http: no such file", 500)
        digest = file_hash(uploaded.read())
        try:
            requests.get(files_url + digest, timeout=_UPSTREAM_TIMEOUT)
        except requests.RequestException as exc:
            log.warning("storage lookup for %s failed: %s", digest, exc)
        return Response(b"", status=200)

    def accepted(**_path):
        """Routes the service accepts and answers with an empty body."""
        return Response(b"", status=200)

    app.add_url_rule("/files/download/<id>", "download_file", accepted, methods=["GET"])
    app.add_url_rule("/files/analyze/<id>", "analyze_file", accepted, methods=["GET"])
    app.add_url_rule("/files/wordcloud/<id>", "word_cloud", accepted, methods=["GET"])
    app.add_url_rule(
        "/files/compare/<first_id>/<second_id>", "compare_files", accepted, methods=["GET"]
    )

    return app


def main(argv=None) -> int:
    """Run the core service."""
    parser = argparse.ArgumentParser(
        prog="textanalyzer-core", description="Core service with business logic."
    )
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=8081)
    parser.add_argument("--storager-url", default=DEFAULT_STORAGER_URL)
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO)
    create_app(args.storager_url).run(host=args.host, port=args.port)
    return 0