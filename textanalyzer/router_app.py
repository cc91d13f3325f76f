"""Public HTTP entry point that forwards requests to the core service."""

import argparse
import logging
import secrets

import requests
from flask import Flask, Response, request

log = logging.getLogger(__name__)

DEFAULT_CORE_URL = "http://core-service:8081"
_UPSTREAM_TIMEOUT = 60


def _error(message: str, status: int) -> Response:
    return Response(message + "\n", status=status, mimetype="text/plain")


def _escape_quotes(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"')


def build_upload_body(filename: str, content: bytes) -> tuple[bytes, str]:
    """Encode the content as a multipart form with one file field named 'file'.

    Returns the body and the Content-Type header that goes with it.
    """
    boundary = secrets.token_hex(30)
    head = (
        f"--{boundary}\r\n"
        f'Content-Disposition: form-data; name="file"; '
        f'filename="{_escape_quotes(filename)}"\r\n'
        "Content-Type: application/octet-stream\r\n"
        "\r\n"
    ).encode("utf-8")
    tail = f"\r\n--{boundary}--\r\n".encode("ascii")
    return head + bytes(content) + tail, f"multipart/form-data; boundary={boundary}"


def create_app(core_url: str) -> Flask:
    """Build the router application forwarding uploads to the core service."""
    app = Flask(__name__)
    upload_url = core_url.rstrip("/") + "/files/upload"

    @app.post("/files/upload")
    def upload_file():
        log.info("upload request received")
        if request.mimetype != "multipart/form-data":
            log.error("request is not a multipart form")
            return _error("hi from error catcher", 500)
        uploaded = request.files.get("file")
        if uploaded is None:
            log.error("request carries no file")
            return _error("There is no file in request", 400)
        body, content_type = build_upload_body(uploaded.filename or "", uploaded.read())
        try:
            upstream = requests.post(
                upload_url,
                data=body,
                headers={"Content-Type": content_type},
                timeout=_UPSTREAM_TIMEOUT,
            )
        except requests.RequestException as exc:
            return _error(str(exc), 500)
        headers = {}
        if "Content-Type" in upstream.headers:
            headers["Content-Type"] = upstream.headers["Content-Type"]
        return Response(upstream.content, status=upstream.status_code, headers=headers)

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
    """Run the router service."""
    parser = argparse.ArgumentParser(
        prog="textanalyzer-router", description="API for Text Analyzer."
    )
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=8080)
    parser.add_argument("--core-url", default=DEFAULT_CORE_URL)
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO)
    create_app(args.core_url).run(host=args.host, port=args.port)
    return 0