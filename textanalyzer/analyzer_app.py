"""HTTP service that analyzes texts and fetches word clouds."""

import argparse
import json
import logging
import os

import requests
from flask import Flask, Response, request, send_from_directory

from .analysis import analyze_text, word_cloud_request

log = logging.getLogger(__name__)

_READ_ERROR = "Cannot read file."
_CLOUD_ERROR = "Cannot get word cloud."
_UPSTREAM_TIMEOUT = 60


def _text_response(message: str, status: int) -> Response:
    return Response(message, status=status, mimetype="text/plain")


def _read_body() -> bytes | None:
    try:
        return request.get_data(cache=False)
    except OSError:
        return None


def create_app(word_cloud_url: str) -> Flask:
    """Build the analyzer application posting word cloud requests to the given URL."""
    app = Flask(__name__)

    @app.post("/files/analyze")
    def analyze_file():
        body = _read_body()
        if body is None:
            return _text_response(_READ_ERROR, 500)
        text = body.decode("utf-8", "surrogateescape")
        log.info("analyzing text of %d bytes", len(body))
        analysis = analyze_text(text)
        return Response(
            json.dumps(analysis.to_dict()), status=200, mimetype="application/json"
        )

    @app.post("/files/wordcloud")
    def word_cloud():
        body = _read_body()
        if body is None:
            return _text_response(_READ_ERROR, 500)
        text = body.decode("utf-8", "replace")
        log.info("requesting word cloud for text of %d bytes", len(body))
        try:
            upstream = requests.post(
                word_cloud_url,
                data=word_cloud_request(text),
                headers={"Content-Type": "application/json"},
                timeout=_UPSTREAM_TIMEOUT,
            )
        except requests.RequestException:
            return _text_response(_CLOUD_ERROR, 500)
        if upstream.status_code != 200:
            return _text_response(_CLOUD_ERROR, 500)
        return Response(
            upstream.content,
            status=200,
            mimetype="image/png",
            headers={"Content-Disposition": 'inline; filename="wordcloud.png"'},
        )

    @app.get("/docs/<path:filename>")
    def docs(filename):
        return send_from_directory(os.path.abspath("docs"), filename)

    return app


def main(argv=None) -> int:
    """Run the analyzer service."""
    parser = argparse.ArgumentParser(
        prog="textanalyzer-analyzer", description="Service for analyzing files."
    )
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=8083)
    parser.add_argument(
        "--word-cloud-url",
        default=os.environ.get("TEXTANALYZER_WORD_CLOUD_URL"),
        help="endpoint of the word cloud service",
    )
    args = parser.parse_args(argv)
    if not args.word_cloud_url:
        parser.error("a word cloud URL is required (--word-cloud-url)")
    logging.basicConfig(level=logging.INFO)
    create_app(args.word_cloud_url).run(host=args.host, port=args.port)
    return 0