"""HTTP service managing stored files and word clouds."""

import argparse
import hashlib
import json
import logging
import os
import re
from collections.abc import Mapping
from typing import Any

from flask import Flask, Response, request, send_from_directory
from pymongo.errors import PyMongoError

from .models import Analysis, FileExistsResponse, FileStatusResponse
from .storage import DocumentStore

log = logging.getLogger(__name__)

INCORRECT_ID_MSG = "Incorrect ID."

GET_PATTERN = "/files/{id}"
ANALYSIS_PATTERN = "/files/analysis/{id}"
WORD_CLOUD_PATTERN = "/files/wordcloud/{id}"
EXISTS_PATTERN = "/files/exists/{id}"

_INTEGER = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1

_INT_FIELDS = ("paragraphs_amount", "sentences_amount", "words_amount", "symbols_amount")
_FLOAT_FIELDS = (
    "average_sentences_per_paragraph",
    "average_words_per_sentence",
    "average_length_of_words",
)


def parse_param_from_url(url: str, pattern: str, param: str) -> str:
    """Read the value standing in the URL where the pattern holds the parameter.

    The value runs from the parameter's offset in the pattern up to the next
    '/' or the end of the URL.
    """
    start = pattern.find(param)
    if start < 0:
        raise ValueError("param not found")
    value = url[start:].split("/", 1)[0]
    if not value:
        raise ValueError("param not found")
    return value


def _parse_id(value: str) -> int:
    if not _INTEGER.fullmatch(value):
        raise ValueError(f"invalid id {value!r}")
    file_id = int(value)
    if not _INT64_MIN <= file_id <= _INT64_MAX:
        raise ValueError(f"id out of range: {value!r}")
    return file_id


def text_hash(text: str) -> str:
    """Hex SHA-256 digest of the UTF-8 text."""
    return hashlib.sha256(text.encode("utf-8", "surrogateescape")).hexdigest()


def analysis_from_record(file_id: int, record: Mapping[str, Any]) -> Analysis:
    """Build an analysis from a stored record, requiring every field with its exact type."""
    values: dict[str, Any] = {}
    for name in _INT_FIELDS:
        raw = record.get(name)
        if not isinstance(raw, int) or isinstance(raw, bool):
            raise ValueError(f"field {name!r} must be an integer")
        values[name] = raw
    for name in _FLOAT_FIELDS:
        raw = record.get(name)
        if not isinstance(raw, float):
            raise ValueError(f"field {name!r} must be a float")
        values[name] = raw
    return Analysis(id=file_id, **values)


def _json_response(payload: dict[str, Any], status: int = 200) -> Response:
    return Response(json.dumps(payload), status=status, mimetype="application/json")


def _status_response(file_id: int, message: str, status: int) -> Response:
    return _json_response(FileStatusResponse(id=file_id, status=message).to_dict(), status)


def _request_id(pattern: str) -> int | None:
    try:
        file_id = _parse_id(parse_param_from_url(request.path, pattern, "{id}"))
    except ValueError:
        log.info("cannot parse id from %s", request.path)
        return None
    return None if file_id == -1 else file_id


def create_app(store: DocumentStore) -> Flask:
    """Build the storage application on top of the given document store."""
    app = Flask(__name__)
    bad_id = lambda: _status_response(-1, INCORRECT_ID_MSG, 400)  # noqa: E731

    @app.get("/files/<file_id>")
    def get_file(**_path):
        file_id = _request_id(GET_PATTERN)
        if file_id is None:
            return bad_id()
        try:
            content = store.get_document(file_id)
        except (KeyError, PyMongoError):
            return _status_response(file_id, "Cannot download file.", 500)
        return Response(content, status=200, mimetype="text/plain")

    @app.post("/files/wordcloud/<file_id>")
    def save_word_cloud(**_path):
        file_id = _request_id(WORD_CLOUD_PATTERN)
        if file_id is None:
            return bad_id()
        cloud = request.files.get("wordCloud")
        if cloud is None:
            return _status_response(file_id, "Cannot get word cloud from request.", 400)
        try:
            store.store_word_cloud(file_id, cloud.stream)
        except (KeyError, PyMongoError):
            return _status_response(
                file_id, "Something went wrong during storing wordcloud.", 500
            )
        return _json_response(
            FileExistsResponse(exists=True, id=file_id, status="File exists").to_dict()
        )

    @app.get("/files/wordcloud/<file_id>")
    def get_word_cloud(**_path):
        file_id = _request_id(WORD_CLOUD_PATTERN)
        if file_id is None:
            return bad_id()
        try:
            cloud = store.get_word_cloud(file_id)
        except (KeyError, PyMongoError):
            return _status_response(
                file_id, "Something went wrong during getting wordcloud.", 500
            )
        return Response(cloud, status=200, mimetype="image/png")

    @app.get("/docs/<path:filename>")
    def docs(filename):
        return send_from_directory(os.path.abspath("docs"), filename)

    return app


def main(argv=None) -> int:
    """Run the storage service."""
    parser = argparse.ArgumentParser(
        prog="textanalyzer-storager",
        description="Service for managing stored files in DB.",
    )
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=8082)
    parser.add_argument(
        "--mongo-uri",
        default=os.environ.get("TEXTANALYZER_MONGO_URI"),
        help="connection URI of the MongoDB server",
    )
    parser.add_argument("--db-name", default="mg")
    args = parser.parse_args(argv)
    if not args.mongo_uri:
        parser.error("a MongoDB URI is required (--mongo-uri)")
    logging.basicConfig(level=logging.INFO)
    create_app(DocumentStore(args.mongo_uri, args.db_name)).run(
        host=args.host, port=args.port
    )
    return 0