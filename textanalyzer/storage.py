"""MongoDB storage for uploaded texts and their word clouds."""

from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import BinaryIO
import logging

import pymongo
from pymongo.database import Database

log = logging.getLogger(__name__)

FILES_COLLECTION = "files"
WORD_CLOUD_BUCKET = "wordcloud"
CHUNK_SIZE = 255 * 1024
_TIMEOUT_MS = 5000


class DocumentStore:
    """Stores file contents in a collection and word clouds in a GridFS-layout bucket."""

    def __init__(self, uri: str, db_name: str = "mg") -> None:
        self._uri = uri
        self._db_name = db_name

    @contextmanager
    def _database(self) -> Iterator[Database]:
        with pymongo.MongoClient(
            self._uri, serverSelectionTimeoutMS=_TIMEOUT_MS
        ) as client:
            log.info("connected to %s", self._db_name)
            yield client[self._db_name]

    def store_document(self, content: bytes, file_id: int) -> None:
        """Insert the file content under the given id."""
        with self._database() as db:
            db[FILES_COLLECTION].insert_one({"_id": file_id, "file": bytes(content)})
        log.info("stored document %d", file_id)

    def get_document(self, file_id: int) -> bytes:
        """Return the content stored under the id; raise KeyError if there is none."""
        with self._database() as db:
            record = db[FILES_COLLECTION].find_one({"_id": file_id})
        if record is None:
            raise KeyError(file_id)
        content = record.get("file")
        if not isinstance(content, (bytes, bytearray)):
            return b""
        log.info("read document %d", file_id)
        return bytes(content)

    def store_word_cloud(self, file_id: int, stream: BinaryIO) -> None:
        """Upload a word cloud image read from the stream as '<id>.png'."""
        data = stream.read()
        with self._database() as db:
            files = db[f"{WORD_CLOUD_BUCKET}.files"]
            chunks = db[f"{WORD_CLOUD_BUCKET}.chunks"]
            files.insert_one(
                {
                    "_id": file_id,
                    "filename": f"{file_id}.png",
                    "length": len(data),
                    "chunkSize": CHUNK_SIZE,
                    "uploadDate": datetime.now(timezone.utc),
                }
            )
            pieces = [
                {"files_id": file_id, "n": n, "data": data[start : start + CHUNK_SIZE]}
                for n, start in enumerate(range(0, len(data), CHUNK_SIZE))
            ]
            if pieces:
                try:
                    chunks.insert_many(pieces)
                except Exception:
                    files.delete_one({"_id": file_id})
                    chunks.delete_many({"files_id": file_id})
                    raise
        log.info("stored word cloud %d", file_id)

    def get_word_cloud(self, file_id: int) -> bytes:
        """Return the word cloud image stored under the id; raise KeyError if there is none."""
        with self._database() as db:
            if db[f"{WORD_CLOUD_BUCKET}.files"].find_one({"_id": file_id}) is None:
                raise KeyError(file_id)
            found = db[f"{WORD_CLOUD_BUCKET}.chunks"].find(
                {"files_id": file_id}, sort=[("n", pymongo.ASCENDING)]
            )
            data = b"".join(bytes(chunk["data"]) for chunk in found)
        log.info("read word cloud %d, %d bytes", file_id, len(data))
        return data