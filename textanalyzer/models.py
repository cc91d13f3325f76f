"""Wire models shared by the text analyzer services."""

from collections.abc import Mapping
from dataclasses import asdict, dataclass, fields
from typing import Any


@dataclass(frozen=True)
class FileExistsResponse:
    """Answer to the question whether a file is stored."""

    exists: bool
    id: int
    status: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class FileStatusResponse:
    """Outcome of an operation on a stored file."""

    id: int
    status: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Analysis:
    """Statistics computed for one text."""

    id: int = 0
    paragraphs_amount: int = 0
    sentences_amount: int = 0
    words_amount: int = 0
    symbols_amount: int = 0
    average_sentences_per_paragraph: float = 0.0
    average_words_per_sentence: float = 0.0
    average_length_of_words: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Any) -> "Analysis":
        """Build an analysis from decoded JSON; missing or null fields stay zero."""
        if not isinstance(data, Mapping):
            raise ValueError("analysis must be a JSON object")
        values: dict[str, Any] = {}
        for field in fields(cls):
            raw = data.get(field.name)
            if raw is None:
                continue
            if isinstance(raw, bool):
                raise ValueError(f"field {field.name!r} must be a number")
            if isinstance(field.default, float):
                if not isinstance(raw, (int, float)):
                    raise ValueError(f"field {field.name!r} must be a number")
                values[field.name] = float(raw)
            else:
                if not isinstance(raw, int):
                    raise ValueError(f"field {field.name!r} must be an integer")
                values[field.name] = raw
        return cls(**values)


@dataclass(frozen=True)
class CompareResponse:
    """Differences between the analyses of two files."""

    first_id: int
    second_id: int
    paragraphs_amount_diff: int
    sentences_amount_diff: int
    words_amount_diff: int
    symbols_amount_diff: int
    average_sentences_per_paragraph_diff: float
    average_words_per_sentence_diff: float
    average_length_of_words_diff: float

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)