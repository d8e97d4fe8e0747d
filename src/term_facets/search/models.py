"""Search data models."""

from dataclasses import dataclass
from typing import Any


@dataclass
class Term:
    """A facet term and the number of matching documents it was counted for."""

    term: str
    termfreq: int = 0
    wdf: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {"term": self.term, "termfreq": self.termfreq, "wdf": self.wdf}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Term":
        """Create from dictionary."""
        return cls(term=data["term"], termfreq=data.get("termfreq", 0), wdf=data.get("wdf", 0))


@dataclass(frozen=True)
class MatchValue:
    """A raw value slot entry reported by a value-count spy.

    ``term`` is the serialized payload stored on the documents and
    ``termfreq`` the number of matching documents carrying exactly that payload.
    """

    term: str
    termfreq: int = 0
