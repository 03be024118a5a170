from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class AnalysisRecord:
    """In-memory representation of a row in the ANALYSIS table.

    Attributes:
        id: Store-generated identifier (None for new records).
        result: Structured assessment or a ``{"rawText": ...}`` wrapper. Always present.
        image_name: Optional filename or URL of the analysed image.
        notes: Optional user-supplied notes.
        refer_to_derm: Whether the user was advised to see a dermatologist.
        created_at: ISO-8601 UTC timestamp set on insert.
        updated_at: ISO-8601 UTC timestamp refreshed on every update.
    """

    id: Optional[str]
    result: Any
    image_name: Optional[str] = None
    notes: Optional[str] = None
    refer_to_derm: bool = False
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the camelCase document shape returned by the API."""
        return {
            "_id": self.id,
            "id": self.id,
            "imageName": self.image_name,
            "result": self.result,
            "notes": self.notes,
            "referToDerm": self.refer_to_derm,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }
