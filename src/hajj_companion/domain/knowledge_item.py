from typing import Any, List, Tuple

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class KnowledgeItem(BaseModel):
    """
    Represents one fact or ritual explanation in the retrieval corpus.
    """

    id: str = Field(..., description="Unique identifier for the knowledge item.")
    title: str = Field(..., description="Short human-readable title.")
    content: str = Field(..., description="Free-text body of the item.")
    category: str = Field(
        default="",
        description="Open category tag such as rituals, preparation or rules.",
    )
    keywords: Tuple[str, ...] = Field(
        default_factory=tuple,
        description="Lowercase terms used for keyword matching.",
    )
    created_at: str = Field(
        default="",
        validation_alias=AliasChoices("createdAt", "created_at"),
        serialization_alias="createdAt",
        description="Authoring timestamp, informational only.",
    )

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @field_validator("keywords", mode="before")
    @classmethod
    def _normalize_keywords(cls, value: Any) -> Tuple[str, ...]:
        """Lowercases keywords and drops blanks and duplicates."""

        if value is None:
            return ()
        if isinstance(value, str):
            value = [value]
        seen: List[str] = []
        for keyword in value:
            normalized = str(keyword).strip().lower()
            if normalized and normalized not in seen:
                seen.append(normalized)
        return tuple(seen)

    def to_payload(self) -> dict[str, Any]:
        """
        Serializes the item using the public field names.

        Returns:
            A JSON-ready dictionary with a ``createdAt`` key.
        """
        payload = self.model_dump(by_alias=True)
        payload["keywords"] = list(self.keywords)
        return payload
