import json
import logging
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from pydantic import TypeAdapter, ValidationError

from hajj_companion.domain.exceptions import DuplicateKnowledgeIdError, RetrievalError
from hajj_companion.domain.knowledge_item import KnowledgeItem
from hajj_companion.knowledge.default_corpus import DEFAULT_KNOWLEDGE_ITEMS

logger = logging.getLogger(__name__)

_ITEM_LIST_ADAPTER = TypeAdapter(List[KnowledgeItem])


class KnowledgeStore:
    """
    Read-only, ordered collection of knowledge items.

    Insertion order is preserved and used as the ranking tie-break.

    Args:
        items: Knowledge items in authoring order.

    Raises:
        DuplicateKnowledgeIdError: If two items share an id.
    """

    def __init__(self, items: Iterable[KnowledgeItem]) -> None:
        ordered = tuple(items)
        by_id: Dict[str, KnowledgeItem] = {}
        for item in ordered:
            if item.id in by_id:
                raise DuplicateKnowledgeIdError(
                    f"Duplicate knowledge item id: {item.id}"
                )
            by_id[item.id] = item
        self._items: Tuple[KnowledgeItem, ...] = ordered
        self._by_id = by_id

    @classmethod
    def default(cls) -> "KnowledgeStore":
        """Builds a store from the bundled Hajj corpus."""

        return cls(DEFAULT_KNOWLEDGE_ITEMS)

    @classmethod
    def from_json_file(cls, path: Path) -> "KnowledgeStore":
        """
        Loads a store from a JSON file.

        The file holds either a list of items or an object with an ``items`` list.

        Args:
            path: Path to the JSON corpus file.

        Returns:
            A populated knowledge store.

        Raises:
            RetrievalError: If the file cannot be read or parsed.
        """
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise RetrievalError(f"Failed to read knowledge file {path}: {exc}") from exc

        records = raw.get("items", []) if isinstance(raw, dict) else raw
        try:
            items = _ITEM_LIST_ADAPTER.validate_python(records)
        except ValidationError as exc:
            raise RetrievalError(f"Invalid knowledge file {path}: {exc}") from exc

        logger.info("Loaded %d knowledge items from %s", len(items), path)
        return cls(items)

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "KnowledgeStore":
        """Loads from ``path`` when given, otherwise the bundled corpus."""

        if path is None:
            return cls.default()
        return cls.from_json_file(path)

    @property
    def items(self) -> Tuple[KnowledgeItem, ...]:
        """All items in insertion order."""

        return self._items

    def get(self, item_id: str) -> Optional[KnowledgeItem]:
        """Returns the item with ``item_id`` or None."""

        return self._by_id.get(item_id)

    def __iter__(self) -> Iterator[KnowledgeItem]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)
