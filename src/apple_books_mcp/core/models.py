from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


def _optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)


@dataclass(frozen=True)
class Asset(object):
    """Represent a single book from ZBKLIBRARYASSET."""

    id: str
    title: str
    author: Optional[str] = None
    language: Optional[str] = None
    path: Optional[str] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Asset":
        return cls(
            id=_optional_str(row["id"]) or "",
            title=str(row["title"]),
            author=_optional_str(row.get("author")),
            language=_optional_str(row.get("language")),
            path=_optional_str(row.get("path")),
        )


@dataclass(frozen=True)
class Collection(object):
    """Represent a user collection from ZBKCOLLECTION.

    ``pk`` is the store's internal key and is only used to correlate
    membership rows; ``id`` is the public collection identifier.
    """

    id: Optional[str]
    pk: int
    title: Optional[str]

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Collection":
        return cls(
            id=_optional_str(row.get("id")),
            pk=int(row["pk"]),
            title=_optional_str(row.get("title")),
        )


@dataclass(frozen=True)
class CollectionMember(object):
    """Link between a collection key and an asset identifier."""

    collection_pk: Any
    asset_id: Any

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "CollectionMember":
        return cls(collection_pk=row["collection_pk"], asset_id=row["asset_id"])


@dataclass(frozen=True)
class Annotation(object):
    """Represent a highlight from ZAEANNOTATION.

    Timestamps are passed through exactly as stored.
    """

    asset_id: Optional[str]
    selected_text: str
    chapter: Optional[str] = None
    creation_date: Optional[float] = None
    modification_date: Optional[float] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Annotation":
        return cls(
            asset_id=_optional_str(row.get("asset_id")),
            selected_text=str(row["selected_text"]),
            chapter=_optional_str(row.get("chapter")),
            creation_date=row.get("creation_date"),
            modification_date=row.get("modification_date"),
        )


@dataclass
class CollectionWithMembers(object):
    id: Optional[str]
    pk: int
    title: Optional[str]
    members: List[Asset] = field(default_factory=list)


@dataclass
class AnnotationWithAsset(object):
    asset_id: Optional[str]
    selected_text: str
    chapter: Optional[str]
    creation_date: Optional[float]
    modification_date: Optional[float]
    asset: List[Asset] = field(default_factory=list)
