"""In-memory joins between assets and the rows that reference them.

Identifiers arrive from different tables in different shapes (text in
one, integer in another), so both sides are compared through
``canonical_id``. The lookups are indexed, but the output order is the
one a plain nested scan would produce: outer rows in query order and
attached assets in asset order.
"""

from collections import defaultdict
from typing import Any, Dict, Iterable, List, Sequence

from .models import (
    Annotation,
    AnnotationWithAsset,
    Asset,
    Collection,
    CollectionMember,
    CollectionWithMembers,
)


def canonical_id(value: Any) -> str:
    """Return the comparable form of an identifier."""
    if value is None:
        return ""
    return str(value).strip()


def index_assets(assets: Iterable[Asset]) -> Dict[str, List[Asset]]:
    """Group assets by canonical id, keeping their original order."""
    index: Dict[str, List[Asset]] = defaultdict(list)
    for asset in assets:
        index[canonical_id(asset.id)].append(asset)
    return index


def join_members(
    collections: Sequence[Collection],
    members: Sequence[CollectionMember],
    assets: Sequence[Asset],
) -> List[CollectionWithMembers]:
    """Attach the member assets to each collection.

    A membership row whose asset is unknown contributes nothing. If an
    identifier matches several assets, all of them are attached.
    """
    assets_by_id = index_assets(assets)
    members_by_key: Dict[str, List[CollectionMember]] = defaultdict(list)
    for member in members:
        members_by_key[canonical_id(member.collection_pk)].append(member)

    result: List[CollectionWithMembers] = []
    for collection in collections:
        joined = CollectionWithMembers(
            id=collection.id,
            pk=collection.pk,
            title=collection.title,
        )
        for member in members_by_key.get(canonical_id(collection.pk), []):
            joined.members.extend(assets_by_id.get(canonical_id(member.asset_id), []))
        result.append(joined)
    return result


def join_annotations(
    annotations: Sequence[Annotation],
    assets: Sequence[Asset],
) -> List[AnnotationWithAsset]:
    """Attach the owning asset(s) to each annotation.

    Annotations without a known asset are kept with an empty list.
    """
    assets_by_id = index_assets(assets)
    return [
        AnnotationWithAsset(
            asset_id=annotation.asset_id,
            selected_text=annotation.selected_text,
            chapter=annotation.chapter,
            creation_date=annotation.creation_date,
            modification_date=annotation.modification_date,
            asset=list(assets_by_id.get(canonical_id(annotation.asset_id), [])),
        )
        for annotation in annotations
    ]
