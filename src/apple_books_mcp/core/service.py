from typing import List

from .errors import SearchQueryError
from .joins import join_annotations, join_members
from .models import AnnotationWithAsset, Asset, CollectionWithMembers
from ..infra.books_sqlite import BooksRepository

UNKNOWN_AUTHOR = "Unknown Author"
UNKNOWN_TITLE = "Unknown Title"


def format_summary(asset: Asset) -> str:
    """Return the ``"<author> - <title>"`` line for one asset."""
    author = asset.author or UNKNOWN_AUTHOR
    title = asset.title or UNKNOWN_TITLE
    return f"{author} - {title}"


class LibraryService(object):
    """Provide the read-only library queries exposed as MCP tools.

    Nothing is cached: each call locates and reads the stores again, so
    results always reflect what Apple Books has written to disk.
    """

    def __init__(self, repository: BooksRepository):
        self._repo = repository

    @property
    def repository(self) -> BooksRepository:
        return self._repo

    def list_books(self) -> List[Asset]:
        return self._repo.fetch_assets()

    def list_collections(self) -> List[CollectionWithMembers]:
        assets, collections, members = self._repo.fetch_collections()
        return join_members(collections, members, assets)

    def list_annotations(self) -> List[AnnotationWithAsset]:
        """Return every highlight together with the book it belongs to.

        The library store is read first; if the annotations store cannot
        be read afterwards the whole call fails.
        """
        assets = self._repo.fetch_assets()
        annotations = self._repo.fetch_annotations()
        return join_annotations(annotations, assets)

    def list_book_summaries(self) -> str:
        return "\n".join(format_summary(asset) for asset in self._repo.fetch_assets())

    def search_books(self, query: str) -> List[Asset]:
        """Return assets whose title or author contains ``query``.

        Matching ignores case and surrounding whitespace of the query.
        An empty query is rejected instead of matching everything.
        """
        needle = (query or "").strip().casefold()
        if not needle:
            raise SearchQueryError("Search query must not be empty")

        return [
            asset
            for asset in self._repo.fetch_assets()
            if needle in (asset.title or "").casefold()
            or needle in (asset.author or "").casefold()
        ]
