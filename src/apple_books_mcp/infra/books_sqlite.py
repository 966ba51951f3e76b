from typing import List, Tuple

from ..core.models import Annotation, Asset, Collection, CollectionMember
from .sqlite_reader import extract_rows
from .store_locator import STORE_EXTENSION, locate_store

# Z_PK values up to this one belong to built-in collections
# (Books, PDFs, Want to Read, ...).
RESERVED_COLLECTION_PK = 8

ASSETS_SQL = """
    SELECT
        ZASSETID AS id,
        ZTITLE AS title,
        ZAUTHOR AS author,
        ZLANGUAGE AS language,
        ZPATH AS path
    FROM ZBKLIBRARYASSET
    WHERE ZTITLE IS NOT NULL
    """

COLLECTIONS_SQL = """
    SELECT
        ZCOLLECTIONID AS id,
        ZTITLE AS title,
        Z_PK AS pk
    FROM ZBKCOLLECTION
    WHERE Z_PK > ?
    """

MEMBERS_SQL = """
    SELECT
        ZCOLLECTION AS collection_pk,
        ZASSETID AS asset_id
    FROM ZBKCOLLECTIONMEMBER
    WHERE ZCOLLECTION > ?
    """

ANNOTATIONS_SQL = """
    SELECT
        ZANNOTATIONASSETID AS asset_id,
        ZANNOTATIONSELECTEDTEXT AS selected_text,
        ZFUTUREPROOFING5 AS chapter,
        ZANNOTATIONCREATIONDATE AS creation_date,
        ZANNOTATIONMODIFICATIONDATE AS modification_date
    FROM ZAEANNOTATION
    WHERE ZANNOTATIONDELETED = 0 AND ZANNOTATIONSELECTEDTEXT NOT NULL
    """


class BooksRepository(object):
    """Access the Apple Books library and annotation stores.

    Only read-only queries are issued. The store file is located again
    on every call so a rotated store is picked up without a restart.
    """

    def __init__(self, library_dir: str, annotations_dir: str, extension: str = STORE_EXTENSION):
        self._library_dir = library_dir
        self._annotations_dir = annotations_dir
        self._extension = extension

    @property
    def library_dir(self) -> str:
        return self._library_dir

    @property
    def annotations_dir(self) -> str:
        return self._annotations_dir

    def _library_store(self) -> str:
        return locate_store(self._library_dir, self._extension)

    def _annotations_store(self) -> str:
        return locate_store(self._annotations_dir, self._extension)

    def fetch_assets(self) -> List[Asset]:
        """Return every titled asset of the library store."""
        return self._read_assets(self._library_store())

    def fetch_collections(self) -> Tuple[List[Asset], List[Collection], List[CollectionMember]]:
        """Read assets, user collections and their membership rows.

        All three tables come from the same store file.
        """
        store = self._library_store()
        assets = self._read_assets(store)
        collections = [
            Collection.from_row(row)
            for row in extract_rows(store, COLLECTIONS_SQL, (RESERVED_COLLECTION_PK,))
        ]
        members = [
            CollectionMember.from_row(row)
            for row in extract_rows(store, MEMBERS_SQL, (RESERVED_COLLECTION_PK,))
        ]
        return assets, collections, members

    def fetch_annotations(self) -> List[Annotation]:
        """Return every live highlight that has selected text."""
        store = self._annotations_store()
        return [Annotation.from_row(row) for row in extract_rows(store, ANNOTATIONS_SQL)]

    @staticmethod
    def _read_assets(store: str) -> List[Asset]:
        return [Asset.from_row(row) for row in extract_rows(store, ASSETS_SQL)]
