import sqlite3
from pathlib import Path

import pytest

from apple_books_mcp.config_loader import ServerConfig
from apple_books_mcp.core.service import LibraryService
from apple_books_mcp.infra.books_sqlite import BooksRepository
from apple_books_mcp.tools.dispatcher import ToolDispatcher

LIBRARY_SCHEMA = """
CREATE TABLE ZBKLIBRARYASSET (
    Z_PK INTEGER PRIMARY KEY,
    ZASSETID VARCHAR,
    ZTITLE VARCHAR,
    ZAUTHOR VARCHAR,
    ZLANGUAGE VARCHAR,
    ZPATH VARCHAR
);
CREATE TABLE ZBKCOLLECTION (
    Z_PK INTEGER PRIMARY KEY,
    ZCOLLECTIONID VARCHAR,
    ZTITLE VARCHAR
);
CREATE TABLE ZBKCOLLECTIONMEMBER (
    Z_PK INTEGER PRIMARY KEY,
    ZCOLLECTION INTEGER,
    ZASSETID VARCHAR
);
"""

ANNOTATION_SCHEMA = """
CREATE TABLE ZAEANNOTATION (
    Z_PK INTEGER PRIMARY KEY,
    ZANNOTATIONASSETID,
    ZANNOTATIONSELECTEDTEXT VARCHAR,
    ZFUTUREPROOFING5 VARCHAR,
    ZANNOTATIONCREATIONDATE TIMESTAMP,
    ZANNOTATIONMODIFICATIONDATE TIMESTAMP,
    ZANNOTATIONDELETED INTEGER
);
"""

ASSETS = [
    ("1", "Dune", "Frank Herbert", "en", "/books/dune.epub"),
    ("2", "Nineteen Eighty-Four", "George Orwell", "en", "/books/1984.epub"),
    ("3", "Animal Farm", None, "en", "/books/animal-farm.epub"),
    ("4", None, "Nobody", "en", "/books/untitled.epub"),
]

# Z_PK 1..8 are built-in collections and must stay invisible.
COLLECTIONS = [
    (1, "BKAllBooks", "Books"),
    (9, "C-FAV", "Favorites"),
    (10, "C-EMPTY", "Empty Shelf"),
    (11, "C-MIXED", "Mixed"),
]

MEMBERS = [
    (1, "1"),
    (9, "2"),
    (9, "1"),
    (11, "missing-asset"),
    (11, "3"),
]

# ZANNOTATIONASSETID is untyped so the integer id below is stored as an integer.
ANNOTATIONS = [
    ("1", "Fear is the mind-killer.", "ch01", 700000000.5, 700000100.25, 0),
    ("2", "Big Brother is watching you.", "ch01", 710000000.0, 710000000.0, 0),
    ("2", "Deleted highlight", "ch02", 710000001.0, 710000001.0, 1),
    ("2", None, "ch03", 710000002.0, 710000002.0, 0),
    (3, "All animals are equal.", "ch10", 715000000.0, 715000000.0, 0),
    ("999", "Orphaned highlight", None, 720000000.0, 720000000.0, 0),
]


def create_library_store(path: Path, assets=ASSETS, collections=COLLECTIONS, members=MEMBERS) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(path)
    try:
        conn.executescript(LIBRARY_SCHEMA)
        conn.executemany(
            "INSERT INTO ZBKLIBRARYASSET (ZASSETID, ZTITLE, ZAUTHOR, ZLANGUAGE, ZPATH) VALUES (?, ?, ?, ?, ?)",
            assets,
        )
        conn.executemany(
            "INSERT INTO ZBKCOLLECTION (Z_PK, ZCOLLECTIONID, ZTITLE) VALUES (?, ?, ?)",
            collections,
        )
        conn.executemany(
            "INSERT INTO ZBKCOLLECTIONMEMBER (ZCOLLECTION, ZASSETID) VALUES (?, ?)",
            members,
        )
        conn.commit()
    finally:
        conn.close()
    return path


def create_annotation_store(path: Path, annotations=ANNOTATIONS) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(path)
    try:
        conn.executescript(ANNOTATION_SCHEMA)
        conn.executemany(
            "INSERT INTO ZAEANNOTATION (ZANNOTATIONASSETID, ZANNOTATIONSELECTEDTEXT, ZFUTUREPROOFING5, "
            "ZANNOTATIONCREATIONDATE, ZANNOTATIONMODIFICATIONDATE, ZANNOTATIONDELETED) "
            "VALUES (?, ?, ?, ?, ?, ?)",
            annotations,
        )
        conn.commit()
    finally:
        conn.close()
    return path


@pytest.fixture
def library_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "BKLibrary"
    create_library_store(directory / "BKLibrary-1-091020131601.sqlite")
    return directory


@pytest.fixture
def annotations_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "AEAnnotation"
    create_annotation_store(directory / "AEAnnotation_v10312011_1727_local.sqlite")
    return directory


@pytest.fixture
def config(library_dir: Path, annotations_dir: Path) -> ServerConfig:
    return ServerConfig(library_dir=str(library_dir), annotations_dir=str(annotations_dir))


@pytest.fixture
def repository(library_dir: Path, annotations_dir: Path) -> BooksRepository:
    return BooksRepository(library_dir=str(library_dir), annotations_dir=str(annotations_dir))


@pytest.fixture
def service(repository: BooksRepository) -> LibraryService:
    return LibraryService(repository)


@pytest.fixture
def dispatcher(service: LibraryService) -> ToolDispatcher:
    return ToolDispatcher(service)
