import dataclasses
import json
import logging
from typing import Any, Callable, Dict, List, Optional, Type

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..core.errors import LibraryError, SearchQueryError, UnknownToolError
from ..core.service import LibraryService
from ..mcp_protocol import MCPToolDescription, ToolResult

logger = logging.getLogger(__name__)

GET_BOOKS = "get_books"
GET_COLLECTIONS = "get_collections"
GET_ANNOTATIONS = "get_annotations"
GET_BOOK_LIST = "get_book_list"
SEARCH_BOOKS = "search_books"


class NoArgumentsInput(BaseModel):
    model_config = ConfigDict(extra="ignore")


class SearchBooksInput(BaseModel):
    query: str = Field(..., description="Search query for title or author")


# Payload keys clients already know from the Node.js server; fields not
# listed keep their name.
WIRE_KEYS = {
    "asset_id": "assetId",
    "selected_text": "selectedText",
    "creation_date": "creationDate",
    "modification_date": "modificationDate",
}


def to_json(value: Any) -> str:
    """Pretty-print a result made of dataclasses, lists and plain values."""
    return json.dumps(_to_wire(value), indent=2, ensure_ascii=False)


def _to_wire(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        value = dataclasses.asdict(value)
    if isinstance(value, dict):
        return {WIRE_KEYS.get(key, key): _to_wire(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_to_wire(item) for item in value]
    return value


def no_match_message(query: str) -> str:
    return f'No books found matching "{query.strip()}"'


@dataclasses.dataclass
class _ToolSpec(object):
    description: MCPToolDescription
    input_model: Type[BaseModel]
    handler: Callable[[Any], str]


class ToolDispatcher(object):
    """Route named tool calls to LibraryService and render the replies.

    ``call_tool`` is the only place where failures are turned into text:
    library errors keep their kind, anything unexpected is reported as
    ``internal_error``. No exception leaves ``call_tool``.
    """

    def __init__(self, service: LibraryService):
        self._service = service
        self._tools: Dict[str, _ToolSpec] = {}
        self._register(
            GET_BOOKS,
            "Get all books from Apple Books library",
            NoArgumentsInput,
            self._get_books,
        )
        self._register(
            GET_COLLECTIONS,
            "Get all collections and their books from Apple Books",
            NoArgumentsInput,
            self._get_collections,
        )
        self._register(
            GET_ANNOTATIONS,
            "Get all annotations/highlights from Apple Books",
            NoArgumentsInput,
            self._get_annotations,
        )
        self._register(
            GET_BOOK_LIST,
            "Get a simple list of books in 'Author - Title' format",
            NoArgumentsInput,
            self._get_book_list,
        )
        self._register(
            SEARCH_BOOKS,
            "Search for books by title or author",
            SearchBooksInput,
            self._search_books,
        )

    @property
    def service(self) -> LibraryService:
        return self._service

    def _register(self, name: str, description: str, input_model: Type[BaseModel], handler) -> None:
        schema = input_model.model_json_schema()
        input_schema = {"type": "object", "properties": schema.get("properties", {})}
        if schema.get("required"):
            input_schema["required"] = schema["required"]
        self._tools[name] = _ToolSpec(
            description=MCPToolDescription(name=name, description=description, input_schema=input_schema),
            input_model=input_model,
            handler=handler,
        )

    def list_tools(self) -> List[MCPToolDescription]:
        return [spec.description for spec in self._tools.values()]

    def call_tool(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> ToolResult:
        logger.info("Tool call: name=%r arguments=%r", name, arguments)
        try:
            spec = self._tools.get(name)
            if spec is None:
                raise UnknownToolError(name)
            try:
                params = spec.input_model.model_validate(arguments or {})
            except ValidationError as exc:
                raise SearchQueryError(f"Invalid arguments for {name}: {exc}") from exc
            return ToolResult.success(spec.handler(params))
        except LibraryError as exc:
            logger.warning("Tool %r failed (%s): %s", name, exc.kind, exc)
            return ToolResult.failure(exc.kind, str(exc))
        except Exception as exc:  # pylint: disable=broad-except
            logger.exception("Tool %r failed unexpectedly", name)
            return ToolResult.failure("internal_error", f"{type(exc).__name__}: {exc}")

    def _get_books(self, params: NoArgumentsInput) -> str:
        return to_json(self._service.list_books())

    def _get_collections(self, params: NoArgumentsInput) -> str:
        return to_json(self._service.list_collections())

    def _get_annotations(self, params: NoArgumentsInput) -> str:
        return to_json(self._service.list_annotations())

    def _get_book_list(self, params: NoArgumentsInput) -> str:
        return self._service.list_book_summaries()

    def _search_books(self, params: SearchBooksInput) -> str:
        hits = self._service.search_books(params.query)
        if not hits:
            return no_match_message(params.query)
        return to_json(hits)
