"""Library Catalog Server

Presents one catalog store to MCP clients:
- Resources render the catalog (dashboard, lists, history, statistics)
- Tools change it (add, delete, issue, return) or search it

The store is created once at startup and handed to ``create_server``;
every resource and tool handler is bound to that instance.
"""

import logging
import signal
import sys
from typing import Any

from fastmcp import FastMCP

from library_catalog.catalog.store import CatalogStore
from library_catalog.config import CatalogConfig, get_config
from library_catalog.resources import build_catalog_resources
from library_catalog.tools import (
    add_book_handler,
    delete_book_handler,
    issue_book_handler,
    return_book_handler,
    search_books_handler,
    search_history_handler,
)

logger = logging.getLogger(__name__)


def configure_logging(config: CatalogConfig) -> None:
    """Log to stderr so stdout stays free for the stdio transport."""
    logging.basicConfig(
        level=logging.DEBUG if config.debug else config.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )
    if not config.debug:
        logging.getLogger("fastmcp").setLevel(logging.WARNING)


def register_resources(mcp: FastMCP, store: CatalogStore) -> None:
    resources = build_catalog_resources(store)
    for resource in resources:
        mcp.resource(
            resource["uri"],
            name=resource["name"],
            description=resource["description"],
            mime_type=resource["mime_type"],
        )(resource["handler"])
    logger.info("Registered %d catalog resources", len(resources))


def register_tools(mcp: FastMCP, store: CatalogStore) -> None:
    @mcp.tool(
        name="add_book",
        description=(
            "Add a book to the catalog. Title and author need at least 2 characters, "
            "the ISBN at least 10. New books are always available."
        ),
    )
    async def add_book(title: str, author: str, isbn: str, category: str) -> dict[str, Any]:
        return await add_book_handler(
            store, {"title": title, "author": author, "isbn": isbn, "category": category}
        )

    @mcp.tool(
        name="delete_book",
        description=(
            "Permanently delete a book. Without confirm=true only a confirmation "
            "prompt is returned. Circulation history is kept."
        ),
    )
    async def delete_book(book_id: str, confirm: bool = False) -> dict[str, Any]:
        return await delete_book_handler(store, {"book_id": book_id, "confirm": confirm})

    @mcp.tool(
        name="issue_book",
        description=(
            "Issue an available book to a borrower until a due date (YYYY-MM-DD, after today)."
        ),
    )
    async def issue_book(book_id: str, borrower: str, due_date: str) -> dict[str, Any]:
        return await issue_book_handler(
            store, {"book_id": book_id, "borrower": borrower, "due_date": due_date}
        )

    @mcp.tool(
        name="return_book",
        description=(
            "Mark an issued book as returned. Without confirm=true only a "
            "confirmation prompt is returned."
        ),
    )
    async def return_book(book_id: str, confirm: bool = False) -> dict[str, Any]:
        return await return_book_handler(store, {"book_id": book_id, "confirm": confirm})

    @mcp.tool(
        name="search_books",
        description="Search books by title, author, ISBN or category. A blank term finds nothing.",
    )
    async def search_books(term: str = "") -> dict[str, Any]:
        return await search_books_handler(store, {"term": term})

    @mcp.tool(
        name="search_history",
        description=(
            "Search circulation history by book title, borrower or action (Issue/Return). "
            "A blank term returns the full history."
        ),
    )
    async def search_history(term: str = "") -> dict[str, Any]:
        return await search_history_handler(store, {"term": term})

    logger.info("Registered catalog tools")


def create_server(store: CatalogStore, config: CatalogConfig | None = None) -> FastMCP:
    """Build a FastMCP server presenting ``store``."""
    config = config or get_config()
    mcp = FastMCP(
        name=config.server_name,
        version=config.server_version,
        instructions=(
            "Library Catalog - a small library's book catalog and circulation desk. "
            "Read resources to see the dashboard, book lists and history; use tools "
            "to add, delete, issue, return and search books."
        ),
    )
    register_resources(mcp, store)
    register_tools(mcp, store)
    return mcp


def run_stdio_server(mcp: FastMCP, config: CatalogConfig) -> None:
    """Run the server on stdio until the client goes away or a signal arrives."""
    logger.info("Starting %s v%s on stdio transport", config.server_name, config.server_version)

    def signal_handler(signum: int, _frame: Any) -> None:
        logger.info("Received signal %s, initiating shutdown...", signum)
        sys.exit(0)

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    try:
        mcp.run(transport="stdio")
    except Exception:
        logger.exception("Fatal error in catalog server")
        sys.exit(1)


def main() -> None:
    """Entry point for ``library-catalog`` and ``python -m library_catalog.server``."""
    config = get_config()
    configure_logging(config)

    try:
        logger.info("Library Catalog v%s", config.server_version)
        logger.info("Storage: %s", config.storage_backend)
        store = CatalogStore.from_config(config)
        run_stdio_server(create_server(store, config), config)
    except KeyboardInterrupt:
        logger.info("Server stopped by user")
    except Exception:
        logger.exception("Failed to start catalog server")
        sys.exit(1)


if __name__ == "__main__":
    main()
