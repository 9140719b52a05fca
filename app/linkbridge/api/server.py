"""FastAPI application exposing the link and directory endpoints.

The application is built by create_app(), which receives every
collaborator explicitly and keeps them on app.state; there is no
module-level instance. Authentication is left to whatever hosts or
fronts the application.

Batch endpoints always answer 200 with `success: true` once the batch has
run. Callers must inspect `errors` to detect partial failure.
"""

import logging

from fastapi import APIRouter, Depends, FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from linkbridge import __version__
from linkbridge.api.schemas import (
    AddItemsRequest,
    AddItemsResponse,
    ClearItemsRequest,
    CreateDirectoryRequest,
    CreateDirectoryResponse,
    ErrorResponse,
    HealthResponse,
    ListSymlinksResponse,
    RemoveDirectoryRequest,
    RemoveDirectoryResponse,
    RemoveItemsRequest,
    RemoveItemsResponse,
    StatusResponse,
    SymlinkInfo,
)
from linkbridge.core.config import BridgeConfig
from linkbridge.core.errors import DirectoryNotEmptyError, InvalidRequestError, LinkStoreError
from linkbridge.links.batch import BatchCoordinator
from linkbridge.links.models import LinkRecord

logger = logging.getLogger(__name__)

# Route prefix for all endpoints
API_PREFIX = "/api/linkbridge"

router = APIRouter()


def get_coordinator(request: Request) -> BatchCoordinator:
    """Return the coordinator attached to the running application."""
    return request.app.state.coordinator


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


def describe_links(records: list[LinkRecord]) -> str:
    """Build the human-readable summary returned by the list endpoint.

    Args:
        records: Links found in a directory.

    Returns:
        Summary message naming each link.
    """
    if not records:
        return "No symlinks found in directory"
    names = ", ".join(record.name for record in records)
    return f"Found {len(records)} symlink(s): {names}"


@router.post("/symlinks/add", response_model=AddItemsResponse)
def add_symlinks(
    body: AddItemsRequest,
    coordinator: BatchCoordinator = Depends(get_coordinator),
) -> AddItemsResponse:
    """Create symlinks for media items."""
    logger.info("Received request to create %d symlink(s)", len(body.items))
    result = coordinator.add_links([item.to_request() for item in body.items])
    return AddItemsResponse.from_result(result)


@router.post("/symlinks/remove", response_model=RemoveItemsResponse)
def remove_symlinks(
    body: RemoveItemsRequest,
    coordinator: BatchCoordinator = Depends(get_coordinator),
) -> RemoveItemsResponse:
    """Remove symlinks by path."""
    logger.info("Received request to remove %d symlink(s)", len(body.symlink_paths))
    result = coordinator.remove_links(body.symlink_paths)
    return RemoveItemsResponse.from_result(result)


@router.post("/symlinks/clear", response_model=RemoveItemsResponse)
def clear_symlinks(
    body: ClearItemsRequest | None = None,
    coordinator: BatchCoordinator = Depends(get_coordinator),
) -> RemoveItemsResponse:
    """Remove every symlink in a directory."""
    directory = body.directory if body is not None else None
    result = coordinator.clear_links(directory.strip() if directory else None)
    return RemoveItemsResponse.from_result(result)


@router.get("/symlinks/list", response_model=ListSymlinksResponse)
def list_symlinks(
    directory: str | None = Query(default=None),
    coordinator: BatchCoordinator = Depends(get_coordinator),
) -> ListSymlinksResponse:
    """List the symlinks in a directory."""
    if directory is None or not directory.strip():
        raise InvalidRequestError("Directory parameter is required")

    logger.info("Received request to list symlinks in %s", directory)
    records = coordinator.store.list_links(directory)
    return ListSymlinksResponse(
        symlinks=[SymlinkInfo.from_record(record) for record in records],
        count=len(records),
        message=describe_links(records),
    )


@router.post("/directories/create", response_model=CreateDirectoryResponse)
def create_directory(
    body: CreateDirectoryRequest,
    coordinator: BatchCoordinator = Depends(get_coordinator),
) -> CreateDirectoryResponse:
    """Create a directory if it does not exist."""
    if not body.directory.strip():
        raise InvalidRequestError("Directory path is required")

    logger.info("Received request to create directory: %s", body.directory)
    created = coordinator.store.ensure_directory(body.directory)
    return CreateDirectoryResponse(
        success=True,
        directory=body.directory,
        created=created,
        message="Directory created successfully" if created else "Directory already exists",
    )


@router.delete("/directories/remove", response_model=RemoveDirectoryResponse)
def remove_directory(
    body: RemoveDirectoryRequest,
    coordinator: BatchCoordinator = Depends(get_coordinator),
) -> RemoveDirectoryResponse:
    """Remove a directory, optionally with its contents."""
    if not body.directory.strip():
        raise InvalidRequestError("Directory path is required")

    logger.info(
        "Received request to remove directory: %s (force=%s)", body.directory, body.force
    )
    coordinator.store.remove_directory(body.directory, force=body.force)
    return RemoveDirectoryResponse(
        success=True,
        directory=body.directory,
        message="Directory removed successfully",
    )


@router.get("/status", response_model=StatusResponse)
def get_status(
    request: Request,
    coordinator: BatchCoordinator = Depends(get_coordinator),
) -> StatusResponse:
    """Report the running version and whether the catalog answers.

    `catalogConnected` is null when catalog sync is disabled.
    """
    catalog = coordinator.catalog
    return StatusResponse(
        version=request.app.state.version,
        catalog_connected=catalog.ping() if catalog is not None else None,
    )


@router.get("/health", response_model=HealthResponse)
def get_health() -> HealthResponse:
    """Liveness check."""
    return HealthResponse()


def _register_error_handlers(app: FastAPI) -> None:
    """Map linkbridge errors onto HTTP responses."""

    @app.exception_handler(InvalidRequestError)
    async def handle_invalid_request(request: Request, exc: InvalidRequestError) -> JSONResponse:
        return _error(400, str(exc))

    @app.exception_handler(RequestValidationError)
    async def handle_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
        messages = [
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()
        ]
        return _error(400, "Invalid request body: " + "; ".join(messages))

    @app.exception_handler(DirectoryNotEmptyError)
    async def handle_not_empty(request: Request, exc: DirectoryNotEmptyError) -> JSONResponse:
        logger.warning("Cannot remove non-empty directory: %s", exc)
        return _error(400, str(exc))

    @app.exception_handler(LinkStoreError)
    async def handle_store_error(request: Request, exc: LinkStoreError) -> JSONResponse:
        logger.error("Filesystem operation failed: %s", exc)
        return _error(500, str(exc))


def create_app(
    config: BridgeConfig | None = None,
    coordinator: BatchCoordinator | None = None,
    version: str = __version__,
) -> FastAPI:
    """Build the FastAPI application.

    Args:
        config: Configuration used to build the coordinator when none is given.
        coordinator: Batch coordinator serving the endpoints.
        version: Version reported by the status endpoint.

    Returns:
        Configured FastAPI application.
    """
    config = config or BridgeConfig()
    if coordinator is None:
        coordinator = BatchCoordinator.from_config(config)

    app = FastAPI(title="linkbridge", version=version)
    app.state.config = config
    app.state.coordinator = coordinator
    app.state.version = version

    _register_error_handlers(app)
    app.include_router(router, prefix=API_PREFIX)

    if coordinator.catalog is not None:
        logger.info("Catalog sync enabled: %s", coordinator.catalog.base_url)
    else:
        logger.info("Catalog sync disabled")

    return app
