"""
Main API module for Aka Platform.

Responsibilities:
    - Expose /aka/{alias} for GET (redirect) and POST/PUT (create or update)
    - Look the alias up before resolving, persist the proposed record after
    - Translate resolver results and store outcomes into HTTP responses

Architecture:
    - App Factory pattern (create_app) for test isolation and DI.
    - In-memory store by default; PostgreSQL via AKA_STORAGE_BACKEND=postgres.
    - AliasResolver holds all request rules; this module only does I/O.

LLM Prompt Example:
    "Explain how to structure a FastAPI service with an application factory,
    injected dependencies, and a clean separation between API and business logic."
"""

import logging
from typing import Optional

from fastapi import Depends, FastAPI, Request, Response
from fastapi.responses import PlainTextResponse
from starlette.concurrency import run_in_threadpool

from auth.dependencies import get_presented_secret
from aka_platform.config import Settings, settings as default_settings
from aka_platform.errors import AliasError, StoreConflict, StoreFailure
from aka_platform.resolver.alias_resolver import AliasResolver, ResolverResult, ResolverStatus
from aka_platform.storage.base import BaseAliasStore, UpsertOutcome
from aka_platform.storage.storage_factory import get_storage

ALIAS_METHODS = ["GET", "POST", "PUT"]


def _configure_logging(level: str) -> None:
    # basic console logging unless the host already configured it
    if not logging.getLogger().handlers:
        logging.basicConfig(level=level)
    logging.getLogger("aka").setLevel(level)


def create_app(settings: Optional[Settings] = None, storage: Optional[BaseAliasStore] = None) -> FastAPI:
    """
    Factory function to build and configure a new FastAPI app instance.

    Args:
        settings (Optional[Settings]): Configuration; defaults to the env-derived settings.
        storage (Optional[BaseAliasStore]): Alias store; defaults to the configured backend.

    Returns:
        FastAPI: A fully configured application instance with its own store and resolver.

    Why an app factory?
        - Enables per-test isolation in pytest.
        - Encourages dependency injection and easy swapping of implementations.
        - Avoids accidental global state across workers/processes.
    """
    settings = settings or default_settings
    _configure_logging(settings.LOG_LEVEL)
    log = logging.getLogger("aka")

    app = FastAPI(
        title="Aka Platform",
        description="Alias redirector with shared-secret protected create/update",
        docs_url="/docs",
    )

    # ----------------------------------------------------------------
    # Per-app instances (isolated for tests, swappable for production)
    # ----------------------------------------------------------------
    if storage is None:
        storage = get_storage(settings.STORAGE_BACKEND, dsn=settings.DB_DSN)
    resolver = AliasResolver(shared_secret=settings.AUTHORIZATION_KEY)
    if not settings.secret_configured:
        log.warning("AKA_AUTHORIZATION_KEY is not set; all POST/PUT requests will be rejected")
    app.state.storage = storage
    app.state.resolver = resolver
    log.info("Aka storage backend: %s", type(storage).__name__)

    # ----------------------------------------------------------------
    # Utilities
    # ----------------------------------------------------------------
    def _to_response(result: ResolverResult) -> Response:
        if result.status == ResolverStatus.REDIRECT:
            # Location is sent verbatim; the resolver only accepts RFC 3986 URLs.
            return Response(status_code=int(result.status), headers=result.headers())
        return PlainTextResponse(result.message or "", status_code=int(result.status))

    def _persist(result: ResolverResult) -> None:
        """
        Forward the proposed record to the store exactly once.

        Raises:
            StoreConflict: Another writer changed the alias since our lookup.
            StoreFailure: The backend could not complete the write.
        """
        record = result.record_to_persist
        if record is None:
            return
        outcome = storage.upsert(record)
        if outcome == UpsertOutcome.CONFLICT:
            raise StoreConflict()
        if outcome != UpsertOutcome.SUCCESS:
            raise StoreFailure()
        log.info("Stored alias %s -> %s", record.alias, record.target_url)

    @app.exception_handler(AliasError)
    async def _alias_error_handler(request: Request, exc: AliasError) -> Response:
        log.warning("%s %s failed: %s", request.method, request.url.path, exc.message)
        return PlainTextResponse(exc.message, status_code=int(exc.status))

    # Health check
    @app.get("/health_aka")
    def health_aka():
        return {"status": "ok"}

    # ----------------------------------------------------------------
    # Routes
    # ----------------------------------------------------------------
    @app.api_route("/aka", methods=ALIAS_METHODS, include_in_schema=False)
    @app.api_route("/aka/", methods=ALIAS_METHODS, include_in_schema=False)
    def missing_alias(request: Request) -> Response:
        """Requests without an alias segment are rejected as 400."""
        return _to_response(resolver.handle_request(request.method, ""))

    @app.api_route("/aka/{alias}", methods=ALIAS_METHODS)
    async def aka(
        alias: str,
        request: Request,
        presented_secret: Optional[str] = Depends(get_presented_secret),
    ) -> Response:
        """
        Redirect to an alias's target, or create/update it.

        GET:
            302 to the stored URL with the inbound query string merged,
            404 if the alias is unknown.
        POST/PUT (body = target URL, header X-Authorization = shared secret):
            302 to the new target after storing it,
            401 on a bad/missing secret, 400 on a non-absolute URL,
            409 if the alias changed concurrently, 503 if the store failed.
        """
        body = await request.body() if request.method in ("POST", "PUT") else None
        query = request.url.query
        existing = await run_in_threadpool(storage.lookup, alias) if alias else None

        result = resolver.handle_request(
            method=request.method,
            alias=alias,
            body=body,
            auth_header=presented_secret,
            query_string=f"?{query}" if query else "",
            existing_record=existing,
        )
        await run_in_threadpool(_persist, result)
        return _to_response(result)

    return app


# `uvicorn main:app --reload` and `from main import app` continue to work.
app = create_app()
