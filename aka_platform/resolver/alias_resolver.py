"""
AliasResolver module for Aka Platform.

Responsibilities:
    - Classify an inbound request (read vs. mutation)
    - Authorize mutations against the configured shared secret
    - Validate mutation bodies as absolute URLs
    - Propose the record to persist (create or update)
    - Build the redirect target, merging the inbound query string on reads

Design notes:
    - Framework-free: takes plain values, returns a ResolverResult. The API
      layer does the store lookup before and the store write after.
    - Stateless between calls; the shared secret is injected at construction.
    - Validation helpers raise AliasError subclasses; handle_request converts
      every one of them into a result, so callers never see an exception.

LLM Prompt Example:
    "Explain how keeping request classification, authorization, and redirect
    construction in a pure function makes the HTTP and storage layers
    swappable and the behavior trivially unit-testable."
"""

import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, Optional, Union

from auth.service import is_authorized

from ..errors import AliasError, InvalidAlias, InvalidBody, NotFound, Unauthorized
from ..models import AliasRecord
from .urls import is_absolute_url, merge_query_string

log = logging.getLogger("aka.resolver")

MUTATING_METHODS = frozenset({"POST", "PUT"})


class ResolverStatus(IntEnum):
    OK = 200  # reserved; no branch produces it today
    REDIRECT = 302
    BAD_REQUEST = 400
    UNAUTHORIZED = 401
    NOT_FOUND = 404


@dataclass(frozen=True)
class ResolverResult:
    """
    Outcome of handling one request.

    Attributes:
        status (ResolverStatus): HTTP status to answer with.
        location (Optional[str]): Redirect target, set only for REDIRECT.
        message (Optional[str]): Human-readable reason for error statuses.
        record_to_persist (Optional[AliasRecord]): Record the caller must
            forward to the store's upsert. Set only for accepted mutations.
    """

    status: ResolverStatus
    location: Optional[str] = None
    message: Optional[str] = None
    record_to_persist: Optional[AliasRecord] = None

    @classmethod
    def redirect(cls, location: str, record: Optional[AliasRecord] = None) -> "ResolverResult":
        return cls(status=ResolverStatus.REDIRECT, location=location, record_to_persist=record)

    @classmethod
    def from_error(cls, error: AliasError) -> "ResolverResult":
        return cls(status=ResolverStatus(int(error.status)), message=error.message)

    def headers(self) -> Dict[str, str]:
        if self.status == ResolverStatus.REDIRECT and self.location:
            return {"Location": self.location}
        return {}


class AliasResolver:
    """
    Resolves aliases to redirects and proposes alias upserts.

    LLM Prompt Example:
        "Show how to inject configuration (a shared secret) into a service
        at construction time instead of reading globals at call time."
    """

    def __init__(self, shared_secret: Optional[str]):
        """
        Args:
            shared_secret (Optional[str]): Secret expected in X-Authorization
                for POST/PUT. Empty or None rejects every mutation.
        """
        self.shared_secret = shared_secret or ""

    # ---------------------------------------------------------------------
    # Validation helpers
    # ---------------------------------------------------------------------
    @staticmethod
    def _require_alias(alias: Optional[str]) -> str:
        if not alias:
            raise InvalidAlias()
        return alias

    def _authorize(self, alias: str, auth_header: Optional[str]) -> None:
        if not is_authorized(auth_header, self.shared_secret):
            log.warning("Unauthorized attempt to modify alias: %s", alias)
            raise Unauthorized()

    @staticmethod
    def _parse_body(body: Union[str, bytes, None]) -> str:
        if isinstance(body, (bytes, bytearray)):
            try:
                body = bytes(body).decode("utf-8")
            except UnicodeDecodeError:
                log.warning("Request body is not valid UTF-8")
                raise InvalidBody() from None
        if not is_absolute_url(body):
            log.warning("Invalid URL provided in body: %r", body)
            raise InvalidBody()
        return body

    # ---------------------------------------------------------------------
    # Branches
    # ---------------------------------------------------------------------
    def _mutate(
        self,
        alias: str,
        body: Union[str, bytes, None],
        auth_header: Optional[str],
        existing: Optional[AliasRecord],
    ) -> ResolverResult:
        self._authorize(alias, auth_header)
        log.info("Authorized request received for alias: %s", alias)
        target_url = self._parse_body(body)

        if existing is not None:
            record = existing.with_target(target_url)
        else:
            record = AliasRecord(alias=alias, target_url=target_url)

        # A mutation redirects to the fresh target as-is; no query merge.
        return ResolverResult.redirect(target_url, record)

    @staticmethod
    def _resolve(alias: str, query_string: Optional[str], existing: Optional[AliasRecord]) -> ResolverResult:
        if existing is None or not existing.target_url:
            log.warning("Alias not found: %s", alias)
            raise NotFound()

        final_url = merge_query_string(existing.target_url, query_string)
        log.info("Redirecting alias %s to %s", alias, final_url)
        return ResolverResult.redirect(final_url)

    # ---------------------------------------------------------------------
    # Public API
    # ---------------------------------------------------------------------
    def handle_request(
        self,
        method: str,
        alias: Optional[str],
        body: Union[str, bytes, None] = None,
        auth_header: Optional[str] = None,
        query_string: Optional[str] = None,
        existing_record: Optional[AliasRecord] = None,
    ) -> ResolverResult:
        """
        Classify a request and produce the response to send.

        Rules:
            - Empty alias -> BAD_REQUEST for any method.
            - POST/PUT (case-insensitive):
                * secret mismatch or missing header -> UNAUTHORIZED
                * body not an absolute URL -> BAD_REQUEST
                * otherwise REDIRECT to the body, with record_to_persist set
                  (existing record updated in place of its URL, or a new one)
            - Any other method:
                * no record, or empty target -> NOT_FOUND
                * otherwise REDIRECT to target with query_string merged

        Args:
            method (str): HTTP method.
            alias (Optional[str]): Alias from the request path.
            body (str | bytes | None): Raw payload (used for POST/PUT only).
            auth_header (Optional[str]): X-Authorization value, None if absent.
            query_string (Optional[str]): Raw inbound query, e.g. "?a=1".
            existing_record (Optional[AliasRecord]): Store lookup result for alias.

        Returns:
            ResolverResult: Never raises for request-level problems.
        """
        log.info("Processing %s request for alias: %r", method, alias)
        try:
            alias = self._require_alias(alias)
            if (method or "").upper() in MUTATING_METHODS:
                return self._mutate(alias, body, auth_header, existing_record)
            return self._resolve(alias, query_string, existing_record)
        except AliasError as exc:
            if isinstance(exc, InvalidAlias):
                log.warning("Alias is null or empty.")
            return ResolverResult.from_error(exc)
