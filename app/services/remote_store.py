"""
Client for the hosted record store (backend-as-a-service)

Every call returns a RemoteResponse; transport errors and store-side
rejections are classified into an ErrorKind here so services never
inspect free-text messages.
"""

from typing import Any, Dict, List, Optional, Protocol
import logging
import re

import httpx

from app.core.config import Settings
from app.core.exceptions import (
    AuthenticationRequiredException,
    NotInitializedException,
    PartialFailureException,
    RemoteFailureException,
    ServiceUnavailableException,
)
from app.schemas.remote import ErrorKind, RecordQuery, RecordResult, RemoteResponse

logger = logging.getLogger(__name__)

_AUTH_MESSAGE = re.compile(
    r"\b(rls|row[- ]level security|policy|unauthori[sz]ed|not authenticated|jwt expired)\b",
    re.IGNORECASE,
)


def classify_message(message: Optional[str]) -> ErrorKind:
    """Classify a store failure message that came without an auth status code"""
    if message and _AUTH_MESSAGE.search(message):
        return ErrorKind.AUTHENTICATION
    return ErrorKind.REMOTE


class RemoteStore(Protocol):
    """Record CRUD over named tables"""

    async def fetch_records(self, table: str, query: RecordQuery) -> RemoteResponse: ...

    async def get_record_by_id(
        self, table: str, record_id: int, fields: List[str]
    ) -> RemoteResponse: ...

    async def create_record(
        self, table: str, records: List[Dict[str, Any]]
    ) -> RemoteResponse: ...

    async def delete_record(self, table: str, record_ids: List[int]) -> RemoteResponse: ...


class RemoteStoreClient:
    """httpx implementation of RemoteStore"""

    def __init__(
        self,
        base_url: str,
        project_id: str,
        public_key: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
            headers={
                "X-Project-Id": project_id,
                "X-Public-Key": public_key,
                "Accept": "application/json",
            },
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> Optional["RemoteStoreClient"]:
        """Build a client, or None when the store is not configured"""
        if not settings.REMOTE_STORE_PROJECT_ID:
            logger.warning("Remote store project id not configured")
            return None
        return cls(
            base_url=settings.REMOTE_STORE_URL,
            project_id=settings.REMOTE_STORE_PROJECT_ID,
            public_key=settings.REMOTE_STORE_PUBLIC_KEY,
            timeout=settings.REMOTE_STORE_TIMEOUT,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def fetch_records(self, table: str, query: RecordQuery) -> RemoteResponse:
        return await self._send("POST", f"/tables/{table}/records/fetch", json=query.to_payload())

    async def get_record_by_id(
        self, table: str, record_id: int, fields: List[str]
    ) -> RemoteResponse:
        return await self._send(
            "GET",
            f"/tables/{table}/records/{record_id}",
            params={"fields": ",".join(fields)},
        )

    async def create_record(
        self, table: str, records: List[Dict[str, Any]]
    ) -> RemoteResponse:
        return await self._send("POST", f"/tables/{table}/records", json={"records": records})

    async def delete_record(self, table: str, record_ids: List[int]) -> RemoteResponse:
        return await self._send(
            "DELETE", f"/tables/{table}/records", json={"RecordIds": record_ids}
        )

    async def _send(self, method: str, url: str, **kwargs) -> RemoteResponse:
        try:
            response = await self._client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"Remote store {method} {url} failed: {e}")
            return RemoteResponse(
                success=False,
                message=str(e) or "Remote store unreachable",
                error_kind=ErrorKind.UNAVAILABLE,
            )

        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {"data": body}

        message = body.get("message") or ""
        if response.status_code in (401, 403):
            return RemoteResponse(
                success=False,
                message=message or "Authentication required",
                error_kind=ErrorKind.AUTHENTICATION,
            )
        if response.is_error:
            return RemoteResponse(
                success=False,
                message=message or f"Remote store returned HTTP {response.status_code}",
                error_kind=classify_message(message),
            )

        results = [
            RecordResult(
                success=bool(r.get("success")),
                data=r.get("data"),
                message=r.get("message") or "",
                error_kind=None if r.get("success") else classify_message(r.get("message")),
            )
            for r in body.get("results") or []
        ]
        success = bool(body.get("success"))
        return RemoteResponse(
            success=success,
            data=body.get("data"),
            results=results,
            message=message,
            error_kind=None if success else classify_message(message),
        )


def require_store(remote: Optional[RemoteStore]) -> RemoteStore:
    if remote is None:
        raise NotInitializedException("Remote store")
    return remote


def raise_for_error(response: RemoteResponse, fallback: str) -> None:
    """Raise the exception matching a failed response's error kind"""
    if response.success:
        return
    detail = response.message or fallback
    if response.error_kind == ErrorKind.AUTHENTICATION:
        raise AuthenticationRequiredException(detail)
    if response.error_kind == ErrorKind.UNAVAILABLE:
        raise ServiceUnavailableException(detail)
    raise RemoteFailureException(detail)


def raise_for_results(response: RemoteResponse, fallback: str) -> List[RecordResult]:
    """
    Aggregate per-record results of a batch call

    Returns the successful records, raises when any record failed.
    """
    failed = response.failed
    if not failed:
        return response.successful

    for record in failed:
        logger.error(f"{fallback}: {record.message}")

    if not response.successful:
        # Nothing succeeded: raise the records' own error kind
        kinds = {r.error_kind for r in failed}
        kind = kinds.pop() if len(kinds) == 1 else ErrorKind.REMOTE
        raise_for_error(
            RemoteResponse(success=False, message=failed[0].message, error_kind=kind),
            fallback,
        )
    raise PartialFailureException(
        fallback,
        succeeded=len(response.successful),
        failed=len(failed),
    )
