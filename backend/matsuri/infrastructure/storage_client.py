"""Object Storage Client — httpx wrapper over a Supabase-compatible storage REST API.

Invariants:
    - upload() returns the bucket-relative path it stored, never a URL
    - Upload transport/HTTP failures map to StoreUnavailableError with the server's message
    - sign() failures map to SigningError (callers decide whether to absorb them)
    - get_public_url() is pure URL construction — no request is made
    - health_check() never raises: transport or HTTP failure means "not ready"

Design Decisions:
    - One shared AsyncClient per StorageClient: timeouts and auth headers set once
    - Client injectable: tests pass an httpx.AsyncClient over MockTransport
    - No retries on upload: a retried POST could store the asset twice
"""

import logging
from urllib.parse import quote

import httpx

from matsuri.config import Settings
from matsuri.core.errors import StoreUnavailableError, SigningError

logger = logging.getLogger(__name__)


def build_storage_http_client(settings: Settings) -> httpx.AsyncClient:
    """Create an `httpx.AsyncClient` with storage auth headers and timeout."""
    return httpx.AsyncClient(
        base_url=settings.storage_url.rstrip("/"),
        timeout=httpx.Timeout(settings.storage_timeout_seconds),
        headers={
            "Authorization": f"Bearer {settings.storage_service_key}",
            "apikey": settings.storage_service_key,
        },
    )


def _object_path(bucket: str, path: str) -> str:
    return f"{quote(bucket, safe='')}/{quote(path.lstrip('/'), safe='/')}"


def _error_message(response: httpx.Response) -> str:
    """Best-effort extraction of the storage server's error message."""
    try:
        body = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"
    if isinstance(body, dict):
        for key in ("message", "error", "msg"):
            if isinstance(body.get(key), str) and body[key]:
                return body[key]
    return f"HTTP {response.status_code}"


class StorageClient:
    """Upload, sign, and build public URLs for stored objects."""

    def __init__(self, settings: Settings, client: httpx.AsyncClient | None = None):
        self.base_url = settings.storage_url.rstrip("/")
        self._client = client or build_storage_http_client(settings)

    async def upload(
        self, bucket: str, path: str, data: bytes, content_type: str | None = None,
    ) -> str:
        headers = {
            "Content-Type": content_type or "application/octet-stream",
            "x-upsert": "false",
        }
        try:
            response = await self._client.post(
                f"/object/{_object_path(bucket, path)}",
                content=data,
                headers=headers,
            )
        except httpx.HTTPError as e:
            logger.error(
                f"Storage upload transport error: {e}", extra={"bucket": bucket},
            )
            raise StoreUnavailableError(f"Upload failed: {e}", "upload")
        if response.is_error:
            message = _error_message(response)
            logger.error(
                f"Storage upload rejected: {message}", extra={"bucket": bucket},
            )
            raise StoreUnavailableError(message, "upload")
        logger.info(f"Stored object {path}", extra={"bucket": bucket})
        return path.lstrip("/")

    async def sign(self, bucket: str, path: str, ttl_seconds: int) -> str:
        try:
            response = await self._client.post(
                f"/object/sign/{_object_path(bucket, path)}",
                json={"expiresIn": ttl_seconds},
            )
        except httpx.HTTPError as e:
            raise SigningError(f"Signing request failed: {e}", path)
        if response.is_error:
            raise SigningError(_error_message(response), path)
        try:
            body = response.json()
        except ValueError:
            body = None
        signed = None
        if isinstance(body, dict):
            signed = body.get("signedURL") or body.get("signedUrl")
        if not isinstance(signed, str) or not signed:
            raise SigningError("Storage returned no signed URL", path)
        if signed.startswith(("http://", "https://")):
            return signed
        return f"{self.base_url}/{signed.lstrip('/')}"

    async def health_check(self, bucket: str) -> bool:
        """Check that storage answers and the bucket exists (for readiness probes)."""
        try:
            response = await self._client.get(f"/bucket/{quote(bucket, safe='')}")
        except httpx.HTTPError as e:
            logger.error(f"Storage health check failed: {e}", extra={"bucket": bucket})
            return False
        if response.is_error:
            logger.error(
                f"Storage health check rejected: {_error_message(response)}",
                extra={"bucket": bucket},
            )
            return False
        return True

    def get_public_url(self, bucket: str, path: str) -> str:
        return f"{self.base_url}/object/public/{_object_path(bucket, path)}"

    async def aclose(self) -> None:
        await self._client.aclose()


# Singleton (initialized on startup)
storage_client: StorageClient | None = None


def init_storage(settings: Settings) -> StorageClient:
    global storage_client
    storage_client = StorageClient(settings)
    return storage_client
