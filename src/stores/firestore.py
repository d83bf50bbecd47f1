"""Minimal Firestore REST client used by the document store."""

import asyncio
import logging
from typing import Any, Optional

import httpx
from google.auth.credentials import Credentials
from google.auth.transport.requests import Request as GoogleAuthRequest
from google.oauth2 import service_account

logger = logging.getLogger(__name__)

# API constants
FIRESTORE_API_URL = "https://firestore.googleapis.com/v1"
TOKEN_URI = "https://oauth2.googleapis.com/token"
DATASTORE_SCOPE = "https://www.googleapis.com/auth/datastore"
LIST_PAGE_SIZE = 300
REQUEST_TIMEOUT = 15.0
MAX_RETRIES = 3
RETRY_DELAY = 1.0
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


def encode_value(value: Any) -> dict:
    """Encode a Python value as a Firestore typed value."""
    if value is None:
        return {"nullValue": None}
    if isinstance(value, bool):
        return {"booleanValue": value}
    if isinstance(value, int):
        if not INT64_MIN <= value <= INT64_MAX:
            return {"doubleValue": float(value)}
        # int64 travels as a string on the wire
        return {"integerValue": str(value)}
    if isinstance(value, float):
        return {"doubleValue": value}
    if isinstance(value, str):
        return {"stringValue": value}
    raise TypeError(f"Unsupported Firestore value type: {type(value).__name__}")


def decode_value(value: dict) -> Any:
    """Decode a Firestore typed value into a Python value."""
    if "nullValue" in value:
        return None
    if "booleanValue" in value:
        return bool(value["booleanValue"])
    if "integerValue" in value:
        return int(value["integerValue"])
    if "doubleValue" in value:
        return float(value["doubleValue"])
    if "stringValue" in value:
        return value["stringValue"]
    if "timestampValue" in value:
        return value["timestampValue"]
    raise ValueError(f"Unsupported Firestore value: {value!r}")


def decode_document(document: dict) -> dict:
    """Flatten a Firestore document into its field values plus an ``id`` key."""
    fields = {k: decode_value(v) for k, v in document.get("fields", {}).items()}
    fields["id"] = document["name"].rsplit("/", 1)[-1]
    return fields


class WriteBatch:
    """
    Collects document writes and applies them in a single atomic commit.

    Either every write is applied or none are.
    """

    def __init__(self, client: "FirestoreClient"):
        self._client = client
        self._writes: list[dict] = []

    def set(self, collection: str, doc_id: str, value: dict) -> None:
        """Create or overwrite a document."""
        self._writes.append({
            "update": {
                "name": self._client.document_name(collection, doc_id),
                "fields": {k: encode_value(v) for k, v in value.items()},
            }
        })

    def delete(self, collection: str, doc_id: str) -> None:
        """Delete a document (no error if it does not exist)."""
        self._writes.append({"delete": self._client.document_name(collection, doc_id)})

    async def commit(self) -> None:
        if not self._writes:
            return
        await self._client.commit(self._writes)
        self._writes = []


class FirestoreClient:
    """
    Firestore REST v1 client authenticated with a service account.

    Only the handful of calls the leaderboard needs are implemented:
    ordered queries, full collection listing, and atomic batch commits.
    """

    def __init__(
        self,
        project_id: str,
        credentials: Credentials,
        api_url: str = FIRESTORE_API_URL,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the client.

        Args:
            project_id: Google Cloud project id
            credentials: google-auth credentials scoped for Datastore access
            api_url: Base URL for the Firestore REST API
            transport: Optional httpx transport override
        """
        self.project_id = project_id
        self.api_url = api_url
        self._credentials = credentials
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @classmethod
    def from_service_account(
        cls,
        project_id: str,
        client_email: str,
        private_key: str,
    ) -> "FirestoreClient":
        """
        Build a client from service-account fields.

        Literal "\\n" sequences in the private key (as found in env vars)
        are unescaped before the key is parsed.
        """
        credentials = service_account.Credentials.from_service_account_info(
            {
                "type": "service_account",
                "project_id": project_id,
                "client_email": client_email,
                "private_key": private_key.replace("\\n", "\n"),
                "token_uri": TOKEN_URI,
            },
            scopes=[DATASTORE_SCOPE],
        )
        return cls(project_id, credentials)

    @property
    def documents_root(self) -> str:
        return f"projects/{self.project_id}/databases/(default)/documents"

    def document_name(self, collection: str, doc_id: str) -> str:
        return f"{self.documents_root}/{collection}/{doc_id}"

    def batch(self) -> WriteBatch:
        return WriteBatch(self)

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.api_url,
                headers={"Content-Type": "application/json"},
                timeout=REQUEST_TIMEOUT,
                transport=self._transport,
            )
        return self._client

    async def _auth_headers(self) -> dict:
        """Bearer token header, refreshing the access token when it has expired."""
        if not self._credentials.valid:
            # google-auth refreshes synchronously; keep it off the event loop
            await asyncio.to_thread(self._credentials.refresh, GoogleAuthRequest())
        return {"Authorization": f"Bearer {self._credentials.token}"}

    async def _make_request(
        self,
        method: str,
        path: str,
        retry_count: int = 0,
        **kwargs,
    ) -> Any:
        """
        Make an authenticated request with retries on timeouts and rate limits.

        Args:
            method: HTTP method
            path: Path relative to the API base URL
            retry_count: Current retry attempt

        Returns:
            Response JSON data
        """
        client = await self._get_client()
        headers = await self._auth_headers()

        try:
            response = await client.request(method, f"/{path}", headers=headers, **kwargs)
            response.raise_for_status()
            return response.json()

        except httpx.TimeoutException as e:
            if retry_count < MAX_RETRIES:
                logger.warning(
                    f"Firestore request {method} {path} timed out "
                    f"(attempt {retry_count + 1}/{MAX_RETRIES}). Retrying in {RETRY_DELAY}s..."
                )
                await asyncio.sleep(RETRY_DELAY)
                return await self._make_request(method, path, retry_count + 1, **kwargs)
            logger.error(f"Firestore request {method} {path} failed after {MAX_RETRIES} retries: {e}")
            raise

        except httpx.HTTPStatusError as e:
            if e.response.status_code == 429 and retry_count < MAX_RETRIES:
                logger.warning(
                    f"Rate limited (429) on {path} (attempt {retry_count + 1}/{MAX_RETRIES}). "
                    f"Retrying in {RETRY_DELAY}s..."
                )
                await asyncio.sleep(RETRY_DELAY)
                return await self._make_request(method, path, retry_count + 1, **kwargs)

            logger.error(f"Firestore HTTP error {e.response.status_code} for {path}: {e}")
            raise

    async def run_query(
        self,
        collection: str,
        order_by: list[tuple[str, str]],
        limit: int,
    ) -> list[dict]:
        """
        Run an ordered, limited query over a collection.

        Args:
            collection: Collection id
            order_by: (field, direction) pairs; direction is "ASCENDING" or "DESCENDING"
            limit: Maximum number of documents

        Returns:
            Decoded documents in query order
        """
        payload = {
            "structuredQuery": {
                "from": [{"collectionId": collection}],
                "orderBy": [
                    {"field": {"fieldPath": field}, "direction": direction}
                    for field, direction in order_by
                ],
                "limit": limit,
            }
        }
        data = await self._make_request("POST", f"{self.documents_root}:runQuery", json=payload)

        # Results without a "document" key only carry a readTime
        return [decode_document(row["document"]) for row in data or [] if "document" in row]

    async def list_documents(self, collection: str) -> list[dict]:
        """List every document in a collection, following pagination."""
        documents: list[dict] = []
        page_token: Optional[str] = None

        while True:
            params = {"pageSize": LIST_PAGE_SIZE}
            if page_token:
                params["pageToken"] = page_token

            data = await self._make_request(
                "GET", f"{self.documents_root}/{collection}", params=params
            )
            documents.extend(decode_document(d) for d in data.get("documents", []))

            page_token = data.get("nextPageToken")
            if not page_token:
                break

        return documents

    async def commit(self, writes: list[dict]) -> None:
        """Apply writes atomically."""
        await self._make_request("POST", f"{self.documents_root}:commit", json={"writes": writes})

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
