"""Process-wide Firestore client for the DomainConfig store.

Credentials come from FIREBASE_SERVICE_ACCOUNT_KEY (JSON) or
FIREBASE_SERVICE_ACCOUNT_PATH. Without either the store stays
unconfigured: the app still starts and store-backed endpoints answer 503.
"""

import json
from pathlib import Path
from typing import Any

import httpx

from custom_domains.core.config import Settings, get_settings
from custom_domains.infrastructure.firebase._rest_client import (
    FirestoreRESTClient,
    load_credentials,
)
from custom_domains.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

_client: FirestoreRESTClient | None = None


def _service_account_info(settings: Settings) -> dict[str, Any] | None:
    """Parsed service account JSON, or None when nothing is configured.

    Raises:
        ValueError: The key or file is set but is not valid JSON, or the file is missing.
    """
    if settings.firebase_service_account_key:
        raw = settings.firebase_service_account_key.get_secret_value()
        source = "FIREBASE_SERVICE_ACCOUNT_KEY"
    elif settings.firebase_service_account_path:
        path = Path(settings.firebase_service_account_path).expanduser()
        if not path.is_file():
            raise ValueError(f"FIREBASE_SERVICE_ACCOUNT_PATH does not exist: {path}")
        raw = path.read_text(encoding="utf-8")
        source = str(path)
    else:
        return None
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValueError(f"Service account from {source} is not valid JSON") from e


def init_firebase(http_client: httpx.AsyncClient | None = None) -> bool:
    """Create the Firestore client once. Returns whether the store is usable.

    Configuration problems are logged rather than raised so a broken store
    only disables the domain endpoints.
    """
    global _client
    if _client is not None:
        return True
    try:
        info = _service_account_info(get_settings())
        if info is None:
            logger.info("Firestore not configured; domain store disabled")
            return False
        project_id = info.get("project_id")
        if not project_id:
            logger.error("Service account JSON has no project_id")
            return False
        _client = FirestoreRESTClient(
            project_id, load_credentials(info), http_client=http_client
        )
    except Exception:
        logger.exception("Firestore initialization failed")
        return False
    logger.info("Firestore initialized for project %s", project_id)
    return True


def get_firestore_client() -> FirestoreRESTClient | None:
    return _client


async def close_firebase() -> None:
    """Release the client's connection pool (app shutdown, end of a script)."""
    global _client
    if _client is None:
        return
    await _client.aclose()
    _client = None
