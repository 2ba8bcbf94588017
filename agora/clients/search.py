import logging

import httpx

from agora.config import get_settings

logger = logging.getLogger(__name__)


class SearchIndexClient:
    """Pushes documents to the external search index over its REST API.

    Indexing is best effort: failures are logged and never reach the caller.
    """

    def __init__(self, server: str, index_name: str, client: httpx.Client | None = None):
        self.server = server.rstrip("/")
        self.index_name = index_name
        self.client = client or httpx.Client(timeout=get_settings().SEARCH_TIMEOUT)

    def _url(self, doc_type: str, doc_id: str | int, *suffix: str) -> str:
        return "/".join([self.server, self.index_name, doc_type, str(doc_id), *suffix])

    def add_document(self, doc: dict, doc_type: str, doc_id: str | int) -> bool:
        try:
            response = self.client.put(self._url(doc_type, doc_id), json=doc)
            response.raise_for_status()
            return True
        except httpx.HTTPError:
            logger.exception("Adds doc [type=%s, id=%s] failed", doc_type, doc_id)
            return False

    def update_document(self, doc: dict, doc_type: str, doc_id: str | int) -> bool:
        payload = {"doc": doc, "upsert": doc}
        try:
            response = self.client.post(self._url(doc_type, doc_id, "_update"), json=payload)
            response.raise_for_status()
            return True
        except httpx.HTTPError:
            logger.exception("Updates doc [type=%s, id=%s] failed", doc_type, doc_id)
            return False


def get_search_client() -> SearchIndexClient:
    settings = get_settings()
    return SearchIndexClient(settings.SEARCH_SERVER, settings.SEARCH_INDEX_NAME)
