"""
In-memory Shopify session storage.

Placeholder store: sessions are lost on restart. Swap in a persistent
implementation with the same methods for production.
"""

from typing import Optional

from .models import ShopifySession


class InMemoryShopifySessionStorage:
    """Keeps Shopify sessions in a dict keyed by session ID."""

    def __init__(self):
        self._sessions: dict[str, ShopifySession] = {}

    async def store(self, session: ShopifySession) -> bool:
        self._sessions[session.id] = session
        return True

    async def load(self, session_id: str) -> Optional[ShopifySession]:
        return self._sessions.get(session_id)

    async def delete(self, session_id: str) -> bool:
        return self._sessions.pop(session_id, None) is not None

    async def delete_many(self, session_ids: list[str]) -> bool:
        for session_id in session_ids:
            self._sessions.pop(session_id, None)
        return True

    async def find_by_shop(self, shop: str) -> list[ShopifySession]:
        return [s for s in self._sessions.values() if s.shop == shop]
