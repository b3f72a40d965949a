"""
Document Store - Firestore-style get/set/add/query over a single JSON table.

Collections are plain path strings. Per-user sub-collections are addressed
as "users/<uid>/activities" and so on (see ``user_collection``).
"""
import logging
import uuid
from typing import Any, Dict, List, Optional

from fastapi import Request
from sqlalchemy import select
from sqlalchemy.ext.asyncio import async_sessionmaker

from ..models import Document

logger = logging.getLogger(__name__)

USERS = "users"


def user_collection(user_id: str, name: str) -> str:
    """Path of a sub-collection owned by one user."""
    return f"{USERS}/{user_id}/{name}"


def _sort_key(value: Any):
    # None sorts first so documents missing the field stay together
    return (value is not None, value if value is not None else "")


class DocumentStore:
    """
    Async JSON document store backed by SQLAlchemy.

    Built once at startup from an ``async_sessionmaker`` and shared through
    ``app.state``. Every call runs in its own short session and commits
    before returning.
    """

    def __init__(self, session_maker: async_sessionmaker):
        self._session_maker = session_maker

    async def get(self, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        """Return a copy of the stored document or None."""
        async with self._session_maker() as session:
            row = await self._find(session, collection, doc_id)
            return dict(row.data) if row is not None else None

    async def set(
        self,
        collection: str,
        doc_id: str,
        data: Dict[str, Any],
        merge: bool = False,
    ) -> None:
        """
        Create or overwrite a document.

        With ``merge=True`` only the top-level keys present in ``data`` are
        replaced; every other key of the stored document is kept as is.
        """
        async with self._session_maker() as session:
            row = await self._find(session, collection, doc_id)
            if row is None:
                session.add(Document(collection=collection, doc_id=doc_id, data=dict(data)))
            elif merge:
                # Assign a new dict so the JSON column is flagged dirty
                row.data = {**row.data, **data}
            else:
                row.data = dict(data)
            await session.commit()

    async def add(self, collection: str, data: Dict[str, Any]) -> str:
        """Insert a document under a generated id and return the id."""
        doc_id = uuid.uuid4().hex
        async with self._session_maker() as session:
            session.add(Document(collection=collection, doc_id=doc_id, data=dict(data)))
            await session.commit()
        return doc_id

    async def query(
        self,
        collection: str,
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """
        List every document in a collection, each with its ``id`` merged in.

        Ordering is applied on a top-level field of the JSON payload; without
        ``order_by`` documents come back in insertion order.
        """
        async with self._session_maker() as session:
            result = await session.execute(
                select(Document)
                .where(Document.collection == collection)
                .order_by(Document.id)
            )
            rows = result.scalars().all()

        documents = [{"id": row.doc_id, **row.data} for row in rows]
        if order_by:
            documents.sort(key=lambda doc: _sort_key(doc.get(order_by)), reverse=descending)
        if limit is not None:
            documents = documents[:limit]
        return documents

    @staticmethod
    async def _find(session, collection: str, doc_id: str) -> Optional[Document]:
        result = await session.execute(
            select(Document).where(
                Document.collection == collection,
                Document.doc_id == doc_id,
            )
        )
        return result.scalar_one_or_none()


def get_store(request: Request) -> DocumentStore:
    """FastAPI dependency: the store built at startup."""
    return request.app.state.store
