import logging
import os
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence, Tuple, Type, TypeVar, Union

from bson import ObjectId
from dotenv import load_dotenv
from pydantic import BaseModel, ValidationError
from pymongo import MongoClient
from pymongo.errors import ConnectionFailure

load_dotenv()

logger = logging.getLogger(__name__)

DATABASE_URL = os.getenv("DATABASE_URL")
DATABASE_NAME = os.getenv("DATABASE_NAME", "ewaste_rewards")
DB_TIMEOUT_MS = int(os.getenv("DB_TIMEOUT_MS", "5000"))

db = None
if DATABASE_URL:
    client = MongoClient(DATABASE_URL, serverSelectionTimeoutMS=DB_TIMEOUT_MS)
    db = client[DATABASE_NAME]

ModelT = TypeVar("ModelT", bound=BaseModel)


def _collection(collection_name: str):
    if db is None:
        raise ConnectionFailure("Database not configured, set DATABASE_URL")
    return db[collection_name]


def _object_id(doc_id: Union[str, ObjectId]) -> Optional[ObjectId]:
    if isinstance(doc_id, ObjectId):
        return doc_id
    return ObjectId(doc_id) if ObjectId.is_valid(doc_id) else None


def create_document(collection_name: str, data: Union[BaseModel, Dict[str, Any]]) -> str:
    """Insert a document and return its id as a string.

    Pydantic models are dumped first; created_at/updated_at are stamped here.
    An explicit ``_id`` in a dict is kept.
    """
    doc = data.model_dump() if isinstance(data, BaseModel) else dict(data)
    now = datetime.now(timezone.utc)
    doc.setdefault("created_at", now)
    doc["updated_at"] = now
    result = _collection(collection_name).insert_one(doc)
    return str(result.inserted_id)


def get_document(collection_name: str, doc_id: str) -> Optional[dict]:
    oid = _object_id(doc_id)
    if oid is None:
        return None
    return _collection(collection_name).find_one({"_id": oid})


def update_document(collection_name: str, doc_id: str, fields: Dict[str, Any]) -> bool:
    oid = _object_id(doc_id)
    if oid is None:
        return False
    updates = dict(fields)
    updates["updated_at"] = datetime.now(timezone.utc)
    res = _collection(collection_name).update_one({"_id": oid}, {"$set": updates})
    return res.matched_count > 0


def delete_document(collection_name: str, doc_id: str) -> bool:
    oid = _object_id(doc_id)
    if oid is None:
        return False
    res = _collection(collection_name).delete_one({"_id": oid})
    return res.deleted_count > 0


def get_documents(
    collection_name: str,
    filter_dict: Optional[Dict[str, Any]] = None,
    sort: Optional[Sequence[Tuple[str, int]]] = None,
    limit: Optional[int] = None,
) -> List[dict]:
    cursor = _collection(collection_name).find(filter_dict or {})
    if sort:
        cursor = cursor.sort(list(sort))
    if limit:
        cursor = cursor.limit(limit)
    return list(cursor)


def serialize(doc: dict) -> dict:
    doc["_id"] = str(doc["_id"])
    return doc


def parse_document(model: Type[ModelT], doc: Optional[dict]) -> Optional[ModelT]:
    """Coerce a raw document into its schema; malformed documents are dropped."""
    if doc is None:
        return None
    try:
        return model.model_validate({k: v for k, v in doc.items() if k != "_id"})
    except ValidationError as e:
        logger.warning(
            "Skipping malformed %s document %s (%d errors)", model.__name__, doc.get("_id"), e.error_count()
        )
        return None
