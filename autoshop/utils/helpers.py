import random
import time
from datetime import datetime
from typing import Any, Optional

from bson import ObjectId
from fastapi.responses import JSONResponse


def serialize_mongo_doc(doc):
    """Recursively convert ObjectIds and datetimes in a MongoDB document."""
    if not doc:
        return doc

    if isinstance(doc, list):
        return [serialize_mongo_doc(d) for d in doc]

    if isinstance(doc, dict):
        clean = {}
        for k, v in doc.items():
            if isinstance(v, ObjectId):
                clean[k] = str(v)
            elif isinstance(v, datetime):
                clean[k] = v.isoformat()
            elif isinstance(v, (dict, list)):
                clean[k] = serialize_mongo_doc(v)
            else:
                clean[k] = v
        return clean

    return doc


def to_object_id(id_str: str) -> Optional[ObjectId]:
    """Convert a string to ObjectId, or None if it is not a valid id."""
    if not id_str or not ObjectId.is_valid(id_str):
        return None
    return ObjectId(id_str)


def to_document(model, **dump_kwargs) -> dict:
    """
    Dump a request model for storage. Enums, dates and nested models become
    JSON-compatible values; datetimes stay native so Mongo stores them as dates.
    """
    data = model.model_dump(mode="json", **dump_kwargs)
    for field, value in model.model_dump(**dump_kwargs).items():
        if isinstance(value, datetime):
            data[field] = value
    return data


def generate_reference(prefix: str) -> str:
    """Human-readable document number, e.g. ORD-1718000000000-417."""
    return f"{prefix}-{int(time.time() * 1000)}-{random.randint(0, 999)}"


def error_response(
    message: str,
    code: int = 400,
    details: Optional[Any] = None,
) -> JSONResponse:
    """Standard error JSON response: {"error": message}."""
    content: dict[str, Any] = {"error": message}
    if details is not None:
        content["details"] = details
    return JSONResponse(status_code=code, content=content)
