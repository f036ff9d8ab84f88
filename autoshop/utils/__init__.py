from .helpers import (
    serialize_mongo_doc,
    to_object_id,
    generate_reference,
    to_document,
    error_response,
)
from .logger import Logger, set_log_level

__all__ = [
    "serialize_mongo_doc",
    "to_object_id",
    "generate_reference",
    "to_document",
    "error_response",
    "Logger",
    "set_log_level",
]
