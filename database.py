from bson import ObjectId
from pymongo import MongoClient

from errors import ValidationError


def connect(uri, db_name, client=None):
    """Return a database handle; pymongo connects lazily on first use."""
    if client is None:
        client = MongoClient(uri)
    return client[db_name]


def to_object_id(value, label="ID"):
    if not isinstance(value, str) or not ObjectId.is_valid(value):
        raise ValidationError(f"Invalid {label} format")
    return ObjectId(value)
