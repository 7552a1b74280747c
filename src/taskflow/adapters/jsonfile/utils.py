"""Utility functions for the JSON adapter."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from taskflow.errors import StorageError
from taskflow.utils.logger import get_logger

ModelT = TypeVar("ModelT", bound=BaseModel)


def now_utc() -> datetime:
    """Get the current time as an aware UTC datetime."""
    return datetime.now(UTC)


def record_to_model(model_cls: type[ModelT], record: Any, collection: str) -> ModelT:
    """Convert a stored record into a model.

    Args:
        model_cls: Model class of the collection's entity
        record: Raw record loaded from the collection
        collection: Collection name (for error messages)

    Returns:
        Model instance

    Raises:
        StorageError: If the stored record no longer matches the model
    """
    try:
        return model_cls.model_validate(record)
    except PydanticValidationError as e:
        record_id = record.get("id") if isinstance(record, dict) else None
        raise StorageError(
            f"Invalid record {record_id!r} in collection {collection}: "
            f"{e.error_count()} validation error(s)"
        ) from e


def records_to_models(
    model_cls: type[ModelT], records: list[Any], collection: str
) -> list[ModelT]:
    """Convert a loaded collection into models for listing.

    Records that no longer match the model are skipped and logged, so one
    bad record does not hide the rest of the collection.
    """
    models = []
    for record in records:
        try:
            models.append(record_to_model(model_cls, record, collection))
        except StorageError as e:
            get_logger().warning("skipping record: %s", e)
    return models


def find_index(records: list[dict[str, Any]], entity_id: str) -> int:
    """Get the position of the record with ``entity_id``, or -1."""
    for index, record in enumerate(records):
        if isinstance(record, dict) and record.get("id") == entity_id:
            return index
    return -1
