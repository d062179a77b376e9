"""Cache key and serialization conventions shared by every entity service.

Key layout:
    single entity   ``order:42``
    collection      ``orders:skip=0&limit=10``

Every collection key of an entity lives under ``<plural>:`` so a single
``delete_by_prefix("<plural>:*")`` drops all cached pages after a write.
"""

from functools import lru_cache
from typing import Any, TypeVar
from urllib.parse import urlencode

from pydantic import TypeAdapter, ValidationError

from pos.core.exceptions import InternalError

T = TypeVar("T")

# (single, collection) key prefixes per entity
ORDER = ("order", "orders")
PRODUCT = ("product", "products")
CATEGORY = ("category", "categories")
PAYMENT = ("payment", "payments")
USER = ("user", "users")


def generate_cache_key(prefix: str, value: Any) -> str:
    """Build ``prefix:value``."""
    return f"{prefix}:{value}"


def generate_cache_key_params(**params: Any) -> str:
    """Serialize query parameters into a stable key segment.

    Parameters keep their call order and values are percent-encoded, so two
    different query shapes can never produce the same segment. ``None``
    renders as an empty value.
    """
    return urlencode(
        [(name, "" if value is None else str(value)) for name, value in params.items()]
    )


def collection_pattern(prefix: str) -> str:
    """Glob matching every collection key under ``prefix``."""
    return f"{prefix}:*"


@lru_cache(maxsize=None)
def _adapter(type_: Any) -> TypeAdapter:
    return TypeAdapter(type_)


def serialize(value: Any, type_: Any | None = None) -> str:
    """Dump a pydantic model (or list of them) to a JSON string.

    Raises:
        InternalError: Value cannot be serialized
    """
    try:
        return _adapter(type_ or type(value)).dump_json(value).decode("utf-8")
    except (ValueError, TypeError) as e:
        raise InternalError(f"failed to serialize cache value: {e}")


def deserialize(data: str | bytes, type_: type[T]) -> T:
    """Load a JSON string produced by :func:`serialize`.

    Raises:
        InternalError: Payload does not match ``type_``
    """
    try:
        return _adapter(type_).validate_json(data)
    except ValidationError as e:
        raise InternalError(f"failed to deserialize cache value: {e.error_count()} errors")
