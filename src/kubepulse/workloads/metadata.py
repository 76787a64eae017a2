"""Best-effort recovery of row namespace and creation time."""

from collections.abc import Mapping
from datetime import datetime
from typing import Any, Callable, Optional, Tuple
import structlog

from kubepulse.models.table_models import ObjectMeta, PartialObjectMetadata

logger = structlog.get_logger(__name__)

Extractor = Callable[[Any], Optional[ObjectMeta]]


def from_typed_object(obj: Any) -> Optional[ObjectMeta]:
    """Read metadata off an object exposing a ``metadata`` attribute."""
    if obj is None or isinstance(obj, (Mapping, str, bytes, bytearray)):
        return None
    meta = getattr(obj, "metadata", None)
    if meta is None:
        return None
    created = getattr(meta, "creation_timestamp", None)
    if created is None:
        created = getattr(meta, "creationTimestamp", None)
    return ObjectMeta(
        name=getattr(meta, "name", None) or "",
        namespace=getattr(meta, "namespace", None) or "",
        creation_timestamp=created,
    )


def from_payload(obj: Any) -> Optional[ObjectMeta]:
    """Decode a raw partial-metadata payload (mapping or JSON text)."""
    if isinstance(obj, Mapping):
        return PartialObjectMetadata.model_validate(obj).metadata
    if isinstance(obj, (str, bytes, bytearray)):
        return PartialObjectMetadata.model_validate_json(obj).metadata
    return None


EXTRACTORS: Tuple[Extractor, ...] = (from_typed_object, from_payload)


def recover_metadata(obj: Any) -> Tuple[str, Optional[datetime]]:
    """Namespace and creation timestamp for a row's embedded object.

    Extractors are tried in order; the first one that applies wins. Decode
    failures leave the namespace empty and the timestamp unset.
    """
    for extractor in EXTRACTORS:
        try:
            meta = extractor(obj)
        except (ValueError, TypeError, AttributeError) as e:
            logger.debug("Metadata recovery failed", extractor=extractor.__name__, error=str(e))
            break
        if meta is not None:
            return meta.namespace, meta.creation_timestamp
    return "", None
