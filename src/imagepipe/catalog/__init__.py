from .client import CatalogClient, HTTPCatalogClient
from .objects import (
    Image,
    ImageStream,
    ImageStreamStatus,
    ImageStreamTag,
    ObjectMeta,
    ObjectReference,
    TagReference,
    TagReferencePolicy,
    render,
)

__all__ = [
    "CatalogClient",
    "HTTPCatalogClient",
    "Image",
    "ImageStream",
    "ImageStreamStatus",
    "ImageStreamTag",
    "ObjectMeta",
    "ObjectReference",
    "TagReference",
    "TagReferencePolicy",
    "render",
]
