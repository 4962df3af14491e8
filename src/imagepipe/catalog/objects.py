# catalog/objects.py
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

API_VERSION = "image.openshift.io/v1"

LOCAL_TAG_REFERENCE_POLICY = "Local"
SOURCE_TAG_REFERENCE_POLICY = "Source"


class _CatalogModel(BaseModel):
    # Catalog objects are records: built once, never mutated, serialised
    # with the catalog's camelCase field names.
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class ObjectMeta(_CatalogModel):
    name: str
    namespace: str = ""


class ObjectReference(_CatalogModel):
    kind: str
    name: str
    namespace: str = ""


class TagReferencePolicy(_CatalogModel):
    type: str = SOURCE_TAG_REFERENCE_POLICY


class TagReference(_CatalogModel):
    """How a tag's image is determined."""
    from_: Optional[ObjectReference] = Field(default=None, alias="from")
    reference_policy: TagReferencePolicy = Field(default_factory=TagReferencePolicy, alias="referencePolicy")


class Image(_CatalogModel):
    metadata: ObjectMeta


class ImageStreamStatus(_CatalogModel):
    docker_image_repository: str = Field(default="", alias="dockerImageRepository")
    public_docker_image_repository: str = Field(default="", alias="publicDockerImageRepository")


class ImageStream(_CatalogModel):
    api_version: str = Field(default=API_VERSION, alias="apiVersion")
    kind: str = "ImageStream"
    metadata: ObjectMeta
    status: Optional[ImageStreamStatus] = None

    @property
    def ref(self) -> str:
        return f"{self.metadata.namespace}/{self.metadata.name}"


class ImageStreamTag(_CatalogModel):
    """A `name:tag` entry of an image stream."""
    api_version: str = Field(default=API_VERSION, alias="apiVersion")
    kind: str = "ImageStreamTag"
    metadata: ObjectMeta
    tag: Optional[TagReference] = None
    image: Optional[Image] = None

    @property
    def ref(self) -> str:
        return f"{self.metadata.namespace}/{self.metadata.name}"


def render(obj: BaseModel) -> str:
    """Indented JSON for dry-run output; equal objects render byte-identical."""
    return obj.model_dump_json(by_alias=True, exclude_none=True, indent=2)


def to_payload(obj: BaseModel) -> dict:
    return obj.model_dump(by_alias=True, exclude_none=True)
