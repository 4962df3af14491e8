# links.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Union

from .model import ImageStreamTagReference

# ---------------------------------------------------------------------
# Step links
# ---------------------------------------------------------------------
# A link names a resource one step creates and another requires.
# The scheduler matches requires() against creates() to order steps,
# so links compare by value, never by identity.


@dataclass(frozen=True)
class InternalImageLink:
    """A pipeline image tag exists in the job namespace."""
    name: str

    def __str__(self) -> str:
        return f"internal:{self.name}"


@dataclass(frozen=True)
class ExternalImageLink:
    """An image stream tag exists in some (possibly foreign) namespace."""
    namespace: str
    name: str
    tag: str

    def __str__(self) -> str:
        return f"external:{self.namespace}/{self.name}:{self.tag}"


@dataclass(frozen=True)
class ReleaseImagesLink:
    """Barrier: the release image set is available."""

    def __str__(self) -> str:
        return "release-images"


StepLink = Union[InternalImageLink, ExternalImageLink, ReleaseImagesLink]


def internal_image_link(name: str) -> InternalImageLink:
    return InternalImageLink(name=name)


def external_image_link(ref: ImageStreamTagReference, namespace: str | None = None) -> ExternalImageLink:
    """Link for `ref`; `namespace` wins over the reference's own namespace."""
    return ExternalImageLink(namespace=namespace or ref.namespace, name=ref.name, tag=ref.tag)


def release_images_link() -> ReleaseImagesLink:
    return ReleaseImagesLink()


def has_any_link(needles: Iterable[StepLink], haystack: Iterable[StepLink]) -> bool:
    hay = set(haystack)
    return any(n in hay for n in needles)


def has_all_links(needles: Iterable[StepLink], haystack: Iterable[StepLink]) -> bool:
    hay = set(haystack)
    return all(n in hay for n in needles)
