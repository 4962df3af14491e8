# steps/image_streams.py
from __future__ import annotations

import sys
from typing import TextIO

from ..catalog.client import CatalogClient
from ..catalog.objects import (
    LOCAL_TAG_REFERENCE_POLICY,
    ImageStream,
    ImageStreamTag,
    ObjectMeta,
    ObjectReference,
    TagReference,
    TagReferencePolicy,
    render,
)


# ---------------------------------------------------------------------
# Object builders
# ---------------------------------------------------------------------

def new_image_stream(namespace: str, name: str) -> ImageStream:
    return ImageStream(metadata=ObjectMeta(name=name, namespace=namespace))


def new_image_stream_tag(
    from_namespace: str,
    from_name: str,
    from_image: str,
    to_namespace: str,
    to_name: str,
    to_tag: str,
) -> ImageStreamTag:
    """
    Build the `to_name:to_tag` tag pointing at image `from_image` of stream
    `from_namespace/from_name`.

    The reference policy is Local: the catalog tracks the image itself
    rather than following a live upstream reference. Inputs are taken as
    given; naming validity is the catalog's business.
    """
    return ImageStreamTag(
        metadata=ObjectMeta(name=f"{to_name}:{to_tag}", namespace=to_namespace),
        tag=TagReference(
            reference_policy=TagReferencePolicy(type=LOCAL_TAG_REFERENCE_POLICY),
            from_=ObjectReference(
                kind="ImageStreamImage",
                name=f"{from_name}@{from_image}",
                namespace=from_namespace,
            ),
        ),
    )


# ---------------------------------------------------------------------
# Create helpers (dry-run aware)
# ---------------------------------------------------------------------
# In dry-run mode the object is written to `out` and the client is never
# called.

def create_image_stream(
    client: CatalogClient,
    stream: ImageStream,
    dry: bool,
    out: TextIO | None = None,
) -> None:
    if dry:
        (out or sys.stdout).write(render(stream) + "\n")
        return
    client.create_image_stream(stream)


def create_image_stream_tag(
    client: CatalogClient,
    tag: ImageStreamTag,
    dry: bool,
    out: TextIO | None = None,
) -> None:
    if dry:
        (out or sys.stdout).write(render(tag) + "\n")
        return
    client.create_image_stream_tag(tag)
