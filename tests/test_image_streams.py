from __future__ import annotations

import io
import json

from imagepipe.catalog.objects import render
from imagepipe.steps.image_streams import (
    create_image_stream,
    create_image_stream_tag,
    new_image_stream,
    new_image_stream_tag,
)


def test_new_image_stream_tag_points_at_source_image():
    ist = new_image_stream_tag("ci-op-1", "pipeline", "sha256:abc", "ocp", "4.1", "cli")

    assert ist.metadata.name == "4.1:cli"
    assert ist.metadata.namespace == "ocp"
    assert ist.tag.reference_policy.type == "Local"
    assert ist.tag.from_.kind == "ImageStreamImage"
    assert ist.tag.from_.name == "pipeline@sha256:abc"
    assert ist.tag.from_.namespace == "ci-op-1"


def test_render_uses_catalog_field_names():
    ist = new_image_stream_tag("ci-op-1", "pipeline", "sha256:abc", "ocp", "4.1", "cli")

    doc = json.loads(render(ist))

    assert doc == {
        "apiVersion": "image.openshift.io/v1",
        "kind": "ImageStreamTag",
        "metadata": {"name": "4.1:cli", "namespace": "ocp"},
        "tag": {
            "from": {"kind": "ImageStreamImage", "name": "pipeline@sha256:abc", "namespace": "ci-op-1"},
            "referencePolicy": {"type": "Local"},
        },
    }


def test_render_is_indented():
    text = render(new_image_stream("ocp", "4.1"))
    assert text.startswith("{\n  ")


def test_dry_create_writes_objects_and_skips_client(catalog):
    out = io.StringIO()
    stream = new_image_stream("ocp", "4.1")
    ist = new_image_stream_tag("ci-op-1", "pipeline", "sha256:abc", "ocp", "4.1", "cli")

    create_image_stream(catalog, stream, True, out)
    create_image_stream_tag(catalog, ist, True, out)

    assert catalog.calls == []
    assert out.getvalue() == render(stream) + "\n" + render(ist) + "\n"


def test_create_calls_client(catalog):
    create_image_stream(catalog, new_image_stream("ocp", "4.1"), False)

    assert ("ocp", "4.1") in catalog.streams
