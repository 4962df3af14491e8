from __future__ import annotations

from imagepipe.links import (
    ExternalImageLink,
    InternalImageLink,
    external_image_link,
    has_all_links,
    has_any_link,
    internal_image_link,
    release_images_link,
)
from imagepipe.model import ImageStreamTagReference


def test_links_compare_by_value():
    assert internal_image_link("src") == InternalImageLink("src")
    assert internal_image_link("src") != internal_image_link("bin")
    assert release_images_link() == release_images_link()
    assert len({internal_image_link("src"), internal_image_link("src"), release_images_link()}) == 2


def test_internal_and_external_links_never_match():
    assert internal_image_link("stable") != ExternalImageLink("", "stable", "")


def test_external_link_namespace():
    ref = ImageStreamTagReference(name="stable", tag="latest", as_="app", namespace="ref-ns")

    assert external_image_link(ref) == ExternalImageLink("ref-ns", "stable", "latest")
    assert external_image_link(ref, "job-ns") == ExternalImageLink("job-ns", "stable", "latest")
    # the alias is not part of the link
    assert external_image_link(ref) == external_image_link(
        ImageStreamTagReference(name="stable", tag="latest", namespace="ref-ns")
    )


def test_has_links():
    haystack = [internal_image_link("src"), release_images_link()]

    assert has_all_links([internal_image_link("src")], haystack)
    assert not has_all_links([internal_image_link("src"), internal_image_link("bin")], haystack)
    assert has_any_link([internal_image_link("bin"), release_images_link()], haystack)
    assert not has_any_link([internal_image_link("bin")], haystack)
