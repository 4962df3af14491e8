from __future__ import annotations

from typing import Dict, List, Optional, Tuple

import pytest

from imagepipe.catalog.client import CatalogClient
from imagepipe.catalog.objects import Image, ImageStream, ImageStreamStatus, ImageStreamTag, ObjectMeta
from imagepipe.context import StepContext
from imagepipe.errors import AlreadyExistsError, NotFoundError
from imagepipe.links import StepLink
from imagepipe.step import ParameterMap, Step
from imagepipe.ui.console import Console, set_console


class FakeCatalog(CatalogClient):
    """
    In-memory catalog.

    Every call is recorded in `calls` as (operation, target, outcome) where
    outcome is "ok", "exists" or "missing". Tag creation resolves the
    ImageStreamImage reference the way the real catalog does, so the
    stored tag carries the source image name.
    """

    def __init__(self):
        self.streams: Dict[Tuple[str, str], ImageStream] = {}
        self.tags: Dict[Tuple[str, str], ImageStreamTag] = {}
        self.calls: List[Tuple[str, str, str]] = []
        self.failures: Dict[str, Exception] = {}

    # helpers ---------------------------------------------------------

    def add_pipeline_image(self, namespace: str, tag: str, image: str) -> None:
        name = f"pipeline:{tag}"
        self.tags[(namespace, name)] = ImageStreamTag(
            metadata=ObjectMeta(name=name, namespace=namespace),
            image=Image(metadata=ObjectMeta(name=image)),
        )

    def add_stream(self, namespace: str, name: str, public: str = "", internal: str = "") -> None:
        self.streams[(namespace, name)] = ImageStream(
            metadata=ObjectMeta(name=name, namespace=namespace),
            status=ImageStreamStatus(public_docker_image_repository=public, docker_image_repository=internal),
        )

    def mutations(self) -> List[Tuple[str, str, str]]:
        return [c for c in self.calls if not c[0].startswith("get")]

    def _record(self, op: str, target: str, outcome: str) -> None:
        self.calls.append((op, target, outcome))

    def _maybe_fail(self, op: str, target: str) -> None:
        if op in self.failures:
            self._record(op, target, "error")
            raise self.failures[op]

    # CatalogClient ---------------------------------------------------

    def create_image_stream(self, stream: ImageStream) -> ImageStream:
        key = (stream.metadata.namespace, stream.metadata.name)
        self._maybe_fail("create_image_stream", stream.ref)
        if key in self.streams:
            self._record("create_image_stream", stream.ref, "exists")
            raise AlreadyExistsError("create imagestream", stream.ref, "already exists", status=409)
        self.streams[key] = stream
        self._record("create_image_stream", stream.ref, "ok")
        return stream

    def get_image_stream(self, namespace: str, name: str) -> ImageStream:
        target = f"{namespace}/{name}"
        self._maybe_fail("get_image_stream", target)
        try:
            stream = self.streams[(namespace, name)]
        except KeyError:
            self._record("get_image_stream", target, "missing")
            raise NotFoundError("get imagestream", target, "not found", status=404) from None
        self._record("get_image_stream", target, "ok")
        return stream

    def create_image_stream_tag(self, tag: ImageStreamTag) -> ImageStreamTag:
        key = (tag.metadata.namespace, tag.metadata.name)
        self._maybe_fail("create_image_stream_tag", tag.ref)
        if key in self.tags:
            self._record("create_image_stream_tag", tag.ref, "exists")
            raise AlreadyExistsError("create imagestreamtag", tag.ref, "already exists", status=409)
        image_name = tag.tag.from_.name.split("@", 1)[1]
        stored = tag.model_copy(update={"image": Image(metadata=ObjectMeta(name=image_name))})
        self.tags[key] = stored
        self._record("create_image_stream_tag", tag.ref, "ok")
        return stored

    def get_image_stream_tag(self, namespace: str, name: str) -> ImageStreamTag:
        target = f"{namespace}/{name}"
        self._maybe_fail("get_image_stream_tag", target)
        try:
            tag = self.tags[(namespace, name)]
        except KeyError:
            self._record("get_image_stream_tag", target, "missing")
            raise NotFoundError("get imagestreamtag", target, "not found", status=404) from None
        self._record("get_image_stream_tag", target, "ok")
        return tag

    def delete_image_stream_tag(self, namespace: str, name: str) -> None:
        target = f"{namespace}/{name}"
        self._maybe_fail("delete_image_stream_tag", target)
        if self.tags.pop((namespace, name), None) is None:
            self._record("delete_image_stream_tag", target, "missing")
            raise NotFoundError("delete imagestreamtag", target, "not found", status=404)
        self._record("delete_image_stream_tag", target, "ok")


class RecordingStep(Step):
    """A step defined purely by its links, recording when it ran."""

    def __init__(
        self,
        name: str,
        requires: Optional[List[StepLink]] = None,
        creates: Optional[List[StepLink]] = None,
        *,
        log: Optional[List[str]] = None,
        is_done: bool = False,
        error: Optional[Exception] = None,
        params: Optional[ParameterMap] = None,
    ):
        self._name = name
        self._requires = requires or []
        self._creates = creates or []
        self.log = log if log is not None else []
        self.is_done = is_done
        self.error = error
        self.params = params

    def inputs(self, ctx, dry):
        return None

    def run(self, ctx, dry):
        if self.error is not None:
            raise self.error
        self.log.append(self._name)

    def done(self, ctx=None):
        return self.is_done

    def requires(self):
        return list(self._requires)

    def creates(self):
        return list(self._creates)

    def provides(self):
        return self.params, None

    def name(self):
        return self._name

    def description(self):
        return f"Record {self._name}"


@pytest.fixture(autouse=True)
def console():
    c = Console(debug=False)
    set_console(c)
    return c


@pytest.fixture
def catalog() -> FakeCatalog:
    return FakeCatalog()


@pytest.fixture
def ctx() -> StepContext:
    return StepContext()
