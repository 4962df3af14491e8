# steps/output_image_tag.py
from __future__ import annotations

from typing import List, Optional, TextIO, Tuple

from ..catalog.client import CatalogClient
from ..catalog.objects import ImageStreamTag
from ..context import StepContext
from ..errors import AlreadyExistsError, CatalogError, NotFoundError, RegistryUnavailableError, ResolutionError
from ..links import StepLink, external_image_link, internal_image_link, release_images_link
from ..model import PIPELINE_IMAGE_STREAM, STABLE_IMAGE_STREAM, JobSpec, OutputImageTagStepConfiguration
from ..step import ParameterMap, Step
from ..ui.console import get_console
from .image_streams import create_image_stream, create_image_stream_tag, new_image_stream, new_image_stream_tag

# Stand-in for the source image when nothing is resolved (dry-run).
DRY_RUN_IMAGE = "dry-fake"


class OutputImageTagStep(Step):
    """
    Ensure a tag exists in the named image stream that resolves to the
    built pipeline image.
    """

    def __init__(
        self,
        config: OutputImageTagStepConfiguration,
        client: CatalogClient,
        job_spec: JobSpec,
        *,
        out: TextIO | None = None,
    ):
        self.config = config
        self.client = client
        self.job_spec = job_spec
        # dry-run sink; stdout when None
        self.out = out

    def inputs(self, ctx: StepContext, dry: bool) -> Optional[List[str]]:
        return None

    def run(self, ctx: StepContext, dry: bool) -> None:
        console = get_console()
        to = self.config.to
        to_namespace = self._namespace()
        if (
            self.config.from_ == to.tag
            and to_namespace == self.job_spec.namespace
            and to.name == STABLE_IMAGE_STREAM
        ):
            console.print_info(f"Tagging {self.config.from_} into {to.name}")
        else:
            console.print_info(f"Tagging {self.config.from_} into {to_namespace}/{to.name}:{to.tag}")

        from_image = DRY_RUN_IMAGE
        if not dry:
            from_image = self._resolve_source(ctx)

        stream = new_image_stream(to_namespace, to.name)
        tag = self._image_stream_tag(from_image)

        ctx.check()
        try:
            create_image_stream(self.client, stream, dry, self.out)
        except AlreadyExistsError:
            console.print_debug(f"image stream {stream.ref} already exists")

        # Force update: the source image may differ from the one a previous
        # run tagged, so the old tag is removed before the new one is made.
        if not dry:
            ctx.check()
            try:
                self.client.delete_image_stream_tag(tag.metadata.namespace, tag.metadata.name)
            except NotFoundError:
                console.print_debug(f"image stream tag {tag.ref} did not exist")

        ctx.check()
        try:
            create_image_stream_tag(self.client, tag, dry, self.out)
        except AlreadyExistsError:
            # a concurrent run created the same tag first
            console.print_debug(f"image stream tag {tag.ref} already exists")

    def done(self, ctx: Optional[StepContext] = None) -> bool:
        if ctx is not None:
            ctx.check()
        to = self.config.to
        to_namespace = self._namespace()
        get_console().print_info(f"Checking for existence of {to_namespace}/{to.name}:{to.tag}")
        try:
            self.client.get_image_stream_tag(to_namespace, f"{to.name}:{to.tag}")
        except NotFoundError:
            return False
        return True

    def requires(self) -> List[StepLink]:
        return [internal_image_link(self.config.from_), release_images_link()]

    def creates(self) -> List[StepLink]:
        links: List[StepLink] = [external_image_link(self.config.to, self._namespace())]
        if self.config.to.as_:
            links.append(internal_image_link(self.config.to.as_))
        return links

    def provides(self) -> Tuple[Optional[ParameterMap], Optional[StepLink]]:
        to = self.config.to
        if not to.as_:
            return None, None

        def resolve() -> str:
            stream = self.client.get_image_stream(self._namespace(), to.name)
            status = stream.status
            if status is not None and status.public_docker_image_repository:
                registry = status.public_docker_image_repository
            elif status is not None and status.docker_image_repository:
                registry = status.docker_image_repository
            else:
                raise RegistryUnavailableError(to.as_)
            return f"{registry}:{to.tag}"

        return {parameter_name(to.as_): resolve}, external_image_link(to, self._namespace())

    def name(self) -> str:
        to = self.config.to
        if not to.as_:
            return f"[output:{to.name}:{to.tag}]"
        return to.as_

    def description(self) -> str:
        to = self.config.to
        if not to.as_:
            return f"Tag the image {self.config.from_} into the image stream tag {to.name}:{to.tag}"
        return f"Tag the image {self.config.from_} into the stable image stream"

    # ------------------------------------------------------------------

    def _namespace(self) -> str:
        return self.config.to.namespace or self.job_spec.namespace

    def _resolve_source(self, ctx: StepContext) -> str:
        ctx.check()
        source = f"{PIPELINE_IMAGE_STREAM}:{self.config.from_}"
        try:
            ist = self.client.get_image_stream_tag(self.job_spec.namespace, source)
        except CatalogError as e:
            raise ResolutionError(f"{self.job_spec.namespace}/{source}", e) from e
        if ist.image is None or not ist.image.metadata.name:
            raise ResolutionError(f"{self.job_spec.namespace}/{source}")
        return ist.image.metadata.name

    def _image_stream_tag(self, from_image: str) -> ImageStreamTag:
        to = self.config.to
        return new_image_stream_tag(
            self.job_spec.namespace, PIPELINE_IMAGE_STREAM, from_image,
            self._namespace(), to.name, to.tag,
        )


def parameter_name(alias: str) -> str:
    """IMAGE_<ALIAS>, with dashes turned into underscores."""
    return f"IMAGE_{alias.replace('-', '_').upper()}"


def output_image_tag_step(
    config: OutputImageTagStepConfiguration,
    client: CatalogClient,
    job_spec: JobSpec,
    *,
    out: TextIO | None = None,
) -> OutputImageTagStep:
    """Create an output image tag step."""
    return OutputImageTagStep(config, client, job_spec, out=out)
