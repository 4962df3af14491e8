# model.py
from __future__ import annotations

from dataclasses import dataclass

# Image stream holding the intermediate images built during a job.
PIPELINE_IMAGE_STREAM = "pipeline"

# Image stream holding the images a job publishes for other consumers.
STABLE_IMAGE_STREAM = "stable"


@dataclass(frozen=True)
class JobSpec:
    """Ambient facts about the running job."""
    namespace: str


@dataclass(frozen=True)
class ImageStreamTagReference:
    """
    A named tag in an image stream.

    `as_` is an optional short alias; when set, later steps can refer to the
    tagged image by that alias instead of the full namespace/name:tag.
    `namespace` overrides the job namespace when non-empty.
    """
    name: str
    tag: str
    as_: str = ""
    namespace: str = ""

    def __str__(self) -> str:
        prefix = f"{self.namespace}/" if self.namespace else ""
        return f"{prefix}{self.name}:{self.tag}"


@dataclass(frozen=True)
class OutputImageTagStepConfiguration:
    """Tag the pipeline image `from_` into the `to` image stream tag."""
    from_: str
    to: ImageStreamTagReference
