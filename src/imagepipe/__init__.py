from .context import StepContext
from .links import ExternalImageLink, InternalImageLink, ReleaseImagesLink, StepLink
from .model import ImageStreamTagReference, JobSpec, OutputImageTagStepConfiguration
from .runner import resolve_parameters, run_steps
from .step import ParameterMap, Step
from .steps.output_image_tag import OutputImageTagStep, output_image_tag_step

__all__ = [
    "ExternalImageLink",
    "ImageStreamTagReference",
    "InternalImageLink",
    "JobSpec",
    "OutputImageTagStep",
    "OutputImageTagStepConfiguration",
    "ParameterMap",
    "ReleaseImagesLink",
    "Step",
    "StepContext",
    "StepLink",
    "output_image_tag_step",
    "resolve_parameters",
    "run_steps",
]
