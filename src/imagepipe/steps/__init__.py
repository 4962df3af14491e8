from .image_streams import create_image_stream, create_image_stream_tag, new_image_stream, new_image_stream_tag
from .output_image_tag import OutputImageTagStep, output_image_tag_step, parameter_name

__all__ = [
    "OutputImageTagStep",
    "create_image_stream",
    "create_image_stream_tag",
    "new_image_stream",
    "new_image_stream_tag",
    "output_image_tag_step",
    "parameter_name",
]
