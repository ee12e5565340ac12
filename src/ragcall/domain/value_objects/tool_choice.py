"""Tool choice policy sent with completion requests."""

from enum import StrEnum


class ToolChoice(StrEnum):
    """Whether the model may, must or must not call tools."""

    AUTO = "auto"
    NONE = "none"
    REQUIRED = "required"
