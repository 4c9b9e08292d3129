"""Pipeline stages — the five roles, their no-op defaults, and built-ins."""

from ghost.pipeline.builtin import (
    JSONBodyModel,
    JSONWriter,
    PathParamsModel,
    RulesValidator,
    ValueExtender,
)
from ghost.pipeline.null import NullModel, NullProcessor, NullValidator, NullWriter
from ghost.pipeline.protocols import Extender, Processor, RequestModel, Validator, Writer

__all__ = [
    "Extender",
    "JSONBodyModel",
    "JSONWriter",
    "NullModel",
    "NullProcessor",
    "NullValidator",
    "NullWriter",
    "PathParamsModel",
    "Processor",
    "RequestModel",
    "RulesValidator",
    "Validator",
    "ValueExtender",
    "Writer",
]
