"""共享类型别名."""

from editgrid.types.structures import (
    ContextDict,
    JsonDict,
    JsonValue,
    LoggerExtra,
    MutablePayloadDict,
    PayloadValue,
    ScalarValue,
    StructlogEventDict,
)

__all__ = [
    "ContextDict",
    "JsonDict",
    "JsonValue",
    "LoggerExtra",
    "MutablePayloadDict",
    "PayloadValue",
    "ScalarValue",
    "StructlogEventDict",
]
