"""JSON encoding/decoding across the engine boundary."""

from typing import Any, Dict, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from solc_bridge.errors import MarshalError, UnmarshalError

M = TypeVar("M", bound=BaseModel)


def to_json(model: BaseModel) -> str:
    """Encode a protocol model to its compact wire form.

    Fields that are ``None`` are omitted and camelCase aliases are used.

    Raises
    ------
    MarshalError
        If the model cannot be serialized.
    """
    try:
        return model.model_dump_json(by_alias=True, exclude_none=True)
    except (ValueError, TypeError) as e:
        raise MarshalError(f"failed to marshal {type(model).__name__}: {e}") from e


def from_json(data: Union[str, bytes, Dict[str, Any]], cls: Type[M]) -> M:
    """Decode wire JSON (text or an already parsed dict) into ``cls``.

    Raises
    ------
    UnmarshalError
        If the data is not valid JSON or does not match ``cls``.
    """
    try:
        if isinstance(data, dict):
            return cls.model_validate(data)
        return cls.model_validate_json(data)
    except ValidationError as e:
        raise UnmarshalError(f"failed to unmarshal {cls.__name__}: {e}") from e
