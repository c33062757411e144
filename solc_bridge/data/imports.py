"""Import callback contract."""

from typing import Any, Callable, Optional

from pydantic import model_validator

from .utils import CamelModel


class ImportResult(CamelModel):
    """The answer of an import callback for one path.

    Exactly one of ``contents`` and ``error`` is set. An empty ``error`` means no error, so
    ``{"contents": "...", "error": ""}`` is a success and ``fail("")`` yields empty contents.
    """

    contents: Optional[str] = None
    """The file contents, if the import was found."""
    error: Optional[str] = None
    """The failure reason, if the import could not be provided."""

    @model_validator(mode="before")
    @classmethod
    def _drop_empty_error(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("error") == "":
            data = {**data, "error": None}
            if data.get("contents") is None:
                data["contents"] = ""
        return data

    @model_validator(mode="after")
    def _validate_exactly_one(self) -> "ImportResult":
        """Validate that the result is either contents or an error.

        Raises
        ------
        ValueError
            If both or neither of ``contents`` and ``error`` are set.
        """
        if (self.contents is None) == (self.error is None):
            raise ValueError("ImportResult requires exactly one of 'contents' or 'error'")
        return self

    @classmethod
    def ok(cls, contents: str) -> "ImportResult":
        return cls(contents=contents)

    @classmethod
    def fail(cls, error: str) -> "ImportResult":
        return cls(error=error)

    @property
    def failed(self) -> bool:
        return self.error is not None


ImportCallback = Callable[[str], ImportResult]
"""Caller-supplied function mapping a logical import path to its contents or a failure.

It is invoked synchronously while the compiler session lock is held, so it must not call
back into the same session.
"""
