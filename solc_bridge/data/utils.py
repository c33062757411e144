from typing import Annotated

from pydantic import BaseModel, ConfigDict, StringConstraints
from pydantic.alias_generators import to_camel

NonEmptyString = Annotated[str, StringConstraints(min_length=1)]
"""Type alias for non-empty strings with minimum length of 1."""


class BaseModelWithDocstrings(BaseModel):
    """Base model with the attribute docstrings being extracted to the model JSON schema."""

    model_config = ConfigDict(use_attribute_docstrings=True)


class CamelModel(BaseModelWithDocstrings):
    """Base model for the compiler JSON protocol.

    Attributes are snake_case in Python and camelCase on the wire. Both spellings are
    accepted on input.
    """

    model_config = ConfigDict(
        use_attribute_docstrings=True, alias_generator=to_camel, populate_by_name=True
    )
