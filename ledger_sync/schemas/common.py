"""Shared pydantic base classes."""

from pydantic import BaseModel, ConfigDict


class CamelModel(BaseModel):
    """
    Model exchanged with the sync process.

    Fields carry camelCase aliases on the wire; Python code can use
    either the alias or the snake_case field name.
    """
    model_config = ConfigDict(populate_by_name=True)
