"""Statement model used by multi-statement transactions."""

from typing import Any, Dict, Mapping, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class Statement(BaseModel):
    """A single Cypher statement and its parameters."""

    model_config = ConfigDict(frozen=True)

    statement: str = Field(..., min_length=1, description="Cypher query")
    parameters: Dict[str, Any] = Field(
        default_factory=dict,
        validation_alias=AliasChoices("parameters", "params"),
        description="Query parameters",
    )

    @field_validator("parameters", mode="before")
    @classmethod
    def empty_parameters_for_null(cls, value: Any) -> Any:
        """JSON callers send ``null`` for "no parameters"."""
        return {} if value is None else value

    @classmethod
    def coerce(cls, value: Union["Statement", Mapping[str, Any]]) -> "Statement":
        """Accept an existing Statement or a ``{statement, parameters}`` mapping."""
        if isinstance(value, cls):
            return value
        return cls.model_validate(value)
