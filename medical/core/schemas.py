"""
Shared schema base for the JSON API.
"""
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """
    Base schema whose JSON keys are camelCase.

    Input accepts either the camelCase alias or the snake_case field name;
    responses are serialized with the aliases.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
