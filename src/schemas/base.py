"""Shared schema base classes."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Model serialized with camelCase keys, as browsers and the CRM expect."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
