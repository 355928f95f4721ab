"""
Shared schema base for the client-facing JSON contract.

The React client speaks camelCase (fileUrl, fullName, translatedText ...),
so these models use snake_case attributes with camelCase aliases.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
