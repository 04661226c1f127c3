"""
Schema Base
camelCase JSON aliases shared by every request/response model
"""

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys, populated by either name"""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True
