from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Snake_case attributes, camelCase on the wire and in the record store"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=False,
    )

    def to_record(self) -> dict:
        """JSON-ready dict using the persisted field names"""
        return self.model_dump(mode="json", by_alias=True)
