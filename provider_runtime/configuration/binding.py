"""Case-insensitive binding of configuration data to pydantic models.

Configuration paths are compared case-insensitively, so binding must be too:
``ConnectionString``, ``connectionstring``, ``CONNECTIONSTRING`` and
``connection_string`` all land on the same field.
"""

from typing import Any, Dict, Type

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_pascal


def match_field_keys(model_type: Type[BaseModel], data: Dict[str, Any]) -> Dict[str, Any]:
    """Re-key *data* so keys matching a field name or alias (ignoring case) use that field's key.

    Keys that match no field are passed through unchanged.
    """
    lookup: Dict[str, str] = {}
    for name, field in model_type.model_fields.items():
        target = field.alias or name
        lookup[name.lower()] = target
        if field.alias:
            lookup[field.alias.lower()] = target

    return {lookup.get(key.lower(), key): value for key, value in data.items()}


class ConfigurationModel(BaseModel):
    """Base for models bound from configuration sections.

    Accepts PascalCase aliases and snake_case field names in any letter case;
    unknown keys are ignored.
    """

    model_config = ConfigDict(alias_generator=to_pascal, populate_by_name=True, extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def match_key_casing(cls, data: Any) -> Any:
        """Normalize incoming key casing before field validation."""
        if isinstance(data, dict):
            return match_field_keys(cls, data)
        return data
