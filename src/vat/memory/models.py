"""Data models for the memory system."""

from dataclasses import dataclass, field


@dataclass
class Frame:
    """Facts recorded about one named object.

    Attributes:
        name: Object name as first seen in the conversation.
        classes: Class names in the order they were stated. Never
            deduplicated: stating "ball is a toy" twice records it twice.
        properties: Property name -> accumulated values, kept as text.
    """

    name: str
    classes: list[str] = field(default_factory=list)
    properties: dict[str, list[str]] = field(default_factory=dict)

    def property_key(self, prop: str) -> str | None:
        """Return the stored key matching prop, ignoring case."""
        if prop in self.properties:
            return prop
        wanted = prop.casefold()
        for key in self.properties:
            if key.casefold() == wanted:
                return key
        return None

    def get_property(self, prop: str) -> list[str] | None:
        key = self.property_key(prop)
        return None if key is None else self.properties[key]
