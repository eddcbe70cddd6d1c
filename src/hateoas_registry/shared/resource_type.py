from dataclasses import dataclass


@dataclass(frozen=True)
class ResourceType:
    """Wire-level tag identifying which domain class a payload represents (e.g. "item")."""
    value: str

    def __str__(self) -> str:
        return self.value
