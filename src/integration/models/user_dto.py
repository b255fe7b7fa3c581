from dataclasses import dataclass
from typing import Any

from neuroglia.data.abstractions import Identifiable


@dataclass
class UserDto(Identifiable[str]):
    id: str
    name: str | None = None
    email: str | None = None

    def to_projection(self) -> dict[str, Any]:
        """Minimal view embedded in task responses."""
        return {"id": self.id, "name": self.name, "email": self.email}
