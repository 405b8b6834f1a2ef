from __future__ import annotations

from dataclasses import dataclass

from core.domain.identifiers import generate_id


@dataclass
class Team:
    """Smallest organizational unit owning tasks (an "isibo")."""

    id: str
    name: str

    @staticmethod
    def create(name: str) -> "Team":
        return Team(id=generate_id(), name=name)


__all__ = ["Team"]
