"""
User model.
"""

from dataclasses import dataclass, field


@dataclass
class User:
    """Forum participant. Users are seeded from fixtures only."""

    id: str
    name: str
    picture: str | None = None

    # Forums joined, in join order
    forum_ids: list[str] = field(default_factory=list)

    def is_member_of(self, forum_id: str) -> bool:
        return forum_id in self.forum_ids

    def __repr__(self) -> str:
        return f"<User {self.id} {self.name}>"
