"""Solution model for the issue tracker backend.

A solution is a proposed fix attached to a bug. Solutions are looked up
individually by id or collectively by the bug they belong to.
"""

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from entitygate.core.database import Base


class Solution(Base):
    """Solution attached to a bug.

    Attributes:
        id: Integer identity primary key, None until persisted
        title: Short summary of the solution
        description: Detailed write-up (optional)
        bug_id: Identifier of the bug this solution addresses
    """

    __tablename__ = "solutions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    title: Mapped[str] = mapped_column(String(255), nullable=False)

    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    bug_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)

    def __repr__(self) -> str:
        return f"<Solution(id={self.id!r}, bug_id={self.bug_id!r}, title={self.title!r})>"
