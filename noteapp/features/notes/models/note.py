from sqlalchemy import Column, ForeignKey, String, Text
from sqlalchemy.orm import relationship

from noteapp.platform.db.base import BaseModel


class Note(BaseModel):
    __tablename__ = "notes"

    owner_id = Column(
        String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=False)

    owner = relationship("User", back_populates="notes")

    def __repr__(self):
        return f"<Note(id={self.id}, owner_id={self.owner_id})>"
