from sqlalchemy import Column, Date, String
from sqlalchemy.orm import relationship

from noteapp.platform.db.base import BaseModel


class User(BaseModel):
    __tablename__ = "users"
    email = Column(String(255), unique=True, nullable=False, index=True)
    name = Column(String(100), nullable=False)
    date_of_birth = Column(Date, nullable=False)

    notes = relationship("Note", back_populates="owner", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<User(id={self.id}, email={self.email})>"
