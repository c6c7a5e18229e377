# taskkeeper/models/user.py
from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from taskkeeper.database import Base

class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)

    tasks = relationship("Task", back_populates="owner", cascade="all, delete-orphan")

    __table_args__ = {"sqlite_autoincrement": True}
