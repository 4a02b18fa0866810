from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from my_todo.db.session import Base

class Label(Base):
    __tablename__ = "labels"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, nullable=False)

    # Relationships
    tasks = relationship("TaskLabel", back_populates="label")
