from sqlalchemy import Column, Integer, String, Boolean
from sqlalchemy.orm import relationship
from my_todo.db.session import Base


class Task(Base):
    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, index=True)
    text = Column(String(100), nullable=False)
    completed = Column(Boolean, nullable=False, default=False)

    # Relationships
    labels = relationship("TaskLabel", back_populates="task")
