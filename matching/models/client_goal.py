from sqlalchemy import Column, Integer, String, Boolean, ForeignKey
from sqlalchemy.orm import relationship

from .base import Base


class ClientGoal(Base):
    __tablename__ = "client_goals"

    id = Column(Integer, primary_key=True)
    goal_key = Column(String, nullable=False, unique=True)
    label = Column(String)
    is_active = Column(Boolean, nullable=False, default=True)

    specialty_mappings = relationship(
        "ClientGoalSpecialtyMapping",
        back_populates="goal",
        cascade="all, delete-orphan",
    )


class ClientGoalSpecialtyMapping(Base):
    __tablename__ = "client_goal_specialty_mappings"

    id = Column(Integer, primary_key=True)
    goal_id = Column(Integer, ForeignKey("client_goals.id"), nullable=False, index=True)
    specialty = Column(String, nullable=False)
    weight = Column(Integer)  # 0-100; null falls back to the mapping tier default
    mapping_type = Column(String, nullable=False, default="primary")

    goal = relationship("ClientGoal", back_populates="specialty_mappings")
