from sqlalchemy import Column, Integer, String, Text, JSON, DateTime

from .base import Base


class MatchingAlgorithmVersion(Base):
    __tablename__ = "matching_algorithm_versions"

    id = Column(Integer, primary_key=True)
    version_number = Column(Integer, nullable=False, unique=True)
    name = Column(String, nullable=False)
    status = Column(String, nullable=False, default="draft", index=True)  # draft/live/archived
    config = Column(JSON, nullable=False)
    notes = Column(Text)
    created_at = Column(DateTime(timezone=True))
    published_at = Column(DateTime(timezone=True))
