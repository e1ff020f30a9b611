"""
Member Record Database Models
=============================

SQLAlchemy ORM models for the records a member owns.

Version: 0.1.0
"""

from sqlalchemy import (
    BigInteger,
    CheckConstraint,
    Column,
    Date,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import relationship

from shared.database.postgres import Base


def _member_fk() -> Column:
    return Column(
        BigInteger,
        ForeignKey("members.id", ondelete="CASCADE"),
        nullable=False,
    )


class AssessmentModel(Base):
    """SQLAlchemy model for member assessments."""

    __tablename__ = "assessments"
    __table_args__ = (
        Index("ix_assessments_member", "member_id"),
        CheckConstraint("score >= 0 AND score <= 100", name="check_assessment_score"),
    )

    id = Column(BigInteger, primary_key=True, autoincrement=True)
    member_id = _member_fk()
    score = Column(Integer)
    assessed_on = Column(Date)
    remarks = Column(Text)

    member = relationship("MemberModel", back_populates="assessments", lazy="noload")


class EducationModel(Base):
    """SQLAlchemy model for completed basic educations."""

    __tablename__ = "educations"
    __table_args__ = (Index("ix_educations_member", "member_id"),)

    id = Column(BigInteger, primary_key=True, autoincrement=True)
    member_id = _member_fk()
    title = Column(String(255), nullable=False)
    institution = Column(String(255))
    completed_on = Column(Date)

    member = relationship("MemberModel", back_populates="educations", lazy="noload")


class AppearancesModel(Base):
    """SQLAlchemy model for member appearances."""

    __tablename__ = "appearances"
    __table_args__ = (
        Index("ix_appearances_member", "member_id"),
        CheckConstraint("hours >= 0", name="check_appearances_hours"),
    )

    id = Column(BigInteger, primary_key=True, autoincrement=True)
    member_id = _member_fk()
    event = Column(String(255), nullable=False)
    appeared_on = Column(Date)
    hours = Column(Float)

    member = relationship("MemberModel", back_populates="appearances", lazy="noload")


class FurtherEducationModel(Base):
    """SQLAlchemy model for further education courses."""

    __tablename__ = "further_educations"
    __table_args__ = (Index("ix_further_educations_member", "member_id"),)

    id = Column(BigInteger, primary_key=True, autoincrement=True)
    member_id = _member_fk()
    course = Column(String(255), nullable=False)
    completed_on = Column(Date)
    valid_until = Column(Date)

    member = relationship("MemberModel", back_populates="further_educations", lazy="noload")
