"""
Member Database Models
======================

SQLAlchemy ORM models for members and member types.

Version: 0.1.0
"""

from sqlalchemy import (
    BigInteger,
    Column,
    Date,
    ForeignKey,
    Index,
    String,
)
from sqlalchemy.orm import relationship

from shared.database.postgres import Base


class MemberTypeModel(Base):
    """SQLAlchemy model for membership categories."""

    __tablename__ = "member_types"

    id = Column(BigInteger, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False, unique=True)
    description = Column(String(500))

    members = relationship("MemberModel", back_populates="membertype", lazy="noload")

    def __repr__(self) -> str:
        return f"<MemberType {self.id}: {self.name}>"


class MemberModel(Base):
    """
    SQLAlchemy model for organisation members.

    Owns assessments, educations, appearances and further education records.
    """

    __tablename__ = "members"
    __table_args__ = (
        Index("ix_members_last_name", "last_name"),
        Index("ix_members_membertype", "membertype_id"),
    )

    id = Column(BigInteger, primary_key=True, autoincrement=True)

    # Personal data
    first_name = Column(String(100))
    last_name = Column(String(100), nullable=False)
    birthday = Column(Date)

    # Contact
    email = Column(String(255))
    phone = Column(String(50))
    street = Column(String(255))
    zip_code = Column(String(20))
    city = Column(String(100))

    membertype_id = Column(
        BigInteger,
        ForeignKey("member_types.id", ondelete="SET NULL"),
    )

    # Relationships
    membertype = relationship("MemberTypeModel", back_populates="members", lazy="noload")
    assessments = relationship("AssessmentModel", back_populates="member", lazy="noload")
    educations = relationship("EducationModel", back_populates="member", lazy="noload")
    appearances = relationship("AppearancesModel", back_populates="member", lazy="noload")
    further_educations = relationship(
        "FurtherEducationModel", back_populates="member", lazy="noload"
    )

    def __repr__(self) -> str:
        return f"<Member {self.id}: {self.first_name} {self.last_name}>"
