"""SQLAlchemy models for Catalog Store."""

from __future__ import annotations

from datetime import datetime, time  # noqa: TC003 - used at runtime for SQLAlchemy
from enum import StrEnum
from typing import Any

from sqlalchemy import (
    Boolean,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Time,
    text,
)
from sqlalchemy.orm import (
    DeclarativeBase,
    Mapped,
    mapped_column,
    relationship,
)


class EnrollmentState(StrEnum):
    """Enrollment state enum."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class Course(Base):
    """Course model - an offering with a fixed daily time window."""

    __tablename__ = "courses"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    code: Mapped[str] = mapped_column(String(10), nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    credits: Mapped[int] = mapped_column(Integer, nullable=False)
    capacity: Mapped[int] = mapped_column(Integer, nullable=False)
    start_time: Mapped[time] = mapped_column(Time, nullable=False)
    end_time: Mapped[time] = mapped_column(Time, nullable=False)
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    # Relationships
    enrollments: Mapped[list[Enrollment]] = relationship(
        "Enrollment", back_populates="course", order_by="Enrollment.id"
    )

    def __init__(
        self,
        code: str,
        name: str,
        credits: int,
        capacity: int,
        start_time: time,
        end_time: time,
        id: int | None = None,
        active: bool = True,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        if id is not None:
            self.id = id
        self.code = code
        self.name = name
        self.credits = credits
        self.capacity = capacity
        self.start_time = start_time
        self.end_time = end_time
        self.active = active

    def active_enrollment_count(self) -> int:
        """Count enrollments that hold a seat. Requires enrollments to be loaded."""
        return sum(1 for e in self.enrollments if e.is_active)

    @property
    def available_slots(self) -> int:
        """Capacity minus seats held by non-cancelled enrollments."""
        return self.capacity - self.active_enrollment_count()

    def to_dict(self) -> dict[str, Any]:
        """Serialize the scalar columns to JSON-compatible values."""
        return {
            "id": self.id,
            "code": self.code,
            "name": self.name,
            "credits": self.credits,
            "capacity": self.capacity,
            "start_time": self.start_time.isoformat(),
            "end_time": self.end_time.isoformat(),
            "active": self.active,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Course:
        """Rebuild a detached Course from to_dict() output."""
        return cls(
            id=data["id"],
            code=data["code"],
            name=data["name"],
            credits=data["credits"],
            capacity=data["capacity"],
            start_time=time.fromisoformat(data["start_time"]),
            end_time=time.fromisoformat(data["end_time"]),
            active=data["active"],
        )

    def __repr__(self) -> str:
        return f"<Course(id={self.id!r}, code={self.code!r}, active={self.active!r})>"


class Enrollment(Base):
    """Enrollment model - a user's registration against a course."""

    __tablename__ = "enrollments"
    __table_args__ = (
        # At most one seat-holding enrollment per (course, user)
        Index(
            "uq_enrollments_active_course_user",
            "course_id",
            "user_id",
            unique=True,
            sqlite_where=text("state != 'cancelled'"),
        ),
        Index("ix_enrollments_user_id", "user_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    course_id: Mapped[int] = mapped_column(Integer, ForeignKey("courses.id"), nullable=False)
    user_id: Mapped[str] = mapped_column(String(450), nullable=False)
    registered_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    state: Mapped[str] = mapped_column(String(20), nullable=False)

    # Relationships
    course: Mapped[Course] = relationship("Course", back_populates="enrollments")

    def __init__(
        self,
        course_id: int,
        user_id: str,
        registered_at: datetime,
        id: int | None = None,
        state: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        if id is not None:
            self.id = id
        self.course_id = course_id
        self.user_id = user_id
        self.registered_at = registered_at
        self.state = state if state is not None else EnrollmentState.PENDING.value

    @property
    def enrollment_state(self) -> EnrollmentState:
        """Get state as EnrollmentState enum."""
        return EnrollmentState(self.state)

    @enrollment_state.setter
    def enrollment_state(self, value: EnrollmentState) -> None:
        """Set state from EnrollmentState enum."""
        self.state = value.value

    @property
    def is_active(self) -> bool:
        """True unless the enrollment was cancelled."""
        return self.state != EnrollmentState.CANCELLED.value

    def __repr__(self) -> str:
        return (
            f"<Enrollment(id={self.id!r}, course_id={self.course_id!r}, "
            f"user_id={self.user_id!r}, state={self.state!r})>"
        )
