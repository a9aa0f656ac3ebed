from datetime import date

from sqlalchemy import JSON, Boolean, Date, ForeignKey, Integer, String, Text
from sqlalchemy.ext.associationproxy import AssociationProxy, association_proxy
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shared.database import Base, new_id, normalize_id


class Course(Base):
    __tablename__ = "course"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    code: Mapped[str] = mapped_column(String(50), unique=True, index=True)
    name: Mapped[str] = mapped_column(String(255))
    stream_id: Mapped[str | None] = mapped_column(String(36), nullable=True, index=True)
    level: Mapped[str] = mapped_column(String(20), default="UG")  # PreU/UG/Diploma
    description: Mapped[str] = mapped_column(Text, default="")
    tags: Mapped[list] = mapped_column(JSON, default=list)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, index=True)


class Career(Base):
    __tablename__ = "career"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    slug: Mapped[str] = mapped_column(String(120), unique=True, index=True)
    name: Mapped[str] = mapped_column(String(255))
    description: Mapped[str] = mapped_column(Text, default="")
    sectors: Mapped[list] = mapped_column(JSON, default=list)
    skills_required: Mapped[list] = mapped_column(JSON, default=list)
    growth_trend: Mapped[str] = mapped_column(String(30), default="Stable")
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, index=True)


class DegreeProgram(Base):
    __tablename__ = "degree_program"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    college_id: Mapped[str] = mapped_column(String(36), index=True)
    course_id: Mapped[str] = mapped_column(String(36), index=True)
    code: Mapped[str] = mapped_column(String(50), default="")
    name: Mapped[str] = mapped_column(String(255))
    duration_years: Mapped[int] = mapped_column(Integer, default=3)
    medium: Mapped[list] = mapped_column(JSON, default=list)
    # {"tuitionPerYear": 0, "hostelPerYear": 0, "misc": 0, "currency": "INR"}
    fees: Mapped[dict] = mapped_column(JSON, default=dict)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, index=True)


class Exam(Base):
    __tablename__ = "exam"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String(255))
    authority: Mapped[str] = mapped_column(String(255), default="")
    level: Mapped[str] = mapped_column(String(20), default="State")  # State/National/Institution
    schedule_window: Mapped[str] = mapped_column(String(120), default="")
    registration_opens: Mapped[date | None] = mapped_column(Date, nullable=True)
    registration_closes: Mapped[date | None] = mapped_column(Date, nullable=True)
    exam_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    link: Mapped[str] = mapped_column(String(500), default="")
    region: Mapped[str] = mapped_column(String(120), default="")
    tags: Mapped[list] = mapped_column(JSON, default=list)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, index=True)

    # an exam is reachable through any of these relationship paths
    course_links: Mapped[list["ExamCourse"]] = relationship(cascade="all, delete-orphan")
    career_links: Mapped[list["ExamCareer"]] = relationship(cascade="all, delete-orphan")
    interest_links: Mapped[list["ExamInterest"]] = relationship(cascade="all, delete-orphan")

    course_ids: AssociationProxy[list[str]] = association_proxy(
        "course_links", "course_id", creator=lambda v: ExamCourse(course_id=normalize_id(v)),
    )
    career_ids: AssociationProxy[list[str]] = association_proxy(
        "career_links", "career_id", creator=lambda v: ExamCareer(career_id=normalize_id(v)),
    )
    interest_ids: AssociationProxy[list[str]] = association_proxy(
        "interest_links", "interest_id", creator=lambda v: ExamInterest(interest_id=normalize_id(v)),
    )


class ExamCourse(Base):
    __tablename__ = "exam_course"

    exam_id: Mapped[str] = mapped_column(ForeignKey("exam.id", ondelete="CASCADE"), primary_key=True)
    course_id: Mapped[str] = mapped_column(String(36), primary_key=True, index=True)


class ExamCareer(Base):
    __tablename__ = "exam_career"

    exam_id: Mapped[str] = mapped_column(ForeignKey("exam.id", ondelete="CASCADE"), primary_key=True)
    career_id: Mapped[str] = mapped_column(String(36), primary_key=True, index=True)


class ExamInterest(Base):
    __tablename__ = "exam_interest"

    exam_id: Mapped[str] = mapped_column(ForeignKey("exam.id", ondelete="CASCADE"), primary_key=True)
    interest_id: Mapped[str] = mapped_column(String(36), primary_key=True, index=True)


class Interest(Base):
    __tablename__ = "interest"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String(120), unique=True)
    slug: Mapped[str] = mapped_column(String(120), unique=True, index=True)
    description: Mapped[str] = mapped_column(Text, default="")
    popularity: Mapped[int] = mapped_column(Integer, default=0)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, index=True)


class College(Base):
    __tablename__ = "college"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String(255))
    code: Mapped[str] = mapped_column(String(50), unique=True, index=True)
    type: Mapped[str] = mapped_column(String(20), default="Government")  # Government/Private
    district: Mapped[str] = mapped_column(String(120), default="")
    state: Mapped[str] = mapped_column(String(120), default="")
    website: Mapped[str] = mapped_column(String(500), default="")
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, index=True)

    course_links: Mapped[list["CollegeCourse"]] = relationship(cascade="all, delete-orphan")
    stream_links: Mapped[list["CollegeStream"]] = relationship(cascade="all, delete-orphan")

    course_ids: AssociationProxy[list[str]] = association_proxy(
        "course_links", "course_id", creator=lambda v: CollegeCourse(course_id=normalize_id(v)),
    )
    stream_ids: AssociationProxy[list[str]] = association_proxy(
        "stream_links", "stream_id", creator=lambda v: CollegeStream(stream_id=normalize_id(v)),
    )


class CollegeCourse(Base):
    __tablename__ = "college_course"

    college_id: Mapped[str] = mapped_column(ForeignKey("college.id", ondelete="CASCADE"), primary_key=True)
    course_id: Mapped[str] = mapped_column(String(36), primary_key=True, index=True)


class CollegeStream(Base):
    __tablename__ = "college_stream"

    college_id: Mapped[str] = mapped_column(ForeignKey("college.id", ondelete="CASCADE"), primary_key=True)
    stream_id: Mapped[str] = mapped_column(String(36), primary_key=True, index=True)
