"""
Bounded reads over the reference catalog.

Every read filters on is_active, orders by name and stops at `limit`
inside the query. List-valued references live in link tables and are
matched with EXISTS subqueries.
"""
from typing import Iterable

from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from shared.database import normalize_ids
from .models import (
    College,
    CollegeCourse,
    CollegeStream,
    Course,
    Career,
    DegreeProgram,
    Exam,
    ExamCareer,
    ExamCourse,
    ExamInterest,
    Interest,
)


def find_courses(db: Session, course_ids: Iterable[str], limit: int) -> list[Course]:
    ids = normalize_ids(course_ids)
    if not ids:
        return []
    return (
        db.query(Course)
        .filter(Course.is_active.is_(True), Course.id.in_(ids))
        .order_by(Course.name.asc())
        .limit(limit)
        .all()
    )


def find_careers(db: Session, career_ids: Iterable[str], limit: int) -> list[Career]:
    ids = normalize_ids(career_ids)
    if not ids:
        return []
    return (
        db.query(Career)
        .filter(Career.is_active.is_(True), Career.id.in_(ids))
        .order_by(Career.name.asc())
        .limit(limit)
        .all()
    )


def find_programs(db: Session, course_ids: Iterable[str], limit: int) -> list[DegreeProgram]:
    ids = normalize_ids(course_ids)
    if not ids:
        return []
    return (
        db.query(DegreeProgram)
        .filter(DegreeProgram.is_active.is_(True), DegreeProgram.course_id.in_(ids))
        .order_by(DegreeProgram.name.asc())
        .limit(limit)
        .all()
    )


def find_exams(
    db: Session,
    course_ids: Iterable[str],
    career_ids: Iterable[str],
    interest_ids: Iterable[str],
    limit: int,
) -> list[Exam]:
    courses, careers, interests = normalize_ids(course_ids), normalize_ids(career_ids), normalize_ids(interest_ids)

    # union over relationship paths, never intersection
    paths = []
    if courses:
        paths.append(Exam.course_links.any(ExamCourse.course_id.in_(courses)))
    if careers:
        paths.append(Exam.career_links.any(ExamCareer.career_id.in_(careers)))
    if interests:
        paths.append(Exam.interest_links.any(ExamInterest.interest_id.in_(interests)))
    if not paths:
        return []

    return (
        db.query(Exam)
        .filter(Exam.is_active.is_(True), or_(*paths))
        .order_by(Exam.name.asc())
        .limit(limit)
        .all()
    )


def find_interests(db: Session, interest_ids: Iterable[str], limit: int) -> list[Interest]:
    ids = normalize_ids(interest_ids)
    if not ids:
        return []
    return (
        db.query(Interest)
        .filter(Interest.is_active.is_(True), Interest.id.in_(ids))
        .order_by(Interest.name.asc())
        .limit(limit)
        .all()
    )


def find_colleges(
    db: Session,
    course_ids: Iterable[str],
    stream_ids: Iterable[str],
    limit: int,
) -> list[College]:
    """
    Colleges hosting an active program of a resolved course, or listing a
    resolved course, or listing a resolved stream.
    """
    courses, streams = normalize_ids(course_ids), normalize_ids(stream_ids)

    paths = []
    if courses:
        hosting = select(DegreeProgram.college_id).where(
            DegreeProgram.is_active.is_(True), DegreeProgram.course_id.in_(courses),
        )
        paths.append(College.id.in_(hosting))
        paths.append(College.course_links.any(CollegeCourse.course_id.in_(courses)))
    if streams:
        paths.append(College.stream_links.any(CollegeStream.stream_id.in_(streams)))
    if not paths:
        return []

    return (
        db.query(College)
        .filter(College.is_active.is_(True), or_(*paths))
        .order_by(College.name.asc())
        .limit(limit)
        .all()
    )
