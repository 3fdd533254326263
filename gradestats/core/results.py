"""Structured results produced by the aggregation engine.

Results are plain, frozen values: they contain no pandas objects, so that two
results computed from the same data compare equal. Tabular parts can be viewed
as a :class:`pandas.DataFrame` via ``to_frame()``.

Expected absence is not an error. Queries return :class:`NotFound` when the
requested key does not exist and :class:`NoRecords` when it exists but has
nothing to aggregate. Both are falsy, so callers may write::

    report = engine.course_report("CS101")
    if not report:
        ...

Results holding a ``dict`` compare by value but are not hashable.

"""

from __future__ import annotations

import dataclasses
import typing

import pandas as pd

from .course import Course
from .student import Student


def _index(ids, name):
    return pd.Index(ids, name=name, dtype=object)


# absent outcomes ======================================================================


@dataclasses.dataclass(frozen=True)
class NotFound:
    """The requested entity does not exist.

    Attributes
    ----------
    kind : str
        What was looked up: ``"student"`` or ``"course"``.
    key : str
        The key that was looked up.

    """

    kind: str
    key: str

    def __bool__(self):
        return False


@dataclasses.dataclass(frozen=True)
class NoRecords:
    """The requested entity exists (or is a grouping) but has nothing to aggregate.

    Attributes
    ----------
    kind : str
        One of ``"student"``, ``"course"``, ``"department"``, ``"teacher"``.
    key : str
        The id or name that was queried.

    """

    kind: str
    key: str

    def __bool__(self):
        return False


# transcripts ==========================================================================


@dataclasses.dataclass(frozen=True)
class TranscriptEntry:
    course: Course
    score: float
    credit: float


@dataclasses.dataclass(frozen=True)
class Transcript:
    """A student's grades, joined against course credits.

    Attributes
    ----------
    student : Student
    entries : tuple[TranscriptEntry, ...]
        One entry per grade whose course resolved, in ledger order.
    unresolved_courses : tuple[str, ...]
        Ids of graded courses missing from the catalog. These do not
        contribute to :attr:`total_credit` or :attr:`gpa`.
    total_credit : float
    gpa : Optional[float]
        The credit-weighted mean score, or `None` if no credit was counted.

    """

    student: Student
    entries: typing.Tuple[TranscriptEntry, ...]
    unresolved_courses: typing.Tuple[str, ...]
    total_credit: float
    gpa: typing.Optional[float]

    def to_frame(self) -> pd.DataFrame:
        """One row per resolved course, indexed by course id."""
        return pd.DataFrame(
            {
                "name": [e.course.name for e in self.entries],
                "score": [e.score for e in self.entries],
                "credit": [e.credit for e in self.entries],
            },
            index=_index([e.course.course_id for e in self.entries], "course_id"),
        )


# course reports =======================================================================


@dataclasses.dataclass(frozen=True)
class RankedStudent:
    """A position in a course ranking.

    `student` is `None` when the directory does not know `student_id`.
    """

    rank: int
    student_id: str
    student: typing.Optional[Student]
    score: float


@dataclasses.dataclass(frozen=True)
class CourseReport:
    """Ranking and summary statistics of a single course.

    Attributes
    ----------
    course : Course
    ranking : tuple[RankedStudent, ...]
        Every graded student, best score first. Equal scores keep the order
        in which the ledger listed them.
    distribution : dict[str, int]
        Number of scores in each bucket, from the highest bucket to the lowest.
    average : Optional[float]
        Unweighted mean of the scores, or `None` if it is not finite.
    highest : float
    lowest : float

    """

    course: Course
    ranking: typing.Tuple[RankedStudent, ...]
    distribution: typing.Dict[str, int]
    average: typing.Optional[float]
    highest: float
    lowest: float

    __hash__ = None

    @property
    def enrollment(self) -> int:
        return len(self.ranking)

    def to_frame(self) -> pd.DataFrame:
        """The ranking as a table indexed by student id."""
        return pd.DataFrame(
            {
                "rank": [r.rank for r in self.ranking],
                "name": [
                    None if r.student is None else r.student.name
                    for r in self.ranking
                ],
                "score": [r.score for r in self.ranking],
            },
            index=_index([r.student_id for r in self.ranking], "student_id"),
        )


# department summaries =================================================================


@dataclasses.dataclass(frozen=True)
class CourseEnrollment:
    """How many students of a group took a course, and their mean score.

    `average` is `None` when the mean is not finite.
    """

    course: Course
    count: int
    average: typing.Optional[float]


@dataclasses.dataclass(frozen=True)
class DepartmentSummary:
    """Aggregate statistics over the students of a department.

    Attributes
    ----------
    department : str
    student_count : int
        Number of students the directory lists in the department.
    students_with_grades : int
        Number of those students with at least one grade entry. Never larger
        than :attr:`student_count`.
    gpas : dict[str, Optional[float]]
        GPA of every student with grades, keyed by student id. `None` when
        none of the student's courses resolved.
    mean_gpa : Optional[float]
        Mean of the GPAs that are not `None`; `None` if there are none.
    courses : tuple[CourseEnrollment, ...]
        Per-course statistics, in order of first appearance.

    """

    department: str
    student_count: int
    students_with_grades: int
    gpas: typing.Dict[str, typing.Optional[float]]
    mean_gpa: typing.Optional[float]
    courses: typing.Tuple[CourseEnrollment, ...]

    __hash__ = None

    @property
    def students_without_grades(self) -> int:
        return self.student_count - self.students_with_grades

    def to_frame(self) -> pd.DataFrame:
        """Per-course statistics as a table indexed by course id."""
        return pd.DataFrame(
            {
                "name": [c.course.name for c in self.courses],
                "count": [c.count for c in self.courses],
                "average": [c.average for c in self.courses],
            },
            index=_index([c.course.course_id for c in self.courses], "course_id"),
        )


# teacher summaries ====================================================================


@dataclasses.dataclass(frozen=True)
class CourseStatistics:
    """Enrollment, average and distribution of one course.

    `average` is `None` when nobody is enrolled; `distribution` then has every
    bucket at zero.
    """

    course: Course
    enrollment: int
    average: typing.Optional[float]
    distribution: typing.Dict[str, int]

    __hash__ = None


@dataclasses.dataclass(frozen=True)
class TeacherSummary:
    """Aggregate statistics over the courses given by a teacher.

    Attributes
    ----------
    teacher : str
    courses : tuple[CourseStatistics, ...]
        In catalog order.
    total_enrollment : int
    mean_enrollment : float
        Mean enrollment over all courses, empty ones counting as zero.
    mean_course_average : Optional[float]
        Plain mean of the course averages. Courses without enrollment are left
        out of both sum and denominator; courses are not weighted by
        enrollment. `None` if no course has enrollment.

    """

    teacher: str
    courses: typing.Tuple[CourseStatistics, ...]
    total_enrollment: int
    mean_enrollment: float
    mean_course_average: typing.Optional[float]

    __hash__ = None

    def to_frame(self) -> pd.DataFrame:
        """Per-course statistics, one column per distribution bucket."""
        rows = []
        for stats in self.courses:
            row = {
                "name": stats.course.name,
                "enrollment": stats.enrollment,
                "average": stats.average,
            }
            row.update(stats.distribution)
            rows.append(row)

        return pd.DataFrame(
            rows,
            index=_index([s.course.course_id for s in self.courses], "course_id"),
        )
