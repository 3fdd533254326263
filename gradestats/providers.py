"""Read-only data providers consumed by the aggregation engine.

The engine never stores records itself. It asks three providers for them:

- a :class:`StudentDirectory`, which knows every :class:`~gradestats.Student`;
- a :class:`CourseCatalog`, which knows every :class:`~gradestats.Course`;
- a :class:`GradeLedger`, which knows the score of each (student, course) pair.

Any object with the right methods can serve as a provider. In-memory
implementations are provided for convenience and testing.

"""

from __future__ import annotations

import typing

import pandas as pd

from .core import Course, Courses, Student, Students


# protocols ============================================================================


class StudentDirectory(typing.Protocol):
    def lookup(self, student_id: str) -> typing.Optional[Student]:
        """The student with the given id, or `None`."""
        ...

    def filter_by_department(self, department: str) -> typing.Sequence[Student]:
        """All students of the department, in a stable order."""
        ...


class CourseCatalog(typing.Protocol):
    def lookup(self, course_id: str) -> typing.Optional[Course]:
        """The course with the given id, or `None`."""
        ...

    def filter_by_teacher(self, teacher: str) -> typing.Sequence[Course]:
        """All courses given by the teacher, in a stable order."""
        ...


class GradeLedger(typing.Protocol):
    def grades_for_student(self, student_id: str) -> typing.Mapping[str, float]:
        """Course ids mapped to the student's scores."""
        ...

    def grades_for_course(self, course_id: str) -> typing.Mapping[str, float]:
        """Student ids mapped to their scores in the course."""
        ...


# in-memory providers ==================================================================


class InMemoryStudentDirectory:
    """A :class:`StudentDirectory` backed by a list of students.

    Parameters
    ----------
    students : Iterable[Student]
        The students. If two share an id, the later one wins lookups.

    """

    def __init__(self, students: typing.Iterable[Student]):
        self.students = Students(students)
        self._by_id = {s.student_id: s for s in self.students}

    def lookup(self, student_id):
        return self._by_id.get(student_id)

    def filter_by_department(self, department):
        return self.students.in_department(department)


class InMemoryCourseCatalog:
    """A :class:`CourseCatalog` backed by a list of courses."""

    def __init__(self, courses: typing.Iterable[Course]):
        self.courses = Courses(courses)
        self._by_id = {c.course_id: c for c in self.courses}

    def lookup(self, course_id):
        return self._by_id.get(course_id)

    def filter_by_teacher(self, teacher):
        return self.courses.taught_by(teacher)


class FrameGradeLedger:
    """A :class:`GradeLedger` backed by a long-format table.

    Parameters
    ----------
    table : pandas.DataFrame
        A dataframe with one row per grade entry and (at least) the columns
        ``student_id``, ``course_id`` and ``score``. If the same
        (student, course) pair appears several times, the last row is kept.
        Row order determines the order in which grades are returned.

    Raises
    ------
    ValueError
        If one of the required columns is missing.

    Attributes
    ----------
    table : pandas.DataFrame
        The deduplicated entries. Treat as read-only.

    """

    COLUMNS = ["student_id", "course_id", "score"]

    def __init__(self, table: pd.DataFrame):
        missing = [c for c in self.COLUMNS if c not in table.columns]
        if missing:
            raise ValueError(f"Grade table is missing columns: {missing}.")

        table = table[self.COLUMNS].drop_duplicates(
            subset=["student_id", "course_id"], keep="last"
        )
        self.table = table.astype({"score": float}).reset_index(drop=True)

    @classmethod
    def from_entries(cls, entries: typing.Iterable[typing.Tuple[str, str, float]]):
        """Create a ledger from ``(student_id, course_id, score)`` triples."""
        return cls(pd.DataFrame(list(entries), columns=cls.COLUMNS))

    @classmethod
    def from_wide(cls, points: pd.DataFrame):
        """Create a ledger from a table with one row per student.

        Parameters
        ----------
        points : pandas.DataFrame
            Indexed by student id, with one column per course id. Missing
            entries (NaN) mean the student has no grade in that course.

        """
        long = (
            points.rename_axis(index="student_id", columns=None)
            .reset_index()
            .melt(id_vars="student_id", var_name="course_id", value_name="score")
        )
        return cls(long.dropna(subset=["score"]))

    def _select(self, column, value, key_column):
        rows = self.table[self.table[column] == value]
        return dict(zip(rows[key_column], rows["score"]))

    def grades_for_student(self, student_id):
        return self._select("student_id", student_id, "course_id")

    def grades_for_course(self, course_id):
        return self._select("course_id", course_id, "student_id")
