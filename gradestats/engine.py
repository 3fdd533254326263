"""The aggregation engine: statistics computed on demand from the providers."""

from __future__ import annotations

import dataclasses
import logging
import typing

import pandas as pd

from . import statistics
from .core import (
    CourseEnrollment,
    CourseReport,
    CourseStatistics,
    DepartmentSummary,
    NoRecords,
    NotFound,
    RankedStudent,
    TeacherSummary,
    Transcript,
    TranscriptEntry,
)
from .providers import CourseCatalog, GradeLedger, StudentDirectory
from .scales import DEFAULT_BUCKETS, check_buckets

logger = logging.getLogger(__name__)


# EngineOptions ------------------------------------------------------------------------


@dataclasses.dataclass
class EngineOptions:
    """Configures the behavior of an :class:`AggregationEngine`.

    Attributes
    ----------
    buckets: OrderedDict
        Bucket labels mapped to lower score thresholds, used for every
        distribution the engine computes. Thresholds must be strictly
        decreasing. Default: :attr:`gradestats.scales.DEFAULT_BUCKETS`.

    """

    buckets: typing.Mapping[str, float] = dataclasses.field(
        default_factory=lambda: DEFAULT_BUCKETS.copy()
    )

    def __post_init__(self):
        check_buckets(self.buckets)


# AggregationEngine ====================================================================


class AggregationEngine:
    """Computes academic statistics from three read-only providers.

    The engine keeps no state between calls: every query asks the providers
    for the current records, so results always reflect what they hold at the
    time. The providers are never modified.

    Queries return structured results. When the requested student, course,
    department or teacher does not exist or has nothing to aggregate, a
    :class:`~gradestats.NotFound` or :class:`~gradestats.NoRecords` value is
    returned instead of raising.

    Grade entries that reference a course the catalog does not know are
    skipped in every credit-weighted or per-course computation, since their
    credit is unknown.

    Parameters
    ----------
    directory : StudentDirectory
    catalog : CourseCatalog
    ledger : GradeLedger
    opts : Optional[EngineOptions]

    Example
    -------
    >>> engine = AggregationEngine(directory, catalog, ledger)
    >>> engine.gpa("S1")
    86.0
    >>> engine.course_report("NOPE")
    NotFound(kind='course', key='NOPE')

    """

    def __init__(
        self,
        directory: StudentDirectory,
        catalog: CourseCatalog,
        ledger: GradeLedger,
        opts: typing.Optional[EngineOptions] = None,
    ):
        if opts is not None and not isinstance(opts, EngineOptions):
            raise TypeError("opts must be an EngineOptions instance.")

        self.directory = directory
        self.catalog = catalog
        self.ledger = ledger
        self.opts = opts if opts is not None else EngineOptions()

    def __repr__(self):
        return (
            f"AggregationEngine(directory={self.directory!r}, "
            f"catalog={self.catalog!r}, ledger={self.ledger!r})"
        )

    def _distribution(self, scores):
        return statistics.distribution(scores, self.opts.buckets)

    def _student_grades(self, student_id):
        return dict(self.ledger.grades_for_student(student_id))

    def _course_grades(self, course_id):
        return dict(self.ledger.grades_for_course(course_id))

    def _resolve(self, student_id, grades):
        resolved, unresolved = statistics.resolve_courses(grades, self.catalog)
        for course_id in unresolved:
            logger.debug(
                "Skipping grade of %s in unknown course %s.", student_id, course_id
            )
        return resolved, unresolved

    # students -------------------------------------------------------------------------

    def gpa(self, student_id: str) -> typing.Optional[float]:
        """The credit-weighted mean score of a student.

        Returns
        -------
        Optional[float]
            The GPA, or `None` if the student has no grades in known courses.

        """
        return statistics.weighted_gpa(self._student_grades(student_id), self.catalog)

    def transcript(self, student_id: str):
        """Collect a student's grades along with course credits and GPA.

        Returns
        -------
        Union[Transcript, NotFound, NoRecords]
            :class:`NotFound` if the directory does not know the student,
            :class:`NoRecords` if the student has no grade entries.

        """
        logger.debug("Computing transcript of %s.", student_id)

        student = self.directory.lookup(student_id)
        if student is None:
            return NotFound("student", student_id)

        grades = self._student_grades(student_id)
        if not grades:
            return NoRecords("student", student_id)

        resolved, unresolved = self._resolve(student_id, grades)
        entries = tuple(
            TranscriptEntry(course=course, score=score, credit=course.credit)
            for course, score in resolved
        )

        return Transcript(
            student=student,
            entries=entries,
            unresolved_courses=tuple(unresolved),
            total_credit=float(sum(e.credit for e in entries)),
            gpa=statistics.weighted_mean(
                [e.score for e in entries], [e.credit for e in entries]
            ),
        )

    # courses --------------------------------------------------------------------------

    def course_report(self, course_id: str):
        """Rank the students of a course and summarize their scores.

        Returns
        -------
        Union[CourseReport, NotFound, NoRecords]
            :class:`NotFound` if the catalog does not know the course,
            :class:`NoRecords` if nobody has a grade in it.

        """
        logger.debug("Computing report of course %s.", course_id)

        course = self.catalog.lookup(course_id)
        if course is None:
            return NotFound("course", course_id)

        grades = self._course_grades(course_id)
        if not grades:
            return NoRecords("course", course_id)

        scores = pd.Series(grades, dtype=float)
        ranks = statistics.rank(scores)
        ranking = tuple(
            RankedStudent(
                rank=int(position),
                student_id=student_id,
                student=self.directory.lookup(student_id),
                score=grades[student_id],
            )
            for student_id, position in ranks.items()
        )

        return CourseReport(
            course=course,
            ranking=ranking,
            distribution=self._distribution(scores),
            average=statistics.average(scores),
            highest=float(scores.max()),
            lowest=float(scores.min()),
        )

    # departments ----------------------------------------------------------------------

    def department_summary(self, department: str):
        """Aggregate the GPAs and course choices of a department's students.

        Students without any grade entry count towards
        :attr:`DepartmentSummary.student_count` only. A student whose graded
        courses are all unknown to the catalog counts as having grades but
        has a GPA of `None`, which is left out of the mean GPA.

        Returns
        -------
        Union[DepartmentSummary, NoRecords]
            :class:`NoRecords` if the department has no students.

        """
        logger.debug("Computing summary of department %s.", department)

        students = list(self.directory.filter_by_department(department))
        if not students:
            return NoRecords("department", department)

        gpas = {}
        courses = {}
        rows = []
        for student in students:
            grades = self._student_grades(student.student_id)
            if not grades:
                continue

            resolved, _ = self._resolve(student.student_id, grades)
            gpas[student.student_id] = statistics.weighted_mean(
                [score for _, score in resolved], [c.credit for c, _ in resolved]
            )
            for course, score in resolved:
                courses.setdefault(course.course_id, course)
                rows.append((course.course_id, score))

        table = pd.DataFrame(rows, columns=["course_id", "score"])
        table = table.astype({"score": float})
        per_course = table.groupby("course_id", sort=False)["score"]

        return DepartmentSummary(
            department=department,
            student_count=len(students),
            students_with_grades=len(gpas),
            gpas=gpas,
            mean_gpa=statistics.average([g for g in gpas.values() if g is not None]),
            courses=tuple(
                CourseEnrollment(
                    course=courses[course_id],
                    count=len(scores),
                    average=statistics.average(scores),
                )
                for course_id, scores in per_course
            ),
        )

    # teachers -------------------------------------------------------------------------

    def teacher_summary(self, teacher: str):
        """Summarize every course given by a teacher.

        The mean course average is a plain average of the per-course averages:
        it is not weighted by enrollment, and courses nobody is enrolled in are
        left out of it. They still count, as zero, towards the mean enrollment.

        Returns
        -------
        Union[TeacherSummary, NoRecords]
            :class:`NoRecords` if the teacher gives no course.

        """
        logger.debug("Computing summary of teacher %s.", teacher)

        courses = list(self.catalog.filter_by_teacher(teacher))
        if not courses:
            return NoRecords("teacher", teacher)

        stats = []
        for course in courses:
            grades = self._course_grades(course.course_id)
            stats.append(
                CourseStatistics(
                    course=course,
                    enrollment=len(grades),
                    average=statistics.average(grades),
                    distribution=self._distribution(grades),
                )
            )

        total_enrollment = sum(s.enrollment for s in stats)
        averages = [
            s.average for s in stats if s.enrollment > 0 and s.average is not None
        ]

        return TeacherSummary(
            teacher=teacher,
            courses=tuple(stats),
            total_enrollment=total_enrollment,
            mean_enrollment=total_enrollment / len(stats),
            mean_course_average=statistics.average(averages),
        )
