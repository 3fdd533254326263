"""A package for computing academic statistics from student, course and grade data."""

from .core import (
    Student,
    Students,
    Course,
    Courses,
    NotFound,
    NoRecords,
    Transcript,
    TranscriptEntry,
    RankedStudent,
    CourseReport,
    CourseEnrollment,
    DepartmentSummary,
    CourseStatistics,
    TeacherSummary,
)

from .scales import DEFAULT_BUCKETS, map_scores_to_buckets

from .providers import (
    StudentDirectory,
    CourseCatalog,
    GradeLedger,
    InMemoryStudentDirectory,
    InMemoryCourseCatalog,
    FrameGradeLedger,
)

from .engine import AggregationEngine, EngineOptions

from . import statistics

__all__ = [
    "Student",
    "Students",
    "Course",
    "Courses",
    "NotFound",
    "NoRecords",
    "Transcript",
    "TranscriptEntry",
    "RankedStudent",
    "CourseReport",
    "CourseEnrollment",
    "DepartmentSummary",
    "CourseStatistics",
    "TeacherSummary",
    "DEFAULT_BUCKETS",
    "map_scores_to_buckets",
    "StudentDirectory",
    "CourseCatalog",
    "GradeLedger",
    "InMemoryStudentDirectory",
    "InMemoryCourseCatalog",
    "FrameGradeLedger",
    "AggregationEngine",
    "EngineOptions",
    "statistics",
]
