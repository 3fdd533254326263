from .student import Student, Students
from .course import Course, Courses
from .results import (
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
]
