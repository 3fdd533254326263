"""Represents a student enrolled at the school."""

import typing

from ._common import find_by_name


class Student:
    """Represents a student.

    Attributes
    ----------
    student_id : str
        The student's identification string. Unique within a directory.
    name : str
        The student's name.
    department : str
        The department the student belongs to.

    Instances are immutable. When two :class:`Student` instances are compared
    for equality, only the :attr:`student_id` is used. A student also compares
    equal to its own id, so that code like ``student in ["S1", "S2"]`` works.

    """

    __slots__ = ("_student_id", "_name", "_department")

    def __init__(self, student_id, name, department):
        object.__setattr__(self, "_student_id", student_id)
        object.__setattr__(self, "_name", name)
        object.__setattr__(self, "_department", department)

    def __setattr__(self, attr, value):
        raise AttributeError(f"{self.__class__.__name__} is immutable.")

    @property
    def student_id(self) -> str:
        return self._student_id

    @property
    def name(self) -> str:
        return self._name

    @property
    def department(self) -> str:
        return self._department

    def __repr__(self):
        return (
            f"Student({self._student_id!r}, {self._name!r}, {self._department!r})"
        )

    def __hash__(self):
        return hash(self._student_id)

    def __eq__(self, other):
        """Equality checks always use the student id."""
        if isinstance(other, Student):
            return other.student_id == self._student_id
        else:
            return self._student_id == other


class Students(typing.Sequence[Student]):
    """A sequence of :class:`Student` instances.

    This behaves like a list of :class:`Student` instances, but also provides
    a :meth:`find` method that allows you to look up a student by (part of)
    their name, and :meth:`in_department` to select a department.

    """

    def __init__(self, students: typing.Iterable[Student]):
        self._students = list(students)

    def __getitem__(self, ix):
        return self._students[ix]

    def __len__(self):
        return len(self._students)

    def __repr__(self):
        return f"Students({self._students!r})"

    def in_department(self, department: str) -> "Students":
        """Return only those students belonging to the department.

        Parameters
        ----------
        department : str
            The department name. Matched exactly.

        Returns
        -------
        Students
            The matching students, in their original order.

        """
        return self.__class__(
            [s for s in self._students if s.department == department]
        )

    def find(self, pattern: str) -> Student:
        """Finds a student from a case-insensitive substring of their name.

        Raises
        ------
        ValueError
            If no student matches, or if more than one student matches.

        """
        return find_by_name(self._students, pattern, "student")
