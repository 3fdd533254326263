"""Represents a course and collections of courses."""

import typing

from ._common import find_by_name


class Course:
    """Represents a course in the catalog.

    Attributes
    ----------
    course_id : str
        The course's identification string. Unique within a catalog.
    name : str
        The course's name.
    credit : float
        The credit weight of the course, used when computing GPAs. Not
        validated; a catalog is responsible for supplying sensible values.
    teacher : str
        The name of the teacher giving the course.

    Like :class:`Student`, instances are immutable and compare by id.

    """

    __slots__ = ("_course_id", "_name", "_credit", "_teacher")

    def __init__(self, course_id, name, credit, teacher):
        object.__setattr__(self, "_course_id", course_id)
        object.__setattr__(self, "_name", name)
        object.__setattr__(self, "_credit", credit)
        object.__setattr__(self, "_teacher", teacher)

    def __setattr__(self, attr, value):
        raise AttributeError(f"{self.__class__.__name__} is immutable.")

    @property
    def course_id(self) -> str:
        return self._course_id

    @property
    def name(self) -> str:
        return self._name

    @property
    def credit(self) -> float:
        return self._credit

    @property
    def teacher(self) -> str:
        return self._teacher

    def __repr__(self):
        return (
            f"Course({self._course_id!r}, {self._name!r}, "
            f"credit={self._credit!r}, teacher={self._teacher!r})"
        )

    def __hash__(self):
        return hash(self._course_id)

    def __eq__(self, other):
        if isinstance(other, Course):
            return other.course_id == self._course_id
        else:
            return self._course_id == other


class Courses(typing.Sequence[Course]):
    """A sequence of courses.

    Behaves essentially like a standard Python list of :class:`Course`, but has
    some additional methods which make it faster to select courses.

    """

    def __init__(self, courses: typing.Iterable[Course]):
        self._courses = list(courses)

    def __getitem__(self, ix):
        return self._courses[ix]

    def __len__(self):
        return len(self._courses)

    def __add__(self, other):
        """Unions :class:`Courses`."""
        return Courses(self._courses + list(other))

    def __repr__(self):
        return f"Courses({self._courses!r})"

    @property
    def ids(self) -> typing.List[str]:
        """The course ids, in order."""
        return [c.course_id for c in self._courses]

    def taught_by(self, teacher: str) -> "Courses":
        """Return only those courses given by the teacher.

        Parameters
        ----------
        teacher : str
            The teacher's name. Matched exactly.

        Returns
        -------
        Courses
            The matching courses, in their original order.

        """
        return self.__class__([c for c in self._courses if c.teacher == teacher])

    def find(self, pattern: str) -> Course:
        """Finds a course from a case-insensitive substring of its name.

        Raises
        ------
        ValueError
            If no course matches, or if more than one course matches.

        """
        return find_by_name(self._courses, pattern, "course")
