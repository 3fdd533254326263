import gradestats


STUDENTS = [
    gradestats.Student("S1", "Alice", "CS"),
    gradestats.Student("S2", "Bob", "CS"),
    gradestats.Student("S3", "Carol", "CS"),
    gradestats.Student("S4", "Dan", "Math"),
    gradestats.Student("S5", "Eve", "Math"),
    gradestats.Student("S6", "Frank", "History"),
]

COURSES = [
    gradestats.Course("C1", "Algorithms", 3, "Turing"),
    gradestats.Course("C2", "Databases", 2, "Turing"),
    gradestats.Course("C3", "Calculus", 4, "Noether"),
    gradestats.Course("C4", "Seminar", 1, "Turing"),
]

# X9 is not in the catalog
GRADES = [
    ("S1", "C1", 90),
    ("S1", "C2", 80),
    ("S2", "C1", 85),
    ("S2", "C2", 75),
    ("S2", "X9", 50),
    ("S4", "C3", 59.9),
    ("S4", "C1", 85),
    ("S5", "X9", 70),
]


def make_engine(students=None, courses=None, grades=None, opts=None):
    """An engine over in-memory providers, by default holding the example data."""
    return gradestats.AggregationEngine(
        gradestats.InMemoryStudentDirectory(STUDENTS if students is None else students),
        gradestats.InMemoryCourseCatalog(COURSES if courses is None else courses),
        gradestats.FrameGradeLedger.from_entries(GRADES if grades is None else grades),
        opts=opts,
    )
