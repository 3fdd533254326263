"""Tests of the AggregationEngine class."""

import collections
import math

import pandas as pd
import pytest

import gradestats

from util import make_engine


# tests: options =======================================================================


def test_engine_defaults_to_five_buckets():
    engine = make_engine()

    assert list(engine.opts.buckets) == ["excellent", "good", "medium", "pass", "fail"]


def test_engine_rejects_invalid_options():
    with pytest.raises(TypeError):
        make_engine(opts={"buckets": {}})

    with pytest.raises(ValueError):
        gradestats.EngineOptions(buckets=collections.OrderedDict([("a", 1), ("b", 2)]))


def test_engine_uses_configured_buckets():
    # given
    buckets = collections.OrderedDict([("pass", 60), ("fail", float("-inf"))])
    engine = make_engine(opts=gradestats.EngineOptions(buckets=buckets))

    # when
    report = engine.course_report("C1")

    # then
    assert report.distribution == {"pass": 3, "fail": 0}


# tests: gpa ===========================================================================


def test_gpa():
    engine = make_engine()

    assert engine.gpa("S1") == 86.0


def test_gpa_skips_unknown_courses():
    engine = make_engine()

    assert engine.gpa("S2") == (85 * 3 + 75 * 2) / 5


def test_gpa_without_data_is_none():
    engine = make_engine()

    # no grades at all
    assert engine.gpa("S3") is None
    # only grades in unknown courses
    assert engine.gpa("S5") is None
    # unknown student
    assert engine.gpa("nobody") is None


# tests: transcript ====================================================================


def test_transcript():
    # given
    engine = make_engine()

    # when
    transcript = engine.transcript("S2")

    # then
    assert isinstance(transcript, gradestats.Transcript)
    assert transcript.student.name == "Bob"
    assert [(e.course.course_id, e.score, e.credit) for e in transcript.entries] == [
        ("C1", 85, 3),
        ("C2", 75, 2),
    ]
    assert transcript.unresolved_courses == ("X9",)
    assert transcript.total_credit == 5
    assert transcript.gpa == 81.0


def test_transcript_of_unknown_student_is_not_found():
    # given
    engine = make_engine()

    # when
    transcript = engine.transcript("nobody")

    # then
    assert transcript == gradestats.NotFound("student", "nobody")
    assert not transcript


def test_transcript_of_student_without_grades_is_no_records():
    engine = make_engine()

    assert engine.transcript("S3") == gradestats.NoRecords("student", "S3")


def test_transcript_with_only_unknown_courses_has_no_gpa():
    # when
    transcript = make_engine().transcript("S5")

    # then
    assert transcript.entries == ()
    assert transcript.unresolved_courses == ("X9",)
    assert transcript.total_credit == 0
    assert transcript.gpa is None


def test_transcript_to_frame():
    # when
    table = make_engine().transcript("S1").to_frame()

    # then
    assert list(table.index) == ["C1", "C2"]
    assert table.loc["C2", "name"] == "Databases"
    assert table.loc["C1", "credit"] == 3


# tests: course_report =================================================================


def test_course_report():
    # given
    engine = make_engine()

    # when
    report = engine.course_report("C1")

    # then
    assert report.course.name == "Algorithms"
    assert report.enrollment == 3
    assert math.isclose(report.average, (90 + 85 + 85) / 3)
    assert report.highest == 90
    assert report.lowest == 85
    assert report.distribution == {
        "excellent": 1,
        "good": 2,
        "medium": 0,
        "pass": 0,
        "fail": 0,
    }


def test_course_report_ranking_breaks_ties_by_ledger_order():
    # when
    report = make_engine().course_report("C1")

    # then
    assert [(r.rank, r.student_id) for r in report.ranking] == [
        (1, "S1"),
        (2, "S2"),
        (3, "S4"),
    ]
    assert report.ranking[2].student.name == "Dan"


def test_course_report_ranking_follows_enumeration_order_of_ties():
    # given
    grades = [("S2", "C1", 85), ("S1", "C1", 85)]

    # when
    report = make_engine(grades=grades).course_report("C1")

    # then
    assert [r.student_id for r in report.ranking] == ["S2", "S1"]


def test_course_report_keeps_students_unknown_to_directory():
    # given
    grades = [("S1", "C1", 70), ("ghost", "C1", 95)]

    # when
    report = make_engine(grades=grades).course_report("C1")

    # then
    assert report.ranking[0].student_id == "ghost"
    assert report.ranking[0].student is None
    assert report.to_frame().loc["ghost", "rank"] == 1


def test_course_report_distribution_sums_to_enrollment():
    # given
    scores = [100, 90, 89.9, 60, 12]
    grades = [(f"S{i}", "C1", score) for i, score in enumerate(scores)]

    # when
    report = make_engine(grades=grades).course_report("C1")

    # then
    assert sum(report.distribution.values()) == report.enrollment == 5
    assert report.distribution["excellent"] == 2
    assert report.distribution["good"] == 1


def test_course_report_of_unknown_course_is_not_found():
    assert make_engine().course_report("C99") == gradestats.NotFound("course", "C99")


def test_course_report_of_course_without_grades_is_no_records():
    assert make_engine().course_report("C4") == gradestats.NoRecords("course", "C4")


# tests: department_summary ============================================================


def test_department_summary():
    # when
    summary = make_engine().department_summary("CS")

    # then
    assert summary.department == "CS"
    assert summary.student_count == 3
    assert summary.students_with_grades == 2
    assert summary.students_without_grades == 1
    assert summary.gpas == {"S1": 86.0, "S2": 81.0}
    assert summary.mean_gpa == 83.5


def test_department_summary_per_course_statistics():
    # when
    summary = make_engine().department_summary("CS")

    # then
    # X9 is unknown to the catalog, so it does not appear
    assert [(c.course.course_id, c.count, c.average) for c in summary.courses] == [
        ("C1", 2, 87.5),
        ("C2", 2, 77.5),
    ]
    assert summary.to_frame().loc["C2", "count"] == 2


def test_department_summary_leaves_students_without_gpa_out_of_the_mean():
    # when
    summary = make_engine().department_summary("Math")

    # then
    expected = (59.9 * 4 + 85 * 3) / 7
    assert summary.students_with_grades == 2
    assert summary.gpas["S5"] is None
    assert math.isclose(summary.gpas["S4"], expected)
    assert math.isclose(summary.mean_gpa, expected)


def test_department_summary_without_any_grades():
    # when
    summary = make_engine().department_summary("History")

    # then
    assert summary.student_count == 1
    assert summary.students_with_grades == 0
    assert summary.mean_gpa is None
    assert summary.courses == ()
    assert len(summary.to_frame()) == 0


def test_department_summary_of_empty_department_is_no_records():
    assert make_engine().department_summary("Physics") == gradestats.NoRecords(
        "department", "Physics"
    )


def test_students_with_grades_equals_student_count_iff_all_have_grades():
    # given
    engine = make_engine(grades=[("S1", "C1", 90), ("S2", "C2", 60), ("S3", "C1", 70)])

    # when
    summary = engine.department_summary("CS")

    # then
    assert summary.students_with_grades == summary.student_count == 3


# tests: teacher_summary ===============================================================


def test_teacher_summary():
    # when
    summary = make_engine().teacher_summary("Turing")

    # then
    assert [s.course.course_id for s in summary.courses] == ["C1", "C2", "C4"]
    assert [s.enrollment for s in summary.courses] == [3, 2, 0]
    assert summary.total_enrollment == 5


def test_teacher_summary_mean_enrollment_counts_empty_courses():
    summary = make_engine().teacher_summary("Turing")

    assert math.isclose(summary.mean_enrollment, 5 / 3)


def test_teacher_summary_mean_course_average_leaves_out_empty_courses():
    # when
    summary = make_engine().teacher_summary("Turing")

    # then
    # an unweighted average of averages: C1 has 3 students, C2 has 2
    c1 = (90 + 85 + 85) / 3
    c2 = (80 + 75) / 2
    assert math.isclose(summary.mean_course_average, (c1 + c2) / 2)


def test_teacher_summary_empty_course():
    # when
    seminar = make_engine().teacher_summary("Turing").courses[2]

    # then
    assert seminar.average is None
    assert sum(seminar.distribution.values()) == 0


def test_teacher_summary_course_average_matches_course_report():
    # given
    engine = make_engine()

    # when
    summary = engine.teacher_summary("Turing")
    report = engine.course_report("C1")

    # then
    assert summary.courses[0].average == report.average
    assert summary.courses[0].distribution == report.distribution


def test_teacher_summary_with_only_empty_courses():
    # when
    summary = make_engine(grades=[]).teacher_summary("Turing")

    # then
    assert summary.mean_enrollment == 0
    assert summary.mean_course_average is None


def test_teacher_summary_of_unknown_teacher_is_no_records():
    assert make_engine().teacher_summary("Knuth") == gradestats.NoRecords(
        "teacher", "Knuth"
    )


def test_teacher_summary_to_frame():
    # when
    table = make_engine().teacher_summary("Noether").to_frame()

    # then
    assert list(table.columns) == [
        "name",
        "enrollment",
        "average",
        "excellent",
        "good",
        "medium",
        "pass",
        "fail",
    ]
    assert table.loc["C3", "fail"] == 1


# tests: statelessness =================================================================


def test_queries_are_idempotent():
    # given
    engine = make_engine()

    # then
    for query, arg in [
        (engine.transcript, "S2"),
        (engine.course_report, "C1"),
        (engine.department_summary, "CS"),
        (engine.teacher_summary, "Turing"),
    ]:
        assert query(arg) == query(arg)


def test_queries_do_not_modify_providers():
    # given
    engine = make_engine()
    before = engine.ledger.table.copy()

    # when
    engine.transcript("S2")
    engine.course_report("C1")
    engine.department_summary("Math")
    engine.teacher_summary("Turing")

    # then
    pd.testing.assert_frame_equal(engine.ledger.table, before)


def test_engine_reflects_current_provider_data():
    # given
    engine = make_engine()
    assert engine.gpa("S3") is None

    # when
    engine.ledger = gradestats.FrameGradeLedger.from_entries([("S3", "C3", 77)])

    # then
    assert engine.gpa("S3") == 77


# tests: non-finite scores =============================================================


def test_department_summary_average_of_infinite_score_is_none():
    # given
    engine = make_engine(grades=[("S1", "C1", float("inf")), ("S2", "C1", 80)])

    # when
    summary = engine.department_summary("CS")
    report = engine.course_report("C1")

    # then
    assert summary.courses[0].count == 2
    assert summary.courses[0].average is None
    assert report.average is None


def test_department_summary_counts_nan_scores_like_teacher_summary():
    # given
    engine = make_engine(grades=[("S1", "C1", float("nan")), ("S2", "C1", 80)])

    # when
    department = engine.department_summary("CS")
    teacher = engine.teacher_summary("Turing")

    # then
    assert department.courses[0].count == teacher.courses[0].enrollment == 2
    assert department.courses[0].average == teacher.courses[0].average == 80


# tests: hashing =======================================================================


def test_results_holding_dicts_are_not_hashable():
    # given
    engine = make_engine()

    # when/then
    with pytest.raises(TypeError):
        hash(engine.department_summary("CS"))

    with pytest.raises(TypeError):
        hash(engine.course_report("C1"))

    with pytest.raises(TypeError):
        hash(engine.teacher_summary("Turing"))

    assert hash(engine.transcript("S1")) == hash(engine.transcript("S1"))
