"""Unit tests for RecordCodec."""

import logging

import pytest

from ccrm.codec import (
    COURSE_HEADER,
    STUDENT_EXPORT_HEADER,
    RecordCodec,
    format_row,
    split_row,
)
from ccrm.domain import (
    Course,
    CourseCode,
    Enrollment,
    Grade,
    Instructor,
    Semester,
    Student,
)
from ccrm.storage import PathNotFoundError, VirtualStorage, create_storage


@pytest.fixture
def storage() -> VirtualStorage:
    return create_storage()


@pytest.fixture
def codec(storage: VirtualStorage) -> RecordCodec:
    return RecordCodec(storage)


@pytest.fixture
def instructors(codec: RecordCodec) -> dict[str, Instructor]:
    return codec.import_instructors("data/instructors.csv")


@pytest.mark.unit
class TestRowHelpers:
    """Tests for format_row and split_row."""

    def test_split_trims_fields(self) -> None:
        assert split_row(" s001 , B23001,Alice ") == ["s001", "B23001", "Alice"]

    def test_format_plain_fields(self) -> None:
        assert format_row(["CS101", "Intro", 3]) == "CS101,Intro,3"

    def test_format_quotes_embedded_comma(self) -> None:
        line = format_row(["i03", "Dr. Who", "who@example.com", "Time, Space"])

        assert line == 'i03,Dr. Who,who@example.com,"Time, Space"'
        assert split_row(line)[3] == "Time, Space"


@pytest.mark.unit
class TestImport:
    """Tests for importing the seeded data."""

    def test_import_students(self, codec: RecordCodec) -> None:
        students = codec.import_students("data/students.csv")

        assert list(students) == ["s001", "s002", "s003"]
        alice = students["s001"]
        assert alice.reg_no == "B23001"
        assert alice.full_name == "Alice Johnson"
        assert alice.email == "alice@example.com"
        assert alice.active is True

    def test_import_instructors(self, instructors: dict[str, Instructor]) -> None:
        assert list(instructors) == ["i01", "i02"]
        assert instructors["i02"].department == "Physics & Math"

    def test_import_courses(self, codec: RecordCodec, instructors: dict[str, Instructor]) -> None:
        courses = codec.import_courses("data/courses.csv", instructors)

        assert list(courses) == [
            CourseCode("CS", 101),
            CourseCode("MA", 201),
            CourseCode("PY", 105),
        ]
        calculus = courses[CourseCode("MA", 201)]
        assert calculus.title == "Calculus I"
        assert calculus.credits == 4
        assert calculus.semester is Semester.FALL
        assert calculus.instructor_id == "i02"

    def test_missing_file(self, codec: RecordCodec) -> None:
        with pytest.raises(PathNotFoundError):
            codec.import_students("data/nope.csv")

    def test_header_only_file(self, storage: VirtualStorage, codec: RecordCodec) -> None:
        storage.write("data/students.csv", ["anything at all"])

        assert codec.import_students("data/students.csv") == {}

    def test_blank_lines_ignored(self, storage: VirtualStorage, codec: RecordCodec) -> None:
        storage.write(
            "data/students.csv",
            ["id,regNo,fullName,email", "", "s009,X1,Zed,z@example.com", "   "],
        )

        assert list(codec.import_students("data/students.csv")) == ["s009"]

    def test_student_active_column(self, storage: VirtualStorage, codec: RecordCodec) -> None:
        storage.write(
            "data/students.csv",
            [
                STUDENT_EXPORT_HEADER,
                "s001,B23001,Alice Johnson,alice@example.com,false",
                "s002,B23002,Bob Smith,bob@example.com,TRUE",
            ],
        )

        students = codec.import_students("data/students.csv")

        assert students["s001"].active is False
        assert students["s002"].active is True


@pytest.mark.unit
class TestMalformedLines:
    """Tests for the skip-and-continue policy."""

    def test_short_student_line_skipped(
        self, storage: VirtualStorage, codec: RecordCodec, caplog: pytest.LogCaptureFixture
    ) -> None:
        caplog.set_level(logging.WARNING, logger="ccrm.codec")
        storage.write(
            "data/students.csv",
            ["id,regNo,fullName,email", "s001,B23001", "s002,B23002,Bob Smith,bob@example.com"],
        )

        students = codec.import_students("data/students.csv")

        assert list(students) == ["s002"]
        assert "Skipping invalid student line 2" in caplog.text

    def test_bad_active_flag_skipped(self, storage: VirtualStorage, codec: RecordCodec) -> None:
        storage.write(
            "data/students.csv",
            [STUDENT_EXPORT_HEADER, "s001,B23001,Alice Johnson,alice@example.com,maybe"],
        )

        assert codec.import_students("data/students.csv") == {}

    def test_short_instructor_line_skipped(
        self, storage: VirtualStorage, codec: RecordCodec
    ) -> None:
        storage.write(
            "data/instructors.csv",
            ["id,fullName,email,department", "i09,Nobody", "i01,Dr. Evelyn Reed,e@x.com,CS"],
        )

        assert list(codec.import_instructors("data/instructors.csv")) == ["i01"]

    @pytest.mark.parametrize(
        "line",
        [
            "CS999,Bad Credits,three,FALL,i01",
            "CS998,Zero Credits,0,FALL,i01",
            "CS997,Bad Semester,3,AUTUMN,i01",
            "C-S1,Bad Code,3,FALL,i01",
            "CS1000,Out Of Range,3,FALL,i01",
            "CS996,Too Short,3",
            "CS995,Underscore Credits,1_8,FALL,i01",
            "CS994,Arabic Digits,\u0661\u0668,FALL,i01",
        ],
    )
    def test_bad_course_line_skipped(
        self,
        storage: VirtualStorage,
        codec: RecordCodec,
        instructors: dict[str, Instructor],
        caplog: pytest.LogCaptureFixture,
        line: str,
    ) -> None:
        caplog.set_level(logging.WARNING, logger="ccrm.codec")
        storage.write(
            "data/courses.csv", [COURSE_HEADER, line, "CS101,Intro to Programming,3,FALL,i01"]
        )

        courses = codec.import_courses("data/courses.csv", instructors)

        assert list(courses) == [CourseCode("CS", 101)]
        assert "Skipping invalid course line 2" in caplog.text

    def test_unknown_instructor_means_unassigned(
        self, storage: VirtualStorage, codec: RecordCodec, instructors: dict[str, Instructor]
    ) -> None:
        storage.write("data/courses.csv", [COURSE_HEADER, "CS101,Intro,3,FALL,i99"])

        courses = codec.import_courses("data/courses.csv", instructors)

        assert courses[CourseCode("CS", 101)].instructor_id is None

    def test_na_instructor_reads_as_unassigned(
        self, storage: VirtualStorage, codec: RecordCodec, instructors: dict[str, Instructor]
    ) -> None:
        storage.write("data/courses.csv", [COURSE_HEADER, "CS101,Intro,3,FALL,N/A"])

        courses = codec.import_courses("data/courses.csv", instructors)

        assert courses[CourseCode("CS", 101)].instructor_id is None

    def test_lowercase_semester_accepted(
        self, storage: VirtualStorage, codec: RecordCodec, instructors: dict[str, Instructor]
    ) -> None:
        storage.write("data/courses.csv", [COURSE_HEADER, "CS101,Intro,3,spring,i01"])

        courses = codec.import_courses("data/courses.csv", instructors)

        assert courses[CourseCode("CS", 101)].semester is Semester.SPRING


    def test_duplicate_id_keeps_first_row(
        self, storage: VirtualStorage, codec: RecordCodec, caplog: pytest.LogCaptureFixture
    ) -> None:
        caplog.set_level(logging.WARNING, logger="ccrm.codec")
        storage.write(
            "data/students.csv",
            [
                "id,regNo,fullName,email",
                "s001,B1,Alice,alice@example.com",
                "s001,B2,Mallory,mallory@example.com",
            ],
        )

        students = codec.import_students("data/students.csv")

        assert students["s001"].full_name == "Alice"
        assert "Skipping duplicate student line 3" in caplog.text

    def test_duplicate_course_code_ignores_case(
        self,
        storage: VirtualStorage,
        codec: RecordCodec,
        instructors: dict[str, Instructor],
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        caplog.set_level(logging.WARNING, logger="ccrm.codec")
        storage.write(
            "data/courses.csv",
            [COURSE_HEADER, "cs101,Intro,3,FALL,i01", "CS101,Other Intro,4,SPRING,i02"],
        )

        courses = codec.import_courses("data/courses.csv", instructors)

        assert list(courses) == [CourseCode("CS", 101)]
        assert courses[CourseCode("CS", 101)].title == "Intro"
        assert "Skipping duplicate course line 3" in caplog.text


@pytest.mark.unit
class TestExport:
    """Tests for rendering and exporting."""

    def test_export_students(self, storage: VirtualStorage, codec: RecordCodec) -> None:
        students = [
            Student("s001", "B23001", "Alice Johnson", "alice@example.com"),
            Student("s002", "B23002", "Bob Smith", "bob@example.com", active=False),
        ]

        count = codec.export_students("out.csv", students)

        assert count == 2
        assert storage.read_lines("out.csv") == [
            "id,regNo,fullName,email,active",
            "s001,B23001,Alice Johnson,alice@example.com,true",
            "s002,B23002,Bob Smith,bob@example.com,false",
        ]

    def test_export_courses_unassigned(self, storage: VirtualStorage, codec: RecordCodec) -> None:
        courses = [
            Course(CourseCode("CS", 101), "Intro to Programming", 3, Semester.FALL, "i01"),
            Course(CourseCode("HI", 110), "World History", 2, Semester.WINTER),
        ]

        codec.export_courses("out.csv", courses)

        assert storage.read_lines("out.csv") == [
            "code,title,credits,semester,instructorId",
            "CS101,Intro to Programming,3,FALL,i01",
            "HI110,World History,2,WINTER,N/A",
        ]

    def test_export_instructors(self, storage: VirtualStorage, codec: RecordCodec) -> None:
        instructors = [Instructor("i01", "Dr. Evelyn Reed", "e.reed@example.com", "CS")]

        codec.export_instructors("out.csv", instructors)

        assert storage.read_lines("out.csv") == [
            "id,fullName,email,department",
            "i01,Dr. Evelyn Reed,e.reed@example.com,CS",
        ]

    def test_export_enrollments(self, storage: VirtualStorage, codec: RecordCodec) -> None:
        student = Student("s001", "B23001", "Alice Johnson", "alice@example.com")
        course = Course(CourseCode("CS", 101), "Intro to Programming")

        codec.export_enrollments("out.csv", [Enrollment(student, course, Grade.A)])

        assert storage.read_lines("out.csv") == ["studentId,courseCode,grade", "s001,CS101,A"]

    def test_export_empty_collection(self, storage: VirtualStorage, codec: RecordCodec) -> None:
        assert codec.export_students("out.csv", []) == 0
        assert storage.read_lines("out.csv") == ["id,regNo,fullName,email,active"]

    def test_courses_round_trip(
        self, storage: VirtualStorage, codec: RecordCodec, instructors: dict[str, Instructor]
    ) -> None:
        original = codec.import_courses("data/courses.csv", instructors)
        codec.export_courses("copy.csv", original.values())

        assert codec.import_courses("copy.csv", instructors) == original

    def test_students_round_trip_with_comma(
        self, storage: VirtualStorage, codec: RecordCodec
    ) -> None:
        student = Student("s010", "C24001", "Brown, Charlie", "cb@example.com", active=False)
        codec.export_students("copy.csv", [student])

        restored = codec.import_students("copy.csv")["s010"]

        assert restored.full_name == "Brown, Charlie"
        assert restored.active is False


@pytest.mark.unit
class TestImportEnrollments:
    """Tests for enrollment rows."""

    def test_resolves_against_entities(
        self, storage: VirtualStorage, codec: RecordCodec, instructors: dict[str, Instructor]
    ) -> None:
        students = codec.import_students("data/students.csv")
        courses = codec.import_courses("data/courses.csv", instructors)
        storage.write(
            "data/enrollments.csv",
            [
                "studentId,courseCode,grade",
                "s001,CS101,A",
                "s999,CS101,A",
                "s001,ZZ999,B",
                "s002,MA201,Q",
                "s002,MA201,NOT_GRADED",
            ],
        )

        records = codec.import_enrollments("data/enrollments.csv", students, courses)

        assert [(r.student.id, str(r.course.code), r.grade) for r in records] == [
            ("s001", "CS101", Grade.A),
            ("s002", "MA201", Grade.NOT_GRADED),
        ]
        assert records[0].student is students["s001"]
