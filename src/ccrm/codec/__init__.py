"""Record Codec - Delimited-text import and export of CCRM records."""

from ccrm.codec.codec import (
    COURSE_HEADER,
    ENROLLMENT_HEADER,
    INSTRUCTOR_HEADER,
    STUDENT_EXPORT_HEADER,
    STUDENT_IMPORT_HEADER,
    UNASSIGNED_INSTRUCTOR,
    EnrollmentRecord,
    RecordCodec,
    format_row,
    split_row,
)
from ccrm.codec.exceptions import CodecError, MalformedRecordError

__all__ = [
    "COURSE_HEADER",
    "ENROLLMENT_HEADER",
    "INSTRUCTOR_HEADER",
    "STUDENT_EXPORT_HEADER",
    "STUDENT_IMPORT_HEADER",
    "UNASSIGNED_INSTRUCTOR",
    "CodecError",
    "EnrollmentRecord",
    "MalformedRecordError",
    "RecordCodec",
    "format_row",
    "split_row",
]
