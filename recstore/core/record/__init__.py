from .record_desc import RecordDesc
from .student_record import StudentRecord, STUDENT_DESC, RECORD_SIZE

__all__ = ["RecordDesc", "StudentRecord", "STUDENT_DESC", "RECORD_SIZE"]
