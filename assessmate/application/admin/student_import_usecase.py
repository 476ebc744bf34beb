import io
import logging

import pandas as pd
from sqlalchemy.orm import Session

from assessmate.core.exceptions import ValidationError
from assessmate.infrastructure.repositories.student_repository import STUDENT_FIELDS, StudentRepository
from assessmate.presentation.schemas.student_schema import StudentCreate

logger = logging.getLogger(__name__)


def read_student_rows(file_content: bytes, filename: str) -> list:
    """Parse a CSV or Excel roster into a list of StudentCreate payloads."""
    lowered = (filename or "").lower()
    try:
        # Everything as text so mobile numbers and roll numbers keep their digits
        if lowered.endswith(".csv"):
            df = pd.read_csv(io.BytesIO(file_content), dtype=str)
        elif lowered.endswith(".xlsx"):
            df = pd.read_excel(io.BytesIO(file_content), dtype=str)
        else:
            raise ValidationError("Unsupported file format. Please upload CSV or XLSX.")
    except ValidationError:
        raise
    except Exception as e:
        logger.warning(f"Could not parse roster file {filename}: {e}")
        raise ValidationError("Could not read the uploaded file")

    # Clean column names
    df.columns = [str(c).strip().lower() for c in df.columns]

    for col in STUDENT_FIELDS:
        if col not in df.columns:
            raise ValidationError(f"Missing required column: {col}")

    students = []
    for _, row in df.iterrows():
        values = {
            field: None if pd.isna(row[field]) else str(row[field]).strip()
            for field in STUDENT_FIELDS
        }
        students.append(StudentCreate(**values))
    return students


def import_students(db: Session, file_content: bytes, filename: str) -> int:
    logger.info(f"Processing roster import: {filename}")
    students = read_student_rows(file_content, filename)
    if not students:
        raise ValidationError("The uploaded file contains no students")

    count = StudentRepository(db).add_students_bulk(students)
    logger.info(f"Roster import finished. Inserted: {count}")
    return count
