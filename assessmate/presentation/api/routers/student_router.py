from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile, status
from sqlalchemy.orm import Session
from assessmate.application.admin.student_import_usecase import import_students
from assessmate.core.exceptions import AssessMateError
from assessmate.infrastructure.repositories.student_repository import StudentRepository
from assessmate.presentation.dependencies import admin_required, get_db, get_student_repository
from assessmate.presentation.schemas.common_schema import CountResponse, MessageResponse
from assessmate.presentation.schemas.student_schema import (
    StudentBulkCreate,
    StudentCreate,
    StudentCreatedResponse,
    StudentPageResponse,
    StudentUpdate,
)
import logging

logger = logging.getLogger(__name__)

# Every roster route is admin-only
router = APIRouter(tags=["Students"], dependencies=[Depends(admin_required)])


@router.post("/add-student", response_model=StudentCreatedResponse, status_code=status.HTTP_201_CREATED)
def add_student(student: StudentCreate, repo: StudentRepository = Depends(get_student_repository)):
    try:
        student_id = repo.add_student(student)
        return {"message": "Student added successfully", "studentId": student_id}
    except AssessMateError as e:
        logger.warning(f"Add student rejected: {e.message}")
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.post("/add-students-bulk", response_model=CountResponse, status_code=status.HTTP_201_CREATED)
def add_students_bulk(payload: StudentBulkCreate, repo: StudentRepository = Depends(get_student_repository)):
    try:
        count = repo.add_students_bulk(payload.students)
        return {"message": f"Successfully added {count} students", "count": count}
    except AssessMateError as e:
        logger.warning(f"Bulk add rejected: {e.message}")
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.post("/import-students", response_model=CountResponse, status_code=status.HTTP_201_CREATED)
def import_students_file(file: UploadFile = File(None), db: Session = Depends(get_db)):
    if file is None or not file.filename:
        raise HTTPException(status_code=400, detail="No file uploaded")
    try:
        count = import_students(db, file.file.read(), file.filename)
        return {"message": f"Successfully added {count} students", "count": count}
    except AssessMateError as e:
        logger.warning(f"Roster import of {file.filename} rejected: {e.message}")
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("/students-count", response_model=CountResponse)
def students_count(repo: StudentRepository = Depends(get_student_repository)):
    try:
        count = repo.count_students()
        return {"message": f"{count} students", "count": count}
    except AssessMateError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("/students", response_model=StudentPageResponse)
def list_students(
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    repo: StudentRepository = Depends(get_student_repository),
):
    try:
        return repo.list_students(page, limit)
    except AssessMateError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("/search-students", response_model=StudentPageResponse)
def search_students(
    term: Optional[str] = Query(None),
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    repo: StudentRepository = Depends(get_student_repository),
):
    try:
        return repo.search_students(term, page, limit)
    except AssessMateError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.put("/student/{student_id}", response_model=MessageResponse)
def update_student(
    student_id: int,
    student: StudentUpdate,
    repo: StudentRepository = Depends(get_student_repository),
):
    try:
        repo.update_student(student_id, student)
        return {"message": "Student updated successfully"}
    except AssessMateError as e:
        logger.warning(f"Update of student {student_id} rejected: {e.message}")
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.delete("/student/{student_id}", response_model=MessageResponse)
def delete_student(student_id: int, repo: StudentRepository = Depends(get_student_repository)):
    try:
        repo.delete_student(student_id)
        return {"message": "Student deleted successfully"}
    except AssessMateError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
