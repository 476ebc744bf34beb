from .user_model import UserModel, ADMIN_ROLE, STUDENT_ROLE
from .category_model import Category
from .subject_model import Subject
from .topic_model import Topic
from .question_model import Question, ProgrammingQuestion, QUESTION_TYPES, PROGRAMMING_LANGUAGES

__all__ = [
    "UserModel",
    "ADMIN_ROLE",
    "STUDENT_ROLE",
    "Category",
    "Subject",
    "Topic",
    "Question",
    "ProgrammingQuestion",
    "QUESTION_TYPES",
    "PROGRAMMING_LANGUAGES",
]
