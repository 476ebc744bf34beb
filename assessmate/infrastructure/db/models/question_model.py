from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Enum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from ..base import Base

QUESTION_TYPES = ("MCQ", "Programming", "Flowchart")
PROGRAMMING_LANGUAGES = ("C", "C++", "Java", "Python", "Other")


# ---------------------------
# Questions
# ---------------------------
class Question(Base):
    __tablename__ = "questions"

    question_id = Column(Integer, primary_key=True, index=True)
    topic_id = Column(Integer, ForeignKey("topics.topic_id", ondelete="CASCADE"), index=True)
    question_type = Column(Enum(*QUESTION_TYPES, name="question_type"), nullable=False)
    question_text = Column(Text, nullable=False)
    option_A = Column(Text, nullable=True)
    option_B = Column(Text, nullable=True)
    option_C = Column(Text, nullable=True)
    option_D = Column(Text, nullable=True)
    # Letter A-D for MCQ, free-text expected output for Flowchart
    correct_answer = Column(Text, nullable=True)
    flowchart_image = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    topic = relationship("Topic", back_populates="questions")
    programming = relationship(
        "ProgrammingQuestion",
        back_populates="question",
        uselist=False,
        cascade="all, delete-orphan",
    )

    @property
    def answer(self):
        if self.question_type in ("MCQ", "Flowchart"):
            return self.correct_answer
        if self.question_type == "Programming" and self.programming is not None:
            return self.programming.expected_output
        return None

    # Flattened satellite columns, NULL for non-programming questions
    @property
    def language(self):
        return self.programming.language if self.programming else None

    @property
    def starter_code(self):
        return self.programming.starter_code if self.programming else None

    @property
    def expected_output(self):
        return self.programming.expected_output if self.programming else None


class ProgrammingQuestion(Base):
    __tablename__ = "programming_questions"

    prog_id = Column(Integer, primary_key=True, index=True)
    question_id = Column(Integer, ForeignKey("questions.question_id", ondelete="CASCADE"), unique=True)
    language = Column(Enum(*PROGRAMMING_LANGUAGES, name="programming_language"), nullable=False)
    starter_code = Column(Text, nullable=True)
    expected_output = Column(Text, nullable=True)

    question = relationship("Question", back_populates="programming")
