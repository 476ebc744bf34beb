"""Tagged question variants.

Authoring payloads arrive flat; each variant picks out the fields it owns,
validates them, and maps itself onto the ``questions`` row plus the optional
``programming_questions`` satellite.
"""
from dataclasses import dataclass
from typing import Dict, Optional, Union

from assessmate.core.exceptions import ValidationError
from assessmate.core.validation import is_blank, require_text
from assessmate.infrastructure.db.models.question_model import PROGRAMMING_LANGUAGES, QUESTION_TYPES
from assessmate.presentation.schemas.question_schema import QuestionCreate

MCQ_LETTERS = ("A", "B", "C", "D")


@dataclass(frozen=True)
class MCQContent:
    options: Dict[str, str]
    answer_letter: str

    def question_columns(self) -> dict:
        columns = {f"option_{letter}": text for letter, text in self.options.items()}
        columns.update(correct_answer=self.answer_letter, flowchart_image=None)
        return columns

    def satellite_columns(self) -> Optional[dict]:
        return None


@dataclass(frozen=True)
class FlowchartContent:
    image_path: str
    answer_text: str

    def question_columns(self) -> dict:
        columns = {f"option_{letter}": None for letter in MCQ_LETTERS}
        columns.update(correct_answer=self.answer_text, flowchart_image=self.image_path)
        return columns

    def satellite_columns(self) -> Optional[dict]:
        return None


@dataclass(frozen=True)
class ProgrammingContent:
    language: str
    starter_code: Optional[str]
    expected_output: Optional[str]

    def question_columns(self) -> dict:
        columns = {f"option_{letter}": None for letter in MCQ_LETTERS}
        columns.update(correct_answer=None, flowchart_image=None)
        return columns

    def satellite_columns(self) -> Optional[dict]:
        return {
            "language": self.language,
            "starter_code": self.starter_code,
            "expected_output": self.expected_output,
        }


QuestionContent = Union[MCQContent, FlowchartContent, ProgrammingContent]


def _build_mcq(data: QuestionCreate) -> MCQContent:
    options = {}
    for letter in MCQ_LETTERS:
        value = getattr(data, f"option_{letter}")
        options[letter] = require_text(value, f"Option {letter} is required for MCQ questions")

    if is_blank(data.correct_answer):
        raise ValidationError("Correct answer is required for MCQ questions")
    letter = data.correct_answer.strip().upper()
    if letter not in MCQ_LETTERS:
        raise ValidationError("Correct answer must be one of A, B, C or D")
    return MCQContent(options=options, answer_letter=letter)


def _build_flowchart(data: QuestionCreate) -> FlowchartContent:
    image = require_text(data.flowchart_image, "Flowchart image is required for Flowchart questions")
    answer = require_text(data.correct_answer, "Answer is required for Flowchart questions")
    return FlowchartContent(image_path=image, answer_text=answer)


def _build_programming(data: QuestionCreate) -> ProgrammingContent:
    language = require_text(data.language, "Language is required for Programming questions")
    if language not in PROGRAMMING_LANGUAGES:
        raise ValidationError(f"Language must be one of {', '.join(PROGRAMMING_LANGUAGES)}")
    return ProgrammingContent(
        language=language,
        starter_code=data.starter_code,
        expected_output=data.expected_output,
    )


_BUILDERS = {
    "MCQ": _build_mcq,
    "Flowchart": _build_flowchart,
    "Programming": _build_programming,
}


def build_question_content(data: QuestionCreate) -> QuestionContent:
    question_type = data.question_type.strip() if data.question_type else data.question_type
    if question_type not in QUESTION_TYPES:
        raise ValidationError(f"Question type must be one of {', '.join(QUESTION_TYPES)}")
    return _BUILDERS[question_type](data)
