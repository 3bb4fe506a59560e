"""
Field-level validation for documents before they are written.

Every validator takes a plain dict (a request payload or a stored document
merged with updates) and returns a ValidationResult; none of them raise.
"""

import re
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

from pydantic import BaseModel, validate_email

EMAIL_RE = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")

QUIZ_STATUSES = ("active", "draft", "inactive")
CHALLENGE_STATUSES = ("active", "pending", "inactive")
REWARD_STATUSES = ("active", "inactive")
REWARD_TYPES = ("coupon", "discount", "cashback", "voucher")
VALUE_TYPES = ("fixed", "percentage")
DIFFICULTIES = ("easy", "medium", "hard")
ROLES = ("admin", "customer")
USER_STATUSES = ("active", "suspended")


class FieldError(BaseModel):
    field: str
    message: str


class ValidationResult(BaseModel):
    is_valid: bool
    errors: List[FieldError] = []


def _result(errors: List[FieldError]) -> ValidationResult:
    return ValidationResult(is_valid=not errors, errors=errors)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_blank(value: Any) -> bool:
    return not isinstance(value, str) or not value.strip()


def is_valid_email(email: Any) -> bool:
    if not isinstance(email, str) or EMAIL_RE.match(email) is None:
        return False
    # same rules as EmailStr on the stored models (rejects reserved domains like .test)
    try:
        validate_email(email)
    except ValueError:
        return False
    return True


def is_valid_points(points: Any) -> bool:
    if not _is_number(points) or points < 0:
        return False
    return float(points).is_integer()


def _as_utc(value: Any) -> Optional[datetime]:
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value)
        except ValueError:
            return None
    if not isinstance(value, datetime):
        return None
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def validate_question(question: Dict[str, Any]) -> ValidationResult:
    errors = []
    if _is_blank(question.get("question")):
        errors.append(FieldError(field="question", message="Question text is required"))

    options = question.get("options") or []
    if len(options) < 2:
        errors.append(FieldError(field="options", message="At least 2 options are required"))
    else:
        for index, option in enumerate(options):
            if _is_blank(option):
                errors.append(FieldError(field=f"options[{index}]", message=f"Option {index + 1} is required"))

    correct = question.get("correct_answer")
    if not isinstance(correct, int) or isinstance(correct, bool) or not 0 <= correct < len(options):
        errors.append(FieldError(field="correct_answer", message="Valid correct answer index is required"))
    return _result(errors)


def validate_quiz(quiz: Dict[str, Any]) -> ValidationResult:
    errors = []
    if _is_blank(quiz.get("title")):
        errors.append(FieldError(field="title", message="Quiz title is required"))
    if _is_blank(quiz.get("description")):
        errors.append(FieldError(field="description", message="Quiz description is required"))

    questions = quiz.get("questions") or []
    if not questions:
        errors.append(FieldError(field="questions", message="At least one question is required"))
    for index, question in enumerate(questions):
        for error in validate_question(question).errors:
            errors.append(FieldError(field=f"questions[{index}].{error.field}", message=error.message))

    if quiz.get("status") not in QUIZ_STATUSES:
        errors.append(FieldError(field="status", message="Invalid quiz status"))
    if _is_blank(quiz.get("category")):
        errors.append(FieldError(field="category", message="Quiz category is required"))
    if not is_valid_points(quiz.get("points")):
        errors.append(FieldError(field="points", message="Valid points value is required"))
    time_limit = quiz.get("time_limit")
    if not _is_number(time_limit) or time_limit <= 0:
        errors.append(FieldError(field="time_limit", message="Time limit must be greater than 0"))
    if quiz.get("difficulty") not in DIFFICULTIES:
        errors.append(FieldError(field="difficulty", message="Invalid difficulty level"))
    return _result(errors)


def validate_challenge(challenge: Dict[str, Any]) -> ValidationResult:
    errors = []
    if _is_blank(challenge.get("title")):
        errors.append(FieldError(field="title", message="Challenge title is required"))
    if _is_blank(challenge.get("description")):
        errors.append(FieldError(field="description", message="Challenge description is required"))
    if not is_valid_points(challenge.get("points")):
        errors.append(FieldError(field="points", message="Valid points value is required"))
    if challenge.get("status") not in CHALLENGE_STATUSES:
        errors.append(FieldError(field="status", message="Invalid challenge status"))
    if _is_blank(challenge.get("category")):
        errors.append(FieldError(field="category", message="Challenge category is required"))
    if challenge.get("difficulty") not in DIFFICULTIES:
        errors.append(FieldError(field="difficulty", message="Invalid difficulty level"))
    if not challenge.get("requirements"):
        errors.append(FieldError(field="requirements", message="At least one requirement is needed"))
    estimated_time = challenge.get("estimated_time")
    if not _is_number(estimated_time) or estimated_time <= 0:
        errors.append(FieldError(field="estimated_time", message="Estimated time must be greater than 0"))
    if _is_blank(challenge.get("creator")):
        errors.append(FieldError(field="creator", message="Challenge creator is required"))
    return _result(errors)


def validate_reward(
    reward: Dict[str, Any], now: Optional[datetime] = None, check_expiry: bool = True
) -> ValidationResult:
    errors = []
    if _is_blank(reward.get("title")):
        errors.append(FieldError(field="title", message="Reward title is required"))
    if _is_blank(reward.get("description")):
        errors.append(FieldError(field="description", message="Reward description is required"))
    if reward.get("type") not in REWARD_TYPES:
        errors.append(FieldError(field="type", message="Invalid reward type"))
    if not is_valid_points(reward.get("points_cost")):
        errors.append(FieldError(field="points_cost", message="Valid points cost is required"))
    value = reward.get("value")
    if not _is_number(value) or value <= 0:
        errors.append(FieldError(field="value", message="Reward value must be greater than 0"))
    if reward.get("value_type") not in VALUE_TYPES:
        errors.append(FieldError(field="value_type", message="Invalid value type"))
    stock = reward.get("stock")
    if not _is_number(stock) or stock < 0:
        errors.append(FieldError(field="stock", message="Stock must be a non-negative number"))
    if reward.get("status") not in REWARD_STATUSES:
        errors.append(FieldError(field="status", message="Invalid reward status"))

    if check_expiry and reward.get("expiry_date") is not None:
        expiry = _as_utc(reward["expiry_date"])
        if expiry is None or expiry <= (now or datetime.now(timezone.utc)):
            errors.append(FieldError(field="expiry_date", message="Expiry date must be in the future"))
    return _result(errors)


def validate_user(user: Dict[str, Any]) -> ValidationResult:
    errors = []
    if not is_valid_email(user.get("email")):
        errors.append(FieldError(field="email", message="Valid email address is required"))
    if user.get("role") not in ROLES:
        errors.append(FieldError(field="role", message="Invalid user role"))
    if not is_valid_points(user.get("points")):
        errors.append(FieldError(field="points", message="Points must be a non-negative integer"))
    if user.get("status") not in USER_STATUSES:
        errors.append(FieldError(field="status", message="Invalid user status"))
    return _result(errors)


def validate_quiz_submission(submission: Dict[str, Any], quiz: Dict[str, Any]) -> ValidationResult:
    errors = []
    if _is_blank(submission.get("quiz_id")):
        errors.append(FieldError(field="quiz_id", message="Quiz ID is required"))
    if _is_blank(submission.get("user_id")):
        errors.append(FieldError(field="user_id", message="User ID is required"))
    if not is_valid_email(submission.get("user_email")):
        errors.append(FieldError(field="user_email", message="Valid user email is required"))

    score = submission.get("score")
    if not _is_number(score) or score < 0:
        errors.append(FieldError(field="score", message="Score must be a non-negative number"))

    total = submission.get("total_questions")
    total_ok = _is_number(total) and total > 0
    if not total_ok:
        errors.append(FieldError(field="total_questions", message="Total questions must be greater than 0"))

    correct = submission.get("correct_answers")
    if not _is_number(correct) or correct < 0 or (total_ok and correct > total):
        errors.append(
            FieldError(field="correct_answers", message="Correct answers must be between 0 and total questions")
        )
    elif total_ok and _is_number(score) and _is_number(quiz.get("points")):
        max_score = round_half_up(correct / total * quiz["points"])
        if score > max_score:
            errors.append(FieldError(field="score", message="Score exceeds maximum possible points for this quiz"))
    return _result(errors)


def validate_required(obj: Dict[str, Any], required_fields: Iterable[str]) -> ValidationResult:
    errors = []
    for field in required_fields:
        value = obj.get(field)
        if not value or (isinstance(value, str) and not value.strip()):
            errors.append(FieldError(field=field, message=f"{field} is required"))
    return _result(errors)


def round_half_up(value: float) -> int:
    # Python's round() is banker's rounding; scores round .5 up
    return int(value + 0.5) if value >= 0 else -int(-value + 0.5)
