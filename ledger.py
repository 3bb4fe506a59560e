"""
Points ledger: the only code that changes a user's points balance or a
reward's stock.

Every balance change is a single guarded ``$inc`` on the user document and
is recorded in the ``pointstransaction`` collection. Awards that must happen
at most once (report status levels, first quiz completion, challenge
approval) are claimed by inserting a transaction whose ``_id`` is the award
key, so a duplicate request loses on the unique ``_id`` and credits nothing.
Reward stock is decremented with a guarded ``$inc`` as well; a redemption
that loses the race for the last unit refunds its debit.
"""

import logging
import secrets
import string
from datetime import datetime, timezone
from typing import List, Optional, Sequence, Tuple

from bson import ObjectId
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError, PyMongoError

from database import db, create_document, parse_document
from schemas import Question, Quiz, QuizSubmission, Reward, RewardRedemption, PointsTransaction
from validation import round_half_up, validate_quiz_submission

logger = logging.getLogger(__name__)

COL_USER = "user"
COL_REPORT = "ewastereport"
COL_QUIZ_SUBMISSION = "quizsubmission"
COL_CHALLENGE = "challenge"
COL_PARTICIPATION = "challengeparticipation"
COL_REWARD = "reward"
COL_REDEMPTION = "rewardredemption"
COL_TRANSACTION = "pointstransaction"

REPORT_STATUSES = ("pending", "collected", "processed")
# Points unlocked by reaching each status; a report moving straight to
# processed unlocks every level below it too.
REPORT_LEVEL_POINTS = (("collected", 50), ("processed", 50))

COUPON_PREFIX = "ECO"
COUPON_ALPHABET = string.ascii_uppercase + string.digits
COUPON_LENGTH = 8


# ---------- Errors ----------
class LedgerError(Exception):
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFound(LedgerError):
    status_code = 404


class RewardNotFound(NotFound):
    pass


class InsufficientPoints(LedgerError):
    status_code = 400


class OutOfStock(LedgerError):
    status_code = 409


class RewardExpired(LedgerError):
    status_code = 409


class InvalidTransition(LedgerError):
    status_code = 400


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _oid(doc_id: str, what: str) -> ObjectId:
    if not ObjectId.is_valid(doc_id):
        raise NotFound(f"{what} not found")
    return ObjectId(doc_id)


# ---------- Balance ----------
def apply_points(user_id: str, delta: int, reason: str, reference: Optional[str] = None) -> int:
    """Add ``delta`` to the user's balance and return the new balance.

    Debits only apply when the balance covers them, so points never go
    negative.
    """
    query = {"_id": _oid(user_id, "User")}
    if delta < 0:
        query["points"] = {"$gte": -delta}
    user = db[COL_USER].find_one_and_update(
        query,
        {"$inc": {"points": delta}, "$set": {"updated_at": _now()}},
        return_document=ReturnDocument.AFTER,
    )
    if user is None:
        if db[COL_USER].find_one({"_id": query["_id"]}, {"_id": 1}) is None:
            raise NotFound("User not found")
        raise InsufficientPoints("Insufficient points")

    create_document(
        COL_TRANSACTION, PointsTransaction(user_id=user_id, delta=delta, reason=reason, reference=reference)
    )
    logger.info("points %+d for user %s (%s %s), balance %s", delta, user_id, reason, reference, user["points"])
    return int(user["points"])


def award_once(key: str, user_id: str, points: int, reason: str, reference: Optional[str] = None) -> bool:
    """Credit ``points`` unless an award with the same key was already claimed.

    Returns True when this call made the award.
    """
    claim = PointsTransaction(user_id=user_id, delta=points, reason=reason, reference=reference).model_dump()
    claim["_id"] = key
    try:
        create_document(COL_TRANSACTION, claim)
    except DuplicateKeyError:
        logger.info("award %s already claimed, skipping", key)
        return False

    result = db[COL_USER].update_one(
        {"_id": _oid(user_id, "User")},
        {"$inc": {"points": points}, "$set": {"updated_at": _now()}},
    )
    if result.matched_count == 0:
        # Leave the claim in place so the award can't be replayed to a recreated id.
        logger.warning("award %s claimed for missing user %s", key, user_id)
        return False
    logger.info("awarded %d points to user %s (%s)", points, user_id, key)
    return True


def set_points(user_id: str, points: int) -> int:
    """Overwrite a balance (admin correction) and record the difference."""
    if points < 0:
        raise LedgerError("Points must be a non-negative integer")
    before = db[COL_USER].find_one_and_update(
        {"_id": _oid(user_id, "User")},
        {"$set": {"points": points, "updated_at": _now()}},
        return_document=ReturnDocument.BEFORE,
    )
    if before is None:
        raise NotFound("User not found")
    delta = points - int(before.get("points", 0))
    if delta:
        create_document(
            COL_TRANSACTION, PointsTransaction(user_id=user_id, delta=delta, reason="admin_adjustment")
        )
    logger.info("points for user %s set to %d (%+d)", user_id, points, delta)
    return points


# ---------- E-waste reports ----------
def _status_rank(status: Optional[str]) -> int:
    return REPORT_STATUSES.index(status) if status in REPORT_STATUSES else 0


def transition_report(report_id: str, new_status: str) -> Tuple[dict, int]:
    """Move a report to ``new_status`` and credit the owner for new levels.

    Moving back down never deducts. Each level is paid at most once per
    report, so repeating or replaying a transition credits nothing.
    Returns the updated report and the points credited by this call.
    """
    if new_status not in REPORT_STATUSES:
        raise InvalidTransition(f"Invalid report status: {new_status}")
    oid = _oid(report_id, "Report")
    report = db[COL_REPORT].find_one({"_id": oid})
    if report is None:
        raise NotFound("Report not found")

    awarded = 0
    owner = report.get("user_id")
    new_rank = _status_rank(new_status)
    # Reports stored before awards were tracked were paid up to their current status.
    paid_rank = _status_rank(report.get("status")) if "points_awarded" not in report else 0
    for level, points in REPORT_LEVEL_POINTS:
        level_rank = _status_rank(level)
        if level_rank > new_rank:
            break
        if level_rank <= paid_rank:
            continue
        if not owner:
            logger.warning("report %s has no owner, no points awarded", report_id)
            break
        if award_once(f"report:{report_id}:{level}", owner, points, "report_status", reference=report_id):
            awarded += points

    updates = {"$set": {"status": new_status, "updated_at": _now()}}
    if awarded:
        updates["$inc"] = {"points_awarded": awarded}
    report = db[COL_REPORT].find_one_and_update({"_id": oid}, updates, return_document=ReturnDocument.AFTER)
    logger.info("report %s -> %s, %d points awarded", report_id, new_status, awarded)
    return report, awarded


# ---------- Quizzes ----------
def score_quiz(answers: Sequence[Optional[int]], questions: Sequence[Question], points: int) -> Tuple[int, int]:
    """Return (correct answers, score) for one attempt.

    ``answers`` holds the selected option index per question, None when the
    question was skipped. Missing trailing answers count as unanswered.
    """
    if not questions:
        raise ValueError("A quiz needs at least one question to be scored")
    correct = sum(
        1
        for index, question in enumerate(questions)
        if index < len(answers) and answers[index] is not None and answers[index] == question.correct_answer
    )
    return correct, round_half_up(correct / len(questions) * points)


def submit_quiz(quiz_id: str, quiz: Quiz, user: dict, answers: List[Optional[int]]) -> dict:
    """Score an attempt, record it and credit the score on the first attempt only."""
    if quiz.status != "active":
        raise LedgerError("Quiz is not open for submissions")
    correct, score = score_quiz(answers, quiz.questions, quiz.points)
    user_id = str(user["_id"])
    submission = {
        "quiz_id": quiz_id,
        "user_id": user_id,
        "user_email": user.get("email", ""),
        "answers": answers,
        "score": score,
        "total_questions": len(quiz.questions),
        "correct_answers": correct,
    }
    result = validate_quiz_submission(submission, quiz.model_dump())
    if not result.is_valid:
        raise LedgerError("; ".join(f"{e.field}: {e.message}" for e in result.errors))

    first = award_once(f"quiz:{quiz_id}:{user_id}", user_id, score, "quiz", reference=quiz_id)
    record = QuizSubmission(**submission, points_awarded=score if first else 0)
    submission_id = create_document(COL_QUIZ_SUBMISSION, record)
    return {"_id": submission_id, **record.model_dump()}


# ---------- Challenges ----------
def set_participation_status(participation_id: str, status: str) -> Tuple[dict, int]:
    """Update a participation; approval credits the challenge points once per user and challenge."""
    if status not in ("pending", "approved", "rejected"):
        raise InvalidTransition(f"Invalid participation status: {status}")
    oid = _oid(participation_id, "Participation")
    participation = db[COL_PARTICIPATION].find_one({"_id": oid})
    if participation is None:
        raise NotFound("Participation not found")

    awarded = 0
    if status == "approved":
        points = participation.get("points")
        if not points:
            challenge = db[COL_CHALLENGE].find_one({"_id": _oid(participation["challenge_id"], "Challenge")})
            points = int(challenge.get("points", 0)) if challenge else 0
        key = f"challenge:{participation['challenge_id']}:{participation['user_id']}"
        if points and award_once(key, participation["user_id"], points, "challenge", reference=participation_id):
            awarded = points

    updates = {"$set": {"status": status, "updated_at": _now()}}
    if awarded:
        updates["$inc"] = {"points_awarded": awarded}
    participation = db[COL_PARTICIPATION].find_one_and_update(
        {"_id": oid}, updates, return_document=ReturnDocument.AFTER
    )
    return participation, awarded


# ---------- Rewards ----------
def generate_coupon_code() -> str:
    return COUPON_PREFIX + "".join(secrets.choice(COUPON_ALPHABET) for _ in range(COUPON_LENGTH))


def is_expired(reward: Reward) -> bool:
    if reward.expiry_date is None:
        return False
    expiry = reward.expiry_date
    if expiry.tzinfo is None:
        expiry = expiry.replace(tzinfo=timezone.utc)
    return expiry <= _now()


def redeem_reward(reward_id: str, user: dict) -> dict:
    """Spend points on one unit of a reward.

    Raises RewardNotFound, InsufficientPoints, RewardExpired or OutOfStock;
    on any failure the balance and the stock are left as they were.
    """
    oid = _oid(reward_id, "Reward")
    reward = parse_document(Reward, db[COL_REWARD].find_one({"_id": oid}))
    if reward is None or reward.status != "active":
        raise RewardNotFound("Reward not found")

    user_id = str(user["_id"])
    current = db[COL_USER].find_one({"_id": _oid(user_id, "User")}, {"points": 1})
    if current is None:
        raise NotFound("User not found")
    if int(current.get("points", 0)) < reward.points_cost:
        raise InsufficientPoints(
            f"Insufficient points: {reward.points_cost} needed, {int(current.get('points', 0))} available"
        )
    if is_expired(reward):
        raise RewardExpired("Reward has expired")
    if reward.stock <= 0:
        raise OutOfStock("Reward is out of stock")

    redemption_id = ObjectId()
    apply_points(user_id, -reward.points_cost, "redemption", reference=str(redemption_id))

    redemption = RewardRedemption(
        reward_id=reward_id,
        reward_title=reward.title,
        user_id=user_id,
        user_email=user["email"],
        points_spent=reward.points_cost,
        reward_value=reward.value,
        coupon_code=generate_coupon_code(),
    )
    doc = redemption.model_dump()
    doc["_id"] = redemption_id
    try:
        create_document(COL_REDEMPTION, doc)
    except PyMongoError:
        apply_points(user_id, reward.points_cost, "redemption_refund", reference=str(redemption_id))
        raise

    claimed = db[COL_REWARD].find_one_and_update(
        {"_id": oid, "status": "active", "stock": {"$gte": 1}},
        {"$inc": {"stock": -1}, "$set": {"updated_at": _now()}},
        return_document=ReturnDocument.AFTER,
    )
    if claimed is None:
        db[COL_REDEMPTION].delete_one({"_id": redemption_id})
        apply_points(user_id, reward.points_cost, "redemption_refund", reference=str(redemption_id))
        raise OutOfStock("Reward is out of stock")

    logger.info("user %s redeemed reward %s, stock left %d", user_id, reward_id, claimed["stock"])
    return {"_id": str(redemption_id), **redemption.model_dump()}
