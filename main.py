import os
import time
import secrets
import hashlib
import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

from fastapi import FastAPI, HTTPException, Depends, Header, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from bson import ObjectId
from pymongo.errors import PyMongoError

import ledger
from database import (
    db,
    create_document,
    delete_document,
    get_document,
    get_documents,
    parse_document,
    serialize,
    update_document,
)
from ledger import (
    COL_CHALLENGE,
    COL_PARTICIPATION,
    COL_QUIZ_SUBMISSION,
    COL_REDEMPTION,
    COL_REPORT,
    COL_REWARD,
    COL_TRANSACTION,
    COL_USER,
)
from schemas import (
    Challenge as ChallengeSchema,
    ChallengeParticipation as ParticipationSchema,
    DeviceCondition,
    EWasteReport as ReportSchema,
    LeaderboardEntry as LeaderboardSchema,
    PointsTransaction as TransactionSchema,
    Quiz as QuizSchema,
    QuizSubmission as SubmissionSchema,
    Reward as RewardSchema,
    RewardRedemption as RedemptionSchema,
    Session as SessionSchema,
    User as UserSchema,
)
from seed import SAMPLE_CHALLENGES, SAMPLE_QUIZZES, SAMPLE_REWARDS
from validation import (
    ValidationResult,
    validate_challenge,
    validate_quiz,
    validate_required,
    validate_reward,
    validate_user,
)

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="E-Waste Rewards API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=os.getenv("CORS_ORIGINS", "*").split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------- Utilities ----------
COL_SESSION = "session"
COL_QUIZ = "quiz"
COL_LEADERBOARD = "leaderboardentry"

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")
SESSION_TTL_SECONDS = int(os.getenv("SESSION_TTL_SECONDS", str(7 * 24 * 3600)))
ADMIN_EMAILS = {e.strip().lower() for e in os.getenv("ADMIN_EMAILS", "").split(",") if e.strip()}


def oid(id_str: str) -> ObjectId:
    try:
        return ObjectId(id_str)
    except Exception:
        raise HTTPException(status_code=400, detail="Invalid id format")


def hash_password(password: str) -> str:
    salted = (SECRET_KEY + password).encode()
    return hashlib.sha256(salted).hexdigest()


def create_session(user_id: str) -> str:
    token = secrets.token_hex(32)
    expires_at = int(time.time()) + SESSION_TTL_SECONDS
    doc = SessionSchema(user_id=user_id, token=token, expires_at=expires_at)
    create_document(COL_SESSION, doc)
    return token


def check(result: ValidationResult):
    if not result.is_valid:
        raise HTTPException(
            status_code=422,
            detail={"message": "Validation failed", "errors": [e.model_dump() for e in result.errors]},
        )


def public_user(user: dict) -> dict:
    user = serialize(dict(user))
    user.pop("password_hash", None)
    user.setdefault("points", 0)
    user.setdefault("status", "active")
    return user


def public_quiz(doc: dict) -> dict:
    doc = serialize(doc)
    doc["questions"] = [
        {k: v for k, v in q.items() if k not in ("correct_answer", "explanation")} for q in doc.get("questions", [])
    ]
    return doc


def find_or_404(collection: str, doc_id: str, what: str) -> dict:
    oid(doc_id)
    doc = get_document(collection, doc_id)
    if not doc:
        raise HTTPException(status_code=404, detail=f"{what} not found")
    return doc


def validated_update(
    collection: str, doc_id: str, updates: Dict[str, Any], validator: Callable[[dict], ValidationResult], what: str
) -> dict:
    existing = find_or_404(collection, doc_id, what)
    if not updates:
        return {"updated": False}
    check(validator({**existing, **updates}))
    update_document(collection, doc_id, updates)
    return {"updated": True}


def with_question_ids(questions: List[dict]) -> List[dict]:
    for index, question in enumerate(questions):
        if not question.get("id"):
            question["id"] = str(index + 1)
    return questions


# ---------- Error handlers ----------
@app.exception_handler(ledger.LedgerError)
async def ledger_error_handler(request: Request, exc: ledger.LedgerError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(PyMongoError)
async def database_error_handler(request: Request, exc: PyMongoError):
    logger.exception("Database error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=503, content={"detail": "Database unavailable, please try again"})


# ---------- Auth ----------
class RegisterRequest(BaseModel):
    email: str
    password: str = Field(..., min_length=6)
    display_name: Optional[str] = None


class LoginRequest(BaseModel):
    email: str
    password: str


class TokenResponse(BaseModel):
    token: str
    role: str
    email: str
    display_name: Optional[str] = None


async def get_current_user(authorization: Optional[str] = Header(None)):
    if not authorization or not authorization.lower().startswith("bearer "):
        return None
    token = authorization.split(" ", 1)[1]
    sess = db[COL_SESSION].find_one({"token": token})
    if not sess:
        return None
    if int(time.time()) > int(sess.get("expires_at", 0)):
        return None
    user = db[COL_USER].find_one({"_id": oid(sess["user_id"])}) if ObjectId.is_valid(sess.get("user_id", "")) else None
    return user


async def require_user(user=Depends(get_current_user)):
    if not user:
        raise HTTPException(status_code=401, detail="Unauthorized")
    if user.get("status") == "suspended":
        raise HTTPException(status_code=403, detail="Account suspended")
    return user


async def require_admin(user=Depends(require_user)):
    if user.get("role") != "admin":
        raise HTTPException(status_code=403, detail="Admin access required")
    return user


def new_user(email: str, password: str, display_name: Optional[str], role: str) -> str:
    email = email.strip().lower()
    check(validate_user({"email": email, "role": role, "points": 0, "status": "active"}))
    if db[COL_USER].find_one({"email": email}):
        raise HTTPException(status_code=400, detail="Email already registered")
    user_doc = UserSchema(
        email=email,
        display_name=display_name,
        password_hash=hash_password(password),
        role=role,
    )
    return create_document(COL_USER, user_doc)


@app.post("/auth/register", response_model=TokenResponse)
def register(payload: RegisterRequest):
    role = "admin" if payload.email.strip().lower() in ADMIN_EMAILS else "customer"
    user_id = new_user(payload.email, payload.password, payload.display_name, role)
    token = create_session(user_id)
    return TokenResponse(token=token, role=role, email=payload.email.strip().lower(), display_name=payload.display_name)


@app.post("/auth/login", response_model=TokenResponse)
def login(payload: LoginRequest):
    user = db[COL_USER].find_one({"email": payload.email.strip().lower()})
    if not user or user.get("password_hash") != hash_password(payload.password):
        raise HTTPException(status_code=401, detail="Invalid email or password")
    if user.get("status") == "suspended":
        raise HTTPException(status_code=403, detail="Account suspended")
    token = create_session(str(user["_id"]))
    return TokenResponse(
        token=token, role=user.get("role", "customer"), email=user["email"], display_name=user.get("display_name")
    )


@app.post("/auth/logout")
def logout(authorization: Optional[str] = Header(None)):
    if authorization and authorization.lower().startswith("bearer "):
        db[COL_SESSION].delete_many({"token": authorization.split(" ", 1)[1]})
    return {"ok": True}


@app.get("/me")
async def me(user=Depends(require_user)):
    return public_user(user)


@app.get("/me/transactions")
async def my_transactions(user=Depends(require_user), limit: int = Query(50, ge=1, le=200)):
    docs = get_documents(COL_TRANSACTION, {"user_id": str(user["_id"])}, sort=[("created_at", -1)], limit=limit)
    return [serialize(d) for d in docs]


# ---------- Public Endpoints ----------
@app.get("/")
def root():
    return {"message": "E-Waste Rewards Backend Running"}


@app.get("/test")
def test_database():
    status = {
        "backend": "✅ Running",
        "database": "❌ Not Available",
        "collections": [],
    }
    try:
        if db is not None:
            status["database"] = "✅ Connected"
            status["collections"] = db.list_collection_names()
    except Exception as e:
        status["database"] = f"⚠️ {str(e)[:60]}"
    return status


@app.get("/leaderboard")
def leaderboard(limit: int = Query(10, ge=1, le=100)):
    latest = db[COL_LEADERBOARD].find_one(sort=[("week_start_date", -1)])
    if not latest:
        return []
    docs = get_documents(
        COL_LEADERBOARD, {"week_start_date": latest["week_start_date"]}, sort=[("rank", 1)], limit=limit
    )
    return [serialize(d) for d in docs]


# ---------- E-waste reports ----------
class ReportCreateRequest(BaseModel):
    device_type: str
    brand: str = ""
    model: str = ""
    condition: DeviceCondition
    quantity: int = Field(1, ge=1)
    location: str
    description: Optional[str] = None
    estimated_value: Optional[float] = Field(None, ge=0)


@app.post("/reports")
async def create_report(payload: ReportCreateRequest, user=Depends(require_user)):
    check(validate_required(payload.model_dump(), ["device_type", "location"]))
    report = ReportSchema(
        **payload.model_dump(),
        user_id=str(user["_id"]),
        reported_by=user["email"],
        status="pending",
    )
    report_id = create_document(COL_REPORT, report)
    return {"_id": report_id}


@app.get("/reports/mine")
async def my_reports(user=Depends(require_user)):
    docs = get_documents(COL_REPORT, {"user_id": str(user["_id"])}, sort=[("created_at", -1)])
    return [serialize(d) for d in docs]


# ---------- Quizzes ----------
class QuizSubmitRequest(BaseModel):
    answers: List[Optional[int]] = []


@app.get("/quizzes")
def list_quizzes():
    docs = get_documents(COL_QUIZ, {"status": "active"}, sort=[("created_at", -1)])
    return [public_quiz(d) for d in docs]


@app.get("/quizzes/{quiz_id}")
def get_quiz(quiz_id: str):
    doc = find_or_404(COL_QUIZ, quiz_id, "Quiz")
    if doc.get("status") != "active":
        raise HTTPException(status_code=404, detail="Quiz not found")
    return public_quiz(doc)


@app.post("/quizzes/{quiz_id}/submit")
async def submit_quiz(quiz_id: str, payload: QuizSubmitRequest, user=Depends(require_user)):
    quiz = parse_document(QuizSchema, find_or_404(COL_QUIZ, quiz_id, "Quiz"))
    if quiz is None or not quiz.questions:
        raise HTTPException(status_code=404, detail="Quiz not found")
    submission = ledger.submit_quiz(quiz_id, quiz, user, payload.answers)
    review = [
        {"id": q.id, "correct_answer": q.correct_answer, "explanation": q.explanation} for q in quiz.questions
    ]
    return {"submission": submission, "review": review}


@app.get("/quizzes/{quiz_id}/submissions/mine")
async def my_quiz_submissions(quiz_id: str, user=Depends(require_user)):
    docs = get_documents(
        COL_QUIZ_SUBMISSION, {"quiz_id": quiz_id, "user_id": str(user["_id"])}, sort=[("created_at", -1)]
    )
    return [serialize(d) for d in docs]


# ---------- Challenges ----------
class ParticipationRequest(BaseModel):
    description: str = ""
    evidence: str = ""
    location: str = ""


@app.get("/challenges")
def list_challenges():
    docs = get_documents(COL_CHALLENGE, {"status": "active"}, sort=[("created_at", -1)])
    return [serialize(d) for d in docs]


@app.post("/challenges/{challenge_id}/participate")
async def participate(challenge_id: str, payload: ParticipationRequest, user=Depends(require_user)):
    challenge = find_or_404(COL_CHALLENGE, challenge_id, "Challenge")
    if challenge.get("status") != "active":
        raise HTTPException(status_code=404, detail="Challenge not found")
    check(validate_required(payload.model_dump(), ["description", "evidence"]))
    participation = ParticipationSchema(
        challenge_id=challenge_id,
        user_id=str(user["_id"]),
        user_email=user["email"],
        points=int(challenge.get("points", 0)),
        **payload.model_dump(),
    )
    participation_id = create_document(COL_PARTICIPATION, participation)
    return {"_id": participation_id, "message": "Submitted. Points are credited once an admin approves it."}


@app.get("/participations/mine")
async def my_participations(user=Depends(require_user)):
    docs = get_documents(COL_PARTICIPATION, {"user_id": str(user["_id"])}, sort=[("created_at", -1)])
    return [serialize(d) for d in docs]


# ---------- Rewards ----------
@app.get("/rewards")
def list_rewards():
    docs = get_documents(COL_REWARD, {"status": "active", "stock": {"$gt": 0}}, sort=[("points_cost", 1)])
    out = []
    for d in docs:
        reward = parse_document(RewardSchema, d)
        if reward is not None and not ledger.is_expired(reward):
            out.append(serialize(d))
    return out


@app.post("/rewards/{reward_id}/redeem")
async def redeem(reward_id: str, user=Depends(require_user)):
    redemption = ledger.redeem_reward(reward_id, user)
    return {"redemption": redemption, "message": f"Reward redeemed. Your coupon code: {redemption['coupon_code']}"}


@app.get("/redemptions/mine")
async def my_redemptions(user=Depends(require_user)):
    docs = get_documents(COL_REDEMPTION, {"user_id": str(user["_id"])}, sort=[("created_at", -1)])
    return [serialize(d) for d in docs]


# ---------- Admin: Users ----------
class UserCreateRequest(BaseModel):
    email: str
    password: str = Field(..., min_length=6)
    display_name: Optional[str] = None
    role: str = "customer"


class UserUpdateRequest(BaseModel):
    display_name: Optional[str] = None
    role: Optional[str] = None
    status: Optional[str] = None


class PointsRequest(BaseModel):
    points: int


@app.get("/admin/users")
def admin_list_users(user=Depends(require_admin)):
    return [public_user(d) for d in get_documents(COL_USER, sort=[("created_at", -1)])]


@app.post("/admin/users")
def admin_create_user(payload: UserCreateRequest, user=Depends(require_admin)):
    user_id = new_user(payload.email, payload.password, payload.display_name, payload.role)
    return {"_id": user_id}


@app.put("/admin/users/{user_id}")
def admin_update_user(user_id: str, payload: UserUpdateRequest, user=Depends(require_admin)):
    updates = {k: v for k, v in payload.model_dump().items() if v is not None}
    existing = find_or_404(COL_USER, user_id, "User")
    merged = {"points": 0, "status": "active", **existing, **updates}
    check(validate_user(merged))
    if not updates:
        return {"updated": False}
    update_document(COL_USER, user_id, updates)
    if updates.get("status") == "suspended":
        db[COL_SESSION].delete_many({"user_id": user_id})
    return {"updated": True}


@app.put("/admin/users/{user_id}/points")
def admin_set_points(user_id: str, payload: PointsRequest, user=Depends(require_admin)):
    oid(user_id)
    return {"points": ledger.set_points(user_id, payload.points)}


@app.delete("/admin/users/{user_id}")
def admin_delete_user(user_id: str, user=Depends(require_admin)):
    if not delete_document(COL_USER, user_id):
        raise HTTPException(status_code=404, detail="User not found")
    db[COL_SESSION].delete_many({"user_id": user_id})
    return {"deleted": True}


# ---------- Admin: Quizzes ----------
class QuestionPayload(BaseModel):
    id: Optional[str] = None
    question: str = ""
    options: List[str] = []
    correct_answer: int = -1
    explanation: Optional[str] = None


class QuizCreateRequest(BaseModel):
    title: str = ""
    description: str = ""
    questions: List[QuestionPayload] = []
    status: str = "draft"
    category: str = ""
    points: int = 0
    time_limit: int = 0
    difficulty: str = "easy"


class QuizUpdateRequest(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    questions: Optional[List[QuestionPayload]] = None
    status: Optional[str] = None
    category: Optional[str] = None
    points: Optional[int] = None
    time_limit: Optional[int] = None
    difficulty: Optional[str] = None


@app.get("/admin/quizzes")
def admin_list_quizzes(user=Depends(require_admin)):
    return [serialize(d) for d in get_documents(COL_QUIZ, sort=[("created_at", -1)])]


@app.post("/admin/quizzes")
def create_quiz(payload: QuizCreateRequest, user=Depends(require_admin)):
    data = payload.model_dump()
    check(validate_quiz(data))
    data["questions"] = with_question_ids(data["questions"])
    quiz_id = create_document(COL_QUIZ, QuizSchema(**data))
    return {"_id": quiz_id}


@app.put("/admin/quizzes/{quiz_id}")
def update_quiz(quiz_id: str, payload: QuizUpdateRequest, user=Depends(require_admin)):
    updates = {k: v for k, v in payload.model_dump().items() if v is not None}
    if "questions" in updates:
        updates["questions"] = with_question_ids(updates["questions"])
    return validated_update(COL_QUIZ, quiz_id, updates, validate_quiz, "Quiz")


@app.delete("/admin/quizzes/{quiz_id}")
def delete_quiz(quiz_id: str, user=Depends(require_admin)):
    if not delete_document(COL_QUIZ, quiz_id):
        raise HTTPException(status_code=404, detail="Quiz not found")
    return {"deleted": True}


# ---------- Admin: Challenges ----------
class ChallengeCreateRequest(BaseModel):
    title: str = ""
    description: str = ""
    points: int = 0
    status: str = "pending"
    category: str = ""
    difficulty: str = "easy"
    requirements: List[str] = []
    estimated_time: int = 0
    creator: str = ""
    image_url: Optional[str] = None


class ChallengeUpdateRequest(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    points: Optional[int] = None
    status: Optional[str] = None
    category: Optional[str] = None
    difficulty: Optional[str] = None
    requirements: Optional[List[str]] = None
    estimated_time: Optional[int] = None
    creator: Optional[str] = None
    image_url: Optional[str] = None


@app.get("/admin/challenges")
def admin_list_challenges(user=Depends(require_admin)):
    return [serialize(d) for d in get_documents(COL_CHALLENGE, sort=[("created_at", -1)])]


@app.post("/admin/challenges")
def create_challenge(payload: ChallengeCreateRequest, user=Depends(require_admin)):
    data = payload.model_dump()
    if not data["creator"].strip():
        data["creator"] = user.get("display_name") or user["email"]
    check(validate_challenge(data))
    challenge_id = create_document(COL_CHALLENGE, ChallengeSchema(**data))
    return {"_id": challenge_id}


@app.put("/admin/challenges/{challenge_id}")
def update_challenge(challenge_id: str, payload: ChallengeUpdateRequest, user=Depends(require_admin)):
    updates = {k: v for k, v in payload.model_dump().items() if v is not None}
    return validated_update(COL_CHALLENGE, challenge_id, updates, validate_challenge, "Challenge")


@app.delete("/admin/challenges/{challenge_id}")
def delete_challenge(challenge_id: str, user=Depends(require_admin)):
    if not delete_document(COL_CHALLENGE, challenge_id):
        raise HTTPException(status_code=404, detail="Challenge not found")
    return {"deleted": True}


# ---------- Admin: Rewards ----------
class RewardCreateRequest(BaseModel):
    title: str = ""
    description: str = ""
    type: str = "coupon"
    points_cost: int = 0
    value: float = 0
    value_type: str = "fixed"
    stock: int = 0
    status: str = "active"
    expiry_date: Optional[datetime] = None
    terms_and_conditions: Optional[str] = None
    image_url: Optional[str] = None


class RewardUpdateRequest(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    type: Optional[str] = None
    points_cost: Optional[int] = None
    value: Optional[float] = None
    value_type: Optional[str] = None
    stock: Optional[int] = None
    status: Optional[str] = None
    expiry_date: Optional[datetime] = None
    terms_and_conditions: Optional[str] = None
    image_url: Optional[str] = None


@app.get("/admin/rewards")
def admin_list_rewards(user=Depends(require_admin)):
    return [serialize(d) for d in get_documents(COL_REWARD, sort=[("created_at", -1)])]


@app.post("/admin/rewards")
def create_reward(payload: RewardCreateRequest, user=Depends(require_admin)):
    data = payload.model_dump()
    check(validate_reward(data))
    reward_id = create_document(COL_REWARD, RewardSchema(**data))
    return {"_id": reward_id}


@app.put("/admin/rewards/{reward_id}")
def update_reward(reward_id: str, payload: RewardUpdateRequest, user=Depends(require_admin)):
    updates = {k: v for k, v in payload.model_dump().items() if v is not None}
    check_expiry = "expiry_date" in updates
    return validated_update(
        COL_REWARD, reward_id, updates, lambda doc: validate_reward(doc, check_expiry=check_expiry), "Reward"
    )


@app.delete("/admin/rewards/{reward_id}")
def delete_reward(reward_id: str, user=Depends(require_admin)):
    if not delete_document(COL_REWARD, reward_id):
        raise HTTPException(status_code=404, detail="Reward not found")
    return {"deleted": True}


# ---------- Admin: Submissions ----------
class StatusRequest(BaseModel):
    status: str


@app.get("/admin/reports")
def admin_list_reports(status: Optional[str] = Query(None), user=Depends(require_admin)):
    q = {"status": status} if status else {}
    return [serialize(d) for d in get_documents(COL_REPORT, q, sort=[("created_at", -1)])]


@app.post("/admin/reports/{report_id}/status")
def update_report_status(report_id: str, payload: StatusRequest, user=Depends(require_admin)):
    oid(report_id)
    report, awarded = ledger.transition_report(report_id, payload.status)
    return {"updated": True, "status": report["status"], "points_awarded": awarded}


@app.get("/admin/participations")
def admin_list_participations(status: Optional[str] = Query(None), user=Depends(require_admin)):
    q = {"status": status} if status else {}
    return [serialize(d) for d in get_documents(COL_PARTICIPATION, q, sort=[("created_at", -1)])]


@app.post("/admin/participations/{participation_id}/status")
def update_participation_status(participation_id: str, payload: StatusRequest, user=Depends(require_admin)):
    oid(participation_id)
    participation, awarded = ledger.set_participation_status(participation_id, payload.status)
    return {"updated": True, "status": participation["status"], "points_awarded": awarded}


@app.get("/admin/redemptions")
def admin_list_redemptions(status: Optional[str] = Query(None), user=Depends(require_admin)):
    q = {"status": status} if status else {}
    return [serialize(d) for d in get_documents(COL_REDEMPTION, q, sort=[("created_at", -1)])]


@app.post("/admin/redemptions/{redemption_id}/status")
def update_redemption_status(redemption_id: str, payload: StatusRequest, user=Depends(require_admin)):
    if payload.status not in {"pending", "approved", "used", "expired"}:
        raise HTTPException(status_code=400, detail="Invalid status")
    updates = {"status": payload.status}
    if payload.status == "used":
        updates["used_at"] = datetime.now(timezone.utc)
    find_or_404(COL_REDEMPTION, redemption_id, "Redemption")
    update_document(COL_REDEMPTION, redemption_id, updates)
    return {"updated": True}


# ---------- Admin: Seed ----------
@app.post("/admin/seed")
def seed_sample_data(user=Depends(require_admin)):
    created = {"quizzes": 0, "challenges": 0, "rewards": 0}
    for key, collection, samples, schema in (
        ("quizzes", COL_QUIZ, SAMPLE_QUIZZES, QuizSchema),
        ("challenges", COL_CHALLENGE, SAMPLE_CHALLENGES, ChallengeSchema),
        ("rewards", COL_REWARD, SAMPLE_REWARDS, RewardSchema),
    ):
        for sample in samples:
            if not db[collection].find_one({"title": sample["title"]}):
                create_document(collection, schema(**sample))
                created[key] += 1
    logger.info("seeded sample data: %s", created)
    return {"status": "seeded", "created": created}


# ---------- Schema endpoint for viewer ----------
@app.get("/schema")
def get_schema_definitions():
    return {
        "user": UserSchema.model_json_schema(),
        "session": SessionSchema.model_json_schema(),
        "ewastereport": ReportSchema.model_json_schema(),
        "quiz": QuizSchema.model_json_schema(),
        "quizsubmission": SubmissionSchema.model_json_schema(),
        "challenge": ChallengeSchema.model_json_schema(),
        "challengeparticipation": ParticipationSchema.model_json_schema(),
        "reward": RewardSchema.model_json_schema(),
        "rewardredemption": RedemptionSchema.model_json_schema(),
        "leaderboardentry": LeaderboardSchema.model_json_schema(),
        "pointstransaction": TransactionSchema.model_json_schema(),
    }


if __name__ == "__main__":
    import uvicorn
    port = int(os.getenv("PORT", 8000))
    uvicorn.run(app, host="0.0.0.0", port=port)
