"""
Database Schemas for the E-Waste Rewards API

Each Pydantic model represents a collection in your MongoDB database.
Collection name is the lowercase of the class name.

- User -> "user"
- Session -> "session"
- EWasteReport -> "ewastereport"
- Quiz -> "quiz"
- QuizSubmission -> "quizsubmission"
- Challenge -> "challenge"
- ChallengeParticipation -> "challengeparticipation"
- Reward -> "reward"
- RewardRedemption -> "rewardredemption"
- LeaderboardEntry -> "leaderboardentry"
- PointsTransaction -> "pointstransaction"
"""

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, EmailStr, Field

Role = Literal["admin", "customer"]
Difficulty = Literal["easy", "medium", "hard"]
ReportStatus = Literal["pending", "collected", "processed"]
DeviceCondition = Literal["working", "broken", "partially-working"]


class User(BaseModel):
    email: EmailStr = Field(..., description="Email address")
    display_name: Optional[str] = Field(None, description="Display name")
    password_hash: str = Field(..., description="Hashed password")
    role: Role = Field("customer", description="Role: admin or customer")
    points: int = Field(0, ge=0, description="Current points balance")
    status: Literal["active", "suspended"] = Field("active", description="active or suspended")


class Session(BaseModel):
    user_id: str = Field(..., description="User ID")
    token: str = Field(..., description="Session token")
    expires_at: int = Field(..., description="Unix timestamp when token expires")


class EWasteReport(BaseModel):
    device_type: str = Field(..., description="Smartphone, Laptop, Monitor, ...")
    brand: str = Field("", description="Device brand")
    model: str = Field("", description="Device model")
    condition: DeviceCondition = Field(..., description="working, broken, partially-working")
    quantity: int = Field(1, ge=1, description="Number of devices")
    location: str = Field(..., description="Pickup or drop-off location")
    description: Optional[str] = Field(None, description="Free text notes")
    estimated_value: Optional[float] = Field(None, ge=0, description="Estimated value in rupees")
    user_id: str = Field(..., description="Owner user ID")
    reported_by: str = Field(..., description="Owner email")
    status: ReportStatus = Field("pending", description="pending, collected, processed")
    points_awarded: int = Field(0, ge=0, description="Points credited for this report so far")


class Question(BaseModel):
    id: str = Field(..., description="Question id, unique within the quiz")
    question: str = Field(..., description="Question text")
    options: List[str] = Field(..., description="Answer options")
    correct_answer: int = Field(..., description="Index of the correct option")
    explanation: Optional[str] = Field(None, description="Shown after submission")


class Quiz(BaseModel):
    title: str = Field(..., description="Quiz title")
    description: str = Field(..., description="Quiz description")
    questions: List[Question] = Field(default_factory=list, description="Ordered questions")
    status: Literal["active", "draft", "inactive"] = Field("draft", description="active, draft, inactive")
    category: str = Field(..., description="Category")
    points: int = Field(..., ge=0, description="Points for a perfect score")
    time_limit: int = Field(..., gt=0, description="Time limit in minutes")
    difficulty: Difficulty = Field("easy", description="easy, medium, hard")


class QuizSubmission(BaseModel):
    quiz_id: str = Field(..., description="Quiz ID")
    user_id: str = Field(..., description="User ID")
    user_email: EmailStr = Field(..., description="User email")
    answers: List[Optional[int]] = Field(default_factory=list, description="Selected option per question")
    score: int = Field(..., ge=0, description="Points scored")
    total_questions: int = Field(..., gt=0)
    correct_answers: int = Field(..., ge=0)
    points_awarded: int = Field(0, ge=0, description="Points credited for this submission")


class Challenge(BaseModel):
    title: str = Field(..., description="Challenge title")
    description: str = Field(..., description="Challenge description")
    points: int = Field(..., ge=0, description="Points for an approved participation")
    status: Literal["active", "pending", "inactive"] = Field("pending", description="active, pending, inactive")
    category: str = Field(..., description="Category")
    difficulty: Difficulty = Field("easy", description="easy, medium, hard")
    requirements: List[str] = Field(default_factory=list, description="What the participant must do")
    estimated_time: int = Field(..., gt=0, description="Estimated time in minutes")
    creator: str = Field(..., description="Creator name")
    image_url: Optional[str] = Field(None, description="Image URL")


class ChallengeParticipation(BaseModel):
    challenge_id: str = Field(..., description="Challenge ID")
    user_id: str = Field(..., description="User ID")
    user_email: EmailStr = Field(..., description="User email")
    description: str = Field("", description="What the participant did")
    evidence: str = Field("", description="Links or notes proving completion")
    location: str = Field("", description="Where it happened")
    status: Literal["pending", "approved", "rejected"] = Field("pending", description="pending, approved, rejected")
    points: int = Field(0, ge=0, description="Challenge points at submission time")
    points_awarded: int = Field(0, ge=0, description="Points credited on approval")


class Reward(BaseModel):
    title: str = Field(..., description="Reward title")
    description: str = Field(..., description="Reward description")
    type: Literal["coupon", "discount", "cashback", "voucher"] = Field(..., description="Reward type")
    points_cost: int = Field(..., ge=0, description="Points needed to redeem")
    value: float = Field(..., gt=0, description="Rupees or percentage, see value_type")
    value_type: Literal["fixed", "percentage"] = Field("fixed", description="fixed or percentage")
    stock: int = Field(0, ge=0, description="Units left")
    status: Literal["active", "inactive"] = Field("active", description="active or inactive")
    expiry_date: Optional[datetime] = Field(None, description="Last day the reward can be redeemed")
    terms_and_conditions: Optional[str] = Field(None)
    image_url: Optional[str] = Field(None)


class RewardRedemption(BaseModel):
    reward_id: str = Field(..., description="Reward ID")
    reward_title: str = Field(..., description="Reward title at redemption time")
    user_id: str = Field(..., description="User ID")
    user_email: EmailStr = Field(..., description="User email")
    points_spent: int = Field(..., ge=0)
    reward_value: float = Field(..., ge=0)
    coupon_code: str = Field(..., description="Generated coupon code")
    status: Literal["pending", "approved", "used", "expired"] = Field("pending")
    used_at: Optional[datetime] = Field(None)


class LeaderboardEntry(BaseModel):
    user_id: str
    user_email: EmailStr
    display_name: str = ""
    weekly_points: int = Field(0, ge=0)
    devices_reported: int = Field(0, ge=0)
    week_start_date: datetime
    week_end_date: datetime
    rank: int = Field(..., ge=1)
    prize: Optional[float] = Field(None, description="Cash prize in rupees")


class PointsTransaction(BaseModel):
    user_id: str = Field(..., description="User ID")
    delta: int = Field(..., description="Signed change to the balance")
    reason: Literal[
        "report_status", "quiz", "challenge", "redemption", "redemption_refund", "admin_adjustment"
    ] = Field(..., description="What caused the change")
    reference: Optional[str] = Field(None, description="Source document ID")
