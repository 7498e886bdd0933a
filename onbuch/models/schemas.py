from pydantic import BaseModel, EmailStr, Field
from typing import Optional, List, Dict, Literal
from datetime import datetime


# --- Auth / users ---

class SessionIn(BaseModel):
    token: str

class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"

class CurrentUser(BaseModel):
    uid: str
    email: Optional[EmailStr] = None
    is_admin: bool = False

class UserProfile(BaseModel):
    uid: str
    email: Optional[EmailStr] = None
    displayName: str = ""
    school: str = ""
    whatsapp: str = ""
    gender: str = ""
    schoolClass: str = ""
    series: str = ""
    points: int = 0
    savedCourses: List[str] = []
    savedResources: List[str] = []
    createdAt: Optional[datetime] = None

class UserProfileUpdate(BaseModel):
    displayName: str
    school: str = ""
    whatsapp: str = ""
    schoolClass: str = ""
    series: str = ""


# --- AI tutor / agents ---

class ChatTurn(BaseModel):
    role: Literal["user", "model"]
    content: str

class PlotPoint(BaseModel):
    x: float
    y: float

class PlotData(BaseModel):
    function: str
    points: List[PlotPoint]

class TutorRequest(BaseModel):
    message: str
    image: Optional[str] = Field(None, description="Image as a data URI")
    history: List[ChatTurn] = []

class TutorResponse(BaseModel):
    response: str
    plotData: Optional[PlotData] = None

class AgentChatRequest(BaseModel):
    prompt: str
    image: Optional[str] = Field(None, description="Image as a data URI")
    history: List[ChatTurn] = []

class AgentChatResponse(BaseModel):
    response: str

class AgentIn(BaseModel):
    name: str = Field(..., min_length=1)
    description: str = ""
    systemPrompt: str = Field(..., min_length=1)
    icon: str = "Bot"
    color: str = "#3b82f6"

class Agent(AgentIn):
    id: str
    createdAt: Optional[datetime] = None


# --- Admin settings ---

class ApiKeysIn(BaseModel):
    gemini: str = Field(..., min_length=10, description="One key per line")

class TutorSettingsIn(BaseModel):
    systemPrompt: str = Field(..., min_length=20)

class AiSettingsOut(BaseModel):
    gemini: str = ""
    systemPrompt: str = ""


# --- Community ---

class LeaderboardEntry(BaseModel):
    uid: str
    displayName: str = ""
    school: str = ""
    points: int = 0

class ExclusionIn(BaseModel):
    exclude: bool


# --- Flashcards ---

class Card(BaseModel):
    id: str
    question: str
    answer: str

class FlashcardDeckIn(BaseModel):
    title: str = Field(..., min_length=1)
    subjectId: str
    isPublic: bool = False
    classes: List[str] = []
    series: List[str] = []
    cards: List[Card] = []

class FlashcardDeck(FlashcardDeckIn):
    id: str
    createdBy: str
    createdAt: Optional[datetime] = None

class CardProgressIn(BaseModel):
    cardId: str
    status: Literal["learning", "mastered"]

class DeckProgress(BaseModel):
    deckId: str
    progress: Dict[str, Literal["learning", "mastered"]] = {}

class ActivityIn(BaseModel):
    activity: Literal["flashcard_review", "chapter_review"]
