"""FastAPI backend server for the Campus Advisor chat."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Literal, Optional, Union

from dotenv import load_dotenv
from fastapi import Depends, FastAPI, Header, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, conint, field_validator
from sqlalchemy.exc import SQLAlchemyError

from agents.orchestrator import OrchestratorAgent
from app.persistence import load_context, record_exchange
from database import store
from database.connection import init_db
from shared.config import Configuration
from shared.generation import TextGenerationService

# --------------------------------------------------------------------------- #
# Environment / logging setup
# --------------------------------------------------------------------------- #

load_dotenv()

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("campus_advisor.api")

# --------------------------------------------------------------------------- #
# FastAPI application & configuration
# --------------------------------------------------------------------------- #

app = FastAPI(
    title="Campus Advisor API",
    description="Chat with academic, wellness and campus-life advisors backed by a local LLM.",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",
        "http://localhost:5173",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:5173",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --------------------------------------------------------------------------- #
# Shared configuration and helpers
# --------------------------------------------------------------------------- #

AGENT_CONFIG: Optional[Configuration] = None
CONFIG_ERROR: Optional[str] = None

try:
    cfg = Configuration()
    cfg.validate()
    AGENT_CONFIG = cfg
    logger.info("Configuration loaded successfully.")
except ValueError as exc:  # pragma: no cover - configuration handled at runtime
    CONFIG_ERROR = str(exc)
    logger.warning("Configuration validation failed: %s", exc)

# One service per process so the stop endpoint can reach in-flight calls
_GENERATION_SERVICE: Optional[TextGenerationService] = None


def get_configuration() -> Configuration:
    """Return validated configuration or raise an HTTP error."""
    if AGENT_CONFIG is None:
        raise HTTPException(
            status_code=500,
            detail=f"Configuration error: {CONFIG_ERROR or 'invalid LOCAL_LLM settings'}",
        )
    return AGENT_CONFIG


def get_generation_service(config: Configuration = Depends(get_configuration)) -> TextGenerationService:
    global _GENERATION_SERVICE
    if _GENERATION_SERVICE is None:
        _GENERATION_SERVICE = TextGenerationService.from_config(config)
        logger.info("Generation service ready: %s", _GENERATION_SERVICE.model_info())
    return _GENERATION_SERVICE


def get_orchestrator(service: TextGenerationService = Depends(get_generation_service)) -> OrchestratorAgent:
    return OrchestratorAgent(service)


def get_current_user(x_user_id: Optional[int] = Header(default=None)) -> Dict[str, Any]:
    """Resolve the caller from the ``X-User-Id`` header set by the auth proxy."""
    if x_user_id is None:
        raise HTTPException(status_code=401, detail="Unauthorized")
    user = store.get_user(x_user_id)
    if user is None:
        raise HTTPException(status_code=401, detail="Unauthorized")
    return user


def get_chat_user(x_user_id: Optional[int] = Header(default=None)) -> Dict[str, Any]:
    """Like ``get_current_user``, but a storage outage must not block the chat.

    When the user table cannot be read the header id is trusted; context
    loading and persistence then degrade on their own.
    """
    try:
        return get_current_user(x_user_id)
    except SQLAlchemyError:
        logger.exception("User lookup failed for id=%s, continuing without storage", x_user_id)
        return {"id": x_user_id, "name": None, "email": None, "created_at": None, "profile": {}}


# --------------------------------------------------------------------------- #
# Pydantic models
# --------------------------------------------------------------------------- #


class HealthResponse(BaseModel):
    status: str
    message: str
    model: Optional[Dict[str, Any]] = None


class SimpleStatusResponse(BaseModel):
    success: bool = True
    message: str


class AdvisorInfo(BaseModel):
    name: str
    description: str
    intent: str


class AdvisorsResponse(BaseModel):
    success: bool = True
    advisors: List[AdvisorInfo]


class RegisterRequest(BaseModel):
    name: str = Field(..., min_length=1, description="Display name")
    email: Optional[str] = Field(default=None, description="Unique e-mail address")


class ProfileData(BaseModel):
    major: Optional[str] = None
    year: Optional[str] = None
    interests: List[str] = Field(default_factory=list)
    stress_level: Optional[str] = None
    goals: Optional[str] = None


class UserResponse(BaseModel):
    success: bool = True
    id: int
    name: str
    email: Optional[str] = None
    created_at: Optional[str] = None
    profile: ProfileData


class ChatAskRequest(BaseModel):
    message: str = Field(..., min_length=1, description="Message for the advisor")
    session_id: Optional[str] = Field(default=None, description="Client-defined session identifier")

    @field_validator("message")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Message cannot be empty")
        return value


class ChatAskResponse(BaseModel):
    success: bool = True
    session_id: Optional[str] = None
    content: str
    intent: str
    handler_name: str
    confidence: float
    tools_used: List[str] = Field(default_factory=list)
    show_emergency_popup: bool = False


class ChatHistoryMessage(BaseModel):
    id: int
    role: Literal["user", "assistant"]
    content: str
    intent: Optional[str] = None
    agent_type: Optional[str] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)
    created_at: Optional[str] = None


class ChatHistoryResponse(BaseModel):
    success: bool = True
    messages: List[ChatHistoryMessage]
    total: int


class StopResponse(SimpleStatusResponse):
    stopped: int = 0


class AdviceRecord(BaseModel):
    id: int
    category: str
    title: str
    content: str
    agent_type: Optional[str] = None
    priority: str
    metadata: Dict[str, Any] = Field(default_factory=dict)
    created_at: Optional[str] = None


class AdviceHistoryResponse(BaseModel):
    success: bool = True
    advice: List[AdviceRecord]


class ProfileUpdateRequest(BaseModel):
    name: Optional[str] = None
    major: Optional[str] = None
    year: Optional[Literal["Freshman", "Sophomore", "Junior", "Senior", "Graduate", ""]] = None
    interests: Optional[List[str]] = None
    stress_level: Optional[Union[conint(ge=0, le=10), Literal["low", "medium", "high"]]] = None
    goals: Optional[str] = None


class CampusResourceRecord(BaseModel):
    id: int
    category: str
    name: str
    description: Optional[str] = None
    location: Optional[str] = None
    contact_info: Optional[str] = None
    website: Optional[str] = None
    hours: Optional[str] = None
    tags: List[str] = Field(default_factory=list)


class ResourcesResponse(BaseModel):
    success: bool = True
    resources: List[CampusResourceRecord]
    total: int


# --------------------------------------------------------------------------- #
# API Routes
# --------------------------------------------------------------------------- #


@app.exception_handler(SQLAlchemyError)
async def storage_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Storage outages outside the chat path surface as 503, not a bare 500."""
    logger.error("Storage error on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=503, content={"detail": "Storage temporarily unavailable"})


@app.get("/", response_model=HealthResponse)
async def root() -> HealthResponse:
    """Root endpoint - health check."""
    return HealthResponse(status="ok", message="Campus Advisor API is running")


@app.get("/api/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Health check endpoint, including which model the advisors talk to."""
    if AGENT_CONFIG is None:
        return HealthResponse(status="degraded", message=f"Configuration error: {CONFIG_ERROR}")
    model = _GENERATION_SERVICE.model_info() if _GENERATION_SERVICE else {
        "model": AGENT_CONFIG.llm_model,
        "endpoint": AGENT_CONFIG.llm_base_url,
    }
    return HealthResponse(status="healthy", message="Backend is operational", model=model)


@app.get("/api/advisors", response_model=AdvisorsResponse)
async def list_advisors(orchestrator: OrchestratorAgent = Depends(get_orchestrator)) -> AdvisorsResponse:
    """Describe the advisors a message can be routed to."""
    return AdvisorsResponse(advisors=[AdvisorInfo(**info) for info in orchestrator.advisors()])


@app.post("/api/auth/register", response_model=UserResponse, status_code=201)
async def register(payload: RegisterRequest) -> UserResponse:
    """Create a student account with an empty profile."""
    if payload.email and store.get_user_by_email(payload.email):
        raise HTTPException(status_code=409, detail="Email already registered")
    user = store.create_user(payload.name, payload.email)
    logger.info("Registered user id=%s", user["id"])
    return UserResponse(**user)


# --------------------------------------------------------------------------- #
# Chat endpoints
# --------------------------------------------------------------------------- #


@app.post("/api/chat/ask", response_model=ChatAskResponse)
async def ask(
    payload: ChatAskRequest,
    user: Dict[str, Any] = Depends(get_chat_user),
    orchestrator: OrchestratorAgent = Depends(get_orchestrator),
    config: Configuration = Depends(get_configuration),
) -> ChatAskResponse:
    """Route a message to an advisor, persist the exchange and return the reply."""
    user_id = user["id"]
    logger.info("CHAT REQUEST: user=%s, message='%s...'", user_id, payload.message[:50])

    context = load_context(user_id, history_limit=config.history_limit)
    reply = await orchestrator.process_message(payload.message, context)
    recorded = record_exchange(user_id, payload.message, reply)

    logger.info("CHAT RESPONSE: intent=%s handler=%s", reply.intent.value, reply.handler_name)
    return ChatAskResponse(
        session_id=payload.session_id,
        content=reply.content,
        intent=reply.intent.value,
        handler_name=reply.handler_name,
        confidence=reply.confidence,
        tools_used=recorded["tools_used"],
        show_emergency_popup=reply.show_emergency_popup,
    )


@app.get("/api/chat/history", response_model=ChatHistoryResponse)
async def chat_history(
    limit: int = Query(20, ge=1, le=200),
    user: Dict[str, Any] = Depends(get_current_user),
) -> ChatHistoryResponse:
    """Return the latest turns in chronological order."""
    rows = store.get_conversation_history(user["id"], limit=limit)
    messages = [ChatHistoryMessage(**row) for row in rows]
    return ChatHistoryResponse(messages=messages, total=len(messages))


@app.delete("/api/chat/history", response_model=SimpleStatusResponse)
async def clear_chat_history(user: Dict[str, Any] = Depends(get_current_user)) -> SimpleStatusResponse:
    """Delete every stored turn of the caller."""
    deleted = store.clear_conversation(user["id"])
    logger.info("Cleared %d messages for user=%s", deleted, user["id"])
    return SimpleStatusResponse(message="Conversation cleared")


@app.post("/api/chat/stop", response_model=StopResponse)
async def stop_generation(
    user: Dict[str, Any] = Depends(get_current_user),
    orchestrator: OrchestratorAgent = Depends(get_orchestrator),
) -> StopResponse:
    """Signal the caller's in-flight generation to stop. Best effort only."""
    stopped = orchestrator.stop_generation(user["id"])
    return StopResponse(message="Generation stopped", stopped=stopped)


# --------------------------------------------------------------------------- #
# Advice, profile and resources
# --------------------------------------------------------------------------- #


@app.get("/api/advice/history", response_model=AdviceHistoryResponse)
async def advice_history(
    category: Optional[str] = None,
    limit: int = Query(50, ge=1, le=200),
    user: Dict[str, Any] = Depends(get_current_user),
) -> AdviceHistoryResponse:
    """Return saved advice, newest first."""
    rows = store.list_advice_logs(user["id"], category=category, limit=limit)
    return AdviceHistoryResponse(advice=[AdviceRecord(**row) for row in rows])


@app.get("/api/profile/me", response_model=UserResponse)
async def get_profile(user: Dict[str, Any] = Depends(get_current_user)) -> UserResponse:
    return UserResponse(**user)


@app.put("/api/profile/me", response_model=UserResponse)
async def update_profile(
    payload: ProfileUpdateRequest,
    user: Dict[str, Any] = Depends(get_current_user),
) -> UserResponse:
    """Update the fields present in the request body."""
    updated = store.update_profile(user["id"], **payload.model_dump(exclude_unset=True))
    if updated is None:
        raise HTTPException(status_code=404, detail="User not found")
    return UserResponse(**updated)


@app.get("/api/resources", response_model=ResourcesResponse)
async def list_resources(
    category: Optional[str] = None,
    user: Dict[str, Any] = Depends(get_current_user),
) -> ResourcesResponse:
    rows = store.list_campus_resources(category)
    return ResourcesResponse(resources=[CampusResourceRecord(**row) for row in rows], total=len(rows))


# Startup event
@app.on_event("startup")
async def startup_event():
    """Create tables on app startup."""
    init_db()


# --------------------------------------------------------------------------- #
# Entrypoint
# --------------------------------------------------------------------------- #


if __name__ == "__main__":
    import uvicorn

    print("=" * 60)
    print("Starting Campus Advisor Backend Server")
    print("=" * 60)
    print("Server will be available at: http://localhost:8000")
    print("API documentation: http://localhost:8000/docs")
    print("=" * 60)

    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info",
    )
