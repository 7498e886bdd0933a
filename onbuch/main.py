import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from onbuch.core.config import settings
from onbuch.routers import admin_settings, agents, ai_tutor, auth, community, flashcards, misc, users


if not settings.SECRET_KEY:
    raise RuntimeError("SECRET_KEY is required")

logging.basicConfig(level=logging.INFO, format="[%(asctime)s] %(levelname)s %(name)s - %(message)s")

app = FastAPI(title="OnBuch API")

origins = [str(o).rstrip("/") for o in settings.CORS_ORIGINS]
if settings.ENV == "development":
    origins += ["http://localhost:3000", "http://localhost:9002"]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

app.include_router(auth.router)
app.include_router(misc.router)
app.include_router(users.router)
app.include_router(ai_tutor.router)
app.include_router(agents.router)
app.include_router(community.router)
app.include_router(flashcards.router)
app.include_router(admin_settings.router)

@app.get("/")
def root():
    return {"message": "OnBuch API"}
