from typing import List
from fastapi import APIRouter, Depends, HTTPException
from onbuch.models.schemas import (
    ActivityIn, CardProgressIn, CurrentUser, DeckProgress, FlashcardDeck, FlashcardDeckIn,
)
from onbuch.repositories import flashcards_repo, users_repo
from onbuch.routers.users import get_current_user

router = APIRouter(prefix="/api/flashcards", tags=["Flashcards"])


def _get_deck_or_404(deck_id: str) -> dict:
    deck = flashcards_repo.get_deck(deck_id)
    if not deck:
        raise HTTPException(status_code=404, detail="Deck introuvable")
    return deck

def _ensure_can_edit(deck: dict, user: CurrentUser):
    if not user.is_admin and deck.get("createdBy") != user.uid:
        raise HTTPException(status_code=403, detail="Vous ne pouvez pas modifier ce deck")


@router.get("/decks", response_model=List[FlashcardDeck])
def list_decks(current_user: CurrentUser = Depends(get_current_user)):
    if current_user.is_admin:
        return flashcards_repo.list_all_decks()
    profile = users_repo.get_user(current_user.uid) or {}
    school_class = profile.get("schoolClass")
    if not school_class:
        return []
    return flashcards_repo.list_decks_for_user(current_user.uid, school_class, profile.get("series", ""))

@router.get("/decks/{deck_id}", response_model=FlashcardDeck)
def get_deck(deck_id: str, current_user: CurrentUser = Depends(get_current_user)):
    deck = _get_deck_or_404(deck_id)
    if current_user.is_admin:
        return deck
    profile = users_repo.get_user(current_user.uid) or {}
    if not flashcards_repo.can_view_deck(deck, current_user.uid, profile.get("schoolClass"), profile.get("series")):
        raise HTTPException(status_code=404, detail="Deck introuvable")
    return deck

@router.post("/decks", response_model=FlashcardDeck, status_code=201)
def create_deck(payload: FlashcardDeckIn, current_user: CurrentUser = Depends(get_current_user)):
    owner = None if current_user.is_admin else current_user.uid
    deck_id = flashcards_repo.create_deck(payload.model_dump(), owner)
    return flashcards_repo.get_deck(deck_id)

@router.put("/decks/{deck_id}", response_model=FlashcardDeck)
def update_deck(deck_id: str, payload: FlashcardDeckIn, current_user: CurrentUser = Depends(get_current_user)):
    _ensure_can_edit(_get_deck_or_404(deck_id), current_user)
    flashcards_repo.update_deck(deck_id, payload.model_dump())
    return flashcards_repo.get_deck(deck_id)

@router.delete("/decks/{deck_id}", status_code=204)
def delete_deck(deck_id: str, current_user: CurrentUser = Depends(get_current_user)):
    _ensure_can_edit(_get_deck_or_404(deck_id), current_user)
    flashcards_repo.delete_deck(deck_id)

@router.get("/decks/{deck_id}/progress", response_model=DeckProgress)
def get_progress(deck_id: str, current_user: CurrentUser = Depends(get_current_user)):
    return DeckProgress(deckId=deck_id, progress=flashcards_repo.get_progress(current_user.uid, deck_id))

@router.put("/decks/{deck_id}/progress", response_model=DeckProgress)
def update_progress(deck_id: str, payload: CardProgressIn, current_user: CurrentUser = Depends(get_current_user)):
    flashcards_repo.update_progress(current_user.uid, deck_id, payload.cardId, payload.status)
    return DeckProgress(deckId=deck_id, progress=flashcards_repo.get_progress(current_user.uid, deck_id))

@router.post("/points")
def add_points(payload: ActivityIn, current_user: CurrentUser = Depends(get_current_user)):
    added = flashcards_repo.add_points_for_activity(current_user.uid, payload.activity)
    return {"added": added}
