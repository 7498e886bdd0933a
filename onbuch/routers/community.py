# onbuch/routers/community.py
from typing import List
from fastapi import APIRouter, Depends, Query
from onbuch.models.schemas import CurrentUser, LeaderboardEntry
from onbuch.repositories import leaderboard_repo, users_repo
from onbuch.routers.users import get_current_user

router = APIRouter(prefix="/api/community", tags=["Community"])

@router.get("/leaderboard", response_model=List[LeaderboardEntry])
def get_leaderboard(
    limit: int = Query(50, ge=1, le=500),
    _: CurrentUser = Depends(get_current_user)  # auth gate
):
    # Firestore has no "not in array field of another doc" query; filter in Python.
    users = users_repo.list_users()
    excluded = leaderboard_repo.get_exclusions()
    ranked = leaderboard_repo.rank_users(users, excluded, limit)
    return [
        LeaderboardEntry(
            uid=u["uid"],
            displayName=u.get("displayName", ""),
            school=u.get("school", ""),
            points=u.get("points", 0),
        )
        for u in ranked
    ]
