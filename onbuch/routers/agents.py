from typing import List
from fastapi import APIRouter, Depends, HTTPException
from onbuch.models.schemas import Agent, AgentIn, AgentChatRequest, AgentChatResponse, CurrentUser
from onbuch.repositories import agents_repo
from onbuch.routers.ai_tutor import tutor_error_to_http
from onbuch.routers.users import get_current_user, require_admin
from onbuch.services.agent_service import AgentService, AgentNotFoundError
from onbuch.services.ai_config import FirestoreConfigProvider
from onbuch.services.gemini import TutorError

router = APIRouter(prefix="/api/agents", tags=["AI Agents"])


def get_agent_service() -> AgentService:
    return AgentService(FirestoreConfigProvider())


@router.get("", response_model=List[Agent])
def list_agents(_: CurrentUser = Depends(get_current_user)):
    return agents_repo.list_agents()

@router.get("/{agent_id}", response_model=Agent)
def get_agent(agent_id: str, _: CurrentUser = Depends(get_current_user)):
    agent = agents_repo.get_agent(agent_id)
    if not agent:
        raise HTTPException(status_code=404, detail="Agent introuvable")
    return agent

@router.post("/{agent_id}/chat", response_model=AgentChatResponse)
def chat_with_agent(
    agent_id: str,
    payload: AgentChatRequest,
    _: CurrentUser = Depends(get_current_user),
    service: AgentService = Depends(get_agent_service),
):
    try:
        return service.chat(agent_id, payload.prompt, image=payload.image, history=payload.history)
    except AgentNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except (TutorError, ValueError) as e:
        raise tutor_error_to_http(e)

# --- admin ---

@router.post("", response_model=Agent, status_code=201)
def create_agent(payload: AgentIn, _: CurrentUser = Depends(require_admin)):
    agent_id = agents_repo.create_agent(payload.model_dump())
    return agents_repo.get_agent(agent_id)

@router.put("/{agent_id}", response_model=Agent)
def update_agent(agent_id: str, payload: AgentIn, _: CurrentUser = Depends(require_admin)):
    if not agents_repo.get_agent(agent_id):
        raise HTTPException(status_code=404, detail="Agent introuvable")
    agents_repo.update_agent(agent_id, payload.model_dump())
    return agents_repo.get_agent(agent_id)

@router.delete("/{agent_id}", status_code=204)
def delete_agent(agent_id: str, _: CurrentUser = Depends(require_admin)):
    agents_repo.delete_agent(agent_id)
