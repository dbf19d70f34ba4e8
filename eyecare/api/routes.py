# eyecare/api/routes.py
from __future__ import annotations

import logging
from functools import lru_cache

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse

from eyecare.diagnosis import chat_about_diagnosis, format_diagnosis, generate_diagnosis
from eyecare.intake import catalog
from eyecare.intake.errors import (
    InvalidImageError,
    UnknownCategoryError,
    WizardValidationError,
)
from eyecare.intake.state import WizardState
from eyecare.llm import LLMClient, LLMError, OpenAILLMClient
from eyecare.services import LLMClientFactory, SessionNotFoundError, WizardSessionService
from .schemas import (
    CatalogResponse,
    ChatRequest,
    ChatResponse,
    ChatTurnRequest,
    CustomEntryRequest,
    ErrorResponse,
    GenerateDiagnosisRequest,
    GenerateDiagnosisResponse,
    ImageUploadRequest,
    OptionSchema,
    SelectEyeRequest,
    SuggestionsResponse,
    ToggleRequest,
    WizardSessionResponse,
    WizardStateSchema,
)

logger = logging.getLogger(__name__)

router = APIRouter()

_service = WizardSessionService()


@lru_cache(maxsize=1)
def get_llm_client() -> LLMClient:
    return OpenAILLMClient()


def get_llm_client_factory() -> LLMClientFactory:
    return get_llm_client


def get_session_service() -> WizardSessionService:
    return _service


def _option_schemas(options) -> list[OptionSchema]:
    return [OptionSchema(id=o.id, label=o.label, emoji=o.emoji) for o in options]


def _session_response(
    service: WizardSessionService,
    session_id: str,
    state: WizardState,
) -> WizardSessionResponse:
    return WizardSessionResponse(
        session_id=session_id,
        state=WizardStateSchema(
            step=int(state.step),
            step_name=state.step.name.lower(),
            selected_symptoms=list(state.selected_symptoms),
            symptom_options=_option_schemas(service.wizard.symptom_options(state)),
            affected_eye=state.affected_eye,
            ocular_history=list(state.ocular_history),
            medical_conditions=list(state.medical_conditions),
            show_search=dict(state.show_search),
            has_image=state.image_data_url is not None,
            diagnosis=state.diagnosis,
            diagnosis_sections=format_diagnosis(state.diagnosis),
            is_generating=state.is_generating,
            chat=list(state.chat),
            warning=state.warning,
        ),
    )


def _load_state(service: WizardSessionService, session_id: str) -> WizardState:
    try:
        return service.get(session_id)
    except SessionNotFoundError:
        raise HTTPException(
            status_code=404,
            detail="Wizard session not found. Start a new session.",
        )


# ----------------------------------------------------------------------
# Stateless relays
# ----------------------------------------------------------------------


@router.post(
    "/generate-diagnosis",
    response_model=GenerateDiagnosisResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def generate_diagnosis_endpoint(
    payload: GenerateDiagnosisRequest,
    llm_client_factory: LLMClientFactory = Depends(get_llm_client_factory),
):
    try:
        diagnosis = generate_diagnosis(payload, llm_client_factory())
    except InvalidImageError as e:
        return JSONResponse(status_code=400, content={"error": str(e)})
    except LLMError:
        logger.exception("Error generating diagnosis")
        return JSONResponse(status_code=500, content={"error": "Failed to generate diagnosis"})

    return GenerateDiagnosisResponse(diagnosis=diagnosis)


@router.post(
    "/chat",
    response_model=ChatResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def chat_endpoint(
    payload: ChatRequest,
    llm_client_factory: LLMClientFactory = Depends(get_llm_client_factory),
):
    try:
        response = chat_about_diagnosis(
            payload.messages, payload.diagnosis, llm_client_factory()
        )
    except LLMError:
        logger.exception("Error in chat API")
        return JSONResponse(status_code=500, content={"error": "Failed to generate response"})
    except ValueError as e:
        return JSONResponse(status_code=400, content={"error": str(e)})

    return ChatResponse(response=response)


# ----------------------------------------------------------------------
# Option catalogs
# ----------------------------------------------------------------------


@router.get("/catalog/{category}", response_model=CatalogResponse)
def get_catalog(category: str) -> CatalogResponse:
    try:
        options = catalog.options_for(category)
    except UnknownCategoryError:
        raise HTTPException(status_code=404, detail=f"Unknown category: {category}")
    return CatalogResponse(category=category, options=_option_schemas(options))


@router.get("/suggestions/{category}", response_model=SuggestionsResponse)
def get_suggestions(category: str, q: str = "") -> SuggestionsResponse:
    try:
        suggestions = catalog.suggest(category, q)
    except UnknownCategoryError:
        raise HTTPException(status_code=404, detail=f"Unknown category: {category}")
    return SuggestionsResponse(category=category, query=q, suggestions=suggestions)


# ----------------------------------------------------------------------
# Wizard sessions
# ----------------------------------------------------------------------


@router.post("/wizard", response_model=WizardSessionResponse)
def start_wizard(
    service: WizardSessionService = Depends(get_session_service),
) -> WizardSessionResponse:
    session_id, state = service.start_session()
    return _session_response(service, session_id, state)


@router.get("/wizard/{session_id}", response_model=WizardSessionResponse)
def get_wizard(
    session_id: str,
    service: WizardSessionService = Depends(get_session_service),
) -> WizardSessionResponse:
    state = _load_state(service, session_id)
    return _session_response(service, session_id, state)


@router.delete("/wizard/{session_id}", status_code=204)
def discard_wizard(
    session_id: str,
    service: WizardSessionService = Depends(get_session_service),
) -> None:
    try:
        service.discard(session_id)
    except SessionNotFoundError:
        raise HTTPException(status_code=404, detail="Wizard session not found.")


def _apply(service: WizardSessionService, session_id: str, action) -> WizardSessionResponse:
    """
    Run a wizard action against a session and render the new state,
    mapping wizard errors to 400 responses.
    """
    state = _load_state(service, session_id)
    try:
        action(state)
    except (WizardValidationError, InvalidImageError) as e:
        raise HTTPException(
            status_code=400,
            detail={
                "warning": str(e),
                "state": _session_response(service, session_id, state).state.model_dump(),
            },
        )
    return _session_response(service, session_id, state)


@router.post("/wizard/{session_id}/symptoms/toggle", response_model=WizardSessionResponse)
def toggle_symptom(
    session_id: str,
    payload: ToggleRequest,
    service: WizardSessionService = Depends(get_session_service),
) -> WizardSessionResponse:
    return _apply(service, session_id, lambda s: service.wizard.toggle_symptom(s, payload.id))


@router.post("/wizard/{session_id}/symptoms/custom", response_model=WizardSessionResponse)
def add_custom_symptom(
    session_id: str,
    payload: CustomEntryRequest,
    service: WizardSessionService = Depends(get_session_service),
) -> WizardSessionResponse:
    return _apply(service, session_id, lambda s: service.wizard.add_custom_symptom(s, payload.label))


@router.post("/wizard/{session_id}/eye", response_model=WizardSessionResponse)
def select_eye(
    session_id: str,
    payload: SelectEyeRequest,
    service: WizardSessionService = Depends(get_session_service),
) -> WizardSessionResponse:
    return _apply(service, session_id, lambda s: service.wizard.select_eye(s, payload.eye))


@router.post("/wizard/{session_id}/ocular-history/toggle", response_model=WizardSessionResponse)
def toggle_ocular_history(
    session_id: str,
    payload: ToggleRequest,
    service: WizardSessionService = Depends(get_session_service),
) -> WizardSessionResponse:
    return _apply(service, session_id, lambda s: service.wizard.toggle_ocular_history(s, payload.id))


@router.post("/wizard/{session_id}/ocular-history/custom", response_model=WizardSessionResponse)
def add_custom_ocular_history(
    session_id: str,
    payload: CustomEntryRequest,
    service: WizardSessionService = Depends(get_session_service),
) -> WizardSessionResponse:
    return _apply(
        service, session_id, lambda s: service.wizard.add_custom_ocular_history(s, payload.label)
    )


@router.post("/wizard/{session_id}/medical-conditions/toggle", response_model=WizardSessionResponse)
def toggle_medical_condition(
    session_id: str,
    payload: ToggleRequest,
    service: WizardSessionService = Depends(get_session_service),
) -> WizardSessionResponse:
    return _apply(
        service, session_id, lambda s: service.wizard.toggle_medical_condition(s, payload.id)
    )


@router.post("/wizard/{session_id}/medical-conditions/custom", response_model=WizardSessionResponse)
def add_custom_medical_condition(
    session_id: str,
    payload: CustomEntryRequest,
    service: WizardSessionService = Depends(get_session_service),
) -> WizardSessionResponse:
    return _apply(
        service, session_id, lambda s: service.wizard.add_custom_medical_condition(s, payload.label)
    )


@router.post("/wizard/{session_id}/image", response_model=WizardSessionResponse)
def upload_image(
    session_id: str,
    payload: ImageUploadRequest,
    service: WizardSessionService = Depends(get_session_service),
) -> WizardSessionResponse:
    return _apply(service, session_id, lambda s: service.wizard.set_image(s, payload.image_url))


@router.post("/wizard/{session_id}/proceed", response_model=WizardSessionResponse)
def proceed(
    session_id: str,
    service: WizardSessionService = Depends(get_session_service),
    llm_client_factory: LLMClientFactory = Depends(get_llm_client_factory),
) -> WizardSessionResponse:
    return _apply(service, session_id, lambda s: service.proceed(session_id, llm_client_factory))


@router.post("/wizard/{session_id}/back", response_model=WizardSessionResponse)
def back(
    session_id: str,
    service: WizardSessionService = Depends(get_session_service),
) -> WizardSessionResponse:
    return _apply(service, session_id, service.wizard.back)


@router.post("/wizard/{session_id}/restart", response_model=WizardSessionResponse)
def restart(
    session_id: str,
    service: WizardSessionService = Depends(get_session_service),
) -> WizardSessionResponse:
    return _apply(service, session_id, service.wizard.restart)


@router.post("/wizard/{session_id}/chat", response_model=WizardSessionResponse)
def send_chat_message(
    session_id: str,
    payload: ChatTurnRequest,
    service: WizardSessionService = Depends(get_session_service),
    llm_client_factory: LLMClientFactory = Depends(get_llm_client_factory),
) -> WizardSessionResponse:
    return _apply(
        service,
        session_id,
        lambda s: service.send_chat_message(session_id, payload.content, llm_client_factory),
    )
