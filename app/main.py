from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from fastapi import Depends, FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field, field_validator

from config.settings import get_settings
from rachael.core.models import ChatTurn, Role
from rachael.core.modes import ConversationMode
from rachael.gateway import CompletionError, CompletionGateway
from rachael.transcript import assemble


settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="[%(asctime)s] %(levelname)s - %(message)s",
)
logger = logging.getLogger("rachael")

app = FastAPI(title="Rachael Incident Assistant", version="1.0.0")

ALLOWED_HEADERS = ["authorization", "x-client-info", "apikey", "content-type"]

# Browser clients call from any origin and send their own identification headers.
CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": ", ".join(ALLOWED_HEADERS),
}


class SummarizationRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str = Field(..., description="Newest user message or the summary instruction")
    history: List[ChatTurn] = Field(
        default_factory=list,
        description="Prior turns kept by the client, oldest first, without a system turn",
    )
    is_summary_request: Optional[bool] = Field(
        default=False,
        alias="isSummaryRequest",
        description="True asks for the written incident summary instead of another question",
    )

    @field_validator("history")
    @classmethod
    def _no_system_turns(cls, history: List[ChatTurn]) -> List[ChatTurn]:
        for index, turn in enumerate(history):
            if turn.role == Role.SYSTEM:
                raise ValueError(f"history[{index}] must not be a system turn")
        return history

    @property
    def mode(self) -> ConversationMode:
        return ConversationMode.from_flag(self.is_summary_request)


def get_gateway() -> CompletionGateway:
    settings = get_settings()
    return CompletionGateway(
        api_key=settings.nvidia_api_key,
        endpoint=settings.chat_completions_url,
        model=settings.chat_model,
        timeout=settings.upstream_timeout,
    )


def error_response(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code, headers=CORS_HEADERS)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    problems = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        problems.append(f"{location}: {err.get('msg')}" if location else str(err.get("msg")))
    logger.warning("Rejected chat payload: %s", problems)
    return error_response("Invalid request: " + "; ".join(problems), 422)


@app.options("/chat-with-rachael")
def chat_preflight() -> Response:
    return Response(status_code=200, headers=CORS_HEADERS)


@app.post("/chat-with-rachael")
def chat_with_rachael(
    req: SummarizationRequest, gateway: CompletionGateway = Depends(get_gateway)
) -> Any:
    if not req.message.strip():
        return error_response("message cannot be empty", 400)

    mode = req.mode
    logger.info(
        "Incoming chat: mode=%s history_turns=%s message_len=%s",
        mode.value,
        len(req.history),
        len(req.message),
    )

    try:
        conversation = assemble(req.message, req.history, mode)
        data: Dict[str, Any] = gateway.complete(conversation, mode)
    except CompletionError as exc:
        logger.warning("Chat completion failed: %s", exc)
        return error_response(str(exc), 500)
    except Exception as exc:
        logger.exception("Error in chat-with-rachael: %s", exc)
        return error_response(str(exc), 500)

    return JSONResponse(data, headers=CORS_HEADERS)


@app.get("/health")
def health():
    return {"status": "ok"}
