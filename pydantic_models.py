from pydantic import BaseModel, ConfigDict
from typing import List, Literal, Union


class ControllerState(BaseModel):
    model_config = ConfigDict(frozen=True)

    input_text: str = ""
    busy: bool = False
    result_text: str = ""
    error_message: str = ""


# --- events consumed by controller.reduce ---

class InputChanged(BaseModel):
    model_config = ConfigDict(frozen=True)
    text: str


class SubmitRequested(BaseModel):
    model_config = ConfigDict(frozen=True)


class SubmitSucceeded(BaseModel):
    model_config = ConfigDict(frozen=True)
    text: str


class SubmitFailed(BaseModel):
    model_config = ConfigDict(frozen=True)
    message: str


Event = Union[InputChanged, SubmitRequested, SubmitSucceeded, SubmitFailed]


# --- outcomes of one completion call ---

class CompletionSuccess(BaseModel):
    text: str = ""


class HttpError(BaseModel):
    status: int
    message: str


class TransportError(BaseModel):
    message: str = ""


CompletionOutcome = Union[CompletionSuccess, HttpError, TransportError]


# --- outbound payload ---

class ChatMessage(BaseModel):
    role: Literal["system", "user", "assistant"]
    content: str


class CompletionRequest(BaseModel):
    model: str
    messages: List[ChatMessage]


class ViewModel(BaseModel):
    input_value: str
    input_disabled: bool
    error_banner: str
    show_error: bool
    button_label: str
    button_disabled: bool
    show_loading: bool
    loading_text: str
    result_text: str
    show_result: bool
