"""
Symptom Query Controller.

State lives in an immutable ControllerState; every change goes through
reduce(state, event). SymptomQueryController wraps one state plus the
completion function and runs the submit cycle.
"""

import logging
from typing import Callable, Optional

from llm_wrapper import complete_symptoms
from pydantic_models import (
    CompletionOutcome,
    CompletionSuccess,
    ControllerState,
    Event,
    HttpError,
    InputChanged,
    SubmitFailed,
    SubmitRequested,
    SubmitSucceeded,
    TransportError,
    ViewModel,
)

logger = logging.getLogger(__name__)

EMPTY_INPUT_MESSAGE = "Please enter some symptoms to get a diagnosis."
NO_RESPONSE_MESSAGE = "No valid response received from the AI. Please try again."
UNEXPECTED_ERROR_FALLBACK = "Please try again later."
BUTTON_IDLE_LABEL = "Check Symptoms"
BUTTON_BUSY_LABEL = "Checking..."
LOADING_TEXT = "Asking MEDICO for a diagnosis..."


def reduce(state: ControllerState, event: Event) -> ControllerState:
    if isinstance(event, InputChanged):
        return state.model_copy(update={"input_text": event.text})

    if isinstance(event, SubmitRequested):
        if state.busy:
            # one request in flight at a time; the second submit is dropped
            return state
        if not state.input_text.strip():
            return state.model_copy(update={"error_message": EMPTY_INPUT_MESSAGE})
        return state.model_copy(update={"error_message": "", "result_text": "", "busy": True})

    if isinstance(event, SubmitSucceeded):
        return state.model_copy(update={"result_text": event.text, "busy": False})

    if isinstance(event, SubmitFailed):
        return state.model_copy(update={"error_message": event.message, "busy": False})

    raise TypeError(f"Unknown event: {event!r}")


def describe_http_error(status: int, message: str) -> str:
    return (
        f"API request failed with status {status}. "
        f"Error: {message or 'Unknown error.'} "
        f"Please check your OpenRouter API key and permissions."
    )


def describe_transport_error(message: str) -> str:
    return f"An unexpected error occurred: {message or UNEXPECTED_ERROR_FALLBACK}"


def outcome_to_event(outcome: CompletionOutcome) -> Event:
    """Map a completion outcome onto the event that ends the submit cycle."""
    if isinstance(outcome, CompletionSuccess):
        return SubmitSucceeded(text=outcome.text or NO_RESPONSE_MESSAGE)
    if isinstance(outcome, HttpError):
        return SubmitFailed(message=describe_http_error(outcome.status, outcome.message))
    if isinstance(outcome, TransportError):
        return SubmitFailed(message=describe_transport_error(outcome.message))
    raise TypeError(f"Unknown completion outcome: {outcome!r}")


def render(state: ControllerState) -> ViewModel:
    return ViewModel(
        input_value=state.input_text,
        input_disabled=state.busy,
        error_banner=state.error_message,
        show_error=bool(state.error_message),
        button_label=BUTTON_BUSY_LABEL if state.busy else BUTTON_IDLE_LABEL,
        button_disabled=state.busy,
        show_loading=state.busy,
        loading_text=LOADING_TEXT,
        result_text=state.result_text,
        show_result=bool(state.result_text),
    )


class SymptomQueryController:
    """Owns one ControllerState and runs submit cycles against `complete`."""

    def __init__(
        self,
        complete: Optional[Callable[[str], CompletionOutcome]] = None,
        state: Optional[ControllerState] = None,
    ):
        self._complete = complete or complete_symptoms
        self.state = state or ControllerState()
        self._pending_text = self.state.input_text

    def dispatch(self, event: Event) -> ControllerState:
        self.state = reduce(self.state, event)
        return self.state

    def change_input(self, text: str) -> ControllerState:
        return self.dispatch(InputChanged(text=text))

    def request_submit(self) -> bool:
        """Start a submit cycle. Returns True when a request is now pending."""
        was_busy = self.state.busy
        self.dispatch(SubmitRequested())
        started = self.state.busy and not was_busy
        if started:
            # the request carries the text as it was when submitted
            self._pending_text = self.state.input_text
        return started

    def resolve(self) -> ControllerState:
        """Run the pending request and finish the cycle; busy is always cleared."""
        if not self.state.busy:
            return self.state
        try:
            event = outcome_to_event(self._complete(self._pending_text))
        except Exception as e:
            logger.exception("Completion call raised")
            event = outcome_to_event(TransportError(message=str(e)))
        return self.dispatch(event)

    def submit(self) -> ControllerState:
        if self.request_submit():
            self.resolve()
        return self.state

    def view(self) -> ViewModel:
        return render(self.state)
