"""
TwiML documents returned by the call webhooks.

Every builder returns a complete VoiceResponse. Each document either ends the
call, bridges it to the agent, or redirects back to the welcome menu.
"""

from dataclasses import dataclass
from typing import Callable, Dict, Optional

from twilio.twiml.voice_response import VoiceResponse

from modules.menu import MenuSelection

WELCOME_MESSAGE = "Welcome."
MENU_PROMPT = "Press 1 to speak to a support agent. Press 2 to hear an inspirational message."
TRANSFER_MESSAGE = "You will now be transferred to a support agent."
CLOSING_MESSAGE = "Hope you have been inspired. Goodbye!"
INVALID_MESSAGE = "Invalid number entered!"


@dataclass(frozen=True)
class CallFlow:
    """Everything a builder needs to render one response."""
    call_url: str
    action_url: str
    agent_phone_number: str
    voice: str = "Polly.Salli"
    language: str = "en-US"
    quote: Optional[str] = None


def build_welcome_response(flow: CallFlow) -> VoiceResponse:
    response = VoiceResponse()
    gather = response.gather(num_digits=1, action=flow.action_url, method="POST")
    gather.say(WELCOME_MESSAGE, voice=flow.voice, language=flow.language)
    gather.say(MENU_PROMPT, voice=flow.voice, language=flow.language)
    # Only reached when <Gather> times out without a keypress.
    response.redirect(flow.call_url, method="POST")
    return response


def _build_support_response(flow: CallFlow) -> VoiceResponse:
    response = VoiceResponse()
    response.say(TRANSFER_MESSAGE, voice=flow.voice, language=flow.language)
    # Nothing may follow <Dial>: Twilio hangs up once the bridged leg ends or fails.
    response.dial(flow.agent_phone_number)
    return response


def _build_inspiration_response(flow: CallFlow) -> VoiceResponse:
    if not flow.quote:
        raise ValueError("An inspirational quote is required for this response.")
    response = VoiceResponse()
    response.say(flow.quote, voice=flow.voice, language=flow.language)
    response.say(CLOSING_MESSAGE, voice=flow.voice, language=flow.language)
    return response


def _build_invalid_response(flow: CallFlow) -> VoiceResponse:
    response = VoiceResponse()
    response.say(INVALID_MESSAGE, voice=flow.voice, language=flow.language)
    response.redirect(flow.call_url, method="POST")
    return response


def _build_absent_response(flow: CallFlow) -> VoiceResponse:
    response = VoiceResponse()
    response.redirect(flow.call_url, method="POST")
    return response


SELECTION_BUILDERS: Dict[MenuSelection, Callable[[CallFlow], VoiceResponse]] = {
    MenuSelection.SUPPORT: _build_support_response,
    MenuSelection.INSPIRATION: _build_inspiration_response,
    MenuSelection.INVALID: _build_invalid_response,
    MenuSelection.ABSENT: _build_absent_response,
}


def build_selection_response(selection: MenuSelection, flow: CallFlow) -> VoiceResponse:
    """
    Render the TwiML for a menu selection.

    Args:
        selection (MenuSelection): Classified keypad input.
        flow (CallFlow): URLs, agent number, voice settings and, for INSPIRATION, the quote.

    Returns:
        VoiceResponse: The response document for the selection.
    """
    return SELECTION_BUILDERS[selection](flow)
