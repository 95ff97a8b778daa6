import logging
from functools import lru_cache

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from twilio.request_validator import RequestValidator
from twilio.twiml.voice_response import VoiceResponse

from modules.config import Settings, get_settings
from modules.menu import MenuSelection, parse_selection
from modules.twiml import CallFlow, build_selection_response, build_welcome_response
from quotes.quote_generator import QuoteGenerator

logger = logging.getLogger(__name__)


async def verify_twilio_signature(request: Request, settings: Settings = Depends(get_settings)) -> None:
    """
    Reject webhook requests that are not signed by Twilio.

    Only active when TWILIO_VALIDATE_SIGNATURE is enabled. The signed URL is the
    public one Twilio called, so PUBLIC_BASE_URL is used when the server sits behind a proxy or tunnel.
    """
    if not settings.validate_signature:
        return
    signature = request.headers.get("X-Twilio-Signature", "")
    form = await request.form()
    params = {key: str(value) for key, value in form.items()}
    if settings.public_base_url:
        url = f"{settings.public_base_url}{request.url.path}"
        if request.url.query:
            url = f"{url}?{request.url.query}"
    else:
        url = str(request.url)
    validator = RequestValidator(settings.twilio_auth_token)
    if not signature or not validator.validate(url, params, signature):
        logger.warning("Rejected webhook with invalid Twilio signature for %s", url)
        raise HTTPException(status_code=403, detail="Invalid Twilio signature")


@lru_cache()
def _quote_generator_for(settings: Settings) -> QuoteGenerator:
    return QuoteGenerator(
        api_key=settings.groq_api_key,
        model_name=settings.groq_model,
        timeout=settings.groq_timeout,
        max_retries=settings.groq_max_retries,
    )


def get_quote_generator(settings: Settings = Depends(get_settings)) -> QuoteGenerator:
    return _quote_generator_for(settings)


router = APIRouter(dependencies=[Depends(verify_twilio_signature)])


def _webhook_url(request: Request, settings: Settings, route_name: str) -> str:
    path = request.app.url_path_for(route_name)
    if settings.public_base_url:
        return f"{settings.public_base_url}{path}"
    return str(path)


def _call_flow(request: Request, settings: Settings, quote: str = None) -> CallFlow:
    return CallFlow(
        call_url=_webhook_url(request, settings, "handle_call"),
        action_url=_webhook_url(request, settings, "handle_action"),
        agent_phone_number=settings.agent_phone_number,
        voice=settings.say_voice,
        language=settings.say_language,
        quote=quote,
    )


def _twiml(response: VoiceResponse) -> Response:
    return Response(content=str(response), media_type="application/xml")


@router.post("/call", name="handle_call")
async def handle_call(request: Request, settings: Settings = Depends(get_settings)):
    """
    Answer a call (or a redirect back to the menu) with the welcome prompt.

    Returns:
        Response: TwiML that gathers one digit and posts it to /action,
        then redirects back here if the caller presses nothing.
    """
    form = await request.form()
    call_sid = form.get("CallSid", "unknown")
    logger.info(f"[{call_sid}] Prompting caller for a menu selection.")
    return _twiml(build_welcome_response(_call_flow(request, settings)))


@router.post("/action", name="handle_action")
async def handle_action(
    request: Request,
    settings: Settings = Depends(get_settings),
    quote_generator: QuoteGenerator = Depends(get_quote_generator),
):
    """
    Route the caller based on the digit collected by <Gather>.

    Returns:
        Response: TwiML that dials the agent (1), reads an inspirational quote
        and hangs up (2), or sends the caller back to the menu (anything else, or nothing).
    """
    form = await request.form()
    call_sid = form.get("CallSid", "unknown")
    selection = parse_selection(form.get("Digits"))
    logger.info(f"[{call_sid}] Menu selection: {selection.value}")

    quote = None
    if selection is MenuSelection.INSPIRATION:
        quote = await quote_generator.generate()
        logger.debug(f"[{call_sid}] Quote: {quote}")

    flow = _call_flow(request, settings, quote=quote)
    return _twiml(build_selection_response(selection, flow))
