"""Short physics explanations of the current sky using the Claude API."""

import logging
import os

import anthropic

from rayleighsky.i18n import t
from rayleighsky.models import ExplanationResult, SkySnapshot
from rayleighsky.physics import phase_label

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "claude-sonnet-4-6"

_SYSTEM_PROMPT = (
    "You are a friendly physics professor explaining Rayleigh scattering to a student.\n"
    "You only ever describe the simulation state you are given.\n"
    "Answer concisely in at most 3 sentences, plain prose, no lists or headings."
)

_LANGUAGE_NAMES: dict[str, str] = {"ko": "Korean", "en": "English"}


def _build_prompt(sun_angle: float, path_length: float, lang: str) -> str:
    return (
        "Current simulation state:\n"
        f"- Sun angle: {sun_angle:.1f} degrees (0° is sunrise, 90° is noon, 180° is sunset).\n"
        f"- Time of day: {phase_label(sun_angle)}.\n"
        f"- Atmosphere path length factor: {path_length:.2f}x (relative to vertical).\n\n"
        "Explain why the sky looks the way it does right now in the simulation. "
        "Focus on the relationship between path length and blue/red light scattering.\n"
        f"Write in {_LANGUAGE_NAMES.get(lang, 'English')}."
    )


def explain_sky_physics(sun_angle: float, path_length: float, lang: str = "en") -> str:
    """Ask the model why the sky looks the way it does at this angle.

    Never raises: a missing credential, an API/network failure, or an empty
    reply each map to a fixed fallback string. No retries.

    Args:
        sun_angle: Raw sun angle in degrees (0–180).
        path_length: Path-length factor for that angle.
        lang: Language code ('ko' or 'en') for the reply and fallbacks.

    Returns:
        A short prose explanation, or a fallback string.
    """
    api_key = os.environ.get("ANTHROPIC_API_KEY")
    if not api_key:
        logger.warning("ANTHROPIC_API_KEY is missing; explanations run in offline mode")
        return t("explanation_offline", lang)

    try:
        client = anthropic.Anthropic(api_key=api_key)
        message = client.messages.create(
            model=os.environ.get("RAYLEIGHSKY_MODEL", DEFAULT_MODEL),
            max_tokens=400,
            system=_SYSTEM_PROMPT,
            messages=[
                {"role": "user", "content": _build_prompt(sun_angle, path_length, lang)}
            ],
        )
        text = "".join(
            block.text for block in message.content if getattr(block, "type", None) == "text"
        ).strip()
    except Exception:
        logger.exception("explanation request failed")
        return t("explanation_error", lang)

    if not text:
        logger.warning("explanation response was empty")
        return t("explanation_empty", lang)
    return text


def request_explanation(snapshot: SkySnapshot, lang: str = "en") -> ExplanationResult:
    """Explain a snapshot and tag the prose with the state it describes.

    Callers compare the result against the current snapshot with
    ExplanationResult.matches() and drop it once the slider has moved on.
    """
    text = explain_sky_physics(snapshot.sun_angle, snapshot.path_length, lang=lang)
    return ExplanationResult(
        sun_angle=snapshot.sun_angle, path_length=snapshot.path_length, text=text
    )
