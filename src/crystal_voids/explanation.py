"""
Natural-language explanations of interstitial voids.

Explanations are requested from the Gemini REST API when an API key is
configured. Without a key a canned markdown summary is returned instead.
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

import requests

from crystal_voids.models import LatticeType, VoidType


logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"

SYSTEM_INSTRUCTION = """\
You are an expert crystallography professor.
Explain concepts clearly and concisely for students.
Focus on the geometry of voids (interstices) in metal lattices.
When asked, assume the user is looking at a 3D visualization.
Use Markdown for formatting.
"""

NO_EXPLANATION = "No explanation generated."

OFFLINE_NOTE = "*(Set GEMINI_API_KEY to generate live explanations.)*"

FAILURE_MESSAGE = (
    "Failed to fetch an explanation. Check your network connection "
    "and that the API key is valid."
)


class ExplanationError(RuntimeError):
    """Raised when the remote explanation request fails."""


@dataclass
class ExplanationConfig:
    """Configuration for the remote explanation service."""
    api_key: Optional[str] = None
    model: str = DEFAULT_MODEL
    base_url: str = DEFAULT_BASE_URL
    timeout: float = 30.0

    @classmethod
    def from_env(cls) -> "ExplanationConfig":
        """
        Build a configuration from environment variables.

        Checks GEMINI_API_KEY, then API_KEY, for the key and
        CRYSTAL_VOIDS_MODEL for the model name.
        """
        api_key = os.environ.get("GEMINI_API_KEY") or os.environ.get("API_KEY")
        model = os.environ.get("CRYSTAL_VOIDS_MODEL") or DEFAULT_MODEL
        return cls(api_key=api_key or None, model=model)


@dataclass(frozen=True)
class Explanation:
    """Markdown explanation and where it came from ("remote" or "offline")."""
    text: str
    source: str


def build_prompt(lattice: LatticeType, void_type: VoidType) -> str:
    """Question sent to the language model for one configuration."""
    structure = "face-centered cubic" if lattice is LatticeType.FCC else "body-centered cubic"
    return (
        f"Explain the {void_type.value.lower()} voids in the {lattice.value} "
        f"({structure}) crystal structure.\n"
        "1. How many such voids belong to one unit cell?\n"
        "2. What is their coordination number?\n"
        "3. What is the radius ratio (r/R)?\n"
        "Keep it concise enough for a side panel."
    )


CANNED_EXPLANATIONS = {
    (LatticeType.FCC, VoidType.TETRAHEDRAL): (
        "**Count:** 8 per unit cell.\n\n"
        "**Position:** centers of the 8 octants, e.g. (1/4, 1/4, 1/4).\n\n"
        "**Formed by:** 1 corner atom and 3 face-center atoms.\n\n"
        "**Radius ratio:** r/R ≈ 0.225"
    ),
    (LatticeType.FCC, VoidType.OCTAHEDRAL): (
        "**Count:** 4 per unit cell (1 body center + 12 edge centers, "
        "each edge shared by 4 cells).\n\n"
        "**Position:** body center (1/2, 1/2, 1/2) and edge midpoints.\n\n"
        "**Formed by:** 6 atoms at the vertices of a regular octahedron.\n\n"
        "**Radius ratio:** r/R ≈ 0.414"
    ),
    (LatticeType.BCC, VoidType.TETRAHEDRAL): (
        "**Count:** 12 per unit cell (24 face sites, each shared by 2 cells).\n\n"
        "**Position:** on the cube faces, e.g. (1/2, 1/4, 0).\n\n"
        "**Formed by:** 2 corner atoms and 2 body-center atoms "
        "(a distorted tetrahedron).\n\n"
        "**Radius ratio:** r/R ≈ 0.291"
    ),
    (LatticeType.BCC, VoidType.OCTAHEDRAL): (
        "**Count:** 6 per unit cell (6 face centers shared by 2 cells, "
        "12 edge centers shared by 4 cells).\n\n"
        "**Position:** face centers and edge midpoints.\n\n"
        "**Formed by:** 2 near atoms along one axis and 4 farther atoms "
        "(a flattened octahedron).\n\n"
        "**Radius ratio:** r/R ≈ 0.155"
    ),
}


def canned_explanation(lattice: LatticeType, void_type: VoidType) -> str:
    """Offline markdown explanation for one configuration."""
    header = f"### {lattice.value} - {void_type.value} voids\n\n"
    return header + CANNED_EXPLANATIONS[(lattice, void_type)] + "\n\n" + OFFLINE_NOTE


def _extract_text(payload) -> str:
    """
    Concatenate the text parts of the first candidate.

    Raises:
        ExplanationError: If the payload does not have the generateContent shape
    """
    if not isinstance(payload, dict):
        raise ExplanationError(FAILURE_MESSAGE)
    candidates = payload.get("candidates") or []
    if not isinstance(candidates, list):
        raise ExplanationError(FAILURE_MESSAGE)
    if not candidates:
        return ""

    candidate = candidates[0]
    if not isinstance(candidate, dict):
        raise ExplanationError(FAILURE_MESSAGE)
    content = candidate.get("content") or {}
    parts = (content.get("parts") if isinstance(content, dict) else None) or []
    if not isinstance(parts, list) or not all(isinstance(p, dict) for p in parts):
        raise ExplanationError(FAILURE_MESSAGE)
    return "".join(str(part.get("text", "")) for part in parts)


def request_explanation(
    lattice: LatticeType,
    void_type: VoidType,
    config: Optional[ExplanationConfig] = None,
    session: Optional[requests.Session] = None,
) -> Explanation:
    """
    Explain a (lattice, void type) pair.

    Args:
        lattice: Lattice type
        void_type: Void type
        config: Service configuration (read from the environment if None)
        session: Optional requests session used for the call

    Returns:
        Explanation with markdown text

    Raises:
        ExplanationError: If the remote request fails
    """
    config = config or ExplanationConfig.from_env()

    if not config.api_key:
        return Explanation(text=canned_explanation(lattice, void_type), source="offline")

    url = f"{config.base_url}/models/{config.model}:generateContent"
    body = {
        "system_instruction": {"parts": [{"text": SYSTEM_INSTRUCTION}]},
        "contents": [{"parts": [{"text": build_prompt(lattice, void_type)}]}],
    }
    headers = {
        "Content-Type": "application/json",
        "x-goog-api-key": config.api_key,
    }

    logger.info("Requesting %s/%s explanation from %s", lattice.value, void_type.value, config.model)
    http = session or requests
    try:
        response = http.post(url, json=body, headers=headers, timeout=config.timeout)
        response.raise_for_status()
        payload = response.json()
    except (requests.RequestException, ValueError) as e:
        logger.exception("Explanation request failed")
        raise ExplanationError(FAILURE_MESSAGE) from e

    try:
        text = _extract_text(payload)
    except ExplanationError:
        logger.error("Unexpected explanation response: %.200r", payload)
        raise

    return Explanation(text=text or NO_EXPLANATION, source="remote")
