import json
import logging
from typing import Any, Callable, Dict, List, Sequence, TypeVar

from google import genai
from google.genai import types

from . import prompts
from .gateway import FacilityImage, Gateway, GatewayError
from .result import (
    EmergencyPlan,
    FireSimulation,
    StorageOptimization,
    StorageRecommendation,
    ZoneAnalysis,
)
from .zone import Coords, Zone

_LOGGER = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-3-flash-preview"

T = TypeVar("T")


class GeminiGateway(Gateway):
    """
    Gateway backed by the Google Gemini API.

    :param api_key: Gemini API key
    :param model: Model used for every request
    :param client: Pre-built ``genai.Client``, mainly useful for tests
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str = DEFAULT_MODEL,
        client: genai.Client | None = None,
    ) -> None:
        if client is None:
            if not api_key:
                raise ValueError("Must provide api_key or client")
            client = genai.Client(api_key=api_key)

        self._client = client
        self._model = model

    @property
    def model(self) -> str:
        return self._model

    async def full_facility_report(
        self, image: FacilityImage, zones: Sequence[Zone]
    ) -> str:
        text = await self._generate(
            image,
            prompts.facility_report_prompt(zones),
            types.GenerateContentConfig(
                system_instruction=prompts.FIRE_SAFETY_SYSTEM_INSTRUCTION,
                temperature=0.4,
            ),
        )
        return text or "No analysis generated."

    async def analyze_zone(self, image: FacilityImage, zone: Zone) -> ZoneAnalysis:
        return await self._generate_json(
            image,
            prompts.zone_analysis_prompt(zone),
            prompts.ZONE_ANALYSIS_SCHEMA,
            ZoneAnalysis.decode,
            temperature=0.2,
        )

    async def emergency_plan(self, image: FacilityImage, zone: Zone) -> EmergencyPlan:
        return await self._generate_json(
            image,
            prompts.emergency_prompt(zone),
            prompts.EMERGENCY_SCHEMA,
            EmergencyPlan.decode,
        )

    async def optimize_storage(
        self, image: FacilityImage, zones: Sequence[Zone]
    ) -> StorageOptimization:
        return await self._generate_json(
            image,
            prompts.optimization_prompt(zones),
            prompts.OPTIMIZATION_SCHEMA,
            StorageOptimization.decode,
            temperature=0.2,
        )

    async def simulate_fire(
        self, image: FacilityImage, zones: Sequence[Zone], origin_ids: Sequence[str]
    ) -> FireSimulation:
        return await self._generate_json(
            image,
            prompts.simulation_prompt(zones, origin_ids),
            prompts.SIMULATION_SCHEMA,
            FireSimulation.decode,
        )

    async def find_safe_zone(
        self, image: FacilityImage, zones: Sequence[Zone], item: str
    ) -> StorageRecommendation:
        return await self._generate_json(
            image,
            prompts.safe_zone_prompt(zones, item),
            prompts.SAFE_ZONE_SCHEMA,
            StorageRecommendation.decode,
        )

    async def detect_zones(self, image: FacilityImage) -> List[Coords]:
        return await self._generate_json(
            image,
            prompts.DETECT_ZONES_PROMPT,
            prompts.DETECT_ZONES_SCHEMA,
            lambda data: [Coords.clamped(r["x"], r["y"]) for r in data["rooms"]],
        )

    async def _generate(
        self,
        image: FacilityImage,
        prompt: str,
        config: types.GenerateContentConfig,
    ) -> str | None:
        _LOGGER.debug(
            "Sending request to %s (%s, prompt %d chars)",
            self._model,
            image.mime_type,
            len(prompt),
        )
        try:
            response = await self._client.aio.models.generate_content(
                model=self._model,
                contents=[
                    types.Part.from_bytes(data=image.data, mime_type=image.mime_type),
                    types.Part.from_text(text=prompt),
                ],
                config=config,
            )
        except Exception as e:
            raise GatewayError("Gemini request failed: {}".format(e)) from e

        return response.text

    async def _generate_json(
        self,
        image: FacilityImage,
        prompt: str,
        schema: Dict[str, Any],
        decode: Callable[[Any], T],
        temperature: float = 0.1,
    ) -> T:
        text = await self._generate(
            image,
            prompt,
            types.GenerateContentConfig(
                response_mime_type="application/json",
                response_schema=schema,
                temperature=temperature,
            ),
        )
        if not text:
            raise GatewayError("Empty response")

        try:
            return decode(json.loads(text))
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            raise GatewayError("Malformed response: {}".format(e)) from e
