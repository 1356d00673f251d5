"""
Recipe Book Photo Extraction Service
Turns a photographed recipe into structured fields through the Gemini API
"""

import base64
import json
import re
from typing import Any, Dict, Optional

import httpx
import structlog
from pydantic import ValidationError

from core.config import settings
from core.exceptions import ExtractionError, ExtractionUnavailableError
from middleware.logging import log_business_event
from models.recipe_models import Difficulty
from schemas.recipe_schemas import ExtractedRecipe, IngredientItem, RecipeDraft
from utils.text_utils import only_digits, unique_stripped

logger = structlog.get_logger()

# First "{" to last "}" of the model output
JSON_BLOCK = re.compile(r"\{[\s\S]*\}")

EXTRACTION_PROMPT = """
Analise esta imagem de uma receita culinária e extraia as seguintes informações em formato JSON:

{
  "title": "Nome da receita",
  "description": "Breve descrição da receita",
  "ingredients": [
    {"item": "nome do ingrediente", "quantity": "quantidade"}
  ],
  "instructions": [
    "Passo 1 do modo de preparo",
    "Passo 2 do modo de preparo"
  ],
  "prepTime": "tempo de preparo em minutos (apenas número)",
  "cookTime": "tempo de cozimento em minutos (apenas número)",
  "servings": "número de porções (apenas número)",
  "difficulty": "facil|medio|dificil",
  "category": "categoria da receita (ex: sobremesa, prato principal, etc)",
  "tags": ["tag1", "tag2", "tag3"]
}

IMPORTANTE:
- Retorne APENAS o JSON válido, sem texto adicional
- Se alguma informação não estiver visível na imagem, use null para esse campo
- Separe o nome do ingrediente da quantidade
- Quebre as instruções em passos lógicos e sequenciais
- Use apenas números para prepTime, cookTime e servings
- Para difficulty, use apenas: facil, medio ou dificil
- Adicione tags relevantes como "vegetariano", "sem glúten", "rápido"

Analise a imagem e retorne o JSON:
"""


# Column widths; longer model output is treated as unreadable
MAX_TITLE_LENGTH = 255
MAX_ITEM_LENGTH = 255
MAX_QUANTITY_LENGTH = 100
MAX_TIME_LENGTH = 50
MAX_SERVINGS_LENGTH = 10
MAX_NAME_LENGTH = 100


def encode_image(image_bytes: bytes) -> str:
    return base64.b64encode(image_bytes).decode("ascii")


def parse_model_response(text: str) -> Dict[str, Any]:
    """Decode the JSON object embedded in free model text"""
    match = JSON_BLOCK.search(text or "")
    if not match:
        raise ExtractionError("No structured data found in the model response")
    try:
        data = json.loads(match.group(0))
    except json.JSONDecodeError as e:
        raise ExtractionError(f"Model returned invalid JSON: {e.msg}")
    if not isinstance(data, dict):
        raise ExtractionError("Model response is not a JSON object")
    return data


def _text(value, max_length: Optional[int] = None) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        value = value.strip()
        if max_length is None or len(value) <= max_length:
            return value
    return None


def _digits(value, max_length: int) -> Optional[str]:
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        return None
    digits = only_digits(str(value))
    if not digits or len(digits) > max_length:
        return None
    return digits


def _ingredient(entry) -> Optional[IngredientItem]:
    if not isinstance(entry, dict) or not isinstance(entry.get("quantity"), str):
        return None
    item = _text(entry.get("item"), MAX_ITEM_LENGTH)
    quantity = entry["quantity"].strip()
    if item is None or len(quantity) > MAX_QUANTITY_LENGTH:
        return None
    return IngredientItem(item=item, quantity=quantity)


def clean_extracted_data(raw: Dict[str, Any]) -> ExtractedRecipe:
    """Keep only well-typed fields from the model output"""
    cleaned: Dict[str, Any] = {
        "title": _text(raw.get("title"), MAX_TITLE_LENGTH),
        "description": _text(raw.get("description")),
        "prep_time": _digits(raw.get("prepTime"), MAX_TIME_LENGTH),
        "cook_time": _digits(raw.get("cookTime"), MAX_TIME_LENGTH),
        "servings": _digits(raw.get("servings"), MAX_SERVINGS_LENGTH),
        "category": _text(raw.get("category"), MAX_NAME_LENGTH),
    }

    if raw.get("difficulty") in {d.value for d in Difficulty}:
        cleaned["difficulty"] = Difficulty(raw["difficulty"])

    ingredients = raw.get("ingredients")
    if isinstance(ingredients, list):
        cleaned["ingredients"] = [
            ingredient for ingredient in map(_ingredient, ingredients) if ingredient is not None
        ]

    instructions = raw.get("instructions")
    if isinstance(instructions, list):
        cleaned["instructions"] = [
            step.strip() for step in instructions if isinstance(step, str) and step.strip()
        ]

    tags = raw.get("tags")
    if isinstance(tags, list):
        cleaned["tags"] = [tag for tag in (_text(t, MAX_NAME_LENGTH) for t in tags) if tag]

    return ExtractedRecipe(**cleaned)


def merge_into_draft(draft: RecipeDraft, extracted: ExtractedRecipe) -> RecipeDraft:
    """
    Fill a form draft with extracted fields

    Scalars are overwritten only when extracted, lists only when
    non-empty. Tags are added to the ones already on the draft.
    """
    merged = draft.model_dump()

    for field in ("title", "description", "prep_time", "cook_time", "servings", "difficulty", "category"):
        value = getattr(extracted, field)
        if value:
            merged[field] = value

    if extracted.ingredients:
        merged["ingredients"] = [ingredient.model_dump() for ingredient in extracted.ingredients]
    if extracted.instructions:
        merged["instructions"] = list(extracted.instructions)
    if extracted.tags:
        merged["tags"] = unique_stripped(list(draft.tags) + list(extracted.tags))

    return RecipeDraft(**merged)


class RecipeExtractionService:
    """Client for the Gemini generateContent endpoint"""

    def __init__(self, client: Optional[httpx.AsyncClient] = None, api_key: Optional[str] = None):
        self.client = client
        self.api_key = api_key if api_key is not None else settings.GEMINI_API_KEY
        self.endpoint = settings.gemini_endpoint

    def build_request(self, image_bytes: bytes, mime_type: str) -> Dict[str, Any]:
        return {
            "contents": [
                {
                    "parts": [
                        {"text": EXTRACTION_PROMPT},
                        {"inline_data": {"mime_type": mime_type, "data": encode_image(image_bytes)}},
                    ]
                }
            ],
            "generationConfig": {
                "temperature": settings.AI_TEMPERATURE,
                "topK": settings.AI_TOP_K,
                "topP": settings.AI_TOP_P,
                "maxOutputTokens": settings.AI_MAX_TOKENS,
            },
        }

    async def _post(self, payload: Dict[str, Any]) -> httpx.Response:
        params = {"key": self.api_key}
        if self.client is not None:
            return await self.client.post(self.endpoint, params=params, json=payload)
        async with httpx.AsyncClient(timeout=settings.AI_TIMEOUT) as client:
            return await client.post(self.endpoint, params=params, json=payload)

    async def extract_recipe(self, image_bytes: bytes, mime_type: str = "image/jpeg") -> ExtractedRecipe:
        """
        Recognize recipe fields in a photo

        Raises:
            ExtractionUnavailableError: no API key configured
            ExtractionError: the call failed or returned nothing usable
        """
        if not self.api_key:
            raise ExtractionUnavailableError()

        try:
            response = await self._post(self.build_request(image_bytes, mime_type))
            response.raise_for_status()
            body = response.json()
        except httpx.RequestError as e:
            logger.error("Gemini request failed", error=str(e))
            raise ExtractionError()
        except httpx.HTTPStatusError as e:
            logger.error("Gemini returned error", status=e.response.status_code, body=e.response.text[:500])
            raise ExtractionError()
        except ValueError:
            logger.error("Gemini returned a non-JSON body")
            raise ExtractionError()

        try:
            text = body["candidates"][0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError):
            logger.error("Gemini response has no candidates")
            raise ExtractionError()

        try:
            extracted = clean_extracted_data(parse_model_response(text))
        except ValidationError as e:
            logger.error("Gemini output does not fit the recipe schema", errors=e.error_count())
            raise ExtractionError()

        log_business_event(
            "recipe_extracted",
            {"fields": sorted(extracted.model_dump(exclude_none=True).keys()), "image_size": len(image_bytes)},
        )
        return extracted


# Global service instance
recipe_extraction_service = RecipeExtractionService()
