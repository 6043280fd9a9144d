import json
import logging
from typing import Any, Dict, List, Optional

from openai import AsyncOpenAI

from app.features.assistant.schemas.assistant import SuggestionsResult
from app.platform.config import settings

logger = logging.getLogger(__name__)

SUGGESTIONS_SYSTEM_PROMPT = """You are an accessibility expert analyzing WCAG violations.
Provide clear, actionable advice for fixing accessibility issues.
Focus on high-impact changes that will improve the site's compliance score.
Be specific but use plain language that non-technical users can understand.
Format your response in JSON with three sections:
1. summary: Brief overview of the top 3 most critical issues
2. fixes: List of 3-5 specific actions to take
3. impact: Estimated score improvement (as a number 1-100) if all fixes are implemented"""


class SuggestionsService:
    """One-shot AI remediation summary for a list of violations."""

    @staticmethod
    def format_violations(violations: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        formatted = []
        for violation in violations:
            if not isinstance(violation, dict):
                continue
            instances = violation.get("instances")
            formatted.append({
                "rule": violation.get("rule"),
                "impact": violation.get("impact"),
                "description": violation.get("description"),
                "count": len(instances) if isinstance(instances, list) and instances else 1,
            })
        return formatted

    @staticmethod
    def parse_response(response_text: str) -> Dict[str, Any]:
        """
        Parse model output as JSON, stripping markdown fences and trailing
        text after the last closing brace when the raw text does not parse.

        Raises:
            json.JSONDecodeError: If no JSON object can be recovered
        """
        try:
            return json.loads(response_text)
        except json.JSONDecodeError as json_err:
            logger.error(f"JSON parse error: {json_err}")
            cleaned_text = response_text.strip()
            if cleaned_text.startswith("```"):
                cleaned_text = cleaned_text.split("\n", 1)[1] if "\n" in cleaned_text else cleaned_text
                if cleaned_text.endswith("```"):
                    cleaned_text = cleaned_text.rsplit("\n", 1)[0] if "\n" in cleaned_text else cleaned_text
                cleaned_text = cleaned_text.replace("```json", "").replace("```", "").strip()

            if cleaned_text.startswith("{"):
                last_brace = cleaned_text.rfind("}")
                if last_brace > 0:
                    return json.loads(cleaned_text[:last_brace + 1])
            raise

    @staticmethod
    async def generate(
        violations: List[Dict[str, Any]],
        url: Optional[str],
        client: AsyncOpenAI,
        model: Optional[str] = None,
    ) -> SuggestionsResult:
        model = model or settings.SUGGESTIONS_MODEL
        payload = {"url": url, "violations": SuggestionsService.format_violations(violations)}

        completion = await client.chat.completions.create(
            model=model,
            messages=[
                {"role": "system", "content": SUGGESTIONS_SYSTEM_PROMPT},
                {"role": "user", "content": json.dumps(payload)},
            ],
            response_format={"type": "json_object"},
        )

        content = completion.choices[0].message.content if completion.choices else None
        if not content:
            raise ValueError("No content received from suggestions model")

        result = SuggestionsResult(**SuggestionsService.parse_response(content))
        logger.info(f"Generated suggestions for {url}: {len(result.fixes)} fixes")
        return result


_client: Optional[AsyncOpenAI] = None


def get_suggestions_client() -> Optional[AsyncOpenAI]:
    """FastAPI dependency; None when no provider key is configured."""
    global _client

    if _client is None and settings.OPENAI_API_KEY:
        _client = AsyncOpenAI(api_key=settings.OPENAI_API_KEY, base_url=settings.OPENAI_BASE_URL)
    return _client
