"""Hugging Face inference client producing natural-language reports."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import requests

from stockbrief.config import Settings
from stockbrief.domain.models import TickerResult
from stockbrief.errors import AIReportError
from stockbrief.logging.logger import ServiceLogger
from stockbrief.reporting.prompt import build_prompt

GENERATION_PARAMETERS: dict[str, Any] = {
    "max_length": 200,
    "temperature": 0.9,
    "do_sample": True,
    "top_p": 0.95,
    "return_full_text": False,
}


class AIReporter:
    """Single-attempt generative report with soft failure.

    `generate` returns the model text, or None whenever the service is
    disabled, unreachable, or answers with something too short to be a
    report. It never raises for those cases and never retries.
    """

    def __init__(
        self,
        token: str,
        model_url: str,
        enabled: bool,
        timeout: float = 30.0,
        min_chars: int = 50,
        session: requests.Session | None = None,
        logger: ServiceLogger | None = None,
    ) -> None:
        self.model_url = model_url
        self.enabled = enabled
        self.timeout = timeout
        self.min_chars = min_chars
        self.session = session or requests.Session()
        self.session.headers.update({"Authorization": f"Bearer {token}"})
        self.logger = logger or ServiceLogger()

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        session: requests.Session | None = None,
        logger: ServiceLogger | None = None,
    ) -> AIReporter:
        return cls(
            token=settings.hugging_face_token,
            model_url=settings.hf_model_url,
            enabled=settings.ai_enabled,
            timeout=settings.ai_timeout_seconds,
            min_chars=settings.ai_min_report_chars,
            session=session,
            logger=logger,
        )

    def generate(self, results: Sequence[TickerResult], prompt: str | None = None) -> str | None:
        if not self.enabled:
            self.logger.ai_skipped("no Hugging Face token configured")
            return None
        instruction = prompt if prompt and prompt.strip() else build_prompt(results)
        try:
            return self._request_report(instruction)
        except (AIReportError, requests.RequestException) as exc:
            self.logger.ai_fallback(str(exc) or exc.__class__.__name__)
            return None

    def _request_report(self, prompt: str) -> str:
        response = self.session.post(
            self.model_url,
            json={
                "inputs": prompt,
                "parameters": GENERATION_PARAMETERS,
                "options": {"wait_for_model": True},
            },
            timeout=self.timeout,
        )
        if not 200 <= response.status_code < 300:
            raise AIReportError(f"AI service returned status {response.status_code}")
        try:
            payload = response.json()
        except ValueError as exc:
            raise AIReportError("AI service returned a non-JSON body") from exc

        text = self._extract_text(payload)
        if len(text) <= self.min_chars:
            raise AIReportError(
                f"AI output too short ({len(text)} chars, need more than {self.min_chars})"
            )
        return text

    @staticmethod
    def _extract_text(payload: Any) -> str:
        if isinstance(payload, list):
            first = payload[0] if payload else None
            if isinstance(first, dict):
                return str(first.get("generated_text") or "")
            return ""
        if isinstance(payload, dict):
            return str(payload.get("generated_text") or "")
        return ""
