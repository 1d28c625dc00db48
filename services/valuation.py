"""Submission of finished forms to the external valuation service."""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping

import httpx

from config import settings
from models import PERCENTAGE_FIELDS
from validators import ValidationIssue, collect_error_messages, validate_form

logger = logging.getLogger(__name__)


class FormValidationError(ValueError):
    """Raised when the form cannot be submitted as entered."""

    def __init__(self, issues: List[ValidationIssue]) -> None:
        super().__init__(collect_error_messages(issues))
        self.issues = issues


class ValuationAPIError(RuntimeError):
    """Raised when the valuation service call fails."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


def to_request_payload(values: Mapping[str, Any]) -> Dict[str, Any]:
    """Convert display values to the wire shape (percentages become 0–1)."""

    payload: Dict[str, Any] = {}
    for name, value in values.items():
        if value is None:
            continue
        if name in PERCENTAGE_FIELDS:
            value = value / 100
        payload[name] = value
    return payload


class ValuationClient:
    """Thin wrapper around the valuation endpoint."""

    def __init__(
        self,
        url: str | None = None,
        *,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.url = url or settings.REALESTATE_API_URL
        self.timeout = timeout if timeout is not None else settings.REQUEST_TIMEOUT_S
        self._transport = transport

    def build_payload(self, values: Mapping[str, Any]) -> Dict[str, Any]:
        form, issues = validate_form(values)
        if form is None:
            raise FormValidationError(issues)
        return to_request_payload(form.model_dump(mode="json", exclude_none=True))

    def submit(self, values: Mapping[str, Any]) -> Dict[str, Any]:
        """Validate, send and return the analysis with the sent conditions attached."""

        payload = self.build_payload(values)
        try:
            with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
                response = client.post(self.url, json=payload)
                response.raise_for_status()
                body = response.json()
        except httpx.HTTPStatusError as exc:
            logger.error("valuation API returned %s", exc.response.status_code)
            raise ValuationAPIError(
                f"API Error: {exc.response.status_code} - {exc.response.reason_phrase}",
                status_code=exc.response.status_code,
            ) from exc
        except httpx.RequestError as exc:
            logger.error("valuation API unreachable: %s", exc)
            raise ValuationAPIError("Network Error: No response received from API") from exc
        except ValueError as exc:
            logger.error("valuation API returned a non-JSON body")
            raise ValuationAPIError("Failed to analyze real estate data") from exc

        if not isinstance(body, dict):
            raise ValuationAPIError("Failed to analyze real estate data")
        logger.info("valuation completed for total_price=%s", payload.get("total_price"))
        return {"conditions": payload, **body}


__all__ = [
    "FormValidationError",
    "ValuationAPIError",
    "ValuationClient",
    "to_request_payload",
]
