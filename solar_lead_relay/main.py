import logging
import math
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Tuple

import uvicorn
from fastapi import FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from solar_lead_relay import __version__
from solar_lead_relay.calculator.financing import transform_building_insights
from solar_lead_relay.config import Settings, load_settings
from solar_lead_relay.errors import (
    ConfigurationError,
    InvalidSubmissionError,
    RelayError,
    UpstreamUnavailableError,
)
from solar_lead_relay.models.schemas import LocationInfo, PropertyInfo, UserInfo, WebhookResult
from solar_lead_relay.tools import get_solar_insights, send_to_webhook

logger = logging.getLogger(__name__)

CORS_METHODS = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
CORS_HEADERS = ["Origin", "X-Requested-With", "Content-Type", "Accept", "Authorization"]


def parse_monthly_bill(raw: Any) -> float:
    """Coerce the submitted bill to a number; empty values count as 0."""
    if not raw:
        return 0.0
    try:
        bill = float(raw)
    except (TypeError, ValueError):
        raise InvalidSubmissionError("Invalid monthly electricity bill amount")
    if not math.isfinite(bill):
        raise InvalidSubmissionError("Invalid monthly electricity bill amount")
    return bill


def validate_submission(payload: Any) -> Tuple[Dict[str, Any], Dict[str, Any], Dict[str, Any], float]:
    if not isinstance(payload, dict):
        raise InvalidSubmissionError("Request body must be a JSON object.")

    user_info = payload.get("userInfo")
    location = payload.get("location")
    property_info = payload.get("propertyInfo")
    if not all(isinstance(section, dict) for section in (user_info, location, property_info)):
        raise InvalidSubmissionError(
            "Missing required data. Please ensure userInfo, location, and propertyInfo are provided."
        )

    if location.get("latitude") in (None, "") or location.get("longitude") in (None, ""):
        raise InvalidSubmissionError(
            "Missing location coordinates. Please ensure latitude and longitude are provided."
        )

    bill = parse_monthly_bill(property_info.get("monthlyElectricityBill"))
    return user_info, location, property_info, bill


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


async def process_submission(payload: Any, settings: Settings) -> Dict[str, Any]:
    """Enrich a lead submission with solar insights and relay it to n8n."""
    user_info, location, property_info, monthly_bill = validate_submission(payload)

    if not settings.google_api_key:
        raise ConfigurationError("Google API key is not configured")

    if not settings.n8n_webhook_url:
        logger.warning("N8N webhook URL is not configured. Data will not be sent to n8n.")

    insights = await run_in_threadpool(
        get_solar_insights,
        location["latitude"],
        location["longitude"],
        settings.google_api_key,
        required_quality=settings.solar_required_quality,
        timeout=settings.outbound_timeout,
    )
    if insights is None:
        raise UpstreamUnavailableError("Failed to retrieve data from Google Solar API")

    processed = transform_building_insights(insights, monthly_bill)

    combined = {
        **processed,
        "userInfo": UserInfo.model_validate(user_info).model_dump(),
        "location": LocationInfo.model_validate(location).model_dump(),
        "propertyInfo": PropertyInfo(
            isOwner=property_info.get("isOwner"),
            monthlyElectricityBill=monthly_bill,
        ).model_dump(),
        "timestamp": _timestamp(),
    }

    if settings.n8n_webhook_url:
        webhook_result = await run_in_threadpool(
            send_to_webhook, combined, settings.n8n_webhook_url, timeout=settings.outbound_timeout
        )
    else:
        webhook_result = WebhookResult(
            success=False, error="N8N webhook URL not configured"
        ).model_dump(exclude_none=True)
    return {**combined, "webhookResult": webhook_result}


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    if settings is None:
        settings = load_settings()

    logging.basicConfig(level=settings.log_level)
    if not settings.google_api_key:
        logger.warning("GOOGLE_API_KEY is not set; lead submissions will fail until it is configured.")

    app = FastAPI(title="Solar Lead Relay", version=__version__)
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=CORS_METHODS,
        allow_headers=CORS_HEADERS,
        max_age=86400,
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.info(
            "Received %s request to %s from origin: %s",
            request.method, request.url.path, request.headers.get("origin"),
        )
        return await call_next(request)

    @app.exception_handler(RelayError)
    async def relay_error_handler(request: Request, exc: RelayError):
        logger.warning("Rejected %s %s with %s: %s", request.method, request.url.path, exc.status_code, exc.message)
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.get("/")
    async def root():
        """Liveness check for the frontend."""
        return {"status": "Solar API server is running"}

    @app.get("/health", response_class=PlainTextResponse)
    async def health():
        return "Server is running"

    @app.post("/")
    async def receive_lead(request: Request):
        """Receive a lead-capture form submission.

        Returns the solar summary merged with the submitted data and the
        outcome of the webhook delivery.
        """
        try:
            try:
                payload = await request.json()
            except ValueError:
                raise InvalidSubmissionError("Request body must be valid JSON.")
            combined = await process_submission(payload, request.app.state.settings)
        except RelayError:
            raise
        except Exception as e:
            logger.exception("Error processing request")
            return JSONResponse(
                status_code=500,
                content={"error": f"An error occurred while processing your request: {e}"},
            )
        return JSONResponse(status_code=200, content=combined)

    return app


app = create_app()


def run():
    uvicorn.run(app, host="0.0.0.0", port=app.state.settings.port)


if __name__ == "__main__":
    run()
