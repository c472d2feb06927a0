"""FastAPI application exposing the report pipeline."""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from stockbrief.api.schemas import AIReportRequest, StockDataRequest
from stockbrief.config import Settings
from stockbrief.errors import InvalidRequestError
from stockbrief.logging.logger import ServiceLogger, setup_logger
from stockbrief.service import ReportService, build_service


def _describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request body"
    first = errors[0]
    location = [str(part) for part in first.get("loc", ()) if part != "body"]
    if location and location[0] == "tickers":
        return "Invalid tickers provided"
    field_name = ".".join(location) or "body"
    return f"Invalid request body: {field_name}: {first.get('msg', 'invalid value')}"


def create_app(
    settings: Settings | None = None,
    service: ReportService | None = None,
) -> FastAPI:
    """Build the API. Pass `service` to run against fakes in tests."""
    settings = settings or Settings.from_env()
    setup_logger(settings.log_level, settings.log_file)
    service = service or build_service(settings)
    logger = ServiceLogger()

    app = FastAPI(title="StockBrief API")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.settings = settings
    app.state.service = service

    @app.exception_handler(RequestValidationError)
    async def validation_error(_request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"error": _describe_validation_error(exc)})

    @app.exception_handler(InvalidRequestError)
    async def invalid_request(_request: Request, exc: InvalidRequestError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"error": str(exc)})

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok", "ai_enabled": settings.ai_enabled}

    @app.post("/api/stock-data")
    def stock_data(body: StockDataRequest):
        try:
            results = service.fetch_stock_data(body.tickers, body.start_date, body.end_date)
        except InvalidRequestError:
            raise
        except Exception:
            logger.error("stock data fetch failed")
            return JSONResponse(status_code=500, content={"error": "Failed to fetch stock data"})
        return {"stockData": [result.to_payload() for result in results]}

    @app.post("/api/ai-report")
    def ai_report(body: AIReportRequest):
        try:
            results = [item.to_domain() for item in body.stock_data]
            report = service.generate_report(results, body.prompt)
        except Exception:
            logger.error("ai report failed")
            return JSONResponse(status_code=500, content={"error": "Failed to generate AI report"})
        return {"report": report}

    return app
