"""Cross-Border Transfer Screening API.

Screens cross-border money transfers before settlement: identity
verification gate, currency conversion, restricted currencies,
high-risk country ceilings, rapid-fire velocity and available funds.

Run with:
    python3 -m uvicorn app.main:app --host 0.0.0.0 --port 8000
"""

import json
from datetime import datetime, timezone
from typing import Dict

import structlog
from fastapi import FastAPI

from app.config import settings
from app.identity.provider import IdentityProvider
from app.logging_config import setup_logging
from app.middleware.error_handler import service_exception_handler
from app.middleware.logging import RequestLoggingMiddleware
from app.models import RulesConfig
from app.routes import accounts, audit, conversion, rules, transfers
from app.screening.converter import load_rates
from app.screening.engine import ComplianceEngine
from app.screening.orchestrator import TransferOrchestrator
from app.storage.memory import MemoryStore

logger = structlog.get_logger()

app = FastAPI(
    title="Cross-Border Transfer Screening API",
    description=(
        "Screens cross-border transfers against identity verification, "
        "restricted currencies, high-risk country limits, transaction "
        "velocity and available funds."
    ),
    version=settings.app_version,
)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@app.on_event("startup")
async def startup() -> None:
    """Load reference data and initialize the screening core."""
    setup_logging(settings.log_level)

    # Directional exchange rates ({source: {target: rate}})
    rates = load_rates(settings.data_dir / "exchange_rates.json")

    # Load tunable rule thresholds (or use defaults)
    rules_config_path = settings.data_dir / "rules_config.json"
    if rules_config_path.exists():
        with open(rules_config_path, "r") as f:
            config = RulesConfig(**json.load(f))
    else:
        config = RulesConfig()

    store = MemoryStore()
    engine = ComplianceEngine(config=config)
    orchestrator = TransferOrchestrator(engine=engine, rates=rates, store=store)

    # Attach to app state for the route handlers
    app.state.settings = settings
    app.state.rates = rates
    app.state.config = config
    app.state.store = store
    app.state.engine = engine
    app.state.orchestrator = orchestrator
    app.state.identity_provider = IdentityProvider()
    app.state.clock = utc_now

    logger.info(
        "screening_started",
        app_name=settings.app_name,
        version=settings.app_version,
        rate_pairs=len(rates),
        restricted_currencies=[c.value for c in config.restricted_currencies],
    )


app.add_middleware(RequestLoggingMiddleware)
app.add_exception_handler(ValueError, service_exception_handler)
app.add_exception_handler(LookupError, service_exception_handler)
app.add_exception_handler(Exception, service_exception_handler)

# Mount all API routers
app.include_router(accounts.router)
app.include_router(transfers.router)
app.include_router(conversion.router)
app.include_router(rules.router)
app.include_router(audit.router)


@app.get("/health")
async def health_check() -> Dict[str, str]:
    """Simple health check endpoint."""
    return {"status": "healthy"}
