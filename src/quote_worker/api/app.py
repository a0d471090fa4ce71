"""FastAPI app for the quote worker."""

from __future__ import annotations

from fastapi import FastAPI

from quote_worker import __version__
from quote_worker.api.routes import router
from quote_worker.automation import CarrierDriver, SubmissionOrchestrator
from quote_worker.browser.playwright_page import PlaywrightLauncher
from quote_worker.carriers import build_registry
from quote_worker.settings import Settings, get_settings


def build_orchestrator(settings: Settings) -> SubmissionOrchestrator:
    """Wire the carrier registry, Playwright launcher and driver from *settings*."""
    driver = CarrierDriver(PlaywrightLauncher(settings.browser), settings.browser)
    return SubmissionOrchestrator(build_registry(settings), driver, dry_run=settings.dry_run)


def create_app(
    settings: Settings | None = None,
    orchestrator: SubmissionOrchestrator | None = None,
) -> FastAPI:
    """Build and return the FastAPI application.

    Args:
        settings: Resolved settings; defaults to :func:`get_settings`.
        orchestrator: Pre-built orchestrator (tests inject one with a fake
            browser launcher); built from *settings* when omitted.
    """
    settings = settings or get_settings()

    application = FastAPI(
        title="Quote Worker",
        description="Validates contact/address submissions and automates carrier quote forms.",
        version=__version__,
    )
    application.state.settings = settings
    application.state.orchestrator = orchestrator or build_orchestrator(settings)
    application.include_router(router)
    return application


app = create_app()
