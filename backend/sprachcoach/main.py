import logging

from fastapi import FastAPI

from .content_tracker import ContentTracker
from .settings import settings
from .routers import exercises, listening


def create_app() -> FastAPI:
	logging.basicConfig(
		level=settings.log_level.upper(),
		format="%(asctime)s %(levelname)s %(name)s: %(message)s",
	)
	app = FastAPI(title="Sprachcoach API")
	# One duplicate tracker per application, shared by all exercise clients
	app.state.content_tracker = ContentTracker()
	app.include_router(listening.router)
	app.include_router(exercises.router)

	@app.get("/info")
	def info():
		return {"status": "ok", "llm_configured": bool(settings.openrouter_api_key)}

	return app


app = create_app()
