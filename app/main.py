import logging
from fastapi import FastAPI, Request, Form
from fastapi.templating import Jinja2Templates
from fastapi.responses import HTMLResponse, RedirectResponse
from pathlib import Path
from urllib.parse import quote
from app.api.valorant_routes import router as valorant_router
from app.config import get_settings

settings = get_settings()
logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger("app")

app = FastAPI(title="Valorant Tournament Card Stats", version="1.0.0")

@app.middleware("http")
async def log_requests(request: Request, call_next):
    logger.info("[MIDDLEWARE] %s %s", request.method, request.url)
    response = await call_next(request)
    logger.info("[MIDDLEWARE] Response: %s", response.status_code)
    return response

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent / "templates"))

# Include routers
app.include_router(valorant_router)

@app.get("/", response_class=HTMLResponse)
async def home(request: Request):
    return templates.TemplateResponse(request, "index.html", {"default_region": settings.default_region})

@app.post("/search")
async def search_player(request: Request, player_name: str = Form(""), player_tag: str = Form(""), region: str = Form("")):
    """Lookup form: name#tag -> player page"""
    if "#" in player_name and not player_tag:
        player_name, _, player_tag = player_name.partition("#")
    player_name, player_tag = player_name.strip(), player_tag.strip()
    if not player_name or not player_tag:
        return templates.TemplateResponse(request, "error.html", {
            "error": "Player name and tag are required."
        }, status_code=400)

    url = f"/player/{quote(player_name, safe='')}/{quote(player_tag, safe='')}"
    if region:
        url += f"?region={quote(region, safe='')}"
    return RedirectResponse(url=url, status_code=303)

@app.get("/health")
async def health_check():
    return {"status": "healthy"}

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
