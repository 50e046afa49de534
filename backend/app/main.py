from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .config import resolve_cors_origins
from .db.schema import init_db
from .routers import health, responses

app = FastAPI(title="Survey API", version=__version__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=resolve_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
async def startup() -> None:
    init_db()


app.include_router(health.router)
app.include_router(responses.router)


@app.get("/")
def root():
    return {"message": "Survey API", "docs": "/docs"}
