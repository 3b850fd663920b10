"""
QuotePage - Customized Moving Quote Pages
Renders each company's quote layout against live quote data.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from routers import layouts, quotes

@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    print("QuotePage starting up...")
    yield
    # Shutdown
    print("QuotePage shutting down...")

app = FastAPI(
    title="QuotePage API",
    description="Customized quote page rendering for moving companies",
    version="1.0.0",
    lifespan=lifespan
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Tighten in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
app.include_router(layouts.router, prefix="/api/layouts", tags=["Layouts"])
app.include_router(quotes.router, prefix="/api/quotes", tags=["Quotes"])

@app.get("/")
async def root():
    return {"status": "ok", "service": "QuotePage API", "version": "1.0.0"}

@app.get("/health")
async def health():
    return {"status": "healthy"}
