from __future__ import annotations
import uvicorn, os
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from .routers import keywords

app = FastAPI(title="KeywordForge Web API", version="0.1.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # tighten in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(keywords.router)

@app.get('/')
async def root():
    return {"service": "keywordforge", "status": "ok"}

if __name__ == '__main__':
    uvicorn.run("backend.app.main:app", host="0.0.0.0", port=int(os.environ.get('PORT', 8000)), reload=True)
