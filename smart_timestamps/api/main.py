from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from smart_timestamps.api.routes.analysis import router as analysis_router
from smart_timestamps.api.routes.timestamps import router as timestamps_router
from smart_timestamps.api.routes.transcription import router as transcription_router
from smart_timestamps.api.routes.uploads import router as uploads_router

app = FastAPI(
    title="Smart Timestamps API",
    description="Chapter timestamps and transcripts for uploaded videos",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",
        "http://localhost:8501",
    ],
    allow_origin_regex=r"http://localhost:\d+",
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(uploads_router)
app.include_router(analysis_router)
app.include_router(timestamps_router)
app.include_router(transcription_router)


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "healthy"}
