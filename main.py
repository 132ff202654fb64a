import os
from contextlib import asynccontextmanager

from dotenv import load_dotenv

load_dotenv()

from fastapi import FastAPI, HTTPException, Request, Response
from fastapi.responses import HTMLResponse, StreamingResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from config import EVENT_STREAM_MAX_SECONDS, HOST, PHASE_DELAY, POLL_INTERVAL, PORT
from models import ProgressSnapshot
from progress import ProgressState, stream_phases
from runner import UploadInProgressError, run_batch_upload

BASE_DIR = os.path.dirname(__file__)
STATIC_DIR = os.path.join(BASE_DIR, "static")
TEMPLATES_DIR = os.path.join(BASE_DIR, "templates")


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.progress = ProgressState()
    yield


# --- FastAPI app ---

app = FastAPI(title="Batch Upload Progress", lifespan=lifespan)
app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")
templates = Jinja2Templates(directory=TEMPLATES_DIR)


def _progress(request: Request) -> ProgressState:
    return request.app.state.progress


@app.get("/", response_class=HTMLResponse)
async def index(request: Request):
    """Landing page with the upload button and live phase log."""
    return templates.TemplateResponse(request, "index.html", {
        "title": "SSE Example",
        "message": "Hello, world!",
    })


@app.post("/api/upload-batch")
async def upload_batch(request: Request):
    """Run the simulated batch upload; responds only once every phase is published."""
    try:
        await run_batch_upload(_progress(request), phase_delay=PHASE_DELAY)
    except UploadInProgressError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return Response(status_code=200)


@app.get("/api/events")
async def events(request: Request):
    """SSE endpoint relaying the current upload phase until COMPLETED."""
    print("[Events] Client connected")
    return StreamingResponse(
        stream_phases(
            _progress(request),
            poll_interval=POLL_INTERVAL,
            is_disconnected=request.is_disconnected,
            max_duration=EVENT_STREAM_MAX_SECONDS,
        ),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",
        },
    )


@app.get("/api/progress", response_model=ProgressSnapshot)
async def progress_snapshot(request: Request):
    """Return the current phase slot as JSON."""
    return _progress(request).snapshot()


if __name__ == "__main__":
    import uvicorn
    print(f"Server is running on http://localhost:{PORT}")
    uvicorn.run("main:app", host=HOST, port=PORT)
