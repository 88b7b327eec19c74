import logging
import os

from fastapi import FastAPI, Header, HTTPException
from dotenv import load_dotenv

from gateway.config import load_settings
from gateway.errors import RenderEngineError
from gateway.schemas import JobSubmission, RenderJobParams
from gateway.services.engine_client import RenderJobClient
from gateway.services.jobs import prepare_payload, submit_job

load_dotenv()

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)
logger = logging.getLogger(__name__)
settings = load_settings()
client = RenderJobClient(settings)

app = FastAPI(title="ticket-render-gateway")


def _bearer_token(authorization: str) -> str:
    value = str(authorization or "").strip()
    if value.lower().startswith("bearer "):
        return value[7:].strip()
    return value


@app.get("/health")
def health() -> dict:
    return {
        "ok": True,
        "version": os.getenv("RAILWAY_GIT_COMMIT_SHA")
        or os.getenv("GIT_COMMIT_SHA")
        or os.getenv("RENDER_GIT_COMMIT")
        or "unknown",
    }


@app.post("/payload")
def payload_endpoint(params: RenderJobParams) -> dict:
    try:
        payload = prepare_payload(params, settings)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return payload.to_wire()


@app.post("/jobs", response_model=JobSubmission)
def jobs_endpoint(params: RenderJobParams, authorization: str = Header(default="")) -> JobSubmission:
    try:
        result = submit_job(
            params=params,
            settings=settings,
            client=client,
            token=_bearer_token(authorization),
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except RenderEngineError as e:
        status = e.status_code if e.status_code is not None and 400 <= e.status_code < 500 else 502
        raise HTTPException(status_code=status, detail=str(e))

    logger.info("/jobs", extra={"job_id": result.job_id, "series": len(result.series)})
    return result
