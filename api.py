import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict

from fastapi import Body, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.concurrency import run_in_threadpool
import uvicorn

from errors import SplitError, SplitException
from registry import DocumentRegistry
from settings import API_ROOT, HOST, PORT, is_blank, parse_config
from splitter import split_documents

logger = logging.getLogger(__name__)

app = FastAPI(title="PDF Splitter API", version="1.0.0")
app.state.root = API_ROOT

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _contained(path, root: Path) -> Path:
    """Resolve path against root, refusing anything that lands outside it."""
    resolved = (root / path).resolve()
    try:
        resolved.relative_to(root)
    except ValueError:
        raise SplitException(SplitError.InvalidConf, f"{path} is outside {root}")
    return resolved


def _split(conf: Any, root: Path) -> list:
    root = Path(root).resolve()
    config = parse_config(conf)

    out_dir = _contained(config.out_folder if not is_blank(config.out_folder) else "out", root)
    config.out_folder = str(out_dir)
    for entry in config.split_docs:
        if not is_blank(entry.input_file):
            entry.input_file = str(_contained(entry.input_file, root))

    with DocumentRegistry() as registry:
        return split_documents(config, registry, lambda path: _contained(path, out_dir))


def _status_for(error: SplitError) -> int:
    return 500 if error is SplitError.Unk else 400


@app.post("/split")
async def split(conf: Dict[str, Any] = Body(...)):
    """
    Run a split job described by a configuration object.

    - **splitInvName** / **splitDepthName**: output file masks
    - **outFolder**: output directory, relative to the server root
    - **splitDocs**: entries with inputFile, page ranges and metakeys
    """
    try:
        outputs = await run_in_threadpool(_split, conf, app.state.root)
    except SplitException as e:
        logger.warning("Split aborted: %s", e)
        raise HTTPException(
            status_code=_status_for(e.error),
            detail={"code": e.error.name, "exit_code": int(e.error), "message": str(e)},
        )
    except Exception as e:
        logger.exception("Unexpected failure while splitting")
        raise HTTPException(
            status_code=500,
            detail={"code": SplitError.Unk.name, "exit_code": int(SplitError.Unk), "message": str(e)},
        )

    return {
        "code": SplitError.Ok.name,
        "exit_code": int(SplitError.Ok),
        "outputs": [str(path) for path in outputs],
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "timestamp": datetime.now().isoformat()}


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "message": "PDF Splitter API",
        "version": "1.0.0",
        "endpoints": {
            "split": "POST /split",
            "health": "GET /health"
        },
        "error_codes": {error.name: int(error) for error in SplitError},
    }


if __name__ == "__main__":
    uvicorn.run(app, host=HOST, port=PORT)
