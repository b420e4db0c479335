"""Main application entry point.

Runs the FastAPI backend (port 8000) and the Streamlit chat interface
(port 8501). Environment variables are loaded from .env file.
"""

import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables before any other imports that might need them
load_dotenv()

# Configure logging
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)

CHAT_PAGE = Path(__file__).parent / "ui" / "chat_page.py"


def run_api() -> None:
    """Run only the FastAPI backend in this process."""
    import uvicorn

    from clara.api.app import create_app

    app = create_app()

    port = int(os.getenv("PORT", "8000"))
    logger.info(f"Starting API server on http://localhost:{port}")
    logger.info(f"API docs available at http://localhost:{port}/docs")

    uvicorn.run(
        app,
        host=os.getenv("HOST", "0.0.0.0"),
        port=port,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )


def run_separate() -> None:
    """Run FastAPI and Streamlit as separate servers.

    FastAPI on PORT (8000), Streamlit on UI_PORT (8501). The UI reaches
    the API through API_BASE_URL.
    """
    import asyncio
    import subprocess

    api_port = os.getenv("PORT", "8000")
    ui_port = os.getenv("UI_PORT", "8501")

    async def run_servers() -> None:
        logger.info(f"Starting FastAPI on http://localhost:{api_port}")
        logger.info(f"Starting Streamlit on http://localhost:{ui_port}")

        fastapi_proc = subprocess.Popen(
            [
                sys.executable,
                "-m",
                "uvicorn",
                "clara.api.app:app",
                "--host",
                os.getenv("HOST", "0.0.0.0"),
                "--port",
                api_port,
            ]
        )

        ui_env = {**os.environ}
        ui_env.setdefault("API_BASE_URL", f"http://localhost:{api_port}")
        streamlit_proc = subprocess.Popen(
            [
                sys.executable,
                "-m",
                "streamlit",
                "run",
                str(CHAT_PAGE),
                "--server.port",
                ui_port,
            ],
            env=ui_env,
        )

        try:
            while True:
                await asyncio.sleep(1)
                if fastapi_proc.poll() is not None or streamlit_proc.poll() is not None:
                    break
        except KeyboardInterrupt:
            logger.info("Shutting down servers...")
        finally:
            fastapi_proc.terminate()
            streamlit_proc.terminate()
            fastapi_proc.wait()
            streamlit_proc.wait()

    asyncio.run(run_servers())


def main() -> None:
    """Application entry point.

    Set RUN_MODE=api to run only the backend.
    Default is separate mode (backend and UI as two servers).
    """
    mode = os.getenv("RUN_MODE", "separate").lower()

    logger.info(f"Starting Clara Chat in {mode} mode")

    if mode == "api":
        run_api()
    else:
        run_separate()


if __name__ == "__main__":
    main()
