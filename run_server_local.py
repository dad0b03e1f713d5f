"""
Run the resume importer API locally.

`python run_server_local.py` serves the Swagger UI at `http://<host>:<port>/docs`
(defaults to 0.0.0.0:8001). Host, port and reload can be changed through the
RESUME_IMPORTER_HOST, RESUME_IMPORTER_PORT and RESUME_IMPORTER_RELOAD
environment variables (a .env file is read).
"""
import os
import signal
import sys

import uvicorn
from dotenv import load_dotenv

load_dotenv()  # load .env


def build_server() -> uvicorn.Server:
    config = uvicorn.Config(
        "api.server:app",
        host=os.getenv("RESUME_IMPORTER_HOST", "0.0.0.0"),
        port=int(os.getenv("RESUME_IMPORTER_PORT", "8001")),
        reload=os.getenv("RESUME_IMPORTER_RELOAD", "true").lower() in ("1", "true", "yes"),
    )
    return uvicorn.Server(config)


def main():
    server = build_server()

    def handle_exit(sig, frame):
        print("\nShutting down gracefully...")
        # Triggers uvicorn's graceful shutdown
        server.should_exit = True

    signal.signal(signal.SIGINT, handle_exit)
    signal.signal(signal.SIGTERM, handle_exit)

    server.run()
    print("Server stopped cleanly.")


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        print("\nKeyboard interrupt received. Exiting...")
        sys.exit(0)
