"""Server startup - runs the storyboard API with uvicorn."""
import os

import uvicorn

from src.api.server import app

port = int(os.environ.get("PORT", "10000"))

print(f"[start.py] Starting on port {port}", flush=True)
uvicorn.run(app, host="0.0.0.0", port=port, log_level="info")
