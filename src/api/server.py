#!/usr/bin/env python
"""FastAPI server for the AdVision storyboard web interface."""

import logging
import sys
from contextlib import asynccontextmanager
from pathlib import Path

# Add src directory to Python path for imports
src_dir = Path(__file__).parent.parent
if str(src_dir) not in sys.path:
    sys.path.insert(0, str(src_dir))

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.dependencies import close_services
from api.routers import core, storyboard
from api.routers.core import API_VERSION
from utils.config import load_config, validate_config
from utils.logging import setup_logging

config = load_config()
setup_logging(config["log_level"], json_output=config["log_json"])
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    for error in validate_config(config):
        logger.warning(f"Configuration problem: {error}")
    logger.info(
        f"Storyboarder ready (script={config['script_model']}, image={config['image_model']})"
    )
    yield
    await close_services()


app = FastAPI(title="AdVision Storyboarder API", version=API_VERSION, lifespan=lifespan)

# CORS middleware for the front end
app.add_middleware(
    CORSMiddleware,
    allow_origins=config["cors_origins"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(core.router)
app.include_router(storyboard.router)
