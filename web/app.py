#!/usr/bin/env python3
"""Run the AI Deployment Inventory dashboard server."""

import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from config.settings import LOG_FORMAT, LOG_LEVEL
from web import create_app

app = create_app()

if __name__ == "__main__":
    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)
    app.run(debug=True, host="0.0.0.0", port=5000)
