"""Pytest configuration.

Puts ``backend/`` on the import path so tests import ``app.price_alerts``
the same way the API and the Celery worker do.
"""

import sys
from pathlib import Path

backend_path = Path(__file__).parent / "backend"
sys.path.insert(0, str(backend_path))
