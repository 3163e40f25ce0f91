"""
Import checks in a clean interpreter.

conftest.py imports every model up front, which would hide a module that
only works because something else registered the models first.
"""
import os
import subprocess
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent


def run_fresh(code: str) -> subprocess.CompletedProcess:
    env = dict(os.environ, DATABASE_URL="sqlite+aiosqlite:///:memory:", SECRET_KEY="test-secret-key")
    return subprocess.run(
        [sys.executable, "-c", code],
        cwd=PROJECT_ROOT,
        env=env,
        capture_output=True,
        text=True,
        timeout=60,
    )


def test_app_imports_cleanly():
    result = run_fresh("import app.main")
    assert result.returncode == 0, result.stderr


def test_record_lookups_configure_all_mappers():
    result = run_fresh(
        "import app.system_services.records\n"
        "from sqlalchemy.orm import configure_mappers\n"
        "configure_mappers()\n"
    )
    assert result.returncode == 0, result.stderr
