# Ensure project root is on sys.path for test imports
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).parent.resolve()
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


@pytest.fixture(autouse=True)
def _isolated_log_dir(tmp_path, monkeypatch):
    # keep assistant run logs out of the working tree
    monkeypatch.setenv("KF_LOG_DIR", str(tmp_path / "logs"))
