import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
TESTS = ROOT / "tests"
for path in (SRC, TESTS):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))


@pytest.fixture(autouse=True)
def isolated_crawler_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("CRAWLER_SEED", "CRAWLER_CHEATS_ENABLED", "CRAWLER_DEBUG_MODE", "CRAWLER_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
