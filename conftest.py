"""Root conftest: pins the test environment before any jobboard_chat settings load."""
from __future__ import annotations

import os
from pathlib import Path

_env_test = Path(__file__).resolve().parent / ".env.test"
if _env_test.exists():
    for line in _env_test.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        key, _, value = line.partition("=")
        os.environ.setdefault(key.strip(), value.strip())

# Required by Settings; no database is contacted in tests.
for _key, _value in {
    "POSTGRES_USER": "jobboard",
    "POSTGRES_PASSWORD": "jobboard",
    "POSTGRES_DB": "jobboard_test",
}.items():
    os.environ.setdefault(_key, _value)
