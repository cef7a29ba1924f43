import os
import sys
from pathlib import Path


# Keep tests deterministic and local-only.
os.environ["ENEM_SKIP_DOTENV"] = "1"
os.environ["ENEM_ENV"] = "test"
os.environ["ENEM_OVERRIDE_SOURCE"] = "none"
os.environ["ENEM_OVERRIDE_TIMEOUT_SECONDS"] = "1"
os.environ["ENEM_LOG_LEVEL"] = "WARNING"

BACKEND_ROOT = Path(__file__).resolve().parents[1]
if str(BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(BACKEND_ROOT))

os.environ["ENEM_DATA_DIR"] = str(BACKEND_ROOT / "tests" / "fixtures" / "missing")
