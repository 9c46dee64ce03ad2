import os
import tempfile

# api.config reads these at import time
os.environ.setdefault("DB_DIR", tempfile.mkdtemp(prefix="cloze_test_db_"))
os.environ.setdefault("LOG_LEVEL", "WARNING")
