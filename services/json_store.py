import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import List, Dict, Any

logger = logging.getLogger(__name__)


class JsonStore:
    def __init__(self, path: Path):
        """
        Initialize a store backed by a single JSON array on disk.
        Creates the parent directory and an empty array file if missing.
        """
        self.path = Path(path)
        # held by services across one read-modify-write cycle
        self.lock = threading.Lock()

        self.path.parent.mkdir(parents=True, exist_ok=True)
        if not self.path.exists():
            logger.info("Initializing empty store at %s", self.path)
            self.write([])

    def read(self) -> List[Dict[str, Any]]:
        """Load the whole collection from disk"""
        with open(self.path, "r", encoding="utf-8") as f:
            return json.load(f)

    def write(self, records: List[Dict[str, Any]]) -> None:
        """
        Rewrite the whole collection on disk.
        The document is written to a temp file beside the target and swapped
        in with os.replace, so readers only ever see a complete document.
        """
        fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(records, f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, self.path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise
