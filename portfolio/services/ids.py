# File: portfolio/services/ids.py

import time
import uuid


class IdGenerator:
    """
    Project id generator.

    Ids look like "1760890000123-9f86d081": the millisecond timestamp keeps
    them roughly creation-ordered, the uuid4 suffix keeps two ids from the
    same millisecond apart. Only [0-9a-f-] is used so ids are safe file names.
    """

    def __init__(self, suffix_length: int = 8):
        self.suffix_length = suffix_length
        self._last_millis = 0

    def next(self) -> str:
        millis = int(time.time() * 1000)
        # wall clock may step backwards; keep the prefix non-decreasing
        if millis < self._last_millis:
            millis = self._last_millis
        self._last_millis = millis
        return f"{millis}-{uuid.uuid4().hex[:self.suffix_length]}"
