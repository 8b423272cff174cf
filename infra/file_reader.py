from __future__ import annotations

from domain.ports import FileReader

_CHUNK = 1 << 20


class PlainFileReader(FileReader):
    def read(self, path: str) -> int:
        n = 0
        with open(path, "rb") as f:
            while True:
                buf = f.read(_CHUNK)
                if not buf:
                    return n
                n += len(buf)
