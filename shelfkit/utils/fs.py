# shelfkit/utils/fs.py
import contextlib
import os
import tempfile


def read_bytes(path: str) -> bytes:
    with open(path, "rb") as f:
        return f.read()


def write_bytes_atomic(dest: str, data: bytes) -> None:
    """
    Write ``data`` to ``dest`` by staging a sibling tempfile and promoting it
    with os.replace(), so readers never observe a half-written file.
    Missing parent directories are created first.
    """
    dirpath = os.path.dirname(dest)
    os.makedirs(dirpath, exist_ok=True)
    fd, tmp = tempfile.mkstemp(prefix=".shelf-", suffix=".tmp", dir=dirpath)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        os.replace(tmp, dest)  # atomic within a filesystem
    except BaseException:
        with contextlib.suppress(OSError):
            if os.path.exists(tmp):
                os.remove(tmp)
        raise
