from typing import Optional

import magic


def sniff_mimetype(data: bytes) -> Optional[str]:
    if not data:
        return None
    return magic.from_buffer(data[:2048], mime=True)
