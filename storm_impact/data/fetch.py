"""
Download-and-cache of the NOAA storm data file.
"""
from __future__ import annotations

from pathlib import Path

import requests

from storm_impact.config import SOURCE_URL, SOURCE_FILE, DOWNLOAD_TIMEOUT, DOWNLOAD_CHUNK_SIZE


def fetch_source(
    dest: Path = SOURCE_FILE,
    url: str = SOURCE_URL,
    force: bool = False,
) -> Path:
    """Download the source file unless it is already cached at dest.

    Any network error propagates; a partially written file is removed so
    the next run starts clean.
    """
    dest = Path(dest)
    if dest.exists() and not force:
        print(f"  Using cached {dest.name} ({dest.stat().st_size:,} bytes)")
        return dest

    dest.parent.mkdir(parents=True, exist_ok=True)
    tmp = dest.with_name(dest.name + ".part")
    print(f"  Downloading {url}")
    try:
        with requests.get(url, stream=True, timeout=DOWNLOAD_TIMEOUT) as r:
            r.raise_for_status()
            written = 0
            with open(tmp, "wb") as f:
                for chunk in r.iter_content(chunk_size=DOWNLOAD_CHUNK_SIZE):
                    if chunk:
                        f.write(chunk)
                        written += len(chunk)
    except BaseException:
        tmp.unlink(missing_ok=True)
        raise

    tmp.replace(dest)
    print(f"  Saved {dest} ({written:,} bytes)")
    return dest
