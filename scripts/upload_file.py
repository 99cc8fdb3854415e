#!/usr/bin/env python3
"""
CLI utility to push a local file through the uploads engine.

Disks come from settings (UPLOADS_DISK_DRIVER, LOCAL_STORAGE_ROOT, MINIO_*);
records are kept in a throwaway in-memory repository.

Usage:
    UV_CACHE_DIR=/tmp/uv uv run scripts/upload_file.py ./report.pdf --disk local --url
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path

import aiofiles

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from disk_uploads.logging import setup_logging
from disk_uploads.support import MemoryRepository
from disk_uploads.uploads import Uploads, UploadsConfig


async def run(args) -> dict:
    repository = MemoryRepository()
    uploads = Uploads(UploadsConfig.from_settings(repository))

    async with aiofiles.open(args.path, "rb") as f:
        content = await f.read()

    meta = json.loads(args.meta) if args.meta else {}
    upload = await uploads.upload(content, Path(args.path).name, meta, args.disk)
    if args.transfer_to:
        await uploads.transfer(upload, args.transfer_to)

    record = await repository.find(upload)
    result = record.model_dump()
    if args.url:
        result["url"] = await uploads.get_url(upload)
        result["temporary_url"] = await uploads.get_temporary_url(upload)
    repository.log()
    return result


def main():
    parser = argparse.ArgumentParser(description="Upload a local file to a configured disk")
    parser.add_argument("path", help="Local file to upload")
    parser.add_argument("--disk", default=None, help="Disk name (defaults to UPLOADS_DEFAULT_DISK)")
    parser.add_argument("--meta", default=None, help="JSON object stored with the upload")
    parser.add_argument("--transfer-to", default=None, help="Transfer the upload to this disk afterwards")
    parser.add_argument("--url", action="store_true", help="Also print the file's URLs")
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL")
    args = parser.parse_args()

    setup_logging(args.log_level)
    result = asyncio.run(run(args))
    print(json.dumps(result, indent=2, default=str))


if __name__ == "__main__":
    main()
