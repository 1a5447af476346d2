"""Storage backends for spilled listing results.

Available backends:
- local: local filesystem, `file://` URIs
- s3: AWS S3 / MinIO via boto3 (requires the `s3` extra, import
  `todoist_tasks.storage.s3` explicitly)
"""

from todoist_tasks.storage.local import LocalStorage

__all__ = [
    "LocalStorage",
]
