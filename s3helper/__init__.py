"""
s3helper - a thin helper layer over the S3 object storage API.

This package contains:
- config: Environment-driven configuration
- infrastructure: The S3 client wrapper (real and in-memory)
- main: Demonstration entry point that lists buckets
"""

__version__ = "0.1.0"
