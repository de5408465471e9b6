"""
Infrastructure layer - external service integrations.

- storage: Object storage (AWS S3 or any S3-compatible endpoint)
"""
