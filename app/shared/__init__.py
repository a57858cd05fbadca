"""
Shared module package.

Cross-cutting concerns used by every bounded context:
- Error handling and mapping
- Security headers and rate limiting
- Logging configuration
"""
