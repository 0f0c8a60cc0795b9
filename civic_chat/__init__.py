"""
Source code root package.

This package contains all application source code organized by responsibility:
- api/       : FastAPI routes and HTTP handling
- core/      : Configuration, logging, and cross-cutting utilities
- cache/     : In-memory response cache with a fixed time-to-live
- realtime/  : Live data from official Brazilian government sources
- services/  : Business logic and orchestration
- llm/       : LLM integration and prompt management
- storage/   : Satisfaction survey persistence (file or Firestore)
- models/    : Pydantic models for request/response schemas
"""
