"""LLM integration layer.

This package is intentionally small:
- One synchronous OpenRouter chat completion call per request, no retries.
- Configured by the caller; nothing here reads the environment.
- Raises typed errors; degrading to "no summary" is the caller's decision.
"""
