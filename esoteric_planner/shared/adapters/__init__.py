"""
Adapters Package

External service integrations.

Contents:
=========
- llm_adapter: DeepSeek chat completions (OpenAI-compatible API)
- email_adapter: Rusender transactional email
- payment_gateway: Prodamus payment links and webhook signatures

Note: Database access is handled by shared/db/session.py using async SQLAlchemy.

Usage:
======
    from esoteric_planner.shared.adapters.llm_adapter import get_llm_adapter
    from esoteric_planner.shared.adapters.email_adapter import get_email_adapter
"""
