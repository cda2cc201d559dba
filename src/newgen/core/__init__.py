"""Core business logic module.

Modules:
- passwords: pluggable password hashing
- notifier: welcome email delivery
- advisor: career-advisor conversation over the LLM client
"""

__all__ = [
    "passwords",
    "notifier",
    "advisor",
]
