"""
Application Layer for the Sparky Fitness API.

This package contains:
- ports/: Abstract repository interfaces (what the use cases need)
- use_cases/: Workflows coordinating domain services and repositories
- exceptions: Error taxonomy surfaced to API callers
- context: Request-scoped acting user, client date and logger
"""
