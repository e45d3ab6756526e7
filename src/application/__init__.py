"""
Application layer - Application Business Rules.

This layer contains application-specific business rules, including:
- Interfaces (ports) for read models and outbound publishing
- Application services that load aggregates, apply commands and publish events
- Queries and projections for the read side
"""
